"""
XPath 1.0 queries over the document navigator, evaluated with elementpath.
"""

from .errors import (
    CompileError, EvaluationError, FunctionCallError, UnresolvableError, XPathError,
)
from .context import Context
from .query import SoupXPath, compile_xpath
from .selector import SelectorEngine

__all__ = [
    'XPathError',
    'CompileError',
    'EvaluationError',
    'UnresolvableError',
    'FunctionCallError',
    'Context',
    'SoupXPath',
    'compile_xpath',
    'SelectorEngine',
]
