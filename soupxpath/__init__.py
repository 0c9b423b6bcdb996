"""
soup-xpath - XPath 1.0 queries over BeautifulSoup HTML documents.
"""

import logging

from soupxpath.navigator import Attribute, DocumentNavigator, NodeKind, TagType, Text
from soupxpath.parser import HTMLParser, parse_document
from soupxpath.network import DocumentLoader
from soupxpath.xpath import (
    CompileError, EvaluationError, FunctionCallError, SelectorEngine, SoupXPath,
    UnresolvableError, XPathError, compile_xpath,
)

# Applications configure output with soupxpath.utils.logging.setup_logging()
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Package information
__version__ = "0.1.0"
__description__ = "XPath 1.0 queries over BeautifulSoup HTML documents"

__all__ = [
    'Attribute',
    'DocumentNavigator',
    'NodeKind',
    'TagType',
    'Text',
    'HTMLParser',
    'parse_document',
    'DocumentLoader',
    'SoupXPath',
    'compile_xpath',
    'SelectorEngine',
    'XPathError',
    'CompileError',
    'EvaluationError',
    'UnresolvableError',
    'FunctionCallError',
]
