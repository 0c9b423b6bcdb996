"""
Exceptions raised while compiling and evaluating XPath expressions.
elementpath errors are converted here so callers only ever see XPathError subclasses.
"""

from elementpath import ElementPathError, XPathFunction


class XPathError(Exception):
    """Base class for all XPath errors."""


class CompileError(XPathError):
    """
    Raised when an expression cannot be parsed.

    Attributes:
        message: The diagnostic
        expression: The expression being compiled
        position: Offset of the offending token, or -1 if unknown
    """

    def __init__(self, message: str, expression: str = "", position: int = -1):
        self.message = message
        self.expression = expression
        self.position = position
        super().__init__(self._format())

    def _format(self) -> str:
        if not self.expression:
            return self.message
        if self.position < 0:
            return f"{self.message} in {self.expression!r}"
        pointer = " " * self.position + "^"
        return f"{self.message} at position {self.position}\n{self.expression}\n{pointer}"


class EvaluationError(XPathError):
    """Raised when a compiled expression fails at evaluation time."""


class UnresolvableError(EvaluationError):
    """Raised for unknown functions, unbound variables and namespace prefixes."""


class FunctionCallError(EvaluationError):
    """Raised when a function is called with the wrong number or type of arguments."""


# Error codes of names that do not resolve: variables, functions, prefixes
_UNRESOLVABLE_CODES = frozenset({'XPST0008', 'XPST0017', 'XPST0081'})


def compile_error(error: ElementPathError, expression: str) -> CompileError:
    """
    Convert an elementpath error raised while parsing.

    Args:
        error: The elementpath error
        expression: The expression being compiled

    Returns:
        A CompileError pointing at the offending token when it is known
    """
    span = getattr(error.token, 'span', None)
    position = span[0] if span else -1
    code = _error_code(error)
    message = f"[{code}] {error.message}" if code else error.message
    return CompileError(message, expression, position)


def evaluation_error(error: ElementPathError) -> EvaluationError:
    """
    Convert an elementpath error raised while evaluating.

    Args:
        error: The elementpath error

    Returns:
        An UnresolvableError for unknown names, a FunctionCallError for
        errors raised by a function call, an EvaluationError otherwise
    """
    if _error_code(error) in _UNRESOLVABLE_CODES:
        return UnresolvableError(str(error))
    if isinstance(error.token, XPathFunction):
        return FunctionCallError(str(error))
    return EvaluationError(str(error))


def _error_code(error: ElementPathError) -> str:
    """The bare error code, 'XPST0003' for 'err:XPST0003'."""
    return str(error.code or '').rpartition(':')[2]
