"""
CSS Selector Engine.
This module translates CSS selectors into XPath queries with cssselect and evaluates them through the navigator.
"""

import logging
from typing import Any, Dict, List, Optional

import cssselect

from soupxpath.navigator import DocumentNavigator
from soupxpath.navigator.etree import top_element

from .errors import CompileError
from .query import SoupXPath

logger = logging.getLogger(__name__)

_SELECT_PREFIX = 'descendant-or-self::'


class SelectorEngine:
    """
    CSS Selector Engine for BeautifulSoup documents.

    Selectors are translated to XPath once and cached per engine.
    """

    def __init__(self, navigator: Optional[DocumentNavigator] = None):
        """
        Initialize the selector engine.

        Args:
            navigator: Navigator shared by the compiled queries
        """
        self.navigator = navigator if navigator is not None else DocumentNavigator()
        self.translator = cssselect.HTMLTranslator()
        self._selector_cache: Dict[str, SoupXPath] = {}

        logger.debug("SelectorEngine initialized")

    def to_xpath(self, selector: str, prefix: str = _SELECT_PREFIX) -> str:
        """
        Translate a CSS selector into XPath.

        Args:
            selector: The CSS selector
            prefix: Axis prefix of every generated path

        Returns:
            The XPath expression

        Raises:
            CompileError: If the selector is malformed or unsupported
        """
        try:
            return self.translator.css_to_xpath(selector, prefix=prefix)
        except cssselect.SelectorError as e:
            raise CompileError(f"Invalid CSS selector: {e}", selector) from e

    def compile(self, selector: str, prefix: str = _SELECT_PREFIX) -> SoupXPath:
        """
        Compile a CSS selector into a query.

        Args:
            selector: The CSS selector
            prefix: Axis prefix of every generated path

        Returns:
            The cached or newly compiled query
        """
        key = f"{prefix}{selector}"
        query = self._selector_cache.get(key)
        if query is None:
            expression = self.to_xpath(selector, prefix)
            logger.debug(f"CSS selector {selector!r} translated to {expression!r}")
            query = SoupXPath(expression, self.navigator)
            self._selector_cache[key] = query
        return query

    def select(self, selector: str, node: Any) -> List[Any]:
        """
        Find all elements matching a CSS selector.

        Args:
            selector: The CSS selector
            node: Document or element to search from; the element itself
                can match

        Returns:
            List of matching elements in document order
        """
        return self.compile(selector).select_nodes(node)

    def select_one(self, selector: str, node: Any) -> Any:
        """Find the first element matching a CSS selector, or None."""
        return self.compile(selector).select_single_node(node)

    def matches(self, element: Any, selector: str) -> bool:
        """
        Check if an element matches a CSS selector.

        Args:
            element: The element to check
            selector: The CSS selector

        Returns:
            True if the element matches the selector, False otherwise
        """
        if not self.navigator.is_element(element):
            return False
        root = self.navigator.owner_document(element)
        if root is None:
            root = top_element(self.navigator, element)
        key = self.navigator.identity(element)
        return any(self.navigator.identity(node) == key for node in self.select(selector, root))

    def clear_cache(self) -> None:
        """Clear the selector cache."""
        self._selector_cache.clear()
