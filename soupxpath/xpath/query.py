"""
XPath query session.
This module compiles XPath expressions with elementpath and evaluates them against BeautifulSoup documents, elements or node-sets through the document navigator.
"""

import logging
import math
from collections.abc import Iterable
from decimal import Decimal
from typing import Any, Dict, List, Optional

from bs4 import Tag
from elementpath import ElementPathError, XPath1Parser, XPathContext, XPathNode

from soupxpath.navigator import DocumentNavigator, NodeKind
from soupxpath.utils.logging import PerformanceLogger

from .context import Context
from .errors import compile_error, evaluation_error
from .tree import NodeTrees

logger = logging.getLogger(__name__)


class SoupXPath:
    """
    A compiled XPath expression bound to a navigator.

    The expression is parsed once, when the query is created; evaluating it
    any number of times never re-parses. Variable bindings are scoped to
    this object.

    Example:
        >>> query = SoupXPath("//p")
        >>> query.select_nodes(soup)
    """

    def __init__(self, expression: str, navigator: Optional[DocumentNavigator] = None):
        """
        Compile an expression.

        Args:
            expression: The XPath 1.0 expression
            navigator: Navigator to evaluate with, a new DocumentNavigator if None

        Raises:
            CompileError: If the expression is malformed or names an unknown
                function or namespace prefix
        """
        self.expression = expression
        self.navigator = navigator if navigator is not None else DocumentNavigator()
        self.parser = XPath1Parser()
        try:
            self.root_token = self.parser.parse(expression)
        except ElementPathError as e:
            raise compile_error(e, expression) from e
        self.variables: Dict[str, Any] = {}
        self.performance = PerformanceLogger(logger, "xpath")

    @classmethod
    def from_css(cls, selector: str, navigator: Optional[DocumentNavigator] = None) -> 'SoupXPath':
        """
        Compile a CSS selector into an XPath query.

        Args:
            selector: The CSS selector
            navigator: Navigator to evaluate with

        Returns:
            A query selecting the matching elements

        Raises:
            CompileError: If the selector is malformed
        """
        from .selector import SelectorEngine
        return SelectorEngine(navigator).compile(selector)

    def set_variable(self, name: str, value: Any) -> None:
        """
        Bind a variable for later evaluations.

        Args:
            name: Variable name without the leading '$'
            value: str, number, bool, node or iterable of nodes
        """
        self.variables[name] = value

    def build_context(self, node: Any) -> Context:
        """
        Build the evaluation context for a starting node.

        A Context is used as-is. A document is evaluated from its root
        element; any other iterable (except strings and elements) is taken
        as the node-set; anything else becomes a single-node set.

        Args:
            node: The starting point

        Returns:
            The evaluation context
        """
        if isinstance(node, Context):
            return node
        if self.navigator.is_document(node):
            root = self.navigator.document_root(node)
            return Context([root] if root is not None else [])
        if self.navigator.classify(node) is not NodeKind.NONE or isinstance(node, (str, bytes, Tag)):
            return Context([node])
        if isinstance(node, Iterable):
            return Context(node)
        return Context([node])

    def evaluate(self, node: Any) -> Any:
        """
        Evaluate the expression.

        Args:
            node: Document, node, iterable of nodes or Context to start from

        Returns:
            A list of nodes in document order, or a str, float or bool

        Raises:
            EvaluationError: If the expression fails at evaluation time
        """
        trees, result = self._evaluate(node)
        if isinstance(result, list):
            handles = (trees.to_handle(item) for item in result if isinstance(item, XPathNode))
            return [handle for handle in handles if handle is not None]
        if isinstance(result, bool):
            return result
        if isinstance(result, (int, float, Decimal)):
            return float(result)
        if result is None:
            return []
        return str(result)

    def _evaluate(self, node: Any):
        """Evaluate against the node trees of the context, returning the trees and the raw result."""
        context = self.build_context(node)
        trees = NodeTrees(self.navigator)
        items = [item for item in map(trees.to_node, context.node_set) if item is not None]
        if not items:
            return trees, []

        variables = {name: self._variable_value(trees, value) for name, value in self.variables.items()}
        merged: List[XPathNode] = []
        with self.performance.measure(f"evaluate {self.expression!r}"):
            try:
                for position, item in enumerate(items, 1):
                    xpath_context = XPathContext(
                        self._root_of(item), item=item, position=position, size=len(items),
                        variables=variables,
                    )
                    result = self.root_token.evaluate(xpath_context)
                    if isinstance(result, XPathNode):
                        result = [result]
                    if not isinstance(result, list):
                        return trees, result
                    merged.extend(result)
            except ElementPathError as e:
                logger.debug(f"Evaluation of {self.expression!r} failed: {e}")
                raise evaluation_error(e) from e
        return trees, trees.sort(merged)

    @staticmethod
    def _root_of(node: XPathNode) -> XPathNode:
        """The document or root element node of the tree holding a node."""
        tree = node.tree if hasattr(node, 'tree') else node.parent.tree
        return tree.root_node

    def _variable_value(self, trees: NodeTrees, value: Any) -> Any:
        """
        Convert a bound Python value to an XPath value.

        Node iterables become node-sets in document order without duplicates;
        objects that are not nodes of an element tree are dropped.
        """
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float, Decimal)):
            return float(value)
        if isinstance(value, str):
            return value
        if value is None:
            return []
        if self.navigator.classify(value) is not NodeKind.NONE or isinstance(value, Tag):
            return trees.to_nodes([value])
        if isinstance(value, Iterable):
            return trees.to_nodes(value)
        return str(value)

    def select_nodes(self, node: Any) -> List[Any]:
        """
        Evaluate the expression as a node-set.

        Args:
            node: The starting point

        Returns:
            The selected nodes; an empty list if the result is not a node-set
        """
        result = self.evaluate(node)
        if isinstance(result, list):
            return result
        return []

    def select_single_node(self, node: Any) -> Any:
        """
        Evaluate the expression and return the first selected node.

        Args:
            node: The starting point

        Returns:
            The first node in document order, or None
        """
        nodes = self.select_nodes(node)
        return nodes[0] if nodes else None

    def string_value_of(self, node: Any) -> str:
        """Evaluate the expression and convert the result with string()."""
        _, result = self._evaluate(node)
        return self.root_token.string_value(self._first(result, None))

    def number_value_of(self, node: Any) -> float:
        """Evaluate the expression and convert the result with number()."""
        _, result = self._evaluate(node)
        if isinstance(result, bool):
            return 1.0 if result else 0.0
        result = self._first(result, math.nan)
        return float(self.root_token.number_value(result))

    def boolean_value_of(self, node: Any) -> bool:
        """Evaluate the expression and convert the result with boolean()."""
        _, result = self._evaluate(node)
        if isinstance(result, list):
            return bool(result)
        return self.root_token.boolean_value(result)

    @staticmethod
    def _first(result: Any, default: Any) -> Any:
        """The first node of a node-set, or a non node-set result as-is."""
        if isinstance(result, list):
            return result[0] if result else default
        return result

    def __str__(self) -> str:
        return self.expression

    def __repr__(self) -> str:
        return f"SoupXPath({self.expression!r})"


def compile_xpath(expression: str, navigator: Optional[DocumentNavigator] = None) -> SoupXPath:
    """
    Compile an XPath expression.

    Args:
        expression: The XPath 1.0 expression
        navigator: Navigator to evaluate with

    Returns:
        The compiled query

    Raises:
        CompileError: If the expression is malformed
    """
    return SoupXPath(expression, navigator)
