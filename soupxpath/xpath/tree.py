"""
elementpath node trees over the navigator.
This module turns the ElementTree-style views of BeautifulSoup trees into elementpath XPath nodes and maps nodes back to navigator handles.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from elementpath import AttributeNode, DocumentNode, ElementNode, TextNode, XPathNode
from elementpath.datatypes import UntypedAtomic
from elementpath.xpath_nodes import EtreeDocumentNode, EtreeElementNode

from soupxpath.navigator import Attribute, DocumentView, NodeKind, Text
from soupxpath.navigator.etree import top_element

logger = logging.getLogger(__name__)

# Positions taken by an element node and its xml namespace node
_ELEMENT_SPAN = 2


class SoupElementNode(EtreeElementNode):
    """Element node whose string value is the navigator's."""

    __slots__ = ()

    @property
    def string_value(self) -> str:
        return self.value.string_value

    @property
    def compat_string_value(self) -> str:
        return self.value.string_value

    @property
    def iter_typed_values(self):
        yield UntypedAtomic(self.value.string_value)


def build_node_tree(view: DocumentView) -> XPathNode:
    """
    Build the XPath nodes of a tree view.

    Node positions follow document order: an element, its attributes, the
    text before its first child, its children each followed by their tail.

    Args:
        view: The tree view

    Returns:
        The document node, or the root element node for trees without one
    """
    position = 1
    document_node = None
    if view.node is not None:
        document_node = EtreeDocumentNode(view, None, position)
        position += 1

    root = view.getroot()
    if root is None:
        return document_node

    def add_element(element, parent):
        nonlocal position
        node = SoupElementNode(element, parent, position)
        position += _ELEMENT_SPAN + len(element.attrib)
        if element.text is not None:
            TextNode(element.text, node, position)
            position += 1
        return node

    root_node = add_element(root, document_node)
    stack = [(root_node, iter(root))]
    while stack:
        parent, children = stack[-1]
        for child in children:
            node = add_element(child, parent)
            if len(child):
                stack.append((node, iter(child)))
                break
            if child.tail is not None:
                TextNode(child.tail, parent, position)
                position += 1
        else:
            stack.pop()
            if stack and parent.value.tail is not None:
                TextNode(parent.value.tail, stack[-1][0], position)
                position += 1

    return document_node if document_node is not None else root_node


class NodeTree:
    """The XPath nodes of one tree, with the rank of the tree in document order."""

    def __init__(self, view: DocumentView, rank: int):
        self.view = view
        self.rank = rank
        self.root = build_node_tree(view)

    def element_node(self, element: Any) -> Optional[ElementNode]:
        element_view = self.view.find_view(element)
        if element_view is None:
            return None
        return self.root.tree.elements.get(element_view)


class NodeTrees:
    """
    The node trees of one evaluation.

    Trees are built the first time one of their nodes is needed, and ranked
    in that order; nodes of different trees sort by the rank of their tree.
    """

    def __init__(self, navigator):
        self.navigator = navigator
        self._trees: Dict[int, NodeTree] = {}
        self._ranks: Dict[int, int] = {}

    def tree_of(self, obj: Any) -> Optional[NodeTree]:
        """
        Get the node tree holding a navigator handle.

        Args:
            obj: A document, element, attribute or text node

        Returns:
            The node tree, or None if the handle belongs to no element tree
        """
        top = top_element(self.navigator, obj)
        key = id(top if top is not None else obj)
        tree = self._trees.get(key)
        if tree is None:
            view = self.navigator.element_tree(obj)
            if view is None:
                return None
            tree = NodeTree(view, len(self._trees))
            logger.debug(f"Built node tree {tree.rank} rooted at {view.getroot()!r}")
            self._trees[key] = tree
            self._ranks[id(tree.root.tree)] = tree.rank
        return tree

    def to_node(self, obj: Any) -> Optional[XPathNode]:
        """
        Find the XPath node of a navigator handle.

        Args:
            obj: The handle

        Returns:
            The node, or None for objects that are not nodes of an element tree
        """
        kind = self.navigator.classify(obj)
        if kind not in (NodeKind.DOCUMENT, NodeKind.ELEMENT, NodeKind.ATTRIBUTE) \
                and not isinstance(obj, Text):
            return None
        tree = self.tree_of(obj)
        if tree is None:
            return None

        if kind is NodeKind.DOCUMENT:
            return tree.root if isinstance(tree.root, DocumentNode) else None
        if kind is NodeKind.ELEMENT:
            return tree.element_node(obj)

        owner = obj.owner_element if kind is NodeKind.ATTRIBUTE else obj.owner
        element_node = tree.element_node(owner)
        if element_node is None:
            return None
        if kind is NodeKind.ATTRIBUTE:
            return next((attr for attr in element_node.attributes if attr.name == obj.name), None)
        return next((child for child in reversed(element_node.children)
                     if isinstance(child, TextNode)), None)

    def to_nodes(self, objs: Iterable[Any]) -> List[XPathNode]:
        """Find the XPath nodes of handles, in document order and without duplicates."""
        return self.sort(node for node in map(self.to_node, objs) if node is not None)

    def to_handle(self, node: XPathNode) -> Any:
        """
        Map an XPath node back to its navigator handle.

        Args:
            node: A node of one of these trees

        Returns:
            The Tag, BeautifulSoup, Attribute or Text, or None for namespace nodes
        """
        if isinstance(node, ElementNode):
            return node.value.node
        if isinstance(node, DocumentNode):
            return node.value.node
        if isinstance(node, AttributeNode):
            return Attribute(node.name, node.value, node.parent.value.node)
        if isinstance(node, TextNode):
            return self.navigator.text_node(node.parent.value.node)
        return None

    def order_key(self, node: XPathNode) -> Tuple[int, int]:
        owner = node if isinstance(node, (ElementNode, DocumentNode)) else node.parent
        return self._ranks.get(id(owner.tree), len(self._ranks)), node.position

    def sort(self, nodes: Iterable[XPathNode]) -> List[XPathNode]:
        """Sort nodes into document order, dropping duplicates."""
        unique = {id(node): node for node in nodes}
        return sorted(unique.values(), key=self.order_key)
