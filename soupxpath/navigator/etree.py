"""
ElementTree-style view of BeautifulSoup trees.
This module lays the navigator's axes out as tag/attrib/text/tail elements so that ElementTree-based tools can walk them.
"""

from typing import Any, Dict, Iterator, List, Optional

from bs4 import BeautifulSoup, Tag

from .attr import Attribute
from .text import Text

_XML_NAMESPACE = 'http://www.w3.org/XML/1998/namespace'

# xml:* attribute names answered by their HTML counterparts
_XML_ALIASES = {
    f'{{{_XML_NAMESPACE}}}id': 'id',
    f'{{{_XML_NAMESPACE}}}lang': 'lang',
}


class AttributeMap(dict):
    """
    Attributes of an element view, in parse order.

    Lookups of xml:id and xml:lang read the HTML id and lang attributes;
    iteration only ever yields the attributes actually present.
    """

    def __missing__(self, key: str) -> str:
        alias = _XML_ALIASES.get(key)
        if alias is None or not dict.__contains__(self, alias):
            raise KeyError(key)
        return dict.__getitem__(self, alias)

    def __contains__(self, key: object) -> bool:
        if dict.__contains__(self, key):
            return True
        alias = _XML_ALIASES.get(key) if isinstance(key, str) else None
        return alias is not None and dict.__contains__(self, alias)

    def get(self, key: str, default: Any = None) -> Any:
        try:
            return self[key]
        except KeyError:
            return default


class ElementView:
    """
    An element seen through the navigator.

    The children are the element's child axis. The synthesized text node that
    closes the child axis becomes ``text`` when the element has no child
    elements and the ``tail`` of its last child otherwise, so the text always
    sits after the child elements.
    """

    __slots__ = ('node', 'tag', 'attrib', 'text', 'tail', 'children', '_navigator')

    def __init__(self, navigator, node: Tag):
        self.node = node
        self.tag = navigator.get_element_name(node)
        self.attrib = AttributeMap((attr.name, attr.value) for attr in navigator.iter_attribute_axis(node))
        self.text: Optional[str] = None
        self.tail: Optional[str] = None
        self.children: List['ElementView'] = []
        self._navigator = navigator

    @property
    def string_value(self) -> str:
        """The navigator's string value of the element."""
        return self._navigator.get_element_string_value(self.node)

    def get(self, key: str, default: Any = None) -> Any:
        return self.attrib.get(key, default)

    def iter(self, tag: Optional[str] = None) -> Iterator['ElementView']:
        """Iterate over this element and its descendants in document order."""
        stack = [self]
        while stack:
            view = stack.pop()
            if tag is None or tag == '*' or view.tag == tag:
                yield view
            stack.extend(reversed(view.children))

    def __iter__(self) -> Iterator['ElementView']:
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)

    def __getitem__(self, index):
        return self.children[index]

    def __repr__(self) -> str:
        return f"<ElementView {self.tag!r}>"


class DocumentView:
    """
    The view of one tree: its root element view and, when the root is the
    root element of a document, that document.
    """

    __slots__ = ('node', 'root', '_views')

    def __init__(self, node: Optional[BeautifulSoup], root: Optional[ElementView],
                 views: Optional[Dict[int, ElementView]] = None):
        self.node = node
        self.root = root
        self._views = views if views is not None else {}

    def getroot(self) -> Optional[ElementView]:
        return self.root

    def iter(self, tag: Optional[str] = None) -> Iterator[ElementView]:
        if self.root is None:
            return iter(())
        return self.root.iter(tag)

    def find_view(self, element: Any) -> Optional[ElementView]:
        """Get the view of an element of this tree, or None."""
        return self._views.get(id(element))

    def __repr__(self) -> str:
        return f"<DocumentView root={self.root!r}>"


def top_element(navigator, obj: Any) -> Optional[Tag]:
    """
    Get the topmost element above a node.

    Args:
        navigator: The document navigator
        obj: A document, element, attribute or text node

    Returns:
        The document's root element for documents, the outermost ancestor
        element otherwise, or None for nodes outside any element
    """
    if navigator.is_document(obj):
        return navigator.document_root(obj)
    if isinstance(obj, Attribute):
        obj = obj.owner_element
    elif isinstance(obj, Text):
        obj = obj.owner
    if not navigator.is_element(obj):
        return None

    top = obj
    parent = navigator.get_parent_node(top)
    while parent is not None:
        top = parent
        parent = navigator.get_parent_node(top)
    return top


def build_element_tree(navigator, obj: Any) -> Optional[DocumentView]:
    """
    Build the view of the tree holding a node.

    Args:
        navigator: The document navigator
        obj: Any node of the tree

    Returns:
        The tree's DocumentView, or None if the node belongs to no element tree
    """
    top = top_element(navigator, obj)
    document = navigator.owner_document(obj if top is None else top)
    if document is not None and navigator.document_root(document) is not top:
        # A top-level element other than the root element
        document = None
    if top is None:
        if not navigator.is_document(obj):
            return None
        return DocumentView(obj, None)

    views: Dict[int, ElementView] = {}
    root = ElementView(navigator, top)
    stack = [root]
    while stack:
        view = stack.pop()
        views[id(view.node)] = view
        last = None
        for child in navigator.iter_child_axis(view.node):
            if isinstance(child, Text):
                if last is None:
                    view.text = child.value
                else:
                    last.tail = child.value
            else:
                last = ElementView(navigator, child)
                view.children.append(last)
                stack.append(last)
    return DocumentView(document, root, views)
