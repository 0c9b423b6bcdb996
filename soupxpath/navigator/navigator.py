"""
Document navigator for BeautifulSoup trees.
This module exposes a parsed HTML tree through the XPath data model: node kinds, names, string values and axes.
"""

import logging
from itertools import chain
from typing import Any, Iterable, Iterator, List, Optional

from bs4 import BeautifulSoup, Tag
from bs4.element import NavigableString, PageElement

from .attr import Attribute, attribute_value
from .etree import DocumentView, build_element_tree
from .node import KIND_BY_TAG_TYPE, NodeKind, TagType, processing_instruction_text, tag_type_of
from .text import Text, extract_text

logger = logging.getLogger(__name__)

# Elements whose content is not part of any text value
DEFAULT_EXCLUDED_ELEMENTS = frozenset({'script', 'style'})

_EMPTY: Iterator[Any] = iter(())


class DocumentNavigator:
    """
    Navigator over BeautifulSoup documents.

    The navigator holds no per-document state: every operation is a pure
    function of its arguments and the (read-only) tree. One instance can be
    shared by any number of queries and documents. Operations never raise on
    unexpected input; they degrade to empty iterators, empty strings or None.
    """

    def __init__(self,
                 collapse_whitespace: bool = True,
                 excluded_elements: Iterable[str] = DEFAULT_EXCLUDED_ELEMENTS):
        """
        Initialize the navigator.

        Args:
            collapse_whitespace: Collapse whitespace runs in text values
            excluded_elements: Element names whose content is left out of text values
        """
        self.collapse_whitespace = collapse_whitespace
        self.excluded_elements = frozenset(name.lower() for name in excluded_elements)
        logger.debug(f"Document navigator initialized (collapse_whitespace: {collapse_whitespace}, "
                     f"excluded: {sorted(self.excluded_elements)})")

    @classmethod
    def from_config(cls, config) -> 'DocumentNavigator':
        """
        Create a navigator from configuration.

        Args:
            config: A Config instance

        Returns:
            A navigator using the text.* settings
        """
        return cls(
            collapse_whitespace=config.get('text.collapse_whitespace', True),
            excluded_elements=config.get('text.excluded_elements', DEFAULT_EXCLUDED_ELEMENTS),
        )

    # Classification

    def classify(self, obj: Any) -> NodeKind:
        """
        Classify an object into exactly one node kind.

        Args:
            obj: The object to classify

        Returns:
            The node kind, NodeKind.NONE for anything not recognized
        """
        if obj is None:
            return NodeKind.NONE
        if isinstance(obj, BeautifulSoup):
            return NodeKind.DOCUMENT
        if isinstance(obj, Attribute):
            return NodeKind.ATTRIBUTE
        if isinstance(obj, Text):
            return NodeKind.TEXT

        tag_type = tag_type_of(obj)
        if tag_type is not None:
            return KIND_BY_TAG_TYPE.get(tag_type, NodeKind.NONE)

        # Plain character data, including strings that never came from a tree
        if isinstance(obj, str):
            return NodeKind.TEXT
        return NodeKind.NONE

    def tag_type(self, obj: Any) -> Optional[TagType]:
        """Get the tag type of a markup segment, or None."""
        return tag_type_of(obj)

    def is_document(self, obj: Any) -> bool:
        return self.classify(obj) is NodeKind.DOCUMENT

    def is_element(self, obj: Any) -> bool:
        return self.classify(obj) is NodeKind.ELEMENT

    def is_attribute(self, obj: Any) -> bool:
        return self.classify(obj) is NodeKind.ATTRIBUTE

    def is_comment(self, obj: Any) -> bool:
        return self.classify(obj) is NodeKind.COMMENT

    def is_processing_instruction(self, obj: Any) -> bool:
        return self.classify(obj) is NodeKind.PROCESSING_INSTRUCTION

    def is_text(self, obj: Any) -> bool:
        return self.classify(obj) is NodeKind.TEXT

    def is_namespace(self, obj: Any) -> bool:
        """HTML has no namespace nodes."""
        return False

    # Names

    def get_element_name(self, obj: Any) -> str:
        """
        Get the name of an element.

        Args:
            obj: The element

        Returns:
            The tag name as parsed, or an empty string for non-elements
        """
        if self.is_element(obj):
            return obj.name
        return ""

    def get_element_qname(self, obj: Any) -> str:
        """Same as get_element_name(); HTML names carry no prefix."""
        return self.get_element_name(obj)

    def get_element_namespace_uri(self, obj: Any) -> str:
        return ""

    def get_attribute_name(self, obj: Any) -> str:
        """
        Get the name of an attribute.

        Args:
            obj: The attribute

        Returns:
            The attribute name, or an empty string for non-attributes
        """
        if isinstance(obj, Attribute):
            return obj.name
        return ""

    def get_attribute_qname(self, obj: Any) -> str:
        """Same as get_attribute_name(); HTML names carry no prefix."""
        return self.get_attribute_name(obj)

    def get_attribute_namespace_uri(self, obj: Any) -> str:
        return ""

    def get_namespace_prefix(self, obj: Any) -> str:
        return ""

    def get_name(self, obj: Any) -> str:
        """
        Get the name of any node.

        Args:
            obj: The node

        Returns:
            The element or attribute name, an empty string otherwise
        """
        kind = self.classify(obj)
        if kind is NodeKind.ELEMENT:
            return obj.name
        if kind is NodeKind.ATTRIBUTE:
            return obj.name
        return ""

    def get_processing_instruction_target(self, obj: Any) -> str:
        """
        Get the target of a processing instruction.

        Args:
            obj: The processing instruction

        Returns:
            The target ("xml-stylesheet" in <?xml-stylesheet href="a.css"?>),
            or an empty string
        """
        if not self.is_processing_instruction(obj):
            return ""
        parts = processing_instruction_text(obj).split(None, 1)
        return parts[0] if parts else ""

    def get_processing_instruction_data(self, obj: Any) -> str:
        """Get the text following the target of a processing instruction."""
        if not self.is_processing_instruction(obj):
            return ""
        parts = processing_instruction_text(obj).split(None, 1)
        return parts[1] if len(parts) > 1 else ""

    # String values

    def get_string_value(self, obj: Any) -> str:
        """
        Get the XPath string value of a node.

        Args:
            obj: The node

        Returns:
            The string value. Unrecognized objects are stringified.
        """
        kind = self.classify(obj)
        if kind is NodeKind.ELEMENT:
            return self.get_element_string_value(obj)
        if kind is NodeKind.ATTRIBUTE:
            return self.get_attribute_string_value(obj)
        if kind is NodeKind.TEXT:
            return self.get_text_string_value(obj)
        if kind is NodeKind.COMMENT:
            return self.get_comment_string_value(obj)
        if kind is NodeKind.PROCESSING_INSTRUCTION:
            return self.get_processing_instruction_string_value(obj)
        if kind is NodeKind.DOCUMENT:
            root = self.document_root(obj)
            return self.get_element_string_value(root) if root is not None else ""
        if obj is None:
            return ""
        return str(obj)

    def get_element_string_value(self, obj: Any) -> str:
        """
        Get the text content of an element.

        All character data inside the element is concatenated with markup
        removed; the content of excluded elements is skipped.

        Args:
            obj: The element

        Returns:
            The text content of the element
        """
        if self.is_element(obj):
            return extract_text(self._iter_text_runs(obj, deep=True), self.collapse_whitespace)
        if isinstance(obj, Text):
            return obj.value
        if isinstance(obj, str):
            return str(obj)
        return "" if obj is None else str(obj)

    def get_attribute_string_value(self, obj: Any) -> str:
        """Get the raw value of an attribute, or an empty string."""
        if isinstance(obj, Attribute):
            return obj.value
        return ""

    def get_comment_string_value(self, obj: Any) -> str:
        """Get the text between the comment delimiters, or an empty string."""
        if self.is_comment(obj):
            return extract_text([str(obj)], self.collapse_whitespace)
        return ""

    def get_processing_instruction_string_value(self, obj: Any) -> str:
        """Get the text between the instruction delimiters, or an empty string."""
        if self.is_processing_instruction(obj):
            return extract_text([processing_instruction_text(obj)], self.collapse_whitespace)
        return ""

    def get_text_string_value(self, obj: Any) -> str:
        """Text nodes are their own string value."""
        return self.get_element_string_value(obj)

    def get_namespace_string_value(self, obj: Any) -> str:
        return self.get_element_string_value(obj)

    def _direct_text(self, element: Tag) -> str:
        """Text value of the character data directly under an element."""
        return extract_text(self._iter_text_runs(element, deep=False), self.collapse_whitespace)

    def _iter_text_runs(self, element: Tag, deep: bool) -> Iterator[str]:
        """
        Iterate over the character data runs of an element.

        Args:
            element: The element to extract from
            deep: Whether to descend into child elements

        Yields:
            Character data in document order
        """
        stack: List[PageElement] = list(reversed(element.contents))
        while stack:
            child = stack.pop()
            if isinstance(child, Tag):
                if deep and child.name.lower() not in self.excluded_elements:
                    stack.extend(reversed(child.contents))
            elif isinstance(child, NavigableString):
                tag_type = tag_type_of(child)
                if tag_type is None or tag_type is TagType.CDATA_SECTION:
                    yield str(child)

    # Structure

    def document_root(self, obj: Any) -> Any:
        """
        Get the root element of a document.

        Args:
            obj: The document

        Returns:
            The first html element, else the first top-level element, else
            None. Anything that is not a document is returned unchanged.
        """
        if not self.is_document(obj):
            return obj
        root = obj.find('html')
        if root is None:
            root = next((child for child in obj.contents if isinstance(child, Tag)), None)
        return root

    def owner_document(self, obj: Any) -> Optional[BeautifulSoup]:
        """
        Get the document a node belongs to.

        Args:
            obj: The node

        Returns:
            The BeautifulSoup object at the top of the node's tree, or None
            for detached nodes and foreign objects
        """
        if isinstance(obj, Attribute):
            obj = obj.owner_element
        elif isinstance(obj, Text):
            obj = obj.owner
        if not isinstance(obj, PageElement):
            return None

        top = obj
        while top.parent is not None:
            top = top.parent
        return top if isinstance(top, BeautifulSoup) else None

    def supports_parent(self, obj: Any) -> bool:
        """Whether the parent of this node can be looked up."""
        return self.classify(obj).supports_parent

    def get_parent_node(self, obj: Any) -> Optional[Tag]:
        """
        Get the parent element of an element.

        Only elements support parent lookup. Attributes, comments, processing
        instructions, text and documents return None; check supports_parent()
        to tell "unsupported" apart from "at the top of the tree".

        Args:
            obj: The context node

        Returns:
            The parent element, or None
        """
        if not self.supports_parent(obj):
            return None
        parent = obj.parent
        if self.is_element(parent):
            return parent
        return None

    def get_elements_by_id(self, root: Any, element_id: str) -> List[Tag]:
        """
        Find all elements with the given id.

        Args:
            root: The element (or document) to search from
            element_id: The id to match, case-sensitively

        Returns:
            The root and descendant elements whose id equals element_id,
            in document order. Duplicate ids are all returned.
        """
        if self.is_document(root):
            root = self.document_root(root)
        if not self.is_element(root):
            return []

        elements_by_id = []
        for element in chain([root], root.descendants):
            if not isinstance(element, Tag):
                continue
            if 'id' not in element.attrs or attribute_value(element.attrs['id']) != element_id:
                continue
            elements_by_id.append(element)
        return elements_by_id

    def identity(self, obj: Any) -> Any:
        """
        Get a hashable identity key for a node.

        Attribute and text handles are recreated on every enumeration and
        compare by owner; every other node compares by object identity.

        Args:
            obj: The node

        Returns:
            A key suitable for de-duplicating node-sets
        """
        if isinstance(obj, (Attribute, Text)):
            return obj
        return id(obj)

    # Axes

    def iter_child_axis(self, obj: Any) -> Iterator[Any]:
        """
        Iterate over the child axis of an element.

        The child elements come first, in markup order, followed by exactly
        one Text node holding the character data directly inside the element.

        Args:
            obj: The context element

        Returns:
            An iterator over child elements and the synthesized text node
        """
        if not self.is_element(obj):
            return _EMPTY
        return self._iter_children(obj)

    def _iter_children(self, element: Tag) -> Iterator[Any]:
        for child in element.contents:
            if isinstance(child, Tag):
                yield child
        yield self.text_node(element)

    def text_node(self, element: Tag) -> Text:
        """Get the synthesized text node closing the child axis of an element."""
        return Text(element, self._direct_text)

    def iter_named_child_axis(self, obj: Any, name: str) -> Iterator[Tag]:
        """
        Iterate over the named child axis of an element.

        This is a deep search: every descendant element with the given name
        is returned, not only direct children.

        Args:
            obj: The context element
            name: The element name to match

        Returns:
            An iterator over matching descendant elements in document order
        """
        if not self.is_element(obj):
            return _EMPTY
        return (element for element in obj.descendants
                if isinstance(element, Tag) and element.name == name)

    def iter_attribute_axis(self, obj: Any) -> Iterator[Attribute]:
        """
        Iterate over the attributes of an element in parse order.

        Args:
            obj: The context element

        Returns:
            An iterator over Attribute handles
        """
        if not self.is_element(obj):
            return _EMPTY
        return (Attribute.from_item(obj, name, raw) for name, raw in list(obj.attrs.items()))

    def iter_named_attribute_axis(self, obj: Any, name: str) -> Iterator[Attribute]:
        """
        Iterate over the attributes of an element with the given name.

        Args:
            obj: The context element
            name: The attribute name to match exactly

        Returns:
            An iterator over every matching Attribute handle
        """
        return (attr for attr in self.iter_attribute_axis(obj) if attr.name == name)

    def iter_namespace_axis(self, obj: Any) -> Iterator[Any]:
        """HTML has no namespaces; always empty."""
        return _EMPTY

    def iter_parent_axis(self, obj: Any) -> Iterator[Tag]:
        """
        Iterate over the parent axis of a node.

        Args:
            obj: The context node

        Returns:
            An iterator over zero or one parent element
        """
        parent = self.get_parent_node(obj)
        if parent is None:
            return _EMPTY
        return iter((parent,))

    # Tree views, queries and documents

    def element_tree(self, obj: Any) -> Optional[DocumentView]:
        """
        Build an ElementTree-style view of the tree holding a node.

        The view follows this navigator's axes: element names, attributes in
        parse order, child elements and the one text node after them.

        Args:
            obj: A document, or any element, attribute or text node of the tree

        Returns:
            The view of the whole tree, or None for nodes outside any element tree
        """
        return build_element_tree(self, obj)

    def parse_xpath(self, expression: str):
        """
        Compile an XPath expression bound to this navigator.

        Args:
            expression: The XPath expression

        Returns:
            A compiled SoupXPath

        Raises:
            CompileError: If the expression is malformed
        """
        from soupxpath.xpath.query import SoupXPath
        return SoupXPath(expression, self)

    def get_document(self, url: str) -> Optional[BeautifulSoup]:
        """
        Load and parse the document at a URL.

        Args:
            url: An http(s) or file URL, or a local path

        Returns:
            The parsed document, or None if it could not be loaded
        """
        from soupxpath.network.loader import DocumentLoader
        with DocumentLoader() as loader:
            return loader.get_document(url)
