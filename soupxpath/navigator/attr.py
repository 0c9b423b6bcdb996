"""
Attribute handles for the navigator.
This module wraps the name/value pairs of a BeautifulSoup tag as attribute nodes.
"""

from typing import Any

from bs4 import Tag


def attribute_value(raw: Any) -> str:
    """
    Convert a stored attribute value to its raw string form.

    Multi-valued attributes (class, rel, ...) are stored as lists by
    BeautifulSoup unless the parser was told otherwise.

    Args:
        raw: The value as stored in Tag.attrs

    Returns:
        The attribute value as a string
    """
    if raw is None:
        return ""
    if isinstance(raw, (list, tuple)):
        return " ".join(str(part) for part in raw)
    return str(raw)


class Attribute:
    """
    Attribute node of an Element.

    Attribute handles are created on demand while enumerating the attribute
    axis. Two handles are equal when they belong to the same element and
    carry the same name, so repeated enumerations yield equal handles.
    """

    __slots__ = ('name', 'value', 'owner_element')

    def __init__(self, name: str, value: str, owner_element: Tag):
        """
        Initialize a new attribute.

        Args:
            name: The attribute name, as parsed
            value: The attribute value
            owner_element: The element that owns this attribute
        """
        self.name = name
        self.value = value
        self.owner_element = owner_element

    @classmethod
    def from_item(cls, owner_element: Tag, name: str, raw: Any) -> 'Attribute':
        """Create an attribute from an entry of Tag.attrs."""
        return cls(str(name), attribute_value(raw), owner_element)

    @property
    def local_name(self) -> str:
        """HTML attributes are never namespaced; same as name."""
        return self.name

    @property
    def namespace_uri(self) -> str:
        return ""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Attribute):
            return NotImplemented
        return self.owner_element is other.owner_element and self.name == other.name

    def __hash__(self) -> int:
        return hash(('@', id(self.owner_element), self.name))

    def __repr__(self) -> str:
        return f"Attribute({self.name!r}={self.value!r})"

    def __str__(self) -> str:
        return self.value
