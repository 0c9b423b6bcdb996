"""
Text node implementation for the navigator.
This module implements the synthesized text node of an element and the shared text extraction rules.
"""

import re
from typing import Callable, Iterable

from bs4 import Tag

# HTML whitespace; U+00A0 is character data and is kept
_HTML_WHITESPACE = re.compile(r'[ \t\n\r\f]+')


def extract_text(runs: Iterable[str], collapse_whitespace: bool = True) -> str:
    """
    Join text runs into a single string value.

    Args:
        runs: Character data runs in document order
        collapse_whitespace: Whether to collapse whitespace runs to one space and trim

    Returns:
        The extracted text
    """
    text = "".join(runs)
    if collapse_whitespace:
        text = _HTML_WHITESPACE.sub(" ", text).strip(" ")
    return text


class Text:
    """
    Synthesized text node.

    A Text stands for all character data directly owned by an element. It is
    not a tree node: it keeps a reference to its owner and recomputes its value
    from the owner's current text runs every time the value is read.
    """

    __slots__ = ('owner', '_extract')

    def __init__(self, owner: Tag, extract: Callable[[Tag], str]):
        """
        Initialize a text node.

        Args:
            owner: The element whose direct text this node represents
            extract: Callable computing the text value of the owner
        """
        self.owner = owner
        self._extract = extract

    @property
    def value(self) -> str:
        """Get the text content of this node."""
        return self._extract(self.owner)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Text):
            return NotImplemented
        return self.owner is other.owner

    def __hash__(self) -> int:
        return hash(('#text', id(self.owner)))

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Text(owner=<{self.owner.name}>, value={self.value!r})"
