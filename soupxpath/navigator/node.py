"""
Node kinds for the XPath view of an HTML tree.
This module classifies BeautifulSoup handles into XPath node kinds and tag types.
"""

from enum import Enum, IntEnum
from typing import Any, Optional

from bs4 import BeautifulSoup, Tag
from bs4.element import CData, Comment, Declaration, Doctype, ProcessingInstruction


class NodeKind(IntEnum):
    """Node kinds as defined by the XPath data model."""
    NONE = 0
    ELEMENT = 1
    ATTRIBUTE = 2
    TEXT = 3
    PROCESSING_INSTRUCTION = 7
    COMMENT = 8
    DOCUMENT = 9
    NAMESPACE = 13  # HTML has no namespaces; never produced

    @property
    def supports_parent(self) -> bool:
        """Whether nodes of this kind can report a parent element."""
        return self is NodeKind.ELEMENT


class TagType(Enum):
    """Markup classification of a parsed segment."""
    NORMAL = "normal"
    COMMENT = "comment"
    XML_PROCESSING_INSTRUCTION = "xml processing instruction"
    XML_DECLARATION = "xml declaration"
    DOCTYPE_DECLARATION = "doctype declaration"
    MARKUP_DECLARATION = "markup declaration"
    CDATA_SECTION = "cdata section"


# Tag types that surface as XPath nodes; the rest classify as NONE
KIND_BY_TAG_TYPE = {
    TagType.NORMAL: NodeKind.ELEMENT,
    TagType.COMMENT: NodeKind.COMMENT,
    TagType.XML_PROCESSING_INSTRUCTION: NodeKind.PROCESSING_INSTRUCTION,
    TagType.XML_DECLARATION: NodeKind.PROCESSING_INSTRUCTION,
}


def processing_instruction_text(pi: ProcessingInstruction) -> str:
    """
    Get the text between the delimiters of a processing instruction.

    html.parser keeps the closing '?' of '<?target data?>' in the string,
    so it is dropped here.

    Args:
        pi: The processing instruction handle

    Returns:
        The instruction text without delimiters
    """
    text = str(pi).strip()
    if text.endswith('?'):
        text = text[:-1].rstrip()
    return text


def tag_type_of(obj: Any) -> Optional[TagType]:
    """
    Get the tag type of a markup segment.

    Args:
        obj: A handle from a parsed tree

    Returns:
        The tag type, or None if the object is not a markup segment
        (documents, plain character data, foreign objects)
    """
    if isinstance(obj, BeautifulSoup):
        return None
    if isinstance(obj, Tag):
        return TagType.NORMAL
    if isinstance(obj, Comment):
        return TagType.COMMENT
    if isinstance(obj, ProcessingInstruction):
        target = processing_instruction_text(obj).split(None, 1)
        if target and target[0].lower() == 'xml':
            return TagType.XML_DECLARATION
        return TagType.XML_PROCESSING_INSTRUCTION
    if isinstance(obj, Doctype):
        return TagType.DOCTYPE_DECLARATION
    if isinstance(obj, Declaration):
        return TagType.MARKUP_DECLARATION
    if isinstance(obj, CData):
        return TagType.CDATA_SECTION
    return None
