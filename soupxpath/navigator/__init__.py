"""
XPath navigator for BeautifulSoup trees.
This package exposes parsed HTML documents through the XPath data model.
"""

from .node import NodeKind, TagType, tag_type_of
from .attr import Attribute
from .text import Text
from .etree import DocumentView, ElementView
from .navigator import DocumentNavigator

__all__ = [
    'NodeKind',
    'TagType',
    'tag_type_of',
    'Attribute',
    'Text',
    'DocumentView',
    'ElementView',
    'DocumentNavigator',
]
