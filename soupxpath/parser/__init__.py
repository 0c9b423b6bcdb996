"""
HTML parsing for soup-xpath.
"""

from soupxpath.parser.html_parser import HTMLParser, parse_document

__all__ = [
    'HTMLParser',
    'parse_document',
]
