"""
Document loading for soup-xpath.
"""

from soupxpath.network.loader import DocumentLoader

__all__ = [
    'DocumentLoader',
]
