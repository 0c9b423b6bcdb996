"""
HTML parser implementation.
This module parses HTML markup into BeautifulSoup trees for the navigator, using html5lib with html.parser as the fallback tree builder.
"""

import logging
import os
import re
from typing import IO, Optional, Union

from bs4 import BeautifulSoup, FeatureNotFound, UnicodeDammit

logger = logging.getLogger(__name__)

DEFAULT_FEATURES = "html5lib"
FALLBACK_FEATURES = "html.parser"

# C0 control characters other than HTML whitespace
_CONTROL_CHARACTERS = re.compile('[\x00-\x08\x0b\x0e-\x1f]')

Markup = Union[str, bytes, IO]


class HTMLParser:
    """HTML parser using BeautifulSoup with html5lib for full HTML5 support."""

    def __init__(self, features: str = DEFAULT_FEATURES, fallback_features: str = FALLBACK_FEATURES):
        """
        Initialize the HTML parser.

        Args:
            features: BeautifulSoup tree builder to use
            fallback_features: Tree builder used when the first one is not installed
        """
        self.features = features
        self.fallback_features = fallback_features
        logger.debug(f"HTML parser initialized (features: {features}, fallback: {fallback_features})")

    @classmethod
    def from_config(cls, config) -> 'HTMLParser':
        """
        Create a parser from configuration.

        Args:
            config: A Config instance

        Returns:
            A parser using the parser.* settings
        """
        return cls(
            features=config.get('parser.features', DEFAULT_FEATURES),
            fallback_features=config.get('parser.fallback_features', FALLBACK_FEATURES),
        )

    def parse(self, markup: Markup, from_encoding: Optional[str] = None) -> BeautifulSoup:
        """
        Parse HTML markup into a document.

        Args:
            markup: HTML as text, bytes or a readable file object
            from_encoding: Encoding of byte input, detected when None

        Returns:
            BeautifulSoup: The parsed document
        """
        if hasattr(markup, 'read'):
            markup = markup.read()

        if isinstance(markup, bytes):
            markup = self._decode(markup, from_encoding)

        return self._build(self._clean_html_content(markup))

    def parse_file(self, path: str, from_encoding: Optional[str] = None) -> BeautifulSoup:
        """
        Parse an HTML file.

        Args:
            path: Path of the file
            from_encoding: Encoding of the file, detected when None

        Returns:
            BeautifulSoup: The parsed document

        Raises:
            OSError: If the file cannot be read
        """
        path = os.path.expanduser(path)
        with open(path, 'rb') as f:
            content = f.read()
        logger.debug(f"Read {len(content)} bytes from {path}")
        return self.parse(content, from_encoding)

    def _decode(self, markup: bytes, from_encoding: Optional[str]) -> str:
        """
        Decode HTML bytes.

        Args:
            markup: The raw bytes
            from_encoding: Encoding to try first, None to detect it

        Returns:
            str: The decoded markup, without any byte order mark
        """
        dammit = UnicodeDammit(markup, [from_encoding] if from_encoding else [], is_html=True)
        logger.debug(f"Decoded {len(markup)} bytes as {dammit.original_encoding}")
        return dammit.unicode_markup

    def _build(self, markup: str) -> BeautifulSoup:
        # Attribute values stay raw strings; class="a b" is not split
        options = {'multi_valued_attributes': None}

        try:
            return BeautifulSoup(markup, self.features, **options)
        except FeatureNotFound as e:
            logger.warning(f"{self.features} tree builder not available ({e}), falling back to '{self.fallback_features}'")
            return BeautifulSoup(markup, self.fallback_features, **options)

    def _clean_html_content(self, html_content: str) -> str:
        """
        Clean HTML content to prevent parsing issues.

        Args:
            html_content: HTML content to clean

        Returns:
            str: Cleaned HTML content
        """
        # Unicode BOM appears as \ufeff at the start of content when incorrectly decoded
        if html_content.startswith('\ufeff'):
            logger.debug("Removing BOM marker from the beginning of HTML content")
            html_content = html_content[1:]

        return _CONTROL_CHARACTERS.sub('', html_content)


def parse_document(markup: Markup, features: str = DEFAULT_FEATURES) -> BeautifulSoup:
    """
    Parse HTML markup with the default settings.

    Args:
        markup: HTML as text, bytes or a readable file object
        features: BeautifulSoup tree builder to use

    Returns:
        BeautifulSoup: The parsed document
    """
    return HTMLParser(features).parse(markup)
