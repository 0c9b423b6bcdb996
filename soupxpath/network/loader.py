"""
Document loader.
This module fetches HTML documents over HTTP(S) or from the local file system and parses them for the navigator.
"""

import logging
import os
import urllib.parse
import urllib.request
from typing import Optional

import requests
from bs4 import BeautifulSoup
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from soupxpath.parser.html_parser import HTMLParser
from soupxpath.utils.config import Config
from soupxpath.utils.logging import log_exception

logger = logging.getLogger(__name__)

RETRY_STATUS_CODES = [429, 500, 502, 503, 504]


class DocumentLoader:
    """
    Loader turning URLs into parsed documents.

    http and https URLs are fetched with a requests session that retries
    transient failures; file URLs and plain paths are read from disk.
    """

    def __init__(self, config: Optional[Config] = None, parser: Optional[HTMLParser] = None):
        """
        Initialize the document loader.

        Args:
            config: Configuration, defaults are used when None
            parser: HTML parser, built from the configuration when None
        """
        self.config = config if config is not None else Config()
        self.parser = parser if parser is not None else HTMLParser.from_config(self.config)
        self.timeout = self.config.get('network.timeout', 30)
        self.session = self._create_session()

        logger.debug("Document loader initialized")

    def _create_session(self) -> requests.Session:
        """
        Create a new requests session with appropriate configuration.

        Returns:
            A configured requests session
        """
        session = requests.Session()

        # Configure retry strategy
        retry_strategy = Retry(
            total=self.config.get('network.retries', 3),
            backoff_factor=self.config.get('network.backoff_factor', 0.5),
            status_forcelist=RETRY_STATUS_CODES,
            allowed_methods=["GET", "HEAD"]
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update({
            "User-Agent": self.config.get('network.user_agent', "soup-xpath/0.1"),
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        })

        return session

    def fetch(self, url: str) -> bytes:
        """
        Fetch the raw content of a URL.

        Args:
            url: An http(s) or file URL, or a local path

        Returns:
            The content as bytes

        Raises:
            requests.RequestException: If an HTTP request fails
            OSError: If a local file cannot be read
        """
        scheme = urllib.parse.urlparse(url).scheme.lower()

        if scheme in ('http', 'https'):
            logger.debug(f"GET request: {url}")
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            logger.debug(f"Received {len(response.content)} bytes from {url} ({response.status_code})")
            return response.content

        if scheme == 'file':
            path = urllib.request.url2pathname(urllib.parse.urlparse(url).path)
        else:
            path = os.path.expanduser(url)

        logger.debug(f"Reading local document: {path}")
        with open(path, 'rb') as f:
            return f.read()

    def get_document(self, url: str) -> Optional[BeautifulSoup]:
        """
        Load and parse the document at a URL.

        Args:
            url: An http(s) or file URL, or a local path

        Returns:
            The parsed document, or None if it could not be loaded
        """
        try:
            content = self.fetch(url)
        except requests.RequestException as e:
            log_exception(logger, e, f"Error fetching {url}")
            return None
        except OSError as e:
            log_exception(logger, e, f"Error reading {url}")
            return None

        return self.parser.parse(content)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def __enter__(self) -> 'DocumentLoader':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
