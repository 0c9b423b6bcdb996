"""Shared fixtures for the soup-xpath tests."""

import pytest

from soupxpath.navigator import DocumentNavigator
from soupxpath.parser import HTMLParser, parse_document

# Markup of the documented query scenarios
SCENARIO_HTML = '<html><body id="b"><p>Hi <b>there</b></p></body></html>'

SAMPLE_HTML = (
    '<html><head><title>Sample</title></head>'
    '<body id="main" class="a  b">\n'
    '<!-- note -->'
    '<div id="d1" lang="en-US"><p>One <b>two</b> three</p><p id="p2">Four</p></div>\n'
    '<script>var x = 1;</script>'
    '<div id="dup"></div><span id="dup">x</span>'
    '</body></html>'
)

LIST_HTML = (
    '<html><body>'
    '<ul id="list"><li id="a">A</li><li id="b">B</li><li id="c">C</li></ul>'
    '<p id="after">P</p>'
    '</body></html>'
)


def parse(markup, features="html.parser"):
    """Parse markup with a predictable tree builder."""
    return HTMLParser(features).parse(markup)


@pytest.fixture
def navigator():
    return DocumentNavigator()


@pytest.fixture
def scenario_soup():
    return parse_document(SCENARIO_HTML)


@pytest.fixture
def sample_soup():
    return parse(SAMPLE_HTML)


@pytest.fixture
def list_soup():
    return parse(LIST_HTML)


@pytest.fixture
def parse_html():
    return parse
