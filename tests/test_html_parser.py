"""Tests for the HTML parser."""

import io
import logging

from soupxpath.parser import HTMLParser, parse_document
from soupxpath.utils.config import Config


class TestHTMLParser:

    def test_default_builder_is_html5lib(self):
        parser = HTMLParser()
        assert parser.features == "html5lib"
        assert parser.fallback_features == "html.parser"

    def test_html5lib_builds_full_document(self):
        soup = parse_document("<p>x")
        assert soup.html is not None
        assert soup.head is not None
        assert soup.body.p.get_text() == "x"

    def test_attribute_values_stay_raw(self):
        soup = parse_document('<p class="a  b" rel="x y">t</p>')
        assert soup.p['class'] == "a  b"
        assert soup.p['rel'] == "x y"

    def test_fallback_builder(self, caplog):
        with caplog.at_level(logging.WARNING, logger="soupxpath"):
            soup = HTMLParser("no-such-builder").parse("<p>x</p>")
        assert soup.p.get_text() == "x"
        assert any("falling back" in record.getMessage() for record in caplog.records)

    def test_utf8_bom_bytes(self):
        soup = HTMLParser("html.parser").parse(b'\xef\xbb\xbf<p>caf\xc3\xa9</p>', from_encoding="utf-8")
        assert soup.contents[0].name == 'p'
        assert soup.p.get_text() == "café"

    def test_bom_text(self):
        soup = HTMLParser("html.parser").parse('\ufeff<p>x</p>')
        assert soup.contents[0].name == 'p'

    def test_control_characters_removed(self):
        soup = HTMLParser("html.parser").parse("<p>a\x01b\x1fc\td</p>")
        assert soup.p.get_text() == "abc\td"

    def test_control_characters_removed_from_bytes(self):
        parser = HTMLParser("html.parser")
        assert parser.parse(b"<p>a\x01b\x1fc\td</p>").p.get_text() == "abc\td"
        soup = parser.parse("<p>é\x0b</p>".encode("utf-8"), from_encoding="utf-8")
        assert soup.p.get_text() == "é"

    def test_wide_encodings_decoded_before_cleaning(self):
        markup = "<p>wide</p>".encode("utf-16")
        soup = HTMLParser("html.parser").parse(markup)
        assert soup.p.get_text() == "wide"

    def test_byte_encoding(self):
        soup = HTMLParser("html.parser").parse("<p>café</p>".encode("latin-1"), from_encoding="latin-1")
        assert soup.p.get_text() == "café"

    def test_file_objects(self):
        parser = HTMLParser("html.parser")
        assert parser.parse(io.StringIO("<p>text</p>")).p.get_text() == "text"
        assert parser.parse(io.BytesIO(b"<p>bytes</p>")).p.get_text() == "bytes"

    def test_parse_file(self, tmp_path):
        path = tmp_path / "page.html"
        path.write_bytes("<html><body><p>Grüße</p></body></html>".encode("utf-8"))
        soup = HTMLParser("html.parser").parse_file(str(path), from_encoding="utf-8")
        assert soup.p.get_text() == "Grüße"

    def test_from_config(self, tmp_path):
        config = Config(str(tmp_path / "config.json"), {'parser': {'features': 'html.parser'}})
        parser = HTMLParser.from_config(config)
        assert parser.features == 'html.parser'
        assert parser.fallback_features == 'html.parser'
