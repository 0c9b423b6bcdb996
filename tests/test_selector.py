"""Tests for the CSS selector engine."""

import pytest

from soupxpath.xpath import CompileError, SelectorEngine, SoupXPath


@pytest.fixture
def engine():
    return SelectorEngine()


class TestSelectorEngine:

    def test_type_selector(self, engine, sample_soup):
        assert [e.get('id') for e in engine.select("p", sample_soup)] == [None, 'p2']

    def test_id_and_class(self, engine, sample_soup):
        assert engine.select("#main", sample_soup) == [sample_soup.body]
        assert engine.select(".a", sample_soup) == [sample_soup.body]
        assert engine.select(".b", sample_soup) == [sample_soup.body]
        assert engine.select(".c", sample_soup) == []

    def test_attribute_selectors(self, engine, sample_soup):
        assert [e.name for e in engine.select("[id=dup]", sample_soup)] == ['div', 'span']
        assert [e.get('id') for e in engine.select("[lang|=en]", sample_soup)] == ['d1']

    def test_combinators(self, engine, scenario_soup):
        assert engine.select("body > p", scenario_soup) == [scenario_soup.p]
        assert engine.select("body b", scenario_soup) == [scenario_soup.b]

    def test_child_combinator_matches_children(self, engine, sample_soup):
        assert engine.select("#d1 > b", sample_soup) == []
        assert [e.get('id') for e in engine.select("#d1 > p", sample_soup)] == [None, 'p2']

    def test_matches_detached_element(self, engine, list_soup):
        ul = list_soup.ul.extract()
        assert engine.matches(ul.li, "ul > li")
        assert not engine.matches(ul.li, "body li")

    def test_first_child(self, engine, list_soup):
        assert [e['id'] for e in engine.select("li:first-child", list_soup)] == ['a']

    def test_select_one(self, engine, list_soup):
        assert engine.select_one("li", list_soup)['id'] == 'a'
        assert engine.select_one("table", list_soup) is None

    def test_element_can_match_itself(self, engine, list_soup):
        assert engine.select("ul", list_soup.ul) == [list_soup.ul]

    def test_matches(self, engine, list_soup):
        b = list_soup.find(id="b")
        assert engine.matches(b, "ul > li")
        assert engine.matches(b, "#b")
        assert not engine.matches(b, "p")
        assert not engine.matches("text", "li")

    def test_translation(self, engine):
        assert engine.to_xpath("p") == "descendant-or-self::p"
        assert engine.to_xpath("p", prefix="") == "p"

    def test_cache(self, engine):
        query = engine.compile("li")
        assert engine.compile("li") is query
        engine.clear_cache()
        assert engine.compile("li") is not query

    def test_queries_share_the_navigator(self, engine):
        assert engine.compile("li").navigator is engine.navigator

    @pytest.mark.parametrize("selector", ["p[", "p::before", "!!"])
    def test_invalid_selectors(self, engine, selector):
        with pytest.raises(CompileError, match="Invalid CSS selector"):
            engine.select(selector, None)


def test_query_from_css(sample_soup):
    query = SoupXPath.from_css("p b")
    assert isinstance(query, SoupXPath)
    assert query.select_nodes(sample_soup) == [sample_soup.b]
