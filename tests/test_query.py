"""Tests for the XPath query session."""

import logging

import pytest
from elementpath import ElementPathError, XPath1Parser

from soupxpath import DocumentNavigator, SoupXPath, compile_xpath
from soupxpath.xpath import (
    CompileError, Context, EvaluationError, FunctionCallError, UnresolvableError, XPathError,
)
from soupxpath.xpath.errors import compile_error, evaluation_error

NESTED_HTML = '<div id="x"><div>2</div><span>3</span></div>'


class TestScenarios:

    def test_paragraph_text(self, scenario_soup):
        query = SoupXPath("//p")
        nodes = query.select_nodes(scenario_soup)
        assert len(nodes) == 1
        assert query.navigator.get_string_value(nodes[0]) == "Hi there"

    def test_element_by_attribute(self, scenario_soup):
        body = SoupXPath("//*[@id='b']").select_single_node(scenario_soup)
        assert body.name == 'body'

    def test_attributes_of_paragraphs(self, scenario_soup):
        assert SoupXPath("count(//p/@*)").evaluate(scenario_soup) == 0.0

    def test_malformed_expression(self):
        with pytest.raises(CompileError) as excinfo:
            SoupXPath("///bad[")
        assert excinfo.value.expression == "///bad["
        assert isinstance(excinfo.value.__cause__, ElementPathError)

    def test_text_nodes(self, scenario_soup):
        texts = SoupXPath("//p/text()").select_nodes(scenario_soup)
        assert [text.value for text in texts] == ["Hi"]

        # The text node of an element follows its child elements
        texts = SoupXPath("//p/text() | //b/text()").select_nodes(scenario_soup)
        assert [text.value for text in texts] == ["there", "Hi"]

    def test_string_value_matches_navigator(self, scenario_soup):
        assert SoupXPath("string(//p)").evaluate(scenario_soup) == "Hi there"
        assert SoupXPath("//p = 'Hi there'").evaluate(scenario_soup) is True


class TestResultTypes:

    def test_scalar_results(self, scenario_soup):
        assert SoupXPath("1 + 1").evaluate(scenario_soup) == 2.0
        assert isinstance(SoupXPath("1 + 1").evaluate(scenario_soup), float)
        assert SoupXPath("'x'").evaluate(scenario_soup) == 'x'
        assert SoupXPath("1 = 1").evaluate(scenario_soup) is True

    def test_conversions(self, scenario_soup):
        assert SoupXPath("//b").string_value_of(scenario_soup) == "there"
        assert SoupXPath("count(//b)").string_value_of(scenario_soup) == "1"
        assert SoupXPath("string-length(//b)").number_value_of(scenario_soup) == 5.0
        assert SoupXPath("//table").boolean_value_of(scenario_soup) is False
        assert SoupXPath("//b").boolean_value_of(scenario_soup) is True
        assert SoupXPath("//table").string_value_of(scenario_soup) == ""

    def test_select_nodes_of_scalar_is_empty(self, scenario_soup):
        assert SoupXPath("1").select_nodes(scenario_soup) == []
        assert SoupXPath("1").select_single_node(scenario_soup) is None

    def test_results_are_in_document_order(self, sample_soup):
        nodes = SoupXPath("//span | //p | //title").select_nodes(sample_soup)
        assert [n.name for n in nodes] == ['title', 'p', 'p', 'span']


class TestContext:

    def test_document_starts_at_root(self, scenario_soup):
        query = SoupXPath(".")
        context = query.build_context(scenario_soup)
        assert context.node_set == [scenario_soup.html]
        assert query.evaluate(scenario_soup) == [scenario_soup.html]

    def test_empty_document(self, parse_html):
        soup = parse_html("")
        assert SoupXPath(".").evaluate(soup) == []
        assert SoupXPath("//p").evaluate(soup) == []

    def test_node_sequences(self, list_soup):
        items = list_soup.find_all('li')
        context = SoupXPath(".").build_context(items)
        assert context.node_set == items
        assert context.size == 3
        assert [e['id'] for e in SoupXPath("self::*[@id != 'b']").evaluate(items)] == ['a', 'c']

    def test_any_iterable_is_a_node_set(self, list_soup):
        items = list_soup.find_all('li')
        query = SoupXPath("self::li")
        assert query.build_context(iter(items)).node_set == items
        assert query.evaluate(iter(items)) == items
        assert query.evaluate(li for li in items if li['id'] != 'a') == items[1:]

    def test_element_is_a_single_node(self, list_soup):
        context = SoupXPath(".").build_context(list_soup.ul)
        assert context.node_set == [list_soup.ul]

    def test_single_node(self, list_soup):
        assert SoupXPath("@id").select_nodes(list_soup.ul)[0].value == 'list'

    def test_context_passes_through(self, list_soup):
        context = Context([list_soup.ul])
        query = SoupXPath("li")
        assert query.build_context(context) is context
        assert len(query.evaluate(context)) == 3

    def test_results_of_each_node_are_merged(self, list_soup):
        items = [list_soup.find(id="c"), list_soup.find(id="a")]
        assert SoupXPath("..").evaluate(items) == [list_soup.ul]
        ids = [e['id'] for e in SoupXPath("following-sibling::li").evaluate(items)]
        assert ids == ['b', 'c']

    def test_unknown_objects_are_skipped(self, list_soup):
        assert SoupXPath(".").evaluate([object(), list_soup.ul]) == [list_soup.ul]
        assert SoupXPath(".").evaluate(["plain"]) == []

    def test_absolute_path_from_any_node(self, list_soup):
        assert SoupXPath("/html").select_nodes(list_soup.find(id="b")) == [list_soup.html]

    def test_relative_paths(self, list_soup):
        b = list_soup.find(id="b")
        assert SoupXPath("../li[3]").select_nodes(b) == [list_soup.find(id="c")]

    def test_filter_expression_positions(self, list_soup):
        assert SoupXPath("(//li)[2]").select_nodes(list_soup) == [list_soup.find(id="b")]
        assert SoupXPath("(//li)[last()]/@id").string_value_of(list_soup) == 'c'

    def test_child_steps_select_direct_children(self, list_soup):
        assert SoupXPath("body/li").select_nodes(list_soup.html) == []
        assert len(SoupXPath("body/ul/li").select_nodes(list_soup.html)) == 3


class TestVariables:

    def test_variables(self, scenario_soup):
        query = SoupXPath("//*[@id = $id]")
        query.set_variable("id", "b")
        assert query.select_single_node(scenario_soup).name == 'body'

    def test_variable_types(self, list_soup):
        query = SoupXPath("$n * 2")
        query.set_variable("n", 4)
        assert query.evaluate(list_soup) == 8.0

        query = SoupXPath("count($items)")
        query.set_variable("items", list_soup.find_all('li'))
        assert query.evaluate(list_soup) == 3.0

        query = SoupXPath("$item/@id")
        query.set_variable("item", list_soup.ul)
        assert query.string_value_of(list_soup) == 'list'

        query = SoupXPath("$flag and true()")
        query.set_variable("flag", False)
        assert query.evaluate(list_soup) is False

    def test_node_set_variables_are_in_document_order(self, parse_html):
        soup = parse_html(NESTED_HTML)
        outer = soup.find(id="x")
        span = soup.span

        query = SoupXPath("string($v)")
        query.set_variable("v", [span, outer])
        assert query.evaluate(soup) == "23"

        query = SoupXPath("$v[1]")
        query.set_variable("v", [span, outer, span])
        assert query.evaluate(soup) == [outer]

        query = SoupXPath("$v")
        query.set_variable("v", iter([span, outer, span]))
        assert query.evaluate(soup) == [outer, span]

    def test_none_is_an_empty_node_set(self, list_soup):
        query = SoupXPath("count($v)")
        query.set_variable("v", None)
        assert query.evaluate(list_soup) == 0.0

    def test_unbound_variable(self, scenario_soup):
        with pytest.raises(UnresolvableError, match="missing"):
            SoupXPath("$missing").evaluate(scenario_soup)

    def test_prefixed_variable(self, scenario_soup):
        with pytest.raises((CompileError, UnresolvableError)):
            SoupXPath("$ns:v").evaluate(scenario_soup)


class TestErrors:

    def test_unknown_function(self):
        with pytest.raises(CompileError):
            SoupXPath("shout('a')")

    def test_wrong_arity(self):
        with pytest.raises(CompileError):
            SoupXPath("concat('a')")

    def test_union_of_non_node_sets(self, scenario_soup):
        with pytest.raises(XPathError):
            SoupXPath("1 | //p").evaluate(scenario_soup)

    def test_path_from_non_node_set(self, scenario_soup):
        with pytest.raises(XPathError):
            SoupXPath("'x'/p").evaluate(scenario_soup)

    def test_namespace_prefix_in_name_test(self):
        with pytest.raises(CompileError, match="svg"):
            SoupXPath("//svg:rect")


class TestErrorConversion:

    def test_compile_error_points_at_token(self):
        token = XPath1Parser().parse("count(//p)")
        error = compile_error(ElementPathError("bad", 'err:XPST0003', token), "count(//p)")
        assert isinstance(error, CompileError)
        assert error.position == token.span[0]
        assert "XPST0003" in str(error)

    def test_compile_error_without_token(self):
        error = compile_error(ElementPathError("bad"), "x")
        assert error.position == -1

    def test_unresolvable_codes(self):
        for code in ('err:XPST0008', 'err:XPST0017', 'err:XPST0081'):
            assert isinstance(evaluation_error(ElementPathError("x", code)), UnresolvableError)

    def test_function_errors(self):
        token = XPath1Parser().parse("count(//p)")
        error = evaluation_error(ElementPathError("bad", 'err:XPTY0004', token))
        assert isinstance(error, FunctionCallError)

    def test_other_errors(self):
        error = evaluation_error(ElementPathError("bad", 'err:XPTY0004'))
        assert type(error) is EvaluationError


class TestSession:

    def test_parsed_once(self, scenario_soup):
        query = SoupXPath("//p")
        root = query.root_token
        query.evaluate(scenario_soup)
        query.evaluate(scenario_soup)
        assert query.root_token is root

    def test_navigator(self):
        navigator = DocumentNavigator()
        assert SoupXPath("//p", navigator).navigator is navigator
        assert isinstance(SoupXPath("//p").navigator, DocumentNavigator)
        assert compile_xpath("//p", navigator).navigator is navigator

    def test_text(self):
        query = SoupXPath("//p")
        assert str(query) == "//p"
        assert repr(query) == "SoupXPath('//p')"

    def test_evaluation_time_is_logged(self, scenario_soup, caplog):
        with caplog.at_level(logging.DEBUG, logger="soupxpath"):
            SoupXPath("//p").evaluate(scenario_soup)
        assert any("took" in record.getMessage() for record in caplog.records)

    def test_failures_are_logged_and_raised(self, scenario_soup, caplog):
        with caplog.at_level(logging.DEBUG, logger="soupxpath"):
            with pytest.raises(UnresolvableError):
                SoupXPath("$missing").evaluate(scenario_soup)
        assert any("failed" in record.getMessage() for record in caplog.records)
