"""Unit tests for QueryTree filter operations."""

from __future__ import annotations

import pytest

from lucene_query.search import (
    Empty,
    QueryTree,
    Term,
    concatenate,
    escape_filter_value,
    parse,
    toggle_filter,
)

# Keys and values with characters that are significant in query syntax
TRICKY_FILTERS = [
    ("host", "web1"),
    ("host", "web 1"),
    ("msg", 'say "hi"'),
    ("path", "C:\\Windows\\System32"),
    ("path", "/var/log/*.log"),
    ("k8s:pod", "api-7d9f"),
    ("-field", "(a OR b)"),
    ("field name", "AND"),
    ("a/b", "x\\"),
    ("tag", ""),
    ("brackets[0]", "{1 TO 5}"),
    ("q", "a\nb"),
    ("msg", "a :b"),
    ("msg", "x\n:y"),
    ("k :v", "x"),
    ("note", "a\u00a0:b"),
    ("field\u2003name", "v\u3000w"),
]

# Values where whitespace before a colon must survive normalization
SPACED_COLON_VALUES = ["a :b", "x\n:y", "key\t:value"]


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParse:
    def test_empty_query(self) -> None:
        tree = parse("")
        assert tree.ast == Empty()
        assert tree.parse_error is None
        assert tree.is_valid

    def test_valid_query(self) -> None:
        tree = parse("status:error")
        assert tree.ast == Term("error", field="status")
        assert tree.source == "status:error"

    def test_invalid_query(self) -> None:
        tree = parse("status:error AND")
        assert tree.ast is None
        assert tree.parse_error is not None
        assert not tree.is_valid

    def test_classmethod(self) -> None:
        assert QueryTree.parse("a b").to_string() == "a b"

    def test_to_string_keeps_source_text(self) -> None:
        assert parse("a   AND  b").to_string() == "a   AND  b"

    def test_str(self) -> None:
        assert str(parse("a:1")) == "a:1"

    def test_repr_of_error(self) -> None:
        assert "parse_error" in repr(parse("("))

    @pytest.mark.parametrize(
        "query",
        [
            "a",
            "a:1 AND b:2",
            "NOT (a OR b) -c:d",
            '  host:"web 1"   OR  !x ',
            "f:(a b) || g:/re.*/",
        ],
    )
    def test_round_trip(self, query: str) -> None:
        tree = parse(query)
        assert tree.ast is not None
        reparsed = parse(QueryTree(tree.ast).to_string())
        assert reparsed.ast == tree.ast


# ---------------------------------------------------------------------------
# Finding filters
# ---------------------------------------------------------------------------


class TestFindFilter:
    def test_finds_filter(self) -> None:
        tree = parse("field:value")
        assert tree.find_filter("field", "value") == Term("value", field="field")

    def test_other_value(self) -> None:
        assert parse("field:value").find_filter("field", "other") is None

    def test_quoted_value(self) -> None:
        assert parse('host:"web 1"').has_filter("host", "web 1")

    def test_escaped_key(self) -> None:
        assert parse(r'k8s\:pod:"api"').has_filter("k8s:pod", "api")

    def test_escaped_quote_in_value(self) -> None:
        assert parse(r'msg:"say \"hi\""').has_filter("msg", 'say "hi"')

    def test_modifier(self) -> None:
        tree = parse('-host:"web1"')
        assert not tree.has_filter("host", "web1")
        assert tree.has_filter("host", "web1", "-")

    def test_filter_in_left_branch_of_nested_expression(self) -> None:
        tree = parse('(a:1 OR host:"web1") AND b:2')
        assert tree.has_filter("host", "web1")

    def test_invalid_query_has_no_filters(self) -> None:
        assert parse('host:"web1" AND').find_filter("host", "web1") is None

    def test_negated_filter_is_found_inside_not(self) -> None:
        tree = parse("NOT host:x")
        assert tree.find_filter("host", "x") == Term("x", field="host")
        assert tree.has_filter("host", "x")
        assert not tree.has_filter("host", "x", "-")

    def test_add_does_not_repeat_filter_under_not(self) -> None:
        tree = parse("NOT host:x")
        assert tree.add_filter("host", "x") is tree
        assert tree.add_filter("host", "x").to_string() == "NOT host:x"

    @pytest.mark.parametrize("value", SPACED_COLON_VALUES)
    def test_phrase_with_space_before_colon(self, value: str) -> None:
        tree = parse(f'msg:"{value}"')
        assert tree.find_filter("msg", value) == Term(value, field="msg", quoted=True)


# ---------------------------------------------------------------------------
# Adding filters
# ---------------------------------------------------------------------------


class TestAddFilter:
    def test_add_to_empty(self) -> None:
        assert parse("").add_filter("host", "web1").to_string() == 'host:"web1"'

    def test_add_to_query(self) -> None:
        tree = parse("status:error").add_filter("host", "web1")
        assert tree.to_string() == 'status:error host:"web1"'
        assert tree.has_filter("host", "web1")

    def test_add_excluded(self) -> None:
        tree = parse("status:error").add_filter("host", "web1", "-")
        assert tree.to_string() == 'status:error -host:"web1"'

    def test_add_with_operator(self) -> None:
        tree = parse("a:1").add_filter("b", "2", operator="OR")
        assert tree.to_string() == 'a:1 OR b:"2"'

    def test_escapes_key_and_value(self) -> None:
        tree = parse("").add_filter("k8s:pod", 'say "hi"')
        assert tree.to_string() == r'k8s\:pod:"say \"hi\""'
        assert tree.is_valid

    def test_add_is_idempotent(self) -> None:
        once = parse("status:error").add_filter("host", "web1")
        twice = once.add_filter("host", "web1")
        assert twice is once
        assert twice.to_string() == once.to_string()

    def test_existing_unquoted_filter_is_not_duplicated(self) -> None:
        tree = parse("host:web1")
        assert tree.add_filter("host", "web1").to_string() == "host:web1"

    def test_exclusion_is_a_different_filter(self) -> None:
        tree = parse('host:"web1"').add_filter("host", "web1", "-")
        assert tree.to_string() == 'host:"web1" -host:"web1"'

    def test_trailing_whitespace_is_not_doubled(self) -> None:
        assert parse("a:1  ").add_filter("b", "2").to_string() == 'a:1 b:"2"'

    def test_add_to_invalid_query(self) -> None:
        tree = parse("a:1 AND").add_filter("b", "2")
        assert tree.to_string() == 'a:1 AND b:"2"'
        assert tree.is_valid

    @pytest.mark.parametrize("value", SPACED_COLON_VALUES)
    def test_add_value_with_space_before_colon_is_idempotent(self, value: str) -> None:
        once = parse("status:error").add_filter("msg", value)
        assert once.has_filter("msg", value)
        twice = once.add_filter("msg", value)
        assert twice is once
        assert twice.to_string().count("msg:") == 1

    @pytest.mark.parametrize(("key", "value"), TRICKY_FILTERS)
    def test_added_filter_parses_and_is_found(self, key: str, value: str) -> None:
        tree = parse("status:error").add_filter(key, value)
        assert tree.parse_error is None, tree.parse_error
        assert tree.has_filter(key, value)


# ---------------------------------------------------------------------------
# Removing filters
# ---------------------------------------------------------------------------


class TestRemoveFilter:
    def test_remove_left_operand(self) -> None:
        tree = parse("a:1 AND b:2").remove_filter("a", "1")
        assert parse(tree.to_string()).ast == parse("b:2").ast

    def test_remove_right_operand(self) -> None:
        tree = parse("a:1 AND b:2").remove_filter("b", "2")
        assert tree.to_string() == "a:1"

    def test_remove_only_filter(self) -> None:
        tree = parse('host:"web1"').remove_filter("host", "web1")
        assert tree.ast == Empty()
        assert tree.to_string() == ""

    def test_remove_missing_filter_returns_same_tree(self) -> None:
        tree = parse("a:1")
        assert tree.remove_filter("b", "2") is tree

    def test_remove_from_invalid_query(self) -> None:
        tree = parse("a:1 AND")
        assert tree.remove_filter("a", "1") is tree

    def test_remove_excluded(self) -> None:
        tree = parse('a:1 -host:"web1"')
        assert tree.remove_filter("host", "web1").to_string() == 'a:1 -host:"web1"'
        assert tree.remove_filter("host", "web1", "-").to_string() == "a:1"

    def test_remove_does_not_mutate(self) -> None:
        tree = parse("a:1 b:2")
        tree.remove_filter("a", "1")
        assert tree.has_filter("a", "1")
        assert tree.to_string() == "a:1 b:2"

    def test_remove_escaped(self) -> None:
        tree = parse("x").add_filter("k8s:pod", 'say "hi"')
        assert tree.remove_filter("k8s:pod", 'say "hi"').to_string() == "x"

    @pytest.mark.parametrize("value", SPACED_COLON_VALUES)
    def test_remove_value_with_space_before_colon(self, value: str) -> None:
        tree = parse("status:error").add_filter("msg", value)
        assert tree.remove_filter("msg", value).to_string() == "status:error"

    @pytest.mark.parametrize(("key", "value"), TRICKY_FILTERS)
    def test_add_then_remove_restores_query(self, key: str, value: str) -> None:
        original = parse("status:error")
        tree = original.add_filter(key, value).remove_filter(key, value)
        assert not tree.has_filter(key, value)
        assert tree.ast == original.ast


class TestToggleFilter:
    def test_toggle_on(self) -> None:
        tree = toggle_filter(parse("a:1"), "b", "2")
        assert tree.to_string() == 'a:1 b:"2"'

    def test_toggle_off(self) -> None:
        tree = toggle_filter(parse('a:1 b:"2"'), "b", "2")
        assert tree.to_string() == "a:1"

    def test_toggle_twice(self) -> None:
        tree = parse("a:1")
        assert toggle_filter(toggle_filter(tree, "b", "2"), "b", "2").ast == tree.ast

    def test_toggle_with_operator(self) -> None:
        tree = toggle_filter(parse("a:1"), "b", "2", operator="AND")
        assert tree.to_string() == 'a:1 AND b:"2"'


# ---------------------------------------------------------------------------
# Concatenation
# ---------------------------------------------------------------------------


class TestConcatenate:
    def test_empty_query(self) -> None:
        assert concatenate("", 'status:"error"') == 'status:"error"'

    def test_blank_query(self) -> None:
        assert concatenate("   ", "b:2") == "b:2"

    def test_implicit(self) -> None:
        assert concatenate("a:1", "b:2") == "a:1 b:2"

    def test_operator(self) -> None:
        assert concatenate("a:1", "b:2", "OR") == "a:1 OR b:2"

    def test_empty_filter(self) -> None:
        assert concatenate("a:1", "") == "a:1"

    def test_strips_trailing_whitespace(self) -> None:
        assert concatenate("a:1 \n", "b:2", "AND") == "a:1 AND b:2"

    def test_does_not_parse(self) -> None:
        assert concatenate("(", ")") == "( )"


def test_escape_filter_value_quotes() -> None:
    assert escape_filter_value('test"value"') == 'test\\"value\\"'
