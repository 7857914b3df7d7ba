"""Unit tests for the query expression parser."""

from __future__ import annotations

import pytest

from textsearcher.exceptions import InvalidLiteralError, QueryError, QueryParseError
from textsearcher.search.ast_nodes import Literal, OrGroup, QuerySpec
from textsearcher.search.parser import format_query, parse_query

# ---------------------------------------------------------------------------
# Primary literal
# ---------------------------------------------------------------------------


class TestPrimary:
    def test_single_word(self) -> None:
        q = parse_query("hello")
        assert isinstance(q, QuerySpec)
        assert q.primary == Literal("hello")
        assert q.groups == ()

    def test_bare_words_form_one_phrase(self) -> None:
        q = parse_query("neural network")
        assert q.primary.value == "neural network"
        assert q.groups == ()

    def test_quoted_phrase(self) -> None:
        q = parse_query('"neural network"')
        assert q.primary.value == "neural network"

    def test_quoted_phrase_keeps_operators(self) -> None:
        q = parse_query('"R&D (a|b)"')
        assert q.primary.value == "R&D (a|b)"
        assert q.groups == ()

    def test_surrounding_whitespace_ignored(self) -> None:
        assert parse_query("   foo   ") == parse_query("foo")


# ---------------------------------------------------------------------------
# OR-groups
# ---------------------------------------------------------------------------


class TestGroups:
    def test_single_alternative(self) -> None:
        q = parse_query("foo & bar")
        assert q.primary.value == "foo"
        assert q.groups == (OrGroup((Literal("bar"),)),)

    def test_parenthesized_alternatives(self) -> None:
        q = parse_query("foo & (bar | baz)")
        assert len(q.groups) == 1
        assert [lit.value for lit in q.groups[0].literals] == ["bar", "baz"]

    def test_parentheses_optional(self) -> None:
        assert parse_query("foo & bar | baz") == parse_query("foo & (bar | baz)")

    def test_multiple_groups_in_order(self) -> None:
        q = parse_query('"neural network" & (transformer | attention) & pytorch')
        primary, groups = q.to_atoms()
        assert primary == "neural network"
        assert groups == [["transformer", "attention"], ["pytorch"]]

    def test_phrases_inside_group(self) -> None:
        q = parse_query('foo & ("deep learning" | machine learning)')
        assert q.to_atoms()[1] == [["deep learning", "machine learning"]]

    def test_no_spaces_around_operators(self) -> None:
        assert parse_query("foo&(bar|baz)&qux").to_atoms() == ("foo", [["bar", "baz"], ["qux"]])

    def test_cjk_literals(self) -> None:
        assert parse_query("中文 & (文本 | 日本語)").to_atoms() == ("中文", [["文本", "日本語"]])


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestParseErrors:
    @pytest.mark.parametrize("query", ["", "   ", "\n\t"])
    def test_empty_query(self, query: str) -> None:
        with pytest.raises(QueryParseError):
            parse_query(query)

    @pytest.mark.parametrize(
        "query",
        [
            "& foo",
            "foo &",
            "foo & & bar",
            "foo & (bar | )",
            "foo & (bar",
            "foo & bar)",
            "(foo | bar)",
            "foo | bar",
            "foo & ()",
            '"unterminated',
        ],
    )
    def test_malformed(self, query: str) -> None:
        with pytest.raises(QueryParseError):
            parse_query(query)

    def test_empty_quoted_literal(self) -> None:
        with pytest.raises(InvalidLiteralError):
            parse_query('"" & foo')

    def test_blank_quoted_literal_in_group(self) -> None:
        with pytest.raises(InvalidLiteralError):
            parse_query('foo & ("   " | bar)')

    def test_errors_are_value_errors(self) -> None:
        with pytest.raises(ValueError):
            parse_query("foo &")
        assert issubclass(QueryParseError, QueryError)

    def test_error_mentions_query(self) -> None:
        with pytest.raises(QueryParseError) as exc_info:
            parse_query("foo & & bar")
        assert exc_info.value.query == "foo & & bar"
        assert "foo & & bar" in str(exc_info.value)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


class TestFormatQuery:
    def test_primary_only(self) -> None:
        assert format_query(QuerySpec.from_atoms("foo")) == '"foo"'

    def test_groups(self) -> None:
        spec = QuerySpec.from_atoms("neural network", [["a", "b"], ["c"]])
        assert format_query(spec) == '"neural network" & ("a" | "b") & "c"'

    @pytest.mark.parametrize(
        "query",
        [
            "foo",
            '"deep learning" & (gpu | tpu)',
            "a & b & (c | d | e)",
        ],
    )
    def test_output_parses_back(self, query: str) -> None:
        spec = parse_query(query)
        assert parse_query(format_query(spec)) == spec
