"""Parse query expressions like ``foo & (bar | baz)`` into a QuerySpec."""

from __future__ import annotations

from importlib import resources
from typing import Any

from lark import Lark, Token, Transformer, UnexpectedInput

from textsearcher.exceptions import QueryParseError
from textsearcher.search.ast_nodes import QuerySpec


def _load_grammar() -> str:
    """Load the Lark grammar from the package resources."""
    return resources.files("textsearcher.search").joinpath("grammar.lark").read_text()


_GRAMMAR_TEXT = _load_grammar()

_parser = Lark(_GRAMMAR_TEXT, parser="lalr")


class _QueryTransformer(Transformer):
    """Transform the Lark parse tree into plain atoms.

    Literal validation happens afterwards in ``QuerySpec.from_atoms`` so
    that query errors are not wrapped in Lark's ``VisitError``.
    """

    def start(self, items: list[Any]) -> tuple[str, list[list[str]]]:
        primary, *groups = items
        return primary, groups

    def primary(self, items: list[Any]) -> str:
        return items[0]

    def group(self, items: list[Any]) -> list[str]:
        return items[0]

    def alternatives(self, items: list[Any]) -> list[str]:
        return list(items)

    def literal(self, items: list[Any]) -> str:
        # Adjacent bare words form one phrase.
        return " ".join(str(item) for item in items)

    def QUOTED_STRING(self, token: Token) -> str:
        return str(token)[1:-1]

    def BARE_WORD(self, token: Token) -> str:
        return str(token)


_transformer = _QueryTransformer()


def parse_query(query_string: str) -> QuerySpec:
    """Parse a query expression into a QuerySpec.

    The first literal is the primary atom; every ``&``-separated part
    after it is an OR-group whose alternatives are separated by ``|``.
    Parentheses around a group are optional.

    Args:
        query_string: The expression to parse.

    Returns:
        A validated QuerySpec.

    Raises:
        QueryParseError: If the expression is not well formed.
        InvalidLiteralError: If a quoted literal is empty.
    """
    query_string = query_string.strip()
    if not query_string:
        raise QueryParseError(query_string, "query is empty")

    try:
        tree = _parser.parse(query_string)
    except UnexpectedInput as e:
        raise QueryParseError(query_string, str(e)) from e

    primary, groups = _transformer.transform(tree)
    return QuerySpec.from_atoms(primary, groups)


def format_query(spec: QuerySpec) -> str:
    """Render a QuerySpec back into expression syntax."""

    def _lit(value: str) -> str:
        return f'"{value}"'

    parts = [_lit(spec.primary.value)]
    for group in spec.groups:
        alternatives = " | ".join(_lit(lit.value) for lit in group.literals)
        parts.append(f"({alternatives})" if len(group.literals) > 1 else alternatives)
    return " & ".join(parts)
