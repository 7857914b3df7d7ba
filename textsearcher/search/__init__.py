"""Whitespace-tolerant boolean keyword search over text files."""

from textsearcher.search.ast_nodes import Literal, OrGroup, QuerySpec
from textsearcher.search.engine import (
    FileMatch,
    OutcomeStatus,
    SearchOutcome,
    SearchResult,
    search,
)
from textsearcher.search.literal import compile_literal, literal_to_pattern
from textsearcher.search.parser import format_query, parse_query
from textsearcher.search.query import CompiledQuery, compile_query, evaluate

__all__ = [
    "CompiledQuery",
    "FileMatch",
    "Literal",
    "OrGroup",
    "OutcomeStatus",
    "QuerySpec",
    "SearchOutcome",
    "SearchResult",
    "compile_literal",
    "compile_query",
    "evaluate",
    "format_query",
    "literal_to_pattern",
    "parse_query",
    "search",
]
