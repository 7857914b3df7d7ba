"""Compile a QuerySpec into matchers and evaluate it against document text."""

from __future__ import annotations

import re
from dataclasses import dataclass

from textsearcher.exceptions import EmptyOrGroupError
from textsearcher.search.ast_nodes import QuerySpec
from textsearcher.search.literal import compile_literal


@dataclass(frozen=True)
class CompiledQuery:
    """Immutable compiled form of a QuerySpec.

    Compiled patterns are thread-safe for matching, so a single instance
    is shared by every search worker without locking.

    Attributes:
        spec: The query this was compiled from.
        primary: Matcher for the primary literal.
        groups: One tuple of matchers per OR-group, in query order.
        case_sensitive: Whether matchers respect letter case.
        cjk_soft_breaks: Whether CJK characters were split into words.
    """

    spec: QuerySpec
    primary: re.Pattern[str]
    groups: tuple[tuple[re.Pattern[str], ...], ...]
    case_sensitive: bool = False
    cjk_soft_breaks: bool = False


def compile_query(
    spec: QuerySpec,
    *,
    case_sensitive: bool = False,
    cjk_soft_breaks: bool = False,
) -> CompiledQuery:
    """Compile every literal of *spec* once.

    Args:
        spec: The query to compile.
        case_sensitive: Match letter case exactly.
        cjk_soft_breaks: Tolerate whitespace between CJK characters.

    Returns:
        A CompiledQuery that can be evaluated against any number of texts.

    Raises:
        InvalidLiteralError: If any literal is empty or whitespace-only.
        EmptyOrGroupError: If any OR-group has no literals.
    """
    options = {"case_sensitive": case_sensitive, "cjk_soft_breaks": cjk_soft_breaks}

    primary = compile_literal(spec.primary.value, **options)

    groups: list[tuple[re.Pattern[str], ...]] = []
    for index, group in enumerate(spec.groups):
        if not group.literals:
            raise EmptyOrGroupError(index)
        groups.append(tuple(compile_literal(lit.value, **options) for lit in group.literals))

    return CompiledQuery(
        spec=spec,
        primary=primary,
        groups=tuple(groups),
        case_sensitive=case_sensitive,
        cjk_soft_breaks=cjk_soft_breaks,
    )


def find_primary(query: CompiledQuery, text: str) -> re.Match[str] | None:
    """Return the first occurrence of the primary literal, if any."""
    return query.primary.search(text)


def groups_satisfied(query: CompiledQuery, text: str) -> bool:
    """Check the OR-groups only, in query order.

    Stops at the first group with no matching member, and within a
    group at the first member that matches.
    """
    return all(any(matcher.search(text) for matcher in group) for group in query.groups)


def evaluate(query: CompiledQuery, text: str) -> bool:
    """Decide whether *text* satisfies the query.

    The primary literal is tried first since most documents fail on it.
    """
    if find_primary(query, text) is None:
        return False
    return groups_satisfied(query, text)
