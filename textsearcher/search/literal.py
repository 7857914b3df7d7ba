"""Whitespace-tolerant literal compilation.

Text produced by PDF-to-text converters is full of spurious or missing
spaces: ``"machine  learning"``, ``"machinelearning"`` and
``"machine\\nlearning"`` can all stand for the same phrase. A literal is
compiled so that every whitespace run it contains becomes a *soft*
separator (``\\s*``), while every other character is matched verbatim.

The transform from literal to pattern source is kept separate from
``re.compile`` so the policy can be inspected and tested on its own.
"""

from __future__ import annotations

import re

from textsearcher.exceptions import InvalidLiteralError

# Zero or more, so "AB" also matches the literal "A B".
SOFT_SEPARATOR = r"\s*"

# CJK unified ideographs plus hiragana/katakana.
_CJK_CHAR = re.compile(r"[\u4e00-\u9fa5\u3040-\u30ff]")


def _is_cjk(ch: str) -> bool:
    return _CJK_CHAR.match(ch) is not None


def _split_cjk(word: str) -> list[str]:
    """Split a word so each CJK character stands alone.

    Runs of non-CJK characters stay together: ``"中文hello"`` becomes
    ``["中", "文", "hello"]``.
    """
    pieces: list[str] = []
    run = ""
    for ch in word:
        if _is_cjk(ch):
            if run:
                pieces.append(run)
                run = ""
            pieces.append(ch)
        else:
            run += ch
    if run:
        pieces.append(run)
    return pieces


def split_words(literal: str, *, cjk_soft_breaks: bool = False) -> list[str]:
    """Split a literal into the words that must match verbatim.

    Leading and trailing whitespace is dropped and consecutive whitespace
    collapses, so ``"A  B"`` and ``"A B"`` yield the same words.

    Raises:
        InvalidLiteralError: If the literal is not a string or is blank.
    """
    if not isinstance(literal, str):
        raise InvalidLiteralError(literal, "literal must be a string")

    words = literal.split()
    if not words:
        raise InvalidLiteralError(literal)

    if cjk_soft_breaks:
        words = [piece for word in words for piece in _split_cjk(word)]
    return words


def literal_to_pattern(literal: str, *, cjk_soft_breaks: bool = False) -> str:
    """Return the regex source that matches *literal* with loose whitespace.

    Examples:
        >>> literal_to_pattern("hello world")
        'hello\\\\s*world'
        >>> literal_to_pattern("a.b")
        'a\\\\.b'

    Args:
        literal: The keyword or phrase to match.
        cjk_soft_breaks: Also allow whitespace between adjacent CJK
            characters and at CJK/non-CJK boundaries.

    Returns:
        Pattern source suitable for ``re.compile``.

    Raises:
        InvalidLiteralError: If the literal is empty or whitespace-only.
    """
    words = split_words(literal, cjk_soft_breaks=cjk_soft_breaks)
    return SOFT_SEPARATOR.join(re.escape(word) for word in words)


def compile_literal(
    literal: str,
    *,
    case_sensitive: bool = False,
    cjk_soft_breaks: bool = False,
) -> re.Pattern[str]:
    """Compile a literal into an unanchored, whitespace-tolerant matcher.

    Use ``pattern.search(text)`` to test for an occurrence anywhere in
    the text.

    Raises:
        InvalidLiteralError: If the literal is empty or whitespace-only.
    """
    flags = 0 if case_sensitive else re.IGNORECASE
    return re.compile(literal_to_pattern(literal, cjk_soft_breaks=cjk_soft_breaks), flags)
