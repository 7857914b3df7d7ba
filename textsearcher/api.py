"""Public entry points: build a query once, search many files with it."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator, Sequence

from textsearcher.search.ast_nodes import QuerySpec
from textsearcher.search.engine import SearchResult, search
from textsearcher.search.parser import parse_query
from textsearcher.search.query import CompiledQuery, compile_query, evaluate


class QueryGroup:
    """A primary literal AND-ed with OR-groups of literals.

    The query is validated and compiled on construction, so a bad query
    fails here rather than halfway through a search.

    Example:
        >>> q = QueryGroup("foo", [["bar", "baz"]])
        >>> match_str(q, "foo and baz")
        True

    Raises:
        InvalidLiteralError: If any literal is empty or whitespace-only.
        EmptyOrGroupError: If any OR-group has no literals.
    """

    def __init__(
        self,
        primary_atom: str,
        and_of_or_atoms: Iterable[Iterable[str]] = (),
        *,
        case_sensitive: bool = False,
        cjk_soft_breaks: bool = False,
    ) -> None:
        self.spec = QuerySpec.from_atoms(primary_atom, and_of_or_atoms)
        self.compiled: CompiledQuery = compile_query(
            self.spec,
            case_sensitive=case_sensitive,
            cjk_soft_breaks=cjk_soft_breaks,
        )

    @classmethod
    def from_spec(
        cls,
        spec: QuerySpec,
        *,
        case_sensitive: bool = False,
        cjk_soft_breaks: bool = False,
    ) -> QueryGroup:
        primary, groups = spec.to_atoms()
        return cls(primary, groups, case_sensitive=case_sensitive, cjk_soft_breaks=cjk_soft_breaks)

    @classmethod
    def parse(cls, expression: str, **options: bool) -> QueryGroup:
        """Build a query from an expression such as ``foo & (bar | baz)``."""
        return cls.from_spec(parse_query(expression), **options)

    @property
    def primary_atom(self) -> str:
        return self.spec.primary.value

    @property
    def and_of_or_atoms(self) -> list[list[str]]:
        return self.spec.to_atoms()[1]

    def __repr__(self) -> str:
        return f"QueryGroup({self.primary_atom!r}, {self.and_of_or_atoms!r})"


class FilePaths(Sequence[str]):
    """Paths of the documents to search.

    Existence is not checked here; a missing file shows up as a failed
    entry in the search result.
    """

    def __init__(self, paths: Iterable[str | os.PathLike[str]]) -> None:
        self.paths: list[str] = [os.fspath(p) for p in paths]

    def __getitem__(self, index):
        return self.paths[index]

    def __len__(self) -> int:
        return len(self.paths)

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths)

    def __repr__(self) -> str:
        return f"FilePaths({len(self.paths)} paths)"


def search_text(
    query: QueryGroup,
    files: FilePaths | Iterable[str | os.PathLike[str]],
    *,
    jobs: int | None = None,
    context: tuple[int, int] | None = None,
    encoding: str = "utf-8",
) -> SearchResult:
    """Search *files* for documents matching *query*.

    Args:
        query: The query; compiled once, at construction.
        files: Paths to search.
        jobs: Number of worker threads (default: CPU count).
        context: ``(before, after)`` characters of text to keep around
            the primary match of every matching file.
        encoding: Text encoding of the files.

    Returns:
        SearchResult with ``matched`` paths and ``failed`` path/reason pairs.
    """
    if not isinstance(files, FilePaths):
        files = FilePaths(files)
    return search(query.compiled, files, jobs=jobs, encoding=encoding, context=context)


def match_str(query: QueryGroup, contents: str) -> bool:
    """Evaluate *query* against an in-memory string."""
    return evaluate(query.compiled, contents)
