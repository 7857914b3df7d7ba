"""Parallel evaluation of a compiled query over many text files.

Workers never share mutable state: each one reads a single file,
evaluates the query and returns a ``SearchOutcome``. The calling thread
collects outcomes as futures complete and builds the ``SearchResult``.
"""

from __future__ import annotations

import codecs
import enum
import logging
import os
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from textsearcher.exceptions import FileAccessError
from textsearcher.search.query import CompiledQuery, find_primary, groups_satisfied

logger = logging.getLogger(__name__)


class OutcomeStatus(enum.Enum):
    """Classification of a single file's search."""

    MATCHED = "matched"
    NOT_MATCHED = "not_matched"
    FAILED = "failed"


@dataclass(frozen=True)
class SearchOutcome:
    """Result of searching one file."""

    path: str
    status: OutcomeStatus
    reason: str | None = None
    context: str | None = None

    @property
    def matched(self) -> bool:
        return self.status is OutcomeStatus.MATCHED


@dataclass(frozen=True)
class FileMatch:
    """A matching file, with the text around the primary match if requested."""

    path: str
    context: str | None = None


@dataclass
class SearchResult:
    """Aggregate result of one search call.

    ``matched`` and ``failed`` carry no ordering; use ``sorted_paths()``
    when reproducible output is needed.
    """

    matches: dict[str, FileMatch] = field(default_factory=dict)
    failed: dict[str, str] = field(default_factory=dict)
    not_matched: set[str] = field(default_factory=set)
    cancelled: bool = False

    @property
    def matched(self) -> frozenset[str]:
        """Paths of all matching files."""
        return frozenset(self.matches)

    @property
    def total(self) -> int:
        """Number of distinct files that were searched."""
        return len(self.matches) + len(self.failed) + len(self.not_matched)

    @property
    def success(self) -> bool:
        """True if no file failed."""
        return not self.failed

    def sorted_paths(self) -> list[str]:
        """Matching paths in lexicographic order."""
        return sorted(self.matches)

    def add(self, outcome: SearchOutcome) -> None:
        """Record one outcome. Only the collector thread calls this."""
        if outcome.status is OutcomeStatus.MATCHED:
            self.matches[outcome.path] = FileMatch(outcome.path, outcome.context)
        elif outcome.status is OutcomeStatus.FAILED:
            self.failed[outcome.path] = outcome.reason or "unknown error"
        else:
            self.not_matched.add(outcome.path)


def default_jobs() -> int:
    """Worker count used when none is configured."""
    return os.cpu_count() or 1


def context_snippet(text: str, start: int, end: int, before: int, after: int) -> str:
    """Cut ``text[start:end]`` plus up to *before*/*after* characters around it."""
    return text[max(0, start - before) : min(len(text), end + after)]


def read_text(path: str, encoding: str = "utf-8") -> str:
    """Read a whole file as text.

    Raises:
        FileAccessError: If the path is invalid, or the file is missing,
            unreadable or not valid text in *encoding*.
    """
    try:
        return Path(path).read_text(encoding=encoding)
    except UnicodeDecodeError as e:
        raise FileAccessError(path, f"not valid {encoding} text ({e.reason} at byte {e.start})") from e
    except OSError as e:
        raise FileAccessError(path, e.strerror or str(e)) from e
    except ValueError as e:
        # e.g. an embedded NUL byte in the path
        raise FileAccessError(path, str(e)) from e


def search_file(
    query: CompiledQuery,
    path: str,
    *,
    encoding: str = "utf-8",
    context: tuple[int, int] | None = None,
) -> SearchOutcome:
    """Search one file. Read and decode errors become a FAILED outcome."""
    try:
        text = read_text(path, encoding)
    except FileAccessError as e:
        return SearchOutcome(path, OutcomeStatus.FAILED, reason=e.reason)

    match = find_primary(query, text)
    if match is None or not groups_satisfied(query, text):
        return SearchOutcome(path, OutcomeStatus.NOT_MATCHED)

    snippet = None
    if context is not None:
        before, after = context
        snippet = context_snippet(text, match.start(), match.end(), before, after)
    return SearchOutcome(path, OutcomeStatus.MATCHED, context=snippet)


def search(
    query: CompiledQuery,
    files: Iterable[str | os.PathLike[str]],
    *,
    jobs: int | None = None,
    encoding: str = "utf-8",
    context: tuple[int, int] | None = None,
    cancel_event: threading.Event | None = None,
    on_outcome: Callable[[SearchOutcome], None] | None = None,
) -> SearchResult:
    """Evaluate *query* against every file using a bounded thread pool.

    A file that cannot be read is reported in ``SearchResult.failed`` and
    never aborts the batch.

    Args:
        query: Compiled query, shared read-only by all workers.
        files: Paths to search. Duplicates are searched once.
        jobs: Worker count; defaults to the number of CPUs.
        encoding: Text encoding of the files.
        context: ``(before, after)`` character counts for snippets.
        cancel_event: When set, files not yet started are skipped.
        on_outcome: Called from the calling thread for every outcome.

    Returns:
        The aggregated SearchResult.

    Raises:
        ValueError: If jobs or context sizes are out of range.
        LookupError: If the encoding is unknown.
    """
    if jobs is None:
        jobs = default_jobs()
    if jobs < 1:
        raise ValueError(f"jobs must be at least 1, got {jobs}")
    if context is not None and (context[0] < 0 or context[1] < 0):
        raise ValueError(f"context sizes must not be negative, got {context}")
    codecs.lookup(encoding)

    paths = list(dict.fromkeys(os.fspath(f) for f in files))
    result = SearchResult()
    if not paths:
        return result

    def _work(path: str) -> SearchOutcome | None:
        if cancel_event is not None and cancel_event.is_set():
            return None
        return search_file(query, path, encoding=encoding, context=context)

    logger.debug("Searching %d files with %d workers", len(paths), jobs)

    executor = ThreadPoolExecutor(max_workers=min(jobs, len(paths)))
    try:
        futures = [executor.submit(_work, path) for path in paths]

        for future in as_completed(futures):
            outcome = future.result()
            if outcome is None:
                result.cancelled = True
                continue
            if outcome.status is OutcomeStatus.FAILED:
                logger.warning("Skipping %s: %s", outcome.path, outcome.reason)
            result.add(outcome)
            if on_outcome is not None:
                on_outcome(outcome)
    except KeyboardInterrupt:
        # Stop feeding workers; a running match finishes on its own.
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    finally:
        executor.shutdown(wait=True)

    logger.debug(
        "Search finished: %d matched, %d not matched, %d failed",
        len(result.matches),
        len(result.not_matched),
        len(result.failed),
    )
    return result
