"""JSON reports of search runs."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path

from textsearcher.search.ast_nodes import QuerySpec
from textsearcher.search.engine import SearchResult
from textsearcher.utils.fileops import atomic_write_text

REPORT_VERSION = 1


@dataclass
class FailedFile:
    """A file that could not be searched."""

    file: str
    reason: str


@dataclass
class SearchReport:
    """Complete record of one search run."""

    version: int  # Always 1
    timestamp: str  # ISO 8601
    duration_seconds: float
    query: dict  # {primary, groups}
    summary: dict  # {total, matched, not_matched, failed}
    matched: list[str]
    failed: list[FailedFile]
    cancelled: bool = False


def build_report(
    spec: QuerySpec,
    result: SearchResult,
    duration_seconds: float,
    timestamp: datetime | None = None,
) -> SearchReport:
    """Summarize *result* with paths sorted for stable output."""
    if timestamp is None:
        timestamp = datetime.now(timezone.utc)

    primary, groups = spec.to_atoms()
    return SearchReport(
        version=REPORT_VERSION,
        timestamp=timestamp.isoformat(),
        duration_seconds=round(duration_seconds, 3),
        query={"primary": primary, "groups": groups},
        summary={
            "total": result.total,
            "matched": len(result.matches),
            "not_matched": len(result.not_matched),
            "failed": len(result.failed),
        },
        matched=result.sorted_paths(),
        failed=[FailedFile(path, reason) for path, reason in sorted(result.failed.items())],
        cancelled=result.cancelled,
    )


def write_report(report: SearchReport, output_path: Path) -> None:
    """Write a SearchReport to a JSON file atomically."""
    atomic_write_text(output_path, json.dumps(asdict(report), indent=2, ensure_ascii=False) + "\n")
