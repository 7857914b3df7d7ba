"""Search text files for a whitespace-tolerant keyword query."""

from __future__ import annotations

import io
import json
import time
from pathlib import Path
from typing import TextIO

import click
from rich.console import Console
from rich.markup import escape

from textsearcher.api import FilePaths, QueryGroup
from textsearcher.cli import Context, pass_context
from textsearcher.commands._query import build_query, query_options
from textsearcher.exceptions import QueryError
from textsearcher.search.engine import SearchResult, search
from textsearcher.search.parser import format_query
from textsearcher.utils.output import (
    THEME,
    console,
    create_progress,
    create_table,
    debug,
    error,
    info,
    pager_print,
    verbose,
    warning,
)
from textsearcher.utils.report import build_report, write_report

# Exit codes per CLI contract
EXIT_SUCCESS = 0
EXIT_QUERY_ERROR = 1
EXIT_PARTIAL_FAILURE = 2
EXIT_NO_FILES = 3
EXIT_INTERRUPTED = 130

# Failed files listed in the table summary before truncating
MAX_FAILED_SHOWN = 10


def _read_file_list(stream: TextIO) -> list[str]:
    """Read one path per line, ignoring blank lines."""
    return [line.rstrip("\r\n") for line in stream if line.strip()]


def _one_line(text: str) -> str:
    return " ".join(text.split())


@click.command("search")
@click.argument("primary", required=False)
@click.argument("files", nargs=-1, type=click.Path(path_type=Path))
@query_options
@click.option(
    "--files-from",
    "-T",
    type=click.File("r", encoding="utf-8"),
    default=None,
    help="Read additional file paths from FILE, one per line ('-' for stdin)",
)
@click.option(
    "--jobs",
    "-j",
    type=click.IntRange(min=1),
    default=None,
    help="Number of parallel workers (default: from config, else CPU count)",
)
@click.option(
    "--context",
    "-C",
    "context",
    type=(click.IntRange(min=0), click.IntRange(min=0)),
    default=None,
    metavar="BEFORE AFTER",
    help="Show BEFORE/AFTER characters around the primary match",
)
@click.option(
    "--encoding",
    default=None,
    help="Text encoding of the files (default: from config, utf-8)",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "paths", "json"]),
    default="table",
    help="Output format (default: table)",
)
@click.option(
    "--report",
    "-o",
    "report_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write a JSON report of the run to this path",
)
@pass_context
def cli(
    ctx: Context,
    primary: str | None,
    files: tuple[Path, ...],
    any_groups: tuple[str, ...],
    expression: str | None,
    ignore_case: bool | None,
    cjk: bool | None,
    files_from: TextIO | None,
    jobs: int | None,
    context: tuple[int, int] | None,
    encoding: str | None,
    output_format: str,
    report_path: Path | None,
) -> None:
    """Find files containing PRIMARY and at least one keyword of every --any group.

    Spaces inside a keyword are soft: "neural network" also matches
    "neuralnetwork" and "neural\\n  network". All other characters,
    including regex metacharacters, match literally.

    \b
    Examples:
      # Files mentioning "neural network"
      textsearcher search "neural network" papers/*.txt

    \b
      # ... that also mention transformer or attention, and pytorch
      textsearcher search "neural network" -a "transformer|attention" -a pytorch papers/*.txt

    \b
      # Same query as an expression, file list from find
      find papers -name '*.txt' | textsearcher search \\
          -e '"neural network" & (transformer | attention) & pytorch' -T -

    \b
      # Show 40 characters around each primary match
      textsearcher search "neural network" -C 40 40 papers/*.txt

    \b
    Output formats:
      --format table   Rich table (default)
      --format paths   One matching path per line (for piping)
      --format json    JSON object with matched and failed files

    \b
    Exit codes:
      0  search completed (with or without matches)
      1  invalid query
      2  some files could not be read
      3  no files given
    """
    config = ctx.config
    if config is None:
        error("Configuration not loaded")
        raise SystemExit(EXIT_QUERY_ERROR)

    # With --query every positional argument is a file.
    if expression is not None and primary is not None:
        files = (Path(primary), *files)
        primary = None

    try:
        query = build_query(config, primary, any_groups, expression, ignore_case, cjk)
    except QueryError as e:
        error(f"Invalid query: {e}")
        raise SystemExit(EXIT_QUERY_ERROR)

    paths = [str(f) for f in files]
    if files_from is not None:
        paths.extend(_read_file_list(files_from))
    targets = FilePaths(paths)

    if not targets:
        error("No files to search", hint="Pass file paths or use --files-from")
        raise SystemExit(EXIT_NO_FILES)

    jobs = jobs or config.jobs
    encoding = encoding or config.encoding
    if context is None:
        context = config.context

    verbose(f"Query: {format_query(query.spec)}")
    verbose(f"Searching {len(targets)} files")
    debug(f"Workers: {jobs or 'one per CPU'}, encoding: {encoding}, context: {context}")

    start = time.monotonic()
    try:
        if ctx.quiet or output_format != "table":
            result = search(query.compiled, targets, jobs=jobs, encoding=encoding, context=context)
        else:
            with create_progress() as progress:
                task = progress.add_task("Searching", total=len(set(targets)))
                result = search(
                    query.compiled,
                    targets,
                    jobs=jobs,
                    encoding=encoding,
                    context=context,
                    on_outcome=lambda _outcome: progress.advance(task),
                )
    except LookupError:
        error(f"Unknown text encoding: {encoding}")
        raise SystemExit(EXIT_QUERY_ERROR)
    except KeyboardInterrupt:
        error("Search interrupted")
        raise SystemExit(EXIT_INTERRUPTED)
    duration = time.monotonic() - start

    if output_format == "table":
        if not ctx.quiet:
            _print_table(query, result)
    elif output_format == "paths":
        _print_paths(result)
    elif output_format == "json":
        _print_json(result)

    if report_path is not None:
        write_report(build_report(query.spec, result, duration), report_path)
        verbose(f"Report written to {report_path}")

    if not result.success:
        if output_format != "table" and not ctx.quiet:
            warning(f"{len(result.failed)} of {result.total} files could not be read")
        raise SystemExit(EXIT_PARTIAL_FAILURE)

    raise SystemExit(EXIT_SUCCESS)


def _print_table(query: QueryGroup, result: SearchResult) -> None:
    """Print matches as a Rich table, followed by any failures."""
    expression = format_query(query.spec)
    if not result.matches:
        info(f"No matches for: {expression} ({result.total} files searched)")
    else:
        info(f"Search: {expression} ({len(result.matches)} of {result.total} files match)")

        show_context = any(m.context is not None for m in result.matches.values())
        table = create_table(show_header=True, header_style="bold")
        table.add_column("File", style="path", no_wrap=True)
        if show_context:
            table.add_column("Context", style="snippet")

        for path in result.sorted_paths():
            row = [escape(path)]
            if show_context:
                row.append(escape(_one_line(result.matches[path].context or "")))
            table.add_row(*row)

        # Render to buffer so we can route through pager
        buf = io.StringIO()
        render_console = Console(
            file=buf,
            theme=THEME,
            force_terminal=not console.no_color,
            width=console.width,
            no_color=console.no_color,
        )
        render_console.print(table)
        pager_print(buf.getvalue())

    if result.failed:
        _show_failures(result)


def _show_failures(result: SearchResult) -> None:
    """List files that could not be searched, with reasons."""
    console.print(f"\n[error]Failed files ({len(result.failed)}):[/error]")
    for path, reason in sorted(result.failed.items())[:MAX_FAILED_SHOWN]:
        console.print(f"  [path]{escape(path)}[/path]")
        console.print(f"    [dim]{escape(reason)}[/dim]")
    if len(result.failed) > MAX_FAILED_SHOWN:
        warning(f"... and {len(result.failed) - MAX_FAILED_SHOWN} more failures")


def _print_paths(result: SearchResult) -> None:
    """Print one matching path per line."""
    for path in result.sorted_paths():
        click.echo(path)


def _print_json(result: SearchResult) -> None:
    """Print matched and failed files as JSON."""
    data = {
        "matched": [
            {"file": path, "context": result.matches[path].context}
            for path in result.sorted_paths()
        ],
        "failed": [
            {"file": path, "reason": reason} for path, reason in sorted(result.failed.items())
        ],
    }
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))
