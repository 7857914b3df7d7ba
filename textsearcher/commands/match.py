"""Test a single text against a query."""

from __future__ import annotations

from typing import TextIO

import click

from textsearcher.api import match_str
from textsearcher.cli import Context, pass_context
from textsearcher.commands._query import build_query, query_options
from textsearcher.exceptions import QueryError
from textsearcher.utils.output import error, success, warning

# grep-style exit codes
EXIT_MATCH = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2


@click.command("match")
@click.argument("primary", required=False)
@query_options
@click.option(
    "--input",
    "-i",
    "source",
    type=click.File("r", encoding="utf-8"),
    default="-",
    show_default=True,
    help="Text to test ('-' for stdin)",
)
@pass_context
def cli(
    ctx: Context,
    primary: str | None,
    any_groups: tuple[str, ...],
    expression: str | None,
    ignore_case: bool | None,
    cjk: bool | None,
    source: TextIO,
) -> None:
    """Exit 0 if the input text matches the query, 1 if it does not.

    Useful for checking what a query matches before running it over a
    whole collection.

    \b
    Examples:
      pdftotext paper.pdf - | textsearcher match "neural network" -a "gpu|tpu"
      printf "Deep \\n  Learning" | textsearcher match "deep learning"
    """
    config = ctx.config
    if config is None:
        error("Configuration not loaded")
        raise SystemExit(EXIT_ERROR)

    try:
        query = build_query(config, primary, any_groups, expression, ignore_case, cjk)
    except QueryError as e:
        error(f"Invalid query: {e}")
        raise SystemExit(EXIT_ERROR)

    try:
        text = source.read()
    except UnicodeDecodeError as e:
        error(f"Input is not valid UTF-8 text: {e.reason}")
        raise SystemExit(EXIT_ERROR)

    if match_str(query, text):
        if not ctx.quiet:
            success("match")
        raise SystemExit(EXIT_MATCH)

    if not ctx.quiet:
        warning("no match")
    raise SystemExit(EXIT_NO_MATCH)
