"""Query options shared by the search and match commands."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click

from textsearcher.api import QueryGroup
from textsearcher.config import Config
from textsearcher.search.parser import parse_query

GROUP_SEPARATOR = "|"


def query_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the options that describe a query to a command."""
    options = [
        click.option(
            "--any",
            "-a",
            "any_groups",
            multiple=True,
            metavar="ALT|ALT...",
            help="OR-group: at least one of the '|'-separated keywords must occur. "
            "Repeat for more groups.",
        ),
        click.option(
            "--query",
            "-e",
            "expression",
            default=None,
            help='Whole query as an expression, e.g. \'"deep learning" & (gpu | tpu)\'',
        ),
        click.option(
            "--ignore-case/--case-sensitive",
            "ignore_case",
            default=None,
            help="Match letter case loosely/exactly (default: from config, ignore case)",
        ),
        click.option(
            "--cjk/--no-cjk",
            "cjk",
            default=None,
            help="Tolerate whitespace between CJK characters (default: from config)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def split_group(raw: str) -> list[str]:
    """Split an ``--any`` value into its alternatives."""
    return [part.strip() for part in raw.split(GROUP_SEPARATOR)]


def build_query(
    config: Config,
    primary: str | None,
    any_groups: tuple[str, ...],
    expression: str | None,
    ignore_case: bool | None,
    cjk: bool | None,
) -> QueryGroup:
    """Build a QueryGroup from command-line values, falling back to config.

    Raises:
        click.UsageError: If neither or both of PRIMARY and --query are given.
        QueryError: If the query is invalid.
    """
    case_sensitive = config.case_sensitive if ignore_case is None else not ignore_case
    cjk_soft_breaks = config.cjk_soft_breaks if cjk is None else cjk
    options = {"case_sensitive": case_sensitive, "cjk_soft_breaks": cjk_soft_breaks}

    if expression is not None:
        if any_groups:
            raise click.UsageError("--query cannot be combined with --any")
        return QueryGroup.from_spec(parse_query(expression), **options)

    if primary is None:
        raise click.UsageError("Missing PRIMARY keyword (or use --query)")

    return QueryGroup(primary, [split_group(raw) for raw in any_groups], **options)
