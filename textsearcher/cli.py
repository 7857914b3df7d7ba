"""Command-line interface for textsearcher."""

from __future__ import annotations

import os
from pathlib import Path

import click

from textsearcher import __version__
from textsearcher.config import Config, load_config
from textsearcher.utils.output import (
    error,
    set_color,
    set_pager,
    set_verbosity,
    warning,
)


class Context:
    """Shared context for all commands."""

    def __init__(self) -> None:
        self.config: Config | None = None
        self.verbose: bool = False
        self.debug: bool = False
        self.quiet: bool = False
        self.pager: bool | None = None  # None = auto


pass_context = click.make_pass_decorator(Context, ensure=True)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=False, path_type=Path),
    help="Path to config file (default: ~/.config/textsearcher/config.toml)",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug output (implies --verbose)",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress non-error output",
)
@click.option(
    "--pager/--no-pager",
    default=None,
    help="Force pager on/off (default: auto-detect)",
)
@click.version_option(version=__version__, prog_name="textsearcher")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    no_color: bool,
    verbose: bool,
    debug: bool,
    quiet: bool,
    pager: bool | None,
) -> None:
    """textsearcher: find text files matching whitespace-tolerant keyword queries.

    Built for text extracted from PDFs, where words are often split or
    glued together by stray whitespace. A query is one primary keyword
    plus any number of OR-groups; a file matches when it contains the
    primary keyword and at least one keyword of every group.

    Configuration is loaded from ~/.config/textsearcher/config.toml by default.
    Use --config to specify an alternative configuration file.

    Examples:

        # Files mentioning "neural network" and either "transformer" or "attention"
        textsearcher search "neural network" -a "transformer|attention" papers/*.txt

        # Show help for a specific command
        textsearcher search --help
    """
    ctx.ensure_object(Context)
    app_ctx = ctx.obj
    app_ctx.verbose = verbose or debug
    app_ctx.debug = debug
    app_ctx.quiet = quiet
    app_ctx.pager = pager

    # Configure verbosity for output helpers and library logging
    set_verbosity(verbose=verbose, debug=debug)

    set_pager(pager)

    # Configure color output: disabled by --no-color, NO_COLOR env, or config
    disable_color = no_color or os.environ.get("NO_COLOR") is not None

    if disable_color:
        set_color(False)

    try:
        loaded_config, warnings = load_config(config)
        app_ctx.config = loaded_config

        if not disable_color and not loaded_config.colored_output:
            set_color(False)

        if not quiet:
            for warn in warnings:
                warning(warn)

    except Exception as e:
        error(str(e))
        ctx.exit(1)


@cli.command("help")
@click.argument("command", required=False, nargs=-1)
@click.pass_context
def help_cmd(ctx: click.Context, command: tuple[str, ...]) -> None:
    """Show help for a command."""
    group = cli
    for name in command:
        cmd = group.get_command(ctx, name)
        if cmd is None:
            error(f"Unknown command: {name}")
            ctx.exit(1)
            return
        if isinstance(cmd, click.Group):
            group = cmd
        else:
            click.echo(cmd.get_help(ctx))
            return
    click.echo(group.get_help(ctx))


def register_commands() -> None:
    """Register all commands from the commands package."""
    from textsearcher.commands import discover_commands

    for command in discover_commands():
        cli.add_command(command)


# Register commands on import
register_commands()


def main() -> None:
    """Console script entry point."""
    cli()
