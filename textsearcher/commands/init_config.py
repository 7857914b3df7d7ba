"""Initialize configuration file for textsearcher."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

import click

from textsearcher.cli import Context, pass_context
from textsearcher.config import get_default_config_path
from textsearcher.utils.fileops import atomic_write_text
from textsearcher.utils.output import error, info, success


def _load_example_config() -> str:
    """Load the example configuration from package data."""
    return resources.files("textsearcher").joinpath("config.example.toml").read_text()


@click.command("init-config")
@click.option(
    "--force",
    "-f",
    is_flag=True,
    default=False,
    help="Overwrite existing config file",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output path for config file (default: ~/.config/textsearcher/config.toml)",
)
@pass_context
def cli(ctx: Context, force: bool, output: Path | None) -> None:
    """Create a new configuration file with default settings.

    Creates a configuration file at the default location
    (~/.config/textsearcher/config.toml) or at a custom path
    specified with --output.

    Examples:

    \b
      # Create config at default location
      textsearcher init-config

    \b
      # Create config at custom location
      textsearcher init-config --output ./textsearcher.toml

    \b
      # Overwrite existing config
      textsearcher init-config --force
    """
    config_path = output if output is not None else get_default_config_path()
    config_path = config_path.expanduser().resolve()

    if config_path.exists() and not force:
        error(
            f"Config file already exists: {config_path}",
            hint="Use --force to overwrite",
        )
        raise SystemExit(1)

    try:
        atomic_write_text(config_path, _load_example_config())
    except OSError as e:
        error(f"Could not write config file: {e}")
        raise SystemExit(1)

    if not ctx.quiet:
        success(f"Created config file: {config_path}")
        info("Edit it to change worker count, encoding and matching options.")
