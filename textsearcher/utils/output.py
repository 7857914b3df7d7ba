"""Rich console output helpers for textsearcher."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.theme import Theme

# Module-level verbosity flags (set by cli.py after argument parsing)
_verbose_enabled: bool = False
_debug_enabled: bool = False

# Module-level pager setting (None = auto, True = forced, False = disabled)
_pager_mode: bool | None = None

THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "path": "blue underline",
        "snippet": "italic",
        "progress.description": "bold blue",
    }
)

# Global console instances
console = Console(theme=THEME, stderr=False)
error_console = Console(theme=THEME, stderr=True)


def set_verbosity(*, verbose: bool = False, debug: bool = False) -> None:
    """Configure module-level verbosity flags and library logging.

    Called from the CLI entry point after argument parsing. Library
    modules log through ``logging``; their records are rendered on
    stderr by a RichHandler.
    """
    global _verbose_enabled, _debug_enabled
    _verbose_enabled = verbose or debug  # debug implies verbose
    _debug_enabled = debug

    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    root = logging.getLogger("textsearcher")
    root.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(RichHandler(console=error_console, show_path=debug, markup=False))


def set_color(enabled: bool) -> None:
    """Enable or disable color on both console instances."""
    console.no_color = not enabled
    error_console.no_color = not enabled


def set_pager(mode: bool | None) -> None:
    """Configure pager mode.

    Args:
        mode: True = always, False = never, None = auto (TTY + content > height).
    """
    global _pager_mode
    _pager_mode = mode


def _find_pager() -> list[str]:
    """$PAGER if set, otherwise ``less`` with ANSI colors passed through."""
    pager_env = os.environ.get("PAGER")
    if pager_env:
        return pager_env.split()
    return ["less", "-RFS"]


def pager_print(content: str) -> None:
    """Print content through a pager if appropriate.

    Pages only when stdout is a TTY and the content is taller than the
    terminal, unless forced either way with ``set_pager``.
    """
    use_pager = _pager_mode
    if use_pager is None:
        lines = content.count("\n")
        use_pager = sys.stdout.isatty() and lines > shutil.get_terminal_size().lines

    if not use_pager:
        sys.stdout.write(content)
        sys.stdout.flush()
        return

    try:
        env = os.environ.copy()
        env.setdefault("LESSCHARSET", "utf-8")
        proc = subprocess.Popen(
            _find_pager(),
            stdin=subprocess.PIPE,
            encoding="utf-8",
            errors="replace",
            env=env,
        )
        proc.communicate(input=content)
    except (OSError, subprocess.SubprocessError):
        # Pager failed, fall back to direct output
        sys.stdout.write(content)
        sys.stdout.flush()


def info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/info]")


def warning(message: str) -> None:
    """Print a warning message to stderr."""
    error_console.print(f"[warning]Warning:[/warning] {message}")


def error(message: str, hint: str | None = None) -> None:
    """Print an error message to stderr.

    Args:
        message: The error message.
        hint: Optional hint for resolution.
    """
    error_console.print(f"[error]Error:[/error] {message}")
    if hint:
        error_console.print(f"  [info]Hint:[/info] {hint}")


def success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/success]")


def verbose(message: str) -> None:
    """Print a message only when verbose mode is enabled."""
    if _verbose_enabled:
        error_console.print(f"[info]{message}[/info]")


def debug(message: str) -> None:
    """Print a debug message only when debug mode is enabled."""
    if _debug_enabled:
        error_console.print(f"[warning]\\[DEBUG][/warning] {message}")


def create_progress() -> Progress:
    """Create a progress bar for searching files.

    Drawn on stderr so that piped result output stays clean.
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        TimeElapsedColumn(),
        console=error_console,
        transient=True,
    )


def create_table(title: str | None = None, **kwargs: Any) -> Table:
    """Create a styled table.

    Args:
        title: Optional table title.
        **kwargs: Additional Table arguments.

    Returns:
        Rich Table instance.
    """
    return Table(title=title, **kwargs)
