"""Utility modules for textsearcher."""

from textsearcher.utils.fileops import atomic_write_text
from textsearcher.utils.output import (
    console,
    error,
    info,
    success,
    warning,
)

__all__ = [
    "atomic_write_text",
    "console",
    "error",
    "info",
    "success",
    "warning",
]
