"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""[search]
jobs = 3
encoding = "utf-8"

[matching]
case_sensitive = true
cjk_soft_breaks = true

[context]
before = 10
after = 20

[display]
colored_output = false
""")
    return config_path


@pytest.fixture
def corpus(temp_dir: Path) -> dict[str, Path]:
    """A handful of text files that look like pdftotext output."""
    docs = {
        "foo_bar": "Intro\nThe foo appears here.\nLater a bar shows up.\n",
        "foo_baz": "foo\n\nand then   baz at the end",
        "foo_only": "Only foo lives here.",
        "bar_only": "bar and baz but not the primary keyword",
        "split_words": "neural\n   net work models with trans former layers",
        "cjk": "这是中 文文本, hello  world",
    }
    paths: dict[str, Path] = {}
    for name, content in docs.items():
        path = temp_dir / f"{name}.txt"
        path.write_text(content, encoding="utf-8")
        paths[name] = path
    return paths


@pytest.fixture
def binary_file(temp_dir: Path) -> Path:
    """A file that is not valid UTF-8."""
    path = temp_dir / "binary.txt"
    path.write_bytes(b"foo \xff\xfe\xfa bar")
    return path

