"""Unit tests for the match command."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from textsearcher.cli import cli
from textsearcher.commands.match import EXIT_ERROR, EXIT_MATCH, EXIT_NO_MATCH


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    path = temp_dir / "config.toml"
    path.write_text("")
    return path


def _invoke(config_file: Path, *args: str, input: str | bytes | None = None):
    runner = CliRunner()
    return runner.invoke(cli, ["--config", str(config_file), "--no-color", *args], input=input)


class TestMatchCommand:
    def test_match(self, config_file: Path) -> None:
        result = _invoke(config_file, "match", "foo", "-a", "bar|baz", input="foo and\nb az baz")
        assert result.exit_code == EXIT_MATCH
        assert "match" in result.output

    def test_no_match(self, config_file: Path) -> None:
        result = _invoke(config_file, "match", "foo", "-a", "bar|baz", input="foo alone")
        assert result.exit_code == EXIT_NO_MATCH
        assert "no match" in result.output

    def test_soft_whitespace(self, config_file: Path) -> None:
        result = _invoke(config_file, "match", "neural network", input="neural\n  net work")
        assert result.exit_code == EXIT_MATCH

    def test_expression(self, config_file: Path) -> None:
        result = _invoke(config_file, "match", "-e", "foo & (bar | baz)", input="baz foo")
        assert result.exit_code == EXIT_MATCH

    def test_case_handling(self, config_file: Path) -> None:
        assert _invoke(config_file, "match", "FOO", input="foo").exit_code == EXIT_MATCH
        result = _invoke(config_file, "match", "-i", "-", "--case-sensitive", "FOO", input="foo")
        assert result.exit_code == EXIT_NO_MATCH

    def test_split_line_example(self, config_file: Path) -> None:
        result = _invoke(config_file, "match", "deep learning", input="Deep \n  Learning")
        assert result.exit_code == EXIT_MATCH

    def test_cjk(self, config_file: Path) -> None:
        assert _invoke(config_file, "match", "中文", input="中 文").exit_code == EXIT_NO_MATCH
        assert _invoke(config_file, "match", "--cjk", "中文", input="中 文").exit_code == EXIT_MATCH

    def test_input_file(self, config_file: Path, corpus: dict[str, Path]) -> None:
        result = _invoke(config_file, "match", "foo", "-a", "bar", "--input", str(corpus["foo_bar"]))
        assert result.exit_code == EXIT_MATCH

    def test_quiet(self, config_file: Path) -> None:
        result = _invoke(config_file, "-q", "match", "foo", input="foo")
        assert result.exit_code == EXIT_MATCH
        assert result.output == ""

    def test_invalid_query(self, config_file: Path) -> None:
        result = _invoke(config_file, "match", "   ", input="foo")
        assert result.exit_code == EXIT_ERROR
        assert "Invalid query" in result.output

    def test_invalid_utf8(self, config_file: Path) -> None:
        result = _invoke(config_file, "match", "foo", input=b"foo \xff\xfe")
        assert result.exit_code == EXIT_ERROR
