"""Unit tests for the init-config command."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from textsearcher.commands.init_config import _load_example_config, cli
from textsearcher.config import load_config


class TestLoadExampleConfig:
    def test_loads_non_empty_content(self) -> None:
        content = _load_example_config()
        assert len(content) > 0

    def test_contains_all_sections(self) -> None:
        content = _load_example_config()
        for section in ("[search]", "[matching]", "[context]", "[display]"):
            assert section in content, f"Missing section {section}"

    def test_example_loads_as_defaults(self, temp_dir: Path) -> None:
        path = temp_dir / "config.toml"
        path.write_text(_load_example_config())
        config, warnings = load_config(path)
        assert warnings == []
        assert config.jobs is None
        assert config.case_sensitive is False
        assert config.context is None


class TestInitConfigCommand:
    def test_creates_config_file(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["--output", "test-config.toml"], standalone_mode=False)
            assert result.exit_code == 0 or result.exception is None
            assert Path("test-config.toml").exists()
            content = Path("test-config.toml").read_text()
            assert "[search]" in content

    def test_created_file_matches_example(self) -> None:
        example = _load_example_config()
        runner = CliRunner()
        with runner.isolated_filesystem():
            runner.invoke(cli, ["--output", "test-config.toml"], standalone_mode=False)
            content = Path("test-config.toml").read_text()
            assert content == example

    def test_fails_if_exists_without_force(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("test-config.toml").write_text("existing")
            result = runner.invoke(cli, ["--output", "test-config.toml"], standalone_mode=False)
            assert isinstance(result.exception, SystemExit)
            assert result.exception.code == 1
            assert Path("test-config.toml").read_text() == "existing"

    def test_force_overwrites_existing(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("test-config.toml").write_text("old content")
            result = runner.invoke(
                cli, ["--output", "test-config.toml", "--force"], standalone_mode=False
            )
            assert result.exception is None or result.exit_code == 0
            content = Path("test-config.toml").read_text()
            assert "[matching]" in content
            assert "old content" not in content

    def test_creates_parent_directories(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(
                cli, ["--output", "deep/nested/dir/config.toml"], standalone_mode=False
            )
            assert result.exception is None or result.exit_code == 0
            assert Path("deep/nested/dir/config.toml").exists()

    def test_default_path_used_when_no_output(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            mock_path = MagicMock(return_value=Path("default-config.toml"))
            with patch("textsearcher.commands.init_config.get_default_config_path", mock_path):
                result = runner.invoke(cli, [], standalone_mode=False)
                assert result.exception is None or result.exit_code == 0
                assert Path("default-config.toml").exists()
