"""Configuration management for textsearcher."""

from __future__ import annotations

import codecs
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from textsearcher.exceptions import (
    ConfigParseError,
    ConfigValidationError,
)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "textsearcher" / "config.toml"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        jobs: Worker threads for a search. None means one per CPU.
        encoding: Text encoding used to read documents.
        case_sensitive: Whether literals match letter case exactly.
        cjk_soft_breaks: Tolerate whitespace between CJK characters.
        context_before: Characters of context kept before the primary match.
        context_after: Characters of context kept after the primary match.
        colored_output: Whether to use colored terminal output.
        config_path: Path where config was loaded from (None if defaults).
    """

    jobs: int | None = None
    encoding: str = "utf-8"
    case_sensitive: bool = False
    cjk_soft_breaks: bool = False
    context_before: int = 0
    context_after: int = 0
    colored_output: bool = True
    config_path: Path | None = None

    @property
    def context(self) -> tuple[int, int] | None:
        """Context window for snippets, or None when disabled."""
        if self.context_before == 0 and self.context_after == 0:
            return None
        return (self.context_before, self.context_after)

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.

        Raises:
            ConfigValidationError: If a critical validation fails.
        """
        warnings: list[str] = []

        if self.jobs is not None and self.jobs < 1:
            raise ConfigValidationError("search.jobs", self.jobs, "must be at least 1")

        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ConfigValidationError(
                "search.encoding", self.encoding, "unknown text encoding"
            ) from None

        if self.context_before < 0:
            raise ConfigValidationError("context.before", self.context_before, "must not be negative")
        if self.context_after < 0:
            raise ConfigValidationError("context.after", self.context_after, "must not be negative")

        if self.context_before > 10_000 or self.context_after > 10_000:
            warnings.append(
                f"Context window {self.context_before}/{self.context_after} is very large; "
                "snippets may flood the output"
            )

        return warnings


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []
    explicit = config_path is not None

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if not config_path.exists():
        config = Config()
        # Running without a config file is normal; only warn when one was asked for.
        if explicit:
            warnings.append(f"No config file found at {config_path}. Using defaults.")
        config_warnings = config.validate()
        return config, warnings + config_warnings

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    config_warnings = config.validate()

    return config, warnings + config_warnings


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [search] section
    search = data.get("search", {})
    if "jobs" in search:
        value = search["jobs"]
        if not _is_int(value):
            raise ConfigValidationError("search.jobs", value, "must be an integer")
        config.jobs = value

    if "encoding" in search:
        value = search["encoding"]
        if not isinstance(value, str):
            raise ConfigValidationError("search.encoding", value, "must be a string")
        config.encoding = value

    # Parse [matching] section
    matching = data.get("matching", {})
    if "case_sensitive" in matching:
        value = matching["case_sensitive"]
        if not isinstance(value, bool):
            raise ConfigValidationError("matching.case_sensitive", value, "must be a boolean")
        config.case_sensitive = value

    if "cjk_soft_breaks" in matching:
        value = matching["cjk_soft_breaks"]
        if not isinstance(value, bool):
            raise ConfigValidationError("matching.cjk_soft_breaks", value, "must be a boolean")
        config.cjk_soft_breaks = value

    # Parse [context] section
    context = data.get("context", {})
    if "before" in context:
        value = context["before"]
        if not _is_int(value):
            raise ConfigValidationError("context.before", value, "must be an integer")
        config.context_before = value

    if "after" in context:
        value = context["after"]
        if not _is_int(value):
            raise ConfigValidationError("context.after", value, "must be an integer")
        config.context_after = value

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    return config


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()

    # Ensure directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = {
        "search": {
            "encoding": config.encoding,
        },
        "matching": {
            "case_sensitive": config.case_sensitive,
            "cjk_soft_breaks": config.cjk_soft_breaks,
        },
        "context": {
            "before": config.context_before,
            "after": config.context_after,
        },
        "display": {
            "colored_output": config.colored_output,
        },
    }

    # TOML has no null, so an unset job count is simply left out.
    if config.jobs is not None:
        data["search"]["jobs"] = config.jobs

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
