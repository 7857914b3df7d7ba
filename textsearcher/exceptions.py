"""Exception hierarchy for textsearcher."""

from pathlib import Path


class TextSearcherError(Exception):
    """Base exception for all textsearcher errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all textsearcher errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(TextSearcherError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Query Errors
class QueryError(TextSearcherError, ValueError):
    """The query itself is malformed. Fatal to the whole call."""

    pass


class InvalidLiteralError(QueryError):
    """A literal is empty or consists only of whitespace."""

    def __init__(self, literal: object, reason: str = "literal must not be empty") -> None:
        self.literal = literal
        self.reason = reason
        super().__init__(f"Invalid literal {literal!r}: {reason}")


class EmptyOrGroupError(QueryError):
    """An OR-group has no literals."""

    def __init__(self, index: int | None = None) -> None:
        self.index = index
        if index is None:
            super().__init__("OR-group has no literals")
        else:
            super().__init__(f"OR-group #{index} has no literals")


class QueryParseError(QueryError):
    """Raised when a query expression cannot be parsed."""

    def __init__(self, query: str, message: str) -> None:
        self.query = query
        super().__init__(f"Failed to parse query '{query}': {message}")


# File Errors
class FileAccessError(TextSearcherError):
    """A file could not be read or decoded as text."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")
