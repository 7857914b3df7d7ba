"""textsearcher: whitespace-tolerant keyword search over extracted text."""

from textsearcher.api import FilePaths, QueryGroup, match_str, search_text
from textsearcher.exceptions import (
    EmptyOrGroupError,
    FileAccessError,
    InvalidLiteralError,
    QueryError,
    QueryParseError,
    TextSearcherError,
)
from textsearcher.search.engine import FileMatch, SearchResult

__version__ = "0.1.0"

__all__ = [
    "EmptyOrGroupError",
    "FileAccessError",
    "FileMatch",
    "FilePaths",
    "InvalidLiteralError",
    "QueryError",
    "QueryGroup",
    "QueryParseError",
    "SearchResult",
    "TextSearcherError",
    "__version__",
    "match_str",
    "search_text",
]
