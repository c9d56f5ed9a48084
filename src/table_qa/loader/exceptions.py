"""
Exceptions raised while turning CSV text into a Table.

All of them describe a problem with the input data, not with the service,
and carry the line number where the problem was found when there is one.
"""

from typing import Any


class TableLoadError(Exception):
    """
    Base exception for all table loading errors.

    Catch this to handle any input data shape problem with one except clause.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class TableSourceError(TableLoadError):
    """Raised when the table source file cannot be read."""

    def __init__(self, message: str, path: str):
        super().__init__(message, {"path": path})
        self.path = path


class EmptyTableError(TableLoadError):
    """Raised when the input has no header row or no data rows."""
    pass


class ParseError(TableLoadError):
    """
    Raised on malformed CSV syntax.

    Examples:
    - Unterminated quoted field
    - Quote character inside a field that is not quoted
    - Characters between a closing quote and the next delimiter
    - Duplicate or empty header names
    """

    def __init__(self, message: str, line_number: int, parse_error: str | None = None):
        details: dict[str, Any] = {"line_number": line_number}
        if parse_error:
            details["parse_error"] = parse_error
        super().__init__(message, details)
        self.line_number = line_number


class MalformedRowError(TableLoadError):
    """
    Raised when a data row has a different number of fields than the header.

    Short rows are rejected rather than padded, so every column of a
    loaded Table always has the same length.
    """

    def __init__(self, message: str, line_number: int, expected: int, actual: int):
        super().__init__(
            message,
            {"line_number": line_number, "expected_fields": expected, "actual_fields": actual},
        )
        self.line_number = line_number
        self.expected = expected
        self.actual = actual
