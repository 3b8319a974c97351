"""
Error types for templ file parsing and project configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .ir import Position


class TemplfileError(Exception):
    """Base exception for all templfile errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(TemplfileError):
    """
    Raised when a templ file cannot be parsed.

    Examples:
    - Declaration missing its closing brace
    - Unclosed block comment
    - Package line without a valid name
    """

    pass


class LegacyFormatError(ParseError):
    """
    Raised when the input is written in the obsolete ``{% ... %}`` dialect.

    The message is meant to be shown to the user verbatim.
    """

    def __init__(self, context: Optional["ErrorContext"] = None):
        super().__init__(LEGACY_FORMAT_MESSAGE, context)


class TemplateNotFoundError(TemplfileError):
    """Raised by the string entry point when the parser reports no match."""

    def __init__(self) -> None:
        super().__init__(TEMPLATE_NOT_FOUND_MESSAGE)


class ConfigError(TemplfileError):
    """
    Raised when ``templfile.toml`` is malformed.

    Examples:
    - Invalid TOML
    - ``extensions`` that is not a list of strings
    """

    pass


LEGACY_FORMAT_MESSAGE = "Legacy file format - run templ migrate"
TEMPLATE_NOT_FOUND_MESSAGE = "Template not found"


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Path to the source file where error occurred
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source line showing the error location
    """

    file: Path | None
    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "index.templ:10:5"
        """
        name = str(self.file) if self.file else "<string>"
        location = f"{name}:{self.line}:{self.column}"
        if self.snippet is not None:
            marker = " " * (self.column - 1) + "^"
            return f"{location}\n{self.snippet}\n{marker}"
        return location


def make_parse_error(
    message: str,
    position: "Position",
    file: Path | None = None,
    snippet: str | None = None,
) -> ParseError:
    """
    Helper to create a ParseError with context.

    Args:
        message: Error description
        position: 0-based cursor position where the error was detected
        file: Optional source file path
        snippet: Optional source line

    Returns:
        ParseError with context attached
    """
    context = ErrorContext(
        file=file,
        line=position.line + 1,
        column=position.col + 1,
        snippet=snippet,
    )
    return ParseError(message, context)
