"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.12+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Extraction errors (malformed localize() call sites)
        2000-2999: Bundle errors (serialization and flattening)
        3000-3999: Resolution problems (translation lookup)
        4000-4999: Language errors (locale code mapping)
        5000-5999: Position map errors (source map input)
    """

    # Extraction errors (1000-1999)
    LOCALIZE_MISSING_ARGUMENTS = 1001
    LOCALIZE_STARRED_ARGUMENT = 1002
    LOCALIZE_KEY_INVALID = 1003
    LOCALIZE_KEY_EMPTY = 1004
    LOCALIZE_COMMENT_INVALID = 1005
    LOCALIZE_MESSAGE_INVALID = 1006
    SOURCE_SYNTAX_ERROR = 1007
    SOURCE_DECODE_FAILED = 1008

    # Bundle errors (2000-2999)
    DUPLICATE_KEY = 2001
    BUNDLE_MALFORMED = 2002

    # Resolution problems (3000-3999)
    TRANSLATION_SOURCE_MISSING = 3001
    TRANSLATION_SOURCE_INVALID = 3002
    TRANSLATION_KEY_MISSING = 3003
    TRANSLATION_VALUE_INVALID = 3004

    # Language errors (4000-4999)
    UNKNOWN_LANGUAGE = 4001

    # Position map errors (5000-5999)
    POSITION_MAP_INVALID = 5001


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes. ast reports UTF-8 byte columns; the rewriter converts them
        before building a span.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, line is
                less than 1 (lines are 1-indexed), or column is less than 1
                (columns are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Used both for fatal errors
    (severity "error") and for non-fatal resolution problems
    (severity "warning").

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None when not tied to source text)
        hint: Suggestion for fixing the error
        location: File or resource the diagnostic refers to
        key: Message key involved, if any
        language: Internal language code involved, if any
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    location: str | None = None
    key: str | None = None
    language: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    @property
    def is_error(self) -> bool:
        """Check if this diagnostic is fatal for its file."""
        return self.severity == "error"

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Delegates to DiagnosticFormatter for consistent output.

        Example output:
            error[LOCALIZE_MESSAGE_INVALID]: Message argument must be a string literal
              --> line 5, column 10
              = help: Pass the default message as a plain string literal

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)

    def format_position(self) -> str:
        """Prefix the message with its "(line,column)" position.

        Returns:
            "(line,column): message" when a span is known, else the bare message
        """
        if self.span is None:
            return self.message
        return f"({self.span.line},{self.span.column}): {self.message}"
