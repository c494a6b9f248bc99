"""Diagnostic system for nlsbundler errors and problems.

Provides structured diagnostics with codes, spans and hints, the
exception hierarchy for fatal errors, and output formatting.

Python 3.12+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    BundleFormatError,
    DuplicateKeyError,
    NlsError,
    PositionMapError,
    UnknownLanguageError,
    ValidationError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "BundleFormatError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "DuplicateKeyError",
    "ErrorTemplate",
    "NlsError",
    "OutputFormat",
    "PositionMapError",
    "SourceSpan",
    "UnknownLanguageError",
    "ValidationError",
]
