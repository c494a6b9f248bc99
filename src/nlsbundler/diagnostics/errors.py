"""nlsbundler exception hierarchy with structured diagnostics.

All exceptions accept either a plain message or a Diagnostic object.
Only fatal conditions are exceptions; resolution problems travel as
warning-severity Diagnostic values instead.

Python 3.12+. Zero external dependencies.
"""

from .codes import Diagnostic


class NlsError(Exception):
    """Base exception for all nlsbundler errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize NlsError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ValidationError(NlsError):
    """Malformed localize() call site found during extraction.

    Fatal for the file: neither the rewritten source nor its bundle
    may be emitted.

    Attributes:
        diagnostics: Every call-site diagnostic found in the file
    """

    def __init__(self, message: str | Diagnostic, diagnostics: tuple[Diagnostic, ...] = ()) -> None:
        """Initialize ValidationError.

        Args:
            message: Error message string OR Diagnostic object
            diagnostics: All diagnostics collected for the file
        """
        super().__init__(message)
        self.diagnostics = diagnostics


class DuplicateKeyError(NlsError):
    """Two bundle positions flatten to the same key.

    Example:
        localize("ok", "OK") and localize({"key": "ok", "comment": [...]}, "Fine")
        in the same file.

    Attributes:
        key: The offending flat key
    """

    def __init__(self, message: str | Diagnostic, *, key: str) -> None:
        """Initialize DuplicateKeyError.

        Args:
            message: Error message string OR Diagnostic object
            key: The duplicated key
        """
        super().__init__(message)
        self.key = key


class BundleFormatError(NlsError):
    """Bundle JSON does not have the expected shape.

    Raised when ``keys``/``messages`` are missing, not arrays, of
    different lengths, or contain values of the wrong type.
    """


class UnknownLanguageError(NlsError):
    """Language code outside the supported table.

    Fatal to the lookup that requested it only.

    Attributes:
        code: The rejected language code
    """

    def __init__(self, message: str | Diagnostic, *, code: str) -> None:
        """Initialize UnknownLanguageError.

        Args:
            message: Error message string OR Diagnostic object
            code: The rejected language code
        """
        super().__init__(message)
        self.code = code


class PositionMapError(NlsError):
    """Position map (source map) input could not be decoded."""
