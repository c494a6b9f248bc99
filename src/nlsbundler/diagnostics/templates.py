"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.12+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan


class ErrorTemplate:
    """Centralized error message templates.

    All diagnostics are created here. NO f-strings in exception constructors!
    Call sites build a Diagnostic through one of these factories and either
    collect it or wrap it in the matching exception.
    """

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    @staticmethod
    def localize_missing_arguments(function: str, count: int, span: SourceSpan) -> Diagnostic:
        """localize() called with fewer than two positional arguments.

        Args:
            function: Called function name
            count: Number of positional arguments found
            span: Location of the call

        Returns:
            Diagnostic for LOCALIZE_MISSING_ARGUMENTS
        """
        msg = (
            f"{function}() requires a key and a default message, "
            f"got {count} positional argument(s)"
        )
        return Diagnostic(
            code=DiagnosticCode.LOCALIZE_MISSING_ARGUMENTS,
            message=msg,
            span=span,
            hint=f'Call it as {function}("key", "Default message", ...)',
        )

    @staticmethod
    def localize_starred_argument(function: str, span: SourceSpan) -> Diagnostic:
        """Key or message passed through argument unpacking.

        Args:
            function: Called function name
            span: Location of the starred argument

        Returns:
            Diagnostic for LOCALIZE_STARRED_ARGUMENT
        """
        msg = f"{function}() key and message cannot be passed with * unpacking"
        return Diagnostic(
            code=DiagnosticCode.LOCALIZE_STARRED_ARGUMENT,
            message=msg,
            span=span,
            hint="Write the key and the default message as literals",
        )

    @staticmethod
    def localize_key_invalid(span: SourceSpan) -> Diagnostic:
        """Key argument is neither a string literal nor a key/comment dict.

        Args:
            span: Location of the key argument

        Returns:
            Diagnostic for LOCALIZE_KEY_INVALID
        """
        msg = 'Key argument must be a string literal or a {"key": ..., "comment": [...]} literal'
        return Diagnostic(
            code=DiagnosticCode.LOCALIZE_KEY_INVALID,
            message=msg,
            span=span,
            hint="Keys are extracted at build time and cannot be computed",
        )

    @staticmethod
    def localize_key_empty(span: SourceSpan) -> Diagnostic:
        """Key literal is the empty string.

        Args:
            span: Location of the key argument

        Returns:
            Diagnostic for LOCALIZE_KEY_EMPTY
        """
        return Diagnostic(
            code=DiagnosticCode.LOCALIZE_KEY_EMPTY,
            message="Key must not be empty",
            span=span,
        )

    @staticmethod
    def localize_comment_invalid(span: SourceSpan) -> Diagnostic:
        """Comment entry is not a string or a list of string literals.

        Args:
            span: Location of the comment value

        Returns:
            Diagnostic for LOCALIZE_COMMENT_INVALID
        """
        msg = "Comment must be a string literal or a list of string literals"
        return Diagnostic(
            code=DiagnosticCode.LOCALIZE_COMMENT_INVALID,
            message=msg,
            span=span,
        )

    @staticmethod
    def localize_message_invalid(span: SourceSpan) -> Diagnostic:
        """Default message is not a plain string literal.

        Args:
            span: Location of the message argument

        Returns:
            Diagnostic for LOCALIZE_MESSAGE_INVALID
        """
        return Diagnostic(
            code=DiagnosticCode.LOCALIZE_MESSAGE_INVALID,
            message="Message argument must be a string literal",
            span=span,
            hint="Use {0}, {1}, ... placeholders instead of f-strings or concatenation",
        )

    @staticmethod
    def source_syntax_error(detail: str, span: SourceSpan) -> Diagnostic:
        """Source file could not be parsed.

        Args:
            detail: Parser error message
            span: Location reported by the parser

        Returns:
            Diagnostic for SOURCE_SYNTAX_ERROR
        """
        return Diagnostic(
            code=DiagnosticCode.SOURCE_SYNTAX_ERROR,
            message=f"Cannot parse source: {detail}",
            span=span,
        )

    @staticmethod
    def source_decode_failed(path: str, detail: str) -> Diagnostic:
        """Source file contents are not valid UTF-8.

        Args:
            path: File path
            detail: Decoder error message

        Returns:
            Diagnostic for SOURCE_DECODE_FAILED
        """
        return Diagnostic(
            code=DiagnosticCode.SOURCE_DECODE_FAILED,
            message=f"Failed to read file: {path} ({detail})",
            location=path,
        )

    # ------------------------------------------------------------------
    # Bundles
    # ------------------------------------------------------------------

    @staticmethod
    def duplicate_key(key: str) -> Diagnostic:
        """Two bundle positions share a flat key.

        Args:
            key: The duplicated key

        Returns:
            Diagnostic for DUPLICATE_KEY
        """
        msg = f'The following key is duplicated: "{key}". Please use unique keys.'
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_KEY,
            message=msg,
            key=key,
        )

    @staticmethod
    def bundle_malformed(detail: str, location: str | None = None) -> Diagnostic:
        """Bundle JSON has the wrong shape.

        Args:
            detail: What is wrong with the bundle
            location: Bundle file path, if known

        Returns:
            Diagnostic for BUNDLE_MALFORMED
        """
        return Diagnostic(
            code=DiagnosticCode.BUNDLE_MALFORMED,
            message=f"Malformed message bundle: {detail}",
            location=location,
        )

    # ------------------------------------------------------------------
    # Resolution (non-fatal, severity "warning")
    # ------------------------------------------------------------------

    @staticmethod
    def translation_source_missing(filename: str, language: str, location: str) -> Diagnostic:
        """No translation data exists for a file and language.

        Args:
            filename: Bundle name (relative path without suffix)
            language: Internal language code
            location: Path that was looked up

        Returns:
            Diagnostic for TRANSLATION_SOURCE_MISSING
        """
        msg = f"No localized messages found for file {filename} in language {language}"
        return Diagnostic(
            code=DiagnosticCode.TRANSLATION_SOURCE_MISSING,
            message=msg,
            location=location,
            language=language,
            hint=f"Expected translations at {location}",
            severity="warning",
        )

    @staticmethod
    def translation_source_invalid(
        filename: str, language: str, location: str, detail: str
    ) -> Diagnostic:
        """Translation data exists but cannot be used.

        Args:
            filename: Bundle name
            language: Internal language code
            location: Path that was read
            detail: Reader or parser error message

        Returns:
            Diagnostic for TRANSLATION_SOURCE_INVALID
        """
        msg = f"Cannot read localized messages for file {filename} in language {language}: {detail}"
        return Diagnostic(
            code=DiagnosticCode.TRANSLATION_SOURCE_INVALID,
            message=msg,
            location=location,
            language=language,
            severity="warning",
        )

    @staticmethod
    def translation_key_missing(filename: str, language: str, key: str) -> Diagnostic:
        """A bundle key has no translation.

        Args:
            filename: Bundle name
            language: Internal language code
            key: Missing key

        Returns:
            Diagnostic for TRANSLATION_KEY_MISSING
        """
        msg = (
            f"No localized message found for key {key} in file {filename} "
            f"(language {language}). Using default message."
        )
        return Diagnostic(
            code=DiagnosticCode.TRANSLATION_KEY_MISSING,
            message=msg,
            location=filename,
            key=key,
            language=language,
            severity="warning",
        )

    @staticmethod
    def translation_value_invalid(
        filename: str, language: str, key: str, received: str
    ) -> Diagnostic:
        """A translation value is not a string.

        Args:
            filename: Bundle name
            language: Internal language code
            key: Key with the bad value
            received: Type name of the value found

        Returns:
            Diagnostic for TRANSLATION_VALUE_INVALID
        """
        msg = (
            f"Localized message for key {key} in file {filename} (language {language}) "
            f"must be a string, got {received}. Using default message."
        )
        return Diagnostic(
            code=DiagnosticCode.TRANSLATION_VALUE_INVALID,
            message=msg,
            location=filename,
            key=key,
            language=language,
            severity="warning",
        )

    # ------------------------------------------------------------------
    # Languages and position maps
    # ------------------------------------------------------------------

    @staticmethod
    def unknown_language(code: str, supported: tuple[str, ...]) -> Diagnostic:
        """Language code is not in the supported table.

        Args:
            code: Rejected code
            supported: Supported codes, for the hint

        Returns:
            Diagnostic for UNKNOWN_LANGUAGE
        """
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_LANGUAGE,
            message=f"Unknown language code: '{code}'",
            language=code,
            hint=f"Supported codes: {', '.join(supported)}",
        )

    @staticmethod
    def position_map_invalid(detail: str) -> Diagnostic:
        """Source map input cannot be decoded.

        Args:
            detail: What is wrong with the map

        Returns:
            Diagnostic for POSITION_MAP_INVALID
        """
        return Diagnostic(
            code=DiagnosticCode.POSITION_MAP_INVALID,
            message=f"Invalid position map: {detail}",
        )
