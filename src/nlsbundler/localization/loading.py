"""Translation source loading for bundle resolution.

Provides the protocol for translation loaders, a filesystem implementation
with path-traversal protection, and the result structure describing one
load attempt.

Components:
    TranslationLoader - Protocol for loading translation sources (structural typing)
    PathTranslationLoader - Disk-based loader rooted at the i18n base directory
    TranslationLoadResult - Immutable result of one load attempt
    load_translations - Load and decode one file's translations for a language
    strip_json_comments - Remove // and /* */ comments from JSON text

Python 3.12+. Zero external dependencies.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from nlsbundler.constants import I18N_JSON, SOURCE_ENCODING
from nlsbundler.enums import Language, LoadStatus
from nlsbundler.localization.types import BundleName, FlatTranslations, TranslationSource
from nlsbundler.locale_utils import parse_language

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "TranslationLoader",
    # Concrete loader
    "PathTranslationLoader",
    # Load result
    "TranslationLoadResult",
    "load_translations",
    # Helpers
    "strip_json_comments",
]

logger = logging.getLogger(__name__)


class TranslationLoader(Protocol):
    """Protocol for loading the translation source of a bundle.

    Implementations must provide a load() method that returns the raw
    ``.i18n.json`` text of a bundle for one language, raising
    FileNotFoundError when no translation exists.

    Example:
        >>> class DictLoader:
        ...     def __init__(self, files: dict[tuple[str, str], str]) -> None:
        ...         self.files = files
        ...     def load(self, language: Language, filename: str) -> str:
        ...         try:
        ...             return self.files[(language, filename)]
        ...         except KeyError:
        ...             raise FileNotFoundError(filename) from None
        ...     def describe_path(self, language: Language, filename: str) -> str:
        ...         return f"{language}/{filename}.i18n.json"
    """

    def load(self, language: Language, filename: BundleName) -> TranslationSource:
        """Load the translation source of a bundle.

        Args:
            language: Target language
            filename: Bundle name (relative source path without suffix)

        Returns:
            Raw translation source text

        Raises:
            FileNotFoundError: If no translation exists for this language
            OSError: If the source cannot be read
        """

    def describe_path(self, language: Language, filename: BundleName) -> str:
        """Return human-readable location for diagnostics."""
        return f"{language}/{filename}{I18N_JSON}"


@dataclass(frozen=True, slots=True)
class PathTranslationLoader:
    """File system translation loader.

    Reads ``<i18n_base_dir>/<language>/[<base_dir>/]<filename>.i18n.json``.

    Security:
        Bundle names containing ".." or absolute paths are rejected, and the
        resolved path must stay inside ``i18n_base_dir``.

    Example:
        >>> loader = PathTranslationLoader("i18n", "extensions/git")
        >>> loader.describe_path(Language.DEU, "out/main")
        'i18n/deu/extensions/git/out/main.i18n.json'

    Attributes:
        i18n_base_dir: Root of the per-language translation trees
        base_dir: Optional subdirectory inside each language tree
    """

    i18n_base_dir: str
    base_dir: str | None = None
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Cache the resolved root directory.

        Raises:
            ValueError: If i18n_base_dir is empty
        """
        if not self.i18n_base_dir:
            msg = "i18n_base_dir must not be empty"
            raise ValueError(msg)
        object.__setattr__(self, "_resolved_root", Path(self.i18n_base_dir).resolve())

    @staticmethod
    def _validate_filename(filename: BundleName) -> None:
        """Validate a bundle name for path traversal.

        Raises:
            ValueError: If filename is empty, absolute or contains ".."
        """
        if not filename:
            msg = "Bundle name cannot be empty"
            raise ValueError(msg)
        if Path(filename).is_absolute() or filename.startswith(("/", "\\")):
            msg = f"Absolute paths not allowed in bundle name: '{filename}'"
            raise ValueError(msg)
        if ".." in Path(filename).parts:
            msg = f"Path traversal sequences not allowed in bundle name: '{filename}'"
            raise ValueError(msg)

    def _path(self, language: Language, filename: BundleName) -> Path:
        directory = Path(self.i18n_base_dir) / str(parse_language(language))
        if self.base_dir:
            directory = directory / self.base_dir
        return directory / f"{filename}{I18N_JSON}"

    def describe_path(self, language: Language, filename: BundleName) -> str:
        """Return the path that load() reads, as a POSIX string."""
        return self._path(language, filename).as_posix()

    def load(self, language: Language, filename: BundleName) -> TranslationSource:
        """Read the translation source from disk.

        Raises:
            ValueError: If filename is unsafe or escapes i18n_base_dir
            FileNotFoundError: If the file doesn't exist
            OSError: If the file cannot be read
        """
        self._validate_filename(filename)
        full_path = self._path(language, filename).resolve()
        try:
            full_path.relative_to(self._resolved_root)
        except ValueError:
            msg = (
                f"Path traversal detected: resolved path escapes i18n base directory. "
                f"language='{language}', filename='{filename}'"
            )
            raise ValueError(msg) from None
        return full_path.read_text(encoding=SOURCE_ENCODING)


def strip_json_comments(text: str) -> str:
    """Remove ``//`` line comments and ``/* */`` block comments.

    Comment characters inside JSON strings are kept. Removed comments are
    replaced by spaces, newlines inside block comments are kept, so JSON
    parser positions still match the input.

    Example:
        >>> json.loads(strip_json_comments('{"a": "b // c"} // trailing'))
        {'a': 'b // c'}
    """
    normal, line_comment, block_comment, string = range(4)
    state = normal
    out: list[str] = []
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]
        nxt = text[i + 1] if i + 1 < n else ""

        if state == normal:
            if ch == "/" and nxt == "/":
                out.append("  ")
                i += 2
                state = line_comment
                continue
            if ch == "/" and nxt == "*":
                out.append("  ")
                i += 2
                state = block_comment
                continue
            if ch == '"':
                state = string
            out.append(ch)
            i += 1
            continue

        if state == line_comment:
            if ch in "\r\n":
                out.append(ch)
                state = normal
            else:
                out.append(" ")
            i += 1
            continue

        if state == block_comment:
            if ch == "*" and nxt == "/":
                out.append("  ")
                i += 2
                state = normal
            else:
                out.append(ch if ch in "\r\n" else " ")
                i += 1
            continue

        # string
        if ch == "\\" and nxt:
            out.append(ch + nxt)
            i += 2
            continue
        if ch == '"':
            state = normal
        out.append(ch)
        i += 1

    return "".join(out)


@dataclass(frozen=True, slots=True)
class TranslationLoadResult:
    """Result of loading one bundle's translations for one language.

    Attributes:
        language: Target language
        filename: Bundle name
        status: Load status (success, not_found, error)
        translations: Decoded key to value mapping when status is SUCCESS
        error: Exception if status is ERROR, None otherwise
        source_path: Human-readable location of the translation source
    """

    language: Language
    filename: BundleName
    status: LoadStatus
    translations: FlatTranslations | None = None
    error: Exception | None = None
    source_path: str | None = None

    @property
    def is_success(self) -> bool:
        """Check if translations were loaded."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        """Check if no translation source exists."""
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        """Check if the translation source could not be used."""
        return self.status == LoadStatus.ERROR


def load_translations(
    loader: TranslationLoader, language: Language, filename: BundleName
) -> TranslationLoadResult:
    """Load and decode one bundle's translations.

    Never raises for missing or malformed sources; the outcome is encoded
    in the returned status.

    Args:
        loader: Translation loader
        language: Target language
        filename: Bundle name

    Returns:
        TranslationLoadResult with status SUCCESS, NOT_FOUND or ERROR
    """
    source_path = loader.describe_path(language, filename)
    try:
        text = loader.load(language, filename)
    except FileNotFoundError:
        logger.debug("No translation source at %s", source_path)
        return TranslationLoadResult(language, filename, LoadStatus.NOT_FOUND, source_path=source_path)
    except (OSError, ValueError) as e:
        logger.debug("Cannot read translation source %s: %s", source_path, e)
        return TranslationLoadResult(language, filename, LoadStatus.ERROR, error=e, source_path=source_path)

    try:
        decoded = json.loads(strip_json_comments(text))
    except ValueError as e:
        return TranslationLoadResult(language, filename, LoadStatus.ERROR, error=e, source_path=source_path)
    if not isinstance(decoded, dict):
        error = ValueError(f"expected a JSON object, got {type(decoded).__name__}")
        return TranslationLoadResult(language, filename, LoadStatus.ERROR, error=error, source_path=source_path)

    logger.debug("Loaded %d translation entries from %s", len(decoded), source_path)
    return TranslationLoadResult(
        language, filename, LoadStatus.SUCCESS, translations=decoded, source_path=source_path
    )
