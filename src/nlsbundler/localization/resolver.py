"""Resolution of message bundles against per-language translations.

Resolution happens long after extraction and in a different process: a
``.nls.json`` bundle is reloaded, the target language's translation source
for the same bundle name is looked up, and every bundle position receives
its translated message. Partial translations are not fatal. Missing or
malformed entries fall back to the bundle's default message and are
reported as warning diagnostics.

Python 3.12+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from nlsbundler.bundle import MessageBundle, key_of
from nlsbundler.diagnostics import Diagnostic, ErrorTemplate
from nlsbundler.enums import Language
from nlsbundler.locale_utils import language_display_name, parse_language
from nlsbundler.localization.loading import (
    PathTranslationLoader,
    TranslationLoader,
    load_translations,
)
from nlsbundler.localization.types import BundleName, ResolvedMessages

__all__ = [
    "BundleResolver",
    "LocalizationResult",
    "create_localized_messages",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LocalizationResult:
    """Localized messages of one bundle for one language.

    ``messages`` is None only when no usable translation source exists;
    callers skip output for that bundle/language pair. ``diagnostics`` may
    be non-empty even when ``messages`` is present.

    Attributes:
        language: Target language
        messages: One localized string per bundle position
        diagnostics: Warning diagnostics, in bundle order
    """

    language: Language
    messages: ResolvedMessages | None
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def problems(self) -> tuple[str, ...]:
        """Problem messages as plain strings."""
        return tuple(diagnostic.message for diagnostic in self.diagnostics)

    @property
    def is_complete(self) -> bool:
        """Check if every position received a translation."""
        return self.messages is not None and not self.diagnostics


class BundleResolver:
    """Resolve bundles against the translation tree of one build.

    Args:
        i18n_base_dir: Root of the per-language translation trees
        base_dir: Optional subdirectory inside each language tree
        loader: Custom translation loader; defaults to PathTranslationLoader

    Example:
        >>> resolver = BundleResolver("i18n")
        >>> result = resolver.resolve("out/main", bundle, "deu")
        >>> result.messages
        ('Hallo, {0}!',)
    """

    __slots__ = ("_loader",)

    def __init__(
        self,
        i18n_base_dir: str,
        base_dir: str | None = None,
        *,
        loader: TranslationLoader | None = None,
    ) -> None:
        self._loader: TranslationLoader = (
            loader if loader is not None else PathTranslationLoader(i18n_base_dir, base_dir)
        )

    def resolve(
        self, filename: BundleName, bundle: MessageBundle, language: Language | str
    ) -> LocalizationResult:
        """Resolve one bundle for one language.

        Args:
            filename: Bundle name (relative source path without suffix)
            bundle: Bundle reloaded from its ``.nls.json`` artifact
            language: Internal language code

        Returns:
            LocalizationResult; ``messages[i]`` corresponds to ``bundle.messages[i]``

        Raises:
            UnknownLanguageError: If language is outside the supported set
        """
        language = parse_language(language)
        loaded = load_translations(self._loader, language, filename)

        if loaded.is_not_found:
            location = loaded.source_path or filename
            diagnostic = ErrorTemplate.translation_source_missing(filename, language, location)
            return LocalizationResult(language, None, (diagnostic,))
        if loaded.is_error or loaded.translations is None:
            location = loaded.source_path or filename
            detail = str(loaded.error) if loaded.error is not None else "no translations"
            diagnostic = ErrorTemplate.translation_source_invalid(filename, language, location, detail)
            return LocalizationResult(language, None, (diagnostic,))

        translations = loaded.translations
        resolved: list[str] = []
        diagnostics: list[Diagnostic] = []
        for localize_key, default in zip(bundle.keys, bundle.messages, strict=True):
            key = key_of(localize_key)
            if key not in translations:
                diagnostics.append(ErrorTemplate.translation_key_missing(filename, language, key))
                resolved.append(default)
                continue
            translated = translations[key]
            if not isinstance(translated, str):
                diagnostics.append(
                    ErrorTemplate.translation_value_invalid(
                        filename, language, key, type(translated).__name__
                    )
                )
                resolved.append(default)
                continue
            resolved.append(translated)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Resolved %s for %s: %d message(s), %d problem(s)",
                filename,
                language_display_name(language),
                len(resolved),
                len(diagnostics),
            )
        return LocalizationResult(language, tuple(resolved), tuple(diagnostics))


def create_localized_messages(
    filename: BundleName,
    bundle: MessageBundle,
    language: Language | str,
    i18n_base_dir: str,
    base_dir: str | None = None,
    *,
    loader: TranslationLoader | None = None,
) -> LocalizationResult:
    """Resolve one bundle for one language without keeping a resolver.

    See BundleResolver.resolve().
    """
    return BundleResolver(i18n_base_dir, base_dir, loader=loader).resolve(filename, bundle, language)
