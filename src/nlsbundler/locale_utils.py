"""Locale utilities: internal language codes to standard locale tags.

The build pipeline names languages with internal three-letter codes
("deu", "chs"). Output artifacts and the runtime use standard locale tags
("de", "zh-cn"). This module owns the fixed mapping between the two and
the Babel-backed helpers used for display names.

Python 3.12+.
"""

from __future__ import annotations

import functools
from types import MappingProxyType
from typing import TYPE_CHECKING

from nlsbundler.diagnostics import ErrorTemplate, UnknownLanguageError
from nlsbundler.enums import Language

if TYPE_CHECKING:
    from collections.abc import Mapping

    from babel import Locale

__all__ = [
    "CORE_LANGUAGES",
    "LOCALE_TAGS",
    "get_babel_locale",
    "language_display_name",
    "normalize_locale",
    "parse_language",
    "to_locale_tag",
]

LOCALE_TAGS: Mapping[Language, str] = MappingProxyType({
    Language.CHS: "zh-cn",
    Language.CHT: "zh-tw",
    Language.CSY: "cs-cz",
    Language.DEU: "de",
    Language.ENU: "en",
    Language.ESN: "es",
    Language.FRA: "fr",
    Language.HUN: "hu",
    Language.ITA: "it",
    Language.JPN: "ja",
    Language.KOR: "ko",
    Language.NLD: "nl",
    Language.PLK: "pl",
    Language.PTB: "pt-br",
    Language.PTG: "pt",
    Language.RUS: "ru",
    Language.SVE: "sv-se",
    Language.TRK: "tr",
})
"""Immutable internal-code to locale-tag table."""

CORE_LANGUAGES: tuple[Language, ...] = (
    Language.CHS,
    Language.CHT,
    Language.JPN,
    Language.KOR,
    Language.DEU,
    Language.FRA,
    Language.ESN,
    Language.RUS,
    Language.ITA,
)
"""Languages emitted when the caller does not choose a list."""


def parse_language(code: Language | str) -> Language:
    """Validate an internal language code.

    Args:
        code: Language member or its three-letter string value

    Returns:
        The matching Language member

    Raises:
        UnknownLanguageError: If code is outside the supported set

    Example:
        >>> parse_language("deu")
        <Language.DEU: 'deu'>
    """
    if isinstance(code, Language):
        return code
    try:
        return Language(code)
    except ValueError:
        supported = tuple(str(language) for language in Language)
        raise UnknownLanguageError(
            ErrorTemplate.unknown_language(str(code), supported), code=str(code)
        ) from None


def to_locale_tag(code: Language | str) -> str:
    """Map an internal language code to its standard locale tag.

    Args:
        code: Internal three-letter code

    Returns:
        Lowercase locale tag (e.g., "de", "zh-cn")

    Raises:
        UnknownLanguageError: If code is outside the supported set

    Example:
        >>> to_locale_tag("chs")
        'zh-cn'
        >>> to_locale_tag(Language.DEU)
        'de'
    """
    return LOCALE_TAGS[parse_language(code)]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (pt-br), while Babel/POSIX uses underscores (pt_br).

    Args:
        locale_code: BCP-47 locale code (e.g., "zh-cn", "pt-br")

    Returns:
        POSIX-formatted locale code (e.g., "zh_cn", "pt_br")

    Example:
        >>> normalize_locale("sv-se")
        'sv_se'
        >>> normalize_locale("de")  # Already normalized
        'de'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=64)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def language_display_name(code: Language | str, display_locale: str = "en") -> str:
    """Human-readable name of an internal language code.

    Used in log messages so operators see "German" next to "deu".

    Args:
        code: Internal three-letter code
        display_locale: Locale the name is rendered in

    Returns:
        Display name, or the locale tag when Babel has no name for it

    Raises:
        UnknownLanguageError: If code is outside the supported set

    Example:
        >>> language_display_name("deu")
        'German'
    """
    from babel import UnknownLocaleError  # noqa: PLC0415

    tag = to_locale_tag(code)
    try:
        name = get_babel_locale(tag).get_display_name(display_locale)
    except (UnknownLocaleError, ValueError):
        return tag
    return name or tag
