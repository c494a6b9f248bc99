"""Bundle resolution against per-language translation data.

Submodules:
    types    - PEP 695 type aliases (BundleName, ResolvedMessages, ...)
    loading  - TranslationLoader protocol, PathTranslationLoader,
               TranslationLoadResult, strip_json_comments
    resolver - BundleResolver, LocalizationResult, create_localized_messages

Python 3.12+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from nlsbundler.enums import LoadStatus
from nlsbundler.localization.loading import (
    PathTranslationLoader,
    TranslationLoader,
    TranslationLoadResult,
    load_translations,
    strip_json_comments,
)
from nlsbundler.localization.resolver import (
    BundleResolver,
    LocalizationResult,
    create_localized_messages,
)
from nlsbundler.localization.types import (
    BundleName,
    FlatTranslations,
    ResolvedMessages,
    TranslationSource,
)

__all__ = [
    # Resolution
    "BundleResolver",
    "LocalizationResult",
    "create_localized_messages",
    # Loader protocol and implementations
    "TranslationLoader",
    "PathTranslationLoader",
    "TranslationLoadResult",
    "LoadStatus",
    "load_translations",
    "strip_json_comments",
    # Type aliases
    "BundleName",
    "FlatTranslations",
    "ResolvedMessages",
    "TranslationSource",
]
