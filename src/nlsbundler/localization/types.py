"""Type aliases for the resolution domain.

Provides semantic type aliases used throughout the localization package
and by user code annotating loader implementations.

Python 3.12+. Zero external dependencies.
"""

from typing import TypeAlias

__all__ = [
    "BundleName",
    "FlatTranslations",
    "ResolvedMessages",
    "TranslationSource",
]

BundleName: TypeAlias = str
"""Bundle identifier: source path relative to the build root, without suffix (e.g., 'src/app')."""

TranslationSource: TypeAlias = str
"""Raw text of a per-language ``.i18n.json`` file."""

FlatTranslations: TypeAlias = dict[str, object]
"""Decoded translation source: key to translated message (values unchecked)."""

ResolvedMessages: TypeAlias = tuple[str, ...]
"""Localized messages, one per bundle position."""
