"""Shared constants for nlsbundler.

Centralizes file suffixes, recognized call names and JSON output settings
used by both the extraction and the resolution stages. Keeping them here
avoids circular imports between the subpackages.

Python 3.12+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Artifact suffixes
    "NLS_JSON",
    "I18N_JSON",
    "NLS_LOCALIZED_TEMPLATE",
    # Flat translation object
    "COMMENT_KEY_PREFIX",
    "COMMENT_KEY_SUFFIX",
    # Call sites
    "LOCALIZE_FUNCTIONS",
    "LOAD_BUNDLE_FUNCTIONS",
    "REWRITTEN_MESSAGE_LITERAL",
    "FILE_REFERENCE",
    # Structured key fields
    "KEY_FIELD",
    "COMMENT_FIELD",
    # JSON output
    "JSON_INDENT",
    "SOURCE_ENCODING",
    "SOURCE_BOM",
]

# ============================================================================
# ARTIFACT SUFFIXES
# ============================================================================

# Raw bundle emitted next to each rewritten source file.
NLS_JSON: str = ".nls.json"

# Flat key/message object emitted in kvp mode, and the suffix of the
# per-language translation sources consumed by the resolver.
I18N_JSON: str = ".i18n.json"

# Localized bundle emitted per requested language.
NLS_LOCALIZED_TEMPLATE: str = ".nls.{tag}.json"

# ============================================================================
# FLAT TRANSLATION OBJECT
# ============================================================================

# A commented key "a.b" gets a sibling entry "_a.b.comment".
COMMENT_KEY_PREFIX: str = "_"
COMMENT_KEY_SUFFIX: str = ".comment"

# ============================================================================
# CALL SITES
# ============================================================================

# localize(key, message, *args) call sites, matched by bare or attribute name.
LOCALIZE_FUNCTIONS: frozenset[str] = frozenset({"localize"})

# load_message_bundle() calls receive the module path so the runtime can
# locate the file's bundle.
LOAD_BUNDLE_FUNCTIONS: frozenset[str] = frozenset({"load_message_bundle"})

# Replacement for the default message once the key became an index.
REWRITTEN_MESSAGE_LITERAL: str = "None"

FILE_REFERENCE: str = "__file__"

# ============================================================================
# STRUCTURED KEY FIELDS
# ============================================================================

KEY_FIELD: str = "key"
COMMENT_FIELD: str = "comment"

# ============================================================================
# JSON OUTPUT
# ============================================================================

JSON_INDENT: str = "\t"
SOURCE_ENCODING: str = "utf-8"

# Kept in the decoded text; line 1 starts after it.
SOURCE_BOM: str = "\ufeff"
