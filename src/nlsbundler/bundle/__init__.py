"""Message bundles: data model and flattening.

Submodules:
    model   - BareKey, CommentedKey, LocalizeKey, MessageBundle
    flatten - flatten_bundle, unflatten and flat JSON output

Python 3.12+. Zero external dependencies.
"""

from nlsbundler.bundle.flatten import (
    comment_key,
    flat_to_json,
    flatten_bundle,
    is_comment_key,
    unflatten,
)
from nlsbundler.bundle.model import BareKey, CommentedKey, LocalizeKey, MessageBundle, key_of

__all__ = [
    "BareKey",
    "CommentedKey",
    "LocalizeKey",
    "MessageBundle",
    "comment_key",
    "flat_to_json",
    "flatten_bundle",
    "is_comment_key",
    "key_of",
    "unflatten",
]
