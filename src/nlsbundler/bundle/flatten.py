"""Flattening of message bundles into key/message objects.

The flat form is what translators edit: one entry per key plus a
``_<key>.comment`` sibling carrying the comments of a commented key.
Flattening is where key uniqueness is enforced.

Python 3.12+. Zero external dependencies.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping

from nlsbundler.bundle.model import BareKey, CommentedKey, MessageBundle
from nlsbundler.constants import COMMENT_KEY_PREFIX, COMMENT_KEY_SUFFIX, JSON_INDENT
from nlsbundler.diagnostics import DuplicateKeyError, ErrorTemplate

__all__ = [
    "comment_key",
    "flat_to_json",
    "flatten_bundle",
    "is_comment_key",
    "unflatten",
]

logger = logging.getLogger(__name__)


def comment_key(key: str) -> str:
    """Name of the sibling entry holding a key's comments.

    Example:
        >>> comment_key("greeting.hello")
        '_greeting.hello.comment'
    """
    return f"{COMMENT_KEY_PREFIX}{key}{COMMENT_KEY_SUFFIX}"


def is_comment_key(flat_key: str) -> bool:
    """Check whether a flat key is a generated comment entry."""
    return (
        len(flat_key) > len(COMMENT_KEY_PREFIX) + len(COMMENT_KEY_SUFFIX)
        and flat_key.startswith(COMMENT_KEY_PREFIX)
        and flat_key.endswith(COMMENT_KEY_SUFFIX)
    )


def _insert(flat: dict[str, str], key: str, value: str) -> None:
    if key in flat:
        raise DuplicateKeyError(ErrorTemplate.duplicate_key(key), key=key)
    flat[key] = value


def flatten_bundle(bundle: MessageBundle) -> dict[str, str]:
    """Convert a bundle into a flat key/message object.

    Iterates in index order. A commented key adds its comments, joined
    with a single space, under ``_<key>.comment`` right after the message.

    Args:
        bundle: Bundle to flatten

    Returns:
        Insertion-ordered mapping of key to message (and comment entries)

    Raises:
        DuplicateKeyError: If two positions produce the same flat key,
            including a key colliding with a generated comment entry

    Example:
        >>> bundle = MessageBundle(
        ...     (BareKey("ok"), CommentedKey("cancel", ("Button", "label"))),
        ...     ("OK", "Cancel"),
        ... )
        >>> flatten_bundle(bundle)
        {'ok': 'OK', 'cancel': 'Cancel', '_cancel.comment': 'Button label'}
    """
    flat: dict[str, str] = {}
    for localize_key, message in zip(bundle.keys, bundle.messages, strict=True):
        match localize_key:
            case BareKey(key=key):
                _insert(flat, key, message)
            case CommentedKey(key=key, comment=comment):
                _insert(flat, key, message)
                _insert(flat, comment_key(key), " ".join(comment))
    logger.debug("Flattened %d bundle entries into %d keys", len(bundle), len(flat))
    return flat


def unflatten(flat: Mapping[str, str]) -> dict[str, str]:
    """Recover key/message pairs from a flat object.

    A comment entry is dropped only when the key it annotates is present;
    otherwise it is an ordinary key. Comment text is not reattached.

    Args:
        flat: Flat object produced by flatten_bundle()

    Returns:
        Mapping of key to message
    """
    return {key: value for key, value in flat.items() if not _annotates(key, flat)}


def _annotates(flat_key: str, flat: Mapping[str, str]) -> bool:
    if not is_comment_key(flat_key):
        return False
    return flat_key[len(COMMENT_KEY_PREFIX) : -len(COMMENT_KEY_SUFFIX)] in flat


def flat_to_json(flat: Mapping[str, str]) -> str:
    """Serialize a flat object to the tab-indented ``.i18n.json`` form."""
    return json.dumps(dict(flat), indent=JSON_INDENT, ensure_ascii=False)
