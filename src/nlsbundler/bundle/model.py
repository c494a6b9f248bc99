"""Message bundle data model.

A bundle holds the ordered key/message pairs extracted from one source file.
Position ``i`` in ``keys`` always corresponds to position ``i`` in
``messages``; serialization, flattening and resolution all preserve it.

Components:
    BareKey - Plain string key
    CommentedKey - Key with translator-facing comments
    LocalizeKey - Tagged union of the two
    MessageBundle - Ordered keys and default messages of one file

Python 3.12+. Zero external dependencies.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from nlsbundler.constants import COMMENT_FIELD, JSON_INDENT, KEY_FIELD
from nlsbundler.diagnostics import BundleFormatError, ErrorTemplate

__all__ = [
    "BareKey",
    "CommentedKey",
    "LocalizeKey",
    "MessageBundle",
    "key_of",
]


@dataclass(frozen=True, slots=True)
class BareKey:
    """Key written as a plain string literal: localize("ok", "OK")."""

    key: str

    def to_json_value(self) -> str:
        """JSON form: the key string itself."""
        return self.key


@dataclass(frozen=True, slots=True)
class CommentedKey:
    """Key written with translator comments.

    Source form: localize({"key": "ok", "comment": ["Button label"]}, "OK")

    Attributes:
        key: Non-empty key string
        comment: Comment lines, in source order
    """

    key: str
    comment: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate the key.

        Raises:
            ValueError: If key is empty
        """
        if not self.key:
            msg = "CommentedKey.key must not be empty"
            raise ValueError(msg)

    def to_json_value(self) -> dict[str, Any]:
        """JSON form: {"key": ..., "comment": [...]}."""
        return {KEY_FIELD: self.key, COMMENT_FIELD: list(self.comment)}


LocalizeKey: TypeAlias = BareKey | CommentedKey
"""Key of one bundle position, bare or commented."""


def key_of(localize_key: LocalizeKey) -> str:
    """Return the lookup string of a key, whatever its variant.

    Args:
        localize_key: Bare or commented key

    Returns:
        The key string
    """
    match localize_key:
        case BareKey(key=key):
            return key
        case CommentedKey(key=key):
            return key


def _key_from_json(value: object, index: int) -> LocalizeKey:
    """Decode one entry of a bundle's ``keys`` array."""
    if isinstance(value, str):
        return BareKey(value)
    if isinstance(value, Mapping):
        key = value.get(KEY_FIELD)
        comment = value.get(COMMENT_FIELD, [])
        if isinstance(comment, str):
            comment = [comment]
        if (
            isinstance(key, str)
            and key
            and isinstance(comment, list)
            and all(isinstance(line, str) for line in comment)
        ):
            return CommentedKey(key, tuple(comment))
    raise BundleFormatError(
        ErrorTemplate.bundle_malformed(f"keys[{index}] is neither a string nor a key/comment object")
    )


@dataclass(frozen=True, slots=True)
class MessageBundle:
    """Ordered keys and default messages extracted from one source file.

    Attributes:
        keys: One LocalizeKey per call site, in index order
        messages: Default message per call site, in index order

    Example:
        >>> bundle = MessageBundle((BareKey("greeting.hello"),), ("Hello, {0}!",))
        >>> bundle.to_dict()
        {'messages': ['Hello, {0}!'], 'keys': ['greeting.hello']}
    """

    keys: tuple[LocalizeKey, ...] = ()
    messages: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Enforce the positional correspondence between keys and messages.

        Raises:
            BundleFormatError: If keys and messages differ in length
        """
        if len(self.keys) != len(self.messages):
            detail = f"{len(self.keys)} keys but {len(self.messages)} messages"
            raise BundleFormatError(ErrorTemplate.bundle_malformed(detail))

    def __len__(self) -> int:
        return len(self.messages)

    def key_strings(self) -> tuple[str, ...]:
        """Lookup strings of all keys, in index order."""
        return tuple(key_of(key) for key in self.keys)

    def to_dict(self) -> dict[str, list[Any]]:
        """Return the JSON-ready mapping, messages first."""
        return {
            "messages": list(self.messages),
            "keys": [key.to_json_value() for key in self.keys],
        }

    def to_json(self) -> str:
        """Serialize to the tab-indented ``.nls.json`` form."""
        return json.dumps(self.to_dict(), indent=JSON_INDENT, ensure_ascii=False)

    @classmethod
    def from_json(cls, data: str | bytes | Mapping[str, Any]) -> MessageBundle:
        """Load a bundle previously written by to_json().

        Args:
            data: JSON text or an already decoded mapping

        Returns:
            The decoded bundle

        Raises:
            BundleFormatError: If the data is not valid bundle JSON
        """
        if isinstance(data, (str, bytes)):
            try:
                data = json.loads(data)
            except ValueError as e:
                raise BundleFormatError(ErrorTemplate.bundle_malformed(str(e))) from e
        if not isinstance(data, Mapping):
            raise BundleFormatError(ErrorTemplate.bundle_malformed("top level is not an object"))

        raw_keys = data.get("keys")
        raw_messages = data.get("messages")
        if not isinstance(raw_keys, list) or not isinstance(raw_messages, list):
            raise BundleFormatError(
                ErrorTemplate.bundle_malformed("'keys' and 'messages' must both be arrays")
            )
        for index, message in enumerate(raw_messages):
            if not isinstance(message, str):
                raise BundleFormatError(
                    ErrorTemplate.bundle_malformed(f"messages[{index}] is not a string")
                )

        keys = tuple(_key_from_json(value, index) for index, value in enumerate(raw_keys))
        return cls(keys, tuple(raw_messages))
