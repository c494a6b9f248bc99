"""Tests for bundle/model.py: LocalizeKey variants and MessageBundle JSON.

Python 3.12+.
"""

import json

import pytest
from hypothesis import given

from nlsbundler.bundle import BareKey, CommentedKey, MessageBundle, key_of
from nlsbundler.diagnostics import BundleFormatError, DiagnosticCode
from tests.strategies import message_bundles


class TestLocalizeKey:
    """Test the two key variants."""

    def test_key_of_bare(self) -> None:
        """key_of returns the string of a bare key."""
        assert key_of(BareKey("ok")) == "ok"

    def test_key_of_commented(self) -> None:
        """key_of returns the key field of a commented key."""
        assert key_of(CommentedKey("ok", ("Button",))) == "ok"

    def test_commented_key_rejects_empty_key(self) -> None:
        """A commented key must have a non-empty key."""
        with pytest.raises(ValueError, match="must not be empty"):
            CommentedKey("", ("comment",))

    def test_json_values(self) -> None:
        """Bare keys serialize as strings, commented keys as objects."""
        assert BareKey("a").to_json_value() == "a"
        assert CommentedKey("b", ("x", "y")).to_json_value() == {"key": "b", "comment": ["x", "y"]}


class TestMessageBundle:
    """Test MessageBundle construction and serialization."""

    def test_length_mismatch_rejected(self) -> None:
        """Keys and messages must have equal lengths."""
        with pytest.raises(BundleFormatError) as exc_info:
            MessageBundle((BareKey("a"),), ())
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.BUNDLE_MALFORMED

    def test_empty_bundle(self) -> None:
        """An empty bundle has length zero."""
        assert len(MessageBundle()) == 0

    def test_to_json_layout(self) -> None:
        """Output is tab-indented with messages before keys."""
        bundle = MessageBundle(
            (BareKey("greeting.hello"), CommentedKey("ok", ("Button",))),
            ("Hello, {0}!", "OK"),
        )
        text = bundle.to_json()
        assert text.index('"messages"') < text.index('"keys"')
        assert '\n\t"messages": [' in text
        assert json.loads(text) == {
            "messages": ["Hello, {0}!", "OK"],
            "keys": ["greeting.hello", {"key": "ok", "comment": ["Button"]}],
        }

    def test_to_json_keeps_non_ascii(self) -> None:
        """Non-ASCII messages are written as-is."""
        bundle = MessageBundle((BareKey("k"),), ("Grüße",))
        assert "Grüße" in bundle.to_json()

    def test_key_strings(self) -> None:
        """key_strings flattens both variants in order."""
        bundle = MessageBundle((BareKey("a"), CommentedKey("b")), ("1", "2"))
        assert bundle.key_strings() == ("a", "b")

    @given(message_bundles())
    def test_json_preserves_positions(self, bundle: MessageBundle) -> None:
        """Reloading a written bundle keeps every position aligned."""
        assert MessageBundle.from_json(bundle.to_json()) == bundle


class TestMessageBundleFromJson:
    """Test validation of reloaded bundles."""

    def test_accepts_bytes(self) -> None:
        """Raw file contents are decoded."""
        bundle = MessageBundle.from_json(b'{"messages": ["x"], "keys": ["k"]}')
        assert bundle == MessageBundle((BareKey("k"),), ("x",))

    def test_accepts_mapping(self) -> None:
        """Already decoded JSON is accepted."""
        bundle = MessageBundle.from_json({"messages": [], "keys": []})
        assert len(bundle) == 0

    def test_comment_string_accepted(self) -> None:
        """A single comment string is read as one comment line."""
        bundle = MessageBundle.from_json({"messages": ["x"], "keys": [{"key": "k", "comment": "c"}]})
        assert bundle.keys == (CommentedKey("k", ("c",)),)

    @pytest.mark.parametrize(
        "data",
        [
            "not json",
            "[]",
            '{"messages": ["x"]}',
            '{"messages": "x", "keys": []}',
            '{"messages": ["x"], "keys": []}',
            '{"messages": [1], "keys": ["k"]}',
            '{"messages": ["x"], "keys": [1]}',
            '{"messages": ["x"], "keys": [{"comment": ["c"]}]}',
            '{"messages": ["x"], "keys": [{"key": "", "comment": []}]}',
            '{"messages": ["x"], "keys": [{"key": "k", "comment": [1]}]}',
        ],
    )
    def test_malformed_rejected(self, data: str) -> None:
        """Malformed bundles raise BundleFormatError."""
        with pytest.raises(BundleFormatError):
            MessageBundle.from_json(data)
