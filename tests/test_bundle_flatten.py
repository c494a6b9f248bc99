"""Tests for bundle/flatten.py: flat translation objects and key uniqueness.

Python 3.12+.
"""

import json

import pytest
from hypothesis import given

from nlsbundler.bundle import (
    BareKey,
    CommentedKey,
    MessageBundle,
    comment_key,
    flat_to_json,
    flatten_bundle,
    is_comment_key,
    unflatten,
)
from nlsbundler.diagnostics import DiagnosticCode, DuplicateKeyError
from tests.strategies import message_bundles


class TestFlattenBundle:
    """Test flatten_bundle."""

    def test_bare_keys(self) -> None:
        """Bare keys map straight to their messages."""
        bundle = MessageBundle((BareKey("greeting.hello"),), ("Hello, {0}!",))
        assert flatten_bundle(bundle) == {"greeting.hello": "Hello, {0}!"}

    def test_commented_key_adds_comment_entry(self) -> None:
        """Comments are joined with single spaces under the sibling key."""
        bundle = MessageBundle((CommentedKey("ok", ("Button", "label")),), ("OK",))
        flat = flatten_bundle(bundle)
        assert flat == {"ok": "OK", "_ok.comment": "Button label"}
        assert list(flat) == ["ok", "_ok.comment"]

    def test_insertion_order_follows_index(self) -> None:
        """Entries appear in bundle index order."""
        bundle = MessageBundle((BareKey("b"), BareKey("a")), ("B", "A"))
        assert list(flatten_bundle(bundle)) == ["b", "a"]

    def test_duplicate_key_raises(self) -> None:
        """Repeated keys raise DuplicateKeyError naming the key."""
        bundle = MessageBundle((BareKey("ok"), CommentedKey("ok", ("c",))), ("OK", "Fine"))
        with pytest.raises(DuplicateKeyError) as exc_info:
            flatten_bundle(bundle)
        assert exc_info.value.key == "ok"
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.DUPLICATE_KEY
        assert 'The following key is duplicated: "ok". Please use unique keys.' in str(exc_info.value)

    def test_collision_with_comment_entry_raises(self) -> None:
        """A key equal to a generated comment entry is a duplicate."""
        bundle = MessageBundle(
            (CommentedKey("ok", ("c",)), BareKey("_ok.comment")),
            ("OK", "text"),
        )
        with pytest.raises(DuplicateKeyError) as exc_info:
            flatten_bundle(bundle)
        assert exc_info.value.key == "_ok.comment"

    @given(message_bundles())
    def test_unflatten_recovers_pairs(self, bundle: MessageBundle) -> None:
        """Flatten then unflatten recovers every key/message pair."""
        recovered = unflatten(flatten_bundle(bundle))
        assert recovered == dict(zip(bundle.key_strings(), bundle.messages, strict=True))

    def test_unflatten_drops_only_attached_comments(self) -> None:
        """A comment-shaped key without its base key is a real key."""
        assert unflatten({"x": "X", "_x.comment": "c"}) == {"x": "X"}
        assert unflatten({"_x.comment": "v"}) == {"_x.comment": "v"}
        assert unflatten({"y": "Y", "_x.comment": "v"}) == {"y": "Y", "_x.comment": "v"}


class TestCommentKeys:
    """Test the comment key helpers."""

    def test_comment_key(self) -> None:
        """Comment keys wrap the key in _ and .comment."""
        assert comment_key("a.b") == "_a.b.comment"

    @pytest.mark.parametrize(
        ("flat_key", "expected"),
        [("_a.comment", True), ("a", False), ("_.comment", False), ("a.comment", False)],
    )
    def test_is_comment_key(self, flat_key: str, expected: bool) -> None:
        """Only _<non-empty>.comment is a comment key."""
        assert is_comment_key(flat_key) is expected


class TestFlatToJson:
    """Test flat object serialization."""

    def test_tab_indent_and_unicode(self) -> None:
        """Output is tab-indented and keeps non-ASCII text."""
        text = flat_to_json({"k": "Grüße"})
        assert text == '{\n\t"k": "Grüße"\n}'
        assert json.loads(text) == {"k": "Grüße"}
