"""Hypothesis strategies for bundle keys, messages and MessageBundle values.

Keys start with an ASCII letter so they never collide with the
``_<key>.comment`` entries generated by flattening.

Event-Emitting Strategies (HypoFuzz-Optimized):
- localize_keys: Emits key_variant=bare|commented
- message_bundles: Emits bundle_size=empty|small|large

Python 3.12+.
"""

from __future__ import annotations

import string
from typing import TYPE_CHECKING

from hypothesis import event
from hypothesis import strategies as st

from nlsbundler.bundle import BareKey, CommentedKey, LocalizeKey, MessageBundle

if TYPE_CHECKING:
    from hypothesis.strategies import DrawFn

_KEY_FIRST_CHARS = string.ascii_letters
_KEY_REST_CHARS = string.ascii_letters + string.digits + "._-"

# Lone surrogates cannot be encoded as UTF-8 output.
_TEXT_CHARS = st.characters(blacklist_categories=("Cs",))


@st.composite
def bundle_keys(draw: DrawFn) -> str:
    """Generate dotted message keys such as "greeting.hello"."""
    first = draw(st.sampled_from(_KEY_FIRST_CHARS))
    rest = draw(st.text(alphabet=_KEY_REST_CHARS, max_size=24))
    return first + rest


def messages() -> st.SearchStrategy[str]:
    """Generate default messages, placeholders and non-ASCII text included."""
    return st.one_of(
        st.text(alphabet=_TEXT_CHARS, max_size=40),
        st.sampled_from(["Hello, {0}!", "{0} of {1}", "Ünïcödé ✓", "line\nbreak", 'quote "x"']),
    )


@st.composite
def localize_keys(draw: DrawFn, key: str | None = None) -> LocalizeKey:
    """Generate a BareKey or CommentedKey.

    Events emitted:
    - key_variant=bare|commented
    """
    key = key if key is not None else draw(bundle_keys())
    if draw(st.booleans()):
        event("key_variant=bare")
        return BareKey(key)
    comment = draw(st.lists(st.text(alphabet=_TEXT_CHARS, max_size=20), max_size=3))
    event("key_variant=commented")
    return CommentedKey(key, tuple(comment))


@st.composite
def message_bundles(draw: DrawFn, max_size: int = 8) -> MessageBundle:
    """Generate bundles whose key strings are unique.

    Events emitted:
    - bundle_size=empty|small|large
    """
    key_strings = draw(st.lists(bundle_keys(), max_size=max_size, unique=True))
    keys = tuple(draw(localize_keys(key)) for key in key_strings)
    texts = tuple(draw(messages()) for _ in key_strings)
    size_class = "empty" if not keys else "small" if len(keys) <= 3 else "large"
    event(f"bundle_size={size_class}")
    return MessageBundle(keys, texts)
