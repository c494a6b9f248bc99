"""Hypothesis strategies for the VLQ codec and position map segments.

Python 3.12+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hypothesis import strategies as st

from nlsbundler.sourcemap import Segment

if TYPE_CHECKING:
    from hypothesis.strategies import DrawFn


def vlq_values() -> st.SearchStrategy[list[int]]:
    """Lists of signed integers, including multi-digit magnitudes."""
    return st.lists(st.integers(min_value=-(2**31), max_value=2**31 - 1), max_size=6)


@st.composite
def segments(draw: DrawFn, max_line: int = 5, max_column: int = 40) -> Segment:
    """Mapped segments with absolute values."""
    return Segment(
        generated_line=draw(st.integers(0, max_line)),
        generated_column=draw(st.integers(0, max_column)),
        source=draw(st.integers(0, 2)),
        original_line=draw(st.integers(0, 50)),
        original_column=draw(st.integers(0, 80)),
        name=draw(st.none() | st.integers(0, 3)),
    )
