"""Tests for text.py: offsets, positions and text edits.

Python 3.12+.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from nlsbundler.extraction import SourceIndex
from nlsbundler.text import (
    OffsetMapper,
    TextEdit,
    apply_edits,
    line_starts,
    offset_to_position,
)


class TestPositions:
    """Test offset to line/column conversion."""

    def test_line_starts(self) -> None:
        """Each line start follows a LF."""
        assert line_starts("ab\ncd\n") == (0, 3, 6)
        assert line_starts("") == (0,)

    def test_crlf_line_starts(self) -> None:
        """A CRLF pair ends a line after the LF."""
        assert line_starts("a\r\nb") == (0, 3)

    def test_offset_to_position(self) -> None:
        """Offsets convert to 0-based line and column."""
        starts = line_starts("ab\ncd\n")
        assert offset_to_position(starts, 0) == (0, 0)
        assert offset_to_position(starts, 4) == (1, 1)
        assert offset_to_position(starts, 6) == (2, 0)

    def test_cr_line_starts(self) -> None:
        """A lone CR ends a line."""
        assert line_starts("a\rb\r") == (0, 2, 4)

    def test_mixed_line_breaks_match_source_index(self) -> None:
        """Position maps and the rewriter agree on line boundaries."""
        text = "a\rb\r\nc\nd"
        index = SourceIndex(text)
        assert line_starts(text) == tuple(index.line_start(n) for n in range(1, 5))


class TestTextEdit:
    """Test TextEdit validation and application."""

    def test_invalid_range(self) -> None:
        """End before start is rejected."""
        with pytest.raises(ValueError, match="Invalid edit range"):
            TextEdit(5, 3, "x")

    def test_delta(self) -> None:
        """delta is the length change."""
        assert TextEdit(0, 3, "x").delta == -2
        assert TextEdit(2, 2, "abc").delta == 3

    def test_apply_in_any_order(self) -> None:
        """Edits are applied by position regardless of input order."""
        source = 'localize("key", "msg")'
        edits = [TextEdit(16, 21, "None"), TextEdit(9, 14, "0")]
        assert apply_edits(source, edits) == "localize(0, None)"

    def test_insertion(self) -> None:
        """A zero-length edit inserts text."""
        assert apply_edits("load()", [TextEdit(5, 5, "__file__")]) == "load(__file__)"

    def test_overlapping_edits_rejected(self) -> None:
        """Overlapping edits raise ValueError."""
        with pytest.raises(ValueError, match="Overlapping"):
            apply_edits("abcdef", [TextEdit(0, 3, "x"), TextEdit(2, 4, "y")])

    def test_edit_outside_text_rejected(self) -> None:
        """Edits past the end raise ValueError."""
        with pytest.raises(ValueError, match="outside text"):
            apply_edits("abc", [TextEdit(2, 10, "x")])


class TestOffsetMapper:
    """Test offset translation through edits."""

    def test_before_inside_after(self) -> None:
        """Offsets before stay, inside collapse, after shift."""
        mapper = OffsetMapper([TextEdit(2, 5, "x")])
        assert mapper.map(1) == 1
        assert mapper.map(2) == 2
        assert mapper.map(4) == 2
        assert mapper.map(5) == 3
        assert mapper.map(9) == 7

    def test_insertion_point_moves_past_text(self) -> None:
        """An offset at an insertion point follows the inserted text."""
        mapper = OffsetMapper([TextEdit(3, 3, "abc")])
        assert mapper.map(2) == 2
        assert mapper.map(3) == 6

    def test_cumulative_shift(self) -> None:
        """Later offsets accumulate the delta of every earlier edit."""
        mapper = OffsetMapper([TextEdit(0, 4, "a"), TextEdit(10, 12, "bcde")])
        assert mapper.map(6) == 3
        assert mapper.map(11) == 7
        assert mapper.map(20) == 19

    @given(
        st.text(alphabet="ab\n", min_size=1, max_size=30),
        st.data(),
    )
    def test_unedited_characters_keep_identity(self, source: str, data: st.DataObject) -> None:
        """Characters outside every edit map onto the same character."""
        start = data.draw(st.integers(0, len(source)))
        end = data.draw(st.integers(start, len(source)))
        replacement = data.draw(st.text(alphabet="xyz\n", max_size=5))
        edit = TextEdit(start, end, replacement)
        edited = apply_edits(source, [edit])
        mapper = OffsetMapper([edit])
        for offset, char in enumerate(source):
            if start <= offset < end:
                continue
            if offset == start == end:
                continue
            assert edited[mapper.map(offset)] == char
