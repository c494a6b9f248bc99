"""Position and edit utilities for source text.

Converts between character offsets and line/column positions, and applies
non-overlapping replacements while tracking how offsets move. Both the
rewriter (to splice call arguments) and the position map (to follow the
splice) build on these helpers.

Python 3.12+. Zero external dependencies.
"""

from __future__ import annotations

import bisect
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

__all__ = [
    "LINE_BREAK",
    "OffsetMapper",
    "TextEdit",
    "apply_edits",
    "line_starts",
    "offset_to_position",
]

# Line terminators recognized by the Python tokenizer.
LINE_BREAK = re.compile(r"\r\n|\r|\n")


def line_starts(source: str) -> tuple[int, ...]:
    """Character offset at which each line starts.

    Lines end at CRLF, CR or LF, the same terminators the tokenizer uses.

    Example:
        >>> line_starts("ab\\ncd\\r\\ne")
        (0, 3, 7)
    """
    return (0, *(match.end() for match in LINE_BREAK.finditer(source)))


def offset_to_position(starts: Sequence[int], offset: int) -> tuple[int, int]:
    """Convert an offset to a 0-based (line, column) pair.

    Args:
        starts: Result of line_starts() for the text
        offset: Character offset

    Returns:
        (line, column), both 0-based
    """
    line = bisect.bisect_right(starts, offset) - 1
    return line, offset - starts[line]


@dataclass(frozen=True, slots=True, order=True)
class TextEdit:
    """Replacement of ``source[start:end]`` by ``text``.

    A zero-length range is an insertion.

    Attributes:
        start: First replaced character offset
        end: Offset after the last replaced character
        text: Replacement text
    """

    start: int
    end: int
    text: str

    def __post_init__(self) -> None:
        """Validate the range.

        Raises:
            ValueError: If start is negative or end precedes start
        """
        if self.start < 0 or self.end < self.start:
            msg = f"Invalid edit range [{self.start}, {self.end})"
            raise ValueError(msg)

    @property
    def delta(self) -> int:
        """Length change introduced by this edit."""
        return len(self.text) - (self.end - self.start)


def _checked(edits: Iterable[TextEdit]) -> tuple[TextEdit, ...]:
    ordered = tuple(sorted(edits))
    for previous, current in zip(ordered, ordered[1:]):
        if current.start < previous.end:
            msg = f"Overlapping edits at offsets {previous.start} and {current.start}"
            raise ValueError(msg)
    return ordered


def apply_edits(source: str, edits: Iterable[TextEdit]) -> str:
    """Apply non-overlapping edits to a text.

    Args:
        source: Original text
        edits: Edits expressed in offsets of the original text

    Returns:
        Edited text

    Raises:
        ValueError: If edits overlap or fall outside the text
    """
    parts: list[str] = []
    cursor = 0
    for edit in _checked(edits):
        if edit.end > len(source):
            msg = f"Edit [{edit.start}, {edit.end}) outside text of length {len(source)}"
            raise ValueError(msg)
        parts.append(source[cursor : edit.start])
        parts.append(edit.text)
        cursor = edit.end
    parts.append(source[cursor:])
    return "".join(parts)


class OffsetMapper:
    """Map offsets of an original text to offsets of its edited version.

    Offsets before an edit are unchanged, offsets after it shift by the
    edit's delta, and offsets inside a replaced range collapse to the start
    of the replacement. An offset equal to the position of an insertion
    moves past the inserted text.

    Example:
        >>> mapper = OffsetMapper([TextEdit(2, 5, "x")])
        >>> mapper.map(1), mapper.map(3), mapper.map(6)
        (1, 2, 4)
    """

    __slots__ = ("_edits", "_shift", "_starts")

    def __init__(self, edits: Iterable[TextEdit]) -> None:
        self._edits = _checked(edits)
        self._starts = [edit.start for edit in self._edits]
        # _shift[i]: total delta of edits[0..i]
        self._shift: list[int] = []
        total = 0
        for edit in self._edits:
            total += edit.delta
            self._shift.append(total)

    def map(self, offset: int) -> int:
        """Translate one offset of the original text."""
        index = bisect.bisect_right(self._starts, offset) - 1
        if index < 0:
            return offset
        edit = self._edits[index]
        if offset < edit.end:
            before = self._shift[index - 1] if index > 0 else 0
            return edit.start + before
        return offset + self._shift[index]
