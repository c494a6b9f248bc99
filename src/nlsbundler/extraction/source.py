"""Mapping of ast node positions onto character offsets.

ast reports 1-based line numbers and UTF-8 *byte* columns. Edits and
diagnostics work on character offsets into the decoded source, so every
node position goes through SourceIndex first.

Python 3.12+. Zero external dependencies.
"""

from __future__ import annotations

import ast

from nlsbundler.constants import SOURCE_BOM
from nlsbundler.diagnostics import SourceSpan
from nlsbundler.text import line_starts

__all__ = ["SourceIndex"]


class SourceIndex:
    """Character-offset lookups for one source text.

    Example:
        >>> index = SourceIndex('x = "é"\\ny = 1\\n')
        >>> index.offset(2, 0)
        8
    """

    __slots__ = ("_encoded", "_source", "_starts")

    def __init__(self, source: str) -> None:
        self._source = source
        self._starts = list(line_starts(source))
        if source.startswith(SOURCE_BOM):
            # ast never sees the BOM, so its line 1 columns start after it.
            self._starts[0] = len(SOURCE_BOM)
        self._encoded: dict[int, bytes] = {}

    def line_start(self, lineno: int) -> int:
        """Offset of the first character of a 1-based line, clamped to the text."""
        if lineno < 1:
            return 0
        if lineno > len(self._starts):
            return len(self._source)
        return self._starts[lineno - 1]

    def _line_bytes(self, lineno: int) -> bytes:
        encoded = self._encoded.get(lineno)
        if encoded is None:
            start = self.line_start(lineno)
            end = self.line_start(lineno + 1) if lineno < len(self._starts) else len(self._source)
            encoded = self._source[start:end].encode("utf-8")
            self._encoded[lineno] = encoded
        return encoded

    def offset(self, lineno: int, byte_column: int) -> int:
        """Character offset of an ast (lineno, col_offset) position."""
        prefix = self._line_bytes(lineno)[:byte_column]
        return self.line_start(lineno) + len(prefix.decode("utf-8", errors="replace"))

    def span(self, node: ast.expr | ast.stmt) -> SourceSpan:
        """Character span of an ast node."""
        start = self.offset(node.lineno, node.col_offset)
        end_lineno = node.end_lineno if node.end_lineno is not None else node.lineno
        end_col = node.end_col_offset if node.end_col_offset is not None else node.col_offset
        end = self.offset(end_lineno, end_col)
        return SourceSpan(
            start=start,
            end=max(end, start),
            line=node.lineno,
            column=start - self.line_start(node.lineno) + 1,
        )

    def point(self, lineno: int, column: int) -> SourceSpan:
        """Zero-width span at a 1-based line and 1-based character column."""
        lineno = max(lineno, 1)
        column = max(column, 1)
        start = min(self.line_start(lineno) + column - 1, len(self._source))
        return SourceSpan(start=start, end=start, line=lineno, column=column)
