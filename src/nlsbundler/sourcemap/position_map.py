"""Position maps (Source Map revision 3) that follow source rewrites.

A source file handed to the rewriter may carry a position map produced by
an earlier build step. Its *generated* positions point into the text the
rewriter edits, so every edit that changes the length or the line
structure of that text has to be reflected in the map.

Components:
    Segment - One decoded mapping with absolute values
    PositionMap - Decoded source map with rewrite support
    decode_mappings / encode_mappings - ``mappings`` string codec

Note:
    Columns are counted in Unicode code points, the unit Python strings
    index by.

Python 3.12+. Zero external dependencies.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from typing import Any

from nlsbundler.diagnostics import ErrorTemplate, PositionMapError
from nlsbundler.sourcemap.vlq import decode_vlq, encode_vlq
from nlsbundler.text import OffsetMapper, TextEdit, line_starts, offset_to_position

__all__ = [
    "PositionMap",
    "Segment",
    "decode_mappings",
    "encode_mappings",
]

logger = logging.getLogger(__name__)

SOURCE_MAP_VERSION = 3


@dataclass(frozen=True, slots=True)
class Segment:
    """One mapping entry with absolute (not delta-encoded) values.

    All positions are 0-based. ``source`` is None for a segment that maps
    generated text to nothing; ``name`` is optional even when ``source``
    is present.

    Attributes:
        generated_line: Line in the generated (rewritten) text
        generated_column: Column in the generated text
        source: Index into PositionMap.sources
        original_line: Line in the original source
        original_column: Column in the original source
        name: Index into PositionMap.names
    """

    generated_line: int
    generated_column: int
    source: int | None = None
    original_line: int | None = None
    original_column: int | None = None
    name: int | None = None


def _generated_position(segment: Segment) -> tuple[int, int]:
    return segment.generated_line, segment.generated_column


def decode_mappings(mappings: str) -> tuple[Segment, ...]:
    """Decode a ``mappings`` string into absolute segments.

    Raises:
        PositionMapError: If a segment has an invalid field count or
            invalid VLQ data
    """
    segments: list[Segment] = []
    source = original_line = original_column = name = 0
    for line_number, line in enumerate(mappings.split(";")):
        column = 0
        for raw in line.split(","):
            if not raw:
                continue
            fields = decode_vlq(raw)
            if len(fields) not in (1, 4, 5):
                raise PositionMapError(
                    ErrorTemplate.position_map_invalid(
                        f"segment {raw!r} on line {line_number} has {len(fields)} fields"
                    )
                )
            column += fields[0]
            if len(fields) == 1:
                segments.append(Segment(line_number, column))
                continue
            source += fields[1]
            original_line += fields[2]
            original_column += fields[3]
            segment_name: int | None = None
            if len(fields) == 5:
                name += fields[4]
                segment_name = name
            segments.append(
                Segment(line_number, column, source, original_line, original_column, segment_name)
            )
    return tuple(segments)


def encode_mappings(segments: Iterable[Segment]) -> str:
    """Encode segments into a ``mappings`` string.

    Segments are sorted by generated position before encoding.
    """
    lines: list[str] = []
    current: list[str] = []
    line_number = 0
    column = source = original_line = original_column = name = 0
    for segment in sorted(segments, key=_generated_position):
        while line_number < segment.generated_line:
            lines.append(",".join(current))
            current = []
            line_number += 1
            column = 0
        fields = [segment.generated_column - column]
        column = segment.generated_column
        if (
            segment.source is not None
            and segment.original_line is not None
            and segment.original_column is not None
        ):
            fields += [
                segment.source - source,
                segment.original_line - original_line,
                segment.original_column - original_column,
            ]
            source = segment.source
            original_line = segment.original_line
            original_column = segment.original_column
            if segment.name is not None:
                fields.append(segment.name - name)
                name = segment.name
        current.append(encode_vlq(fields))
    lines.append(",".join(current))
    return ";".join(lines)


def _string_list(data: Mapping[str, Any], field: str, *, nullable: bool = False) -> tuple[Any, ...]:
    value = data.get(field, [])
    if not isinstance(value, list) or not all(
        isinstance(item, str) or (nullable and item is None) for item in value
    ):
        raise PositionMapError(ErrorTemplate.position_map_invalid(f"'{field}' must be a list of strings"))
    return tuple(value)


@dataclass(frozen=True, slots=True)
class PositionMap:
    """Decoded Source Map v3.

    Attributes:
        sources: Original source file names
        segments: Decoded mappings, sorted by generated position
        names: Symbol names referenced by segments
        file: Name of the generated file
        source_root: Prefix for source names
        sources_content: Inline original sources, parallel to ``sources``

    Example:
        >>> pmap = PositionMap.from_json('{"version": 3, "sources": ["a.src"], "mappings": "AAAA"}')
        >>> pmap.segments
        (Segment(generated_line=0, generated_column=0, source=0, original_line=0, ...),)
    """

    sources: tuple[str, ...] = ()
    segments: tuple[Segment, ...] = ()
    names: tuple[str, ...] = ()
    file: str | None = None
    source_root: str | None = None
    sources_content: tuple[str | None, ...] | None = None

    @classmethod
    def from_json(cls, data: str | bytes | Mapping[str, Any]) -> PositionMap:
        """Decode a source map from JSON text or a decoded mapping.

        Raises:
            PositionMapError: If the map is not a valid revision 3 source map
        """
        if isinstance(data, (str, bytes)):
            try:
                data = json.loads(data)
            except ValueError as e:
                raise PositionMapError(ErrorTemplate.position_map_invalid(str(e))) from e
        if not isinstance(data, Mapping):
            raise PositionMapError(ErrorTemplate.position_map_invalid("top level is not an object"))
        if data.get("version") != SOURCE_MAP_VERSION:
            raise PositionMapError(
                ErrorTemplate.position_map_invalid(f"unsupported version {data.get('version')!r}")
            )
        mappings = data.get("mappings", "")
        if not isinstance(mappings, str):
            raise PositionMapError(ErrorTemplate.position_map_invalid("'mappings' must be a string"))

        sources_content = None
        if "sourcesContent" in data:
            sources_content = _string_list(data, "sourcesContent", nullable=True)

        return cls(
            sources=_string_list(data, "sources"),
            segments=tuple(sorted(decode_mappings(mappings), key=_generated_position)),
            names=_string_list(data, "names"),
            file=data.get("file"),
            source_root=data.get("sourceRoot"),
            sources_content=sources_content,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready source map mapping."""
        data: dict[str, Any] = {"version": SOURCE_MAP_VERSION}
        if self.file is not None:
            data["file"] = self.file
        if self.source_root is not None:
            data["sourceRoot"] = self.source_root
        data["sources"] = list(self.sources)
        if self.sources_content is not None:
            data["sourcesContent"] = list(self.sources_content)
        data["names"] = list(self.names)
        data["mappings"] = encode_mappings(self.segments)
        return data

    def to_json(self) -> str:
        """Serialize to compact source map JSON."""
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))

    def rewritten(self, old_text: str, new_text: str, edits: Iterable[TextEdit]) -> PositionMap:
        """Return a map whose generated positions follow an edit of the text.

        Every segment's generated position is converted to an offset in
        ``old_text``, moved through the edits and converted back to a
        (line, column) pair in ``new_text``. Segments that land inside a
        replaced range collapse onto the start of the replacement; when
        several collapse onto the same position only the first is kept.
        Segments pointing outside ``old_text`` are dropped.

        Args:
            old_text: Text the current segments point into
            new_text: Result of applying ``edits`` to ``old_text``
            edits: Edits in ``old_text`` offsets

        Returns:
            New PositionMap; original positions are unchanged
        """
        mapper = OffsetMapper(edits)
        old_starts = line_starts(old_text)
        new_starts = line_starts(new_text)

        moved: list[Segment] = []
        seen: set[tuple[int, int]] = set()
        dropped = 0
        for segment in self.segments:
            if segment.generated_line >= len(old_starts):
                dropped += 1
                continue
            offset = old_starts[segment.generated_line] + segment.generated_column
            if offset > len(old_text):
                dropped += 1
                continue
            line, column = offset_to_position(new_starts, mapper.map(offset))
            if (line, column) in seen:
                continue
            seen.add((line, column))
            moved.append(replace(segment, generated_line=line, generated_column=column))

        if dropped:
            logger.debug("Dropped %d position map segment(s) outside the source text", dropped)
        return replace(self, segments=tuple(sorted(moved, key=_generated_position)))
