"""Position maps that stay consistent with rewritten source text.

Submodules:
    vlq          - base64 VLQ codec
    position_map - Segment, PositionMap, mappings codec

Python 3.12+. Zero external dependencies.
"""

from nlsbundler.sourcemap.position_map import (
    PositionMap,
    Segment,
    decode_mappings,
    encode_mappings,
)
from nlsbundler.sourcemap.vlq import decode_vlq, encode_vlq

__all__ = [
    "PositionMap",
    "Segment",
    "decode_mappings",
    "decode_vlq",
    "encode_mappings",
    "encode_vlq",
]
