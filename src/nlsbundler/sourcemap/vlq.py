"""Base64 VLQ codec for Source Map v3 ``mappings`` strings.

Each value is stored as a sign bit followed by 5-bit groups, least
significant group first, with bit 6 of every base64 digit flagging a
continuation.

Python 3.12+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable

from nlsbundler.diagnostics import ErrorTemplate, PositionMapError

__all__ = ["decode_vlq", "encode_vlq"]

_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_DIGITS = {char: index for index, char in enumerate(_ALPHABET)}

_SHIFT = 5
_CONTINUATION = 1 << _SHIFT
_MASK = _CONTINUATION - 1


def encode_vlq(values: Iterable[int]) -> str:
    """Encode integers as one base64 VLQ segment.

    Example:
        >>> encode_vlq([0, 0, 16, 1])
        'AAgBC'
    """
    out: list[str] = []
    for value in values:
        vlq = (-value << 1) | 1 if value < 0 else value << 1
        while True:
            digit = vlq & _MASK
            vlq >>= _SHIFT
            if vlq:
                digit |= _CONTINUATION
            out.append(_ALPHABET[digit])
            if not vlq:
                break
    return "".join(out)


def decode_vlq(segment: str) -> list[int]:
    """Decode one base64 VLQ segment into integers.

    Raises:
        PositionMapError: On characters outside the base64 alphabet or a
            truncated value

    Example:
        >>> decode_vlq("AAgBC")
        [0, 0, 16, 1]
    """
    values: list[int] = []
    shift = 0
    accumulated = 0
    for char in segment:
        digit = _DIGITS.get(char)
        if digit is None:
            raise PositionMapError(
                ErrorTemplate.position_map_invalid(f"invalid base64 VLQ character {char!r}")
            )
        accumulated += (digit & _MASK) << shift
        if digit & _CONTINUATION:
            shift += _SHIFT
            continue
        negative = accumulated & 1
        accumulated >>= 1
        values.append(-accumulated if negative else accumulated)
        shift = 0
        accumulated = 0
    if shift:
        raise PositionMapError(
            ErrorTemplate.position_map_invalid(f"truncated VLQ value in segment {segment!r}")
        )
    return values
