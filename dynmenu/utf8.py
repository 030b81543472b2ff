"""Lenient UTF-8 decoding that maps bad input to the replacement character."""

from __future__ import annotations

from collections.abc import Iterator

UTF_INVALID = 0xFFFD
UTF_SIZ = 4

_UTF_BYTE = (0x80, 0x00, 0xC0, 0xE0, 0xF0)
_UTF_MASK = (0xC0, 0x80, 0xE0, 0xF0, 0xF8)
_UTF_MIN = (0, 0, 0x80, 0x800, 0x10000)
_UTF_MAX = (0x10FFFF, 0x7F, 0x7FF, 0xFFFF, 0x10FFFF)


def _decode_byte(byte: int) -> tuple[int, int]:
    """Return the payload bits of *byte* and its kind (0 = continuation)."""
    for kind, (mask, lead) in enumerate(zip(_UTF_MASK, _UTF_BYTE)):
        if byte & mask == lead:
            return byte & ~mask & 0xFF, kind
    return 0, len(_UTF_MASK)


def decode(data: bytes) -> tuple[int, int]:
    """Decode one code point from the start of *data*.

    Returns ``(codepoint, consumed)``. Malformed sequences give
    ``UTF_INVALID``; a sequence cut short by the end of *data* consumes 0.
    """
    if not data:
        return UTF_INVALID, 0
    value, length = _decode_byte(data[0])
    if not 1 <= length <= UTF_SIZ:
        return UTF_INVALID, 1
    for index, byte in enumerate(data[1:length], start=1):
        bits, kind = _decode_byte(byte)
        value = (value << 6) | bits
        if kind:
            return UTF_INVALID, index
    if len(data) < length:
        return UTF_INVALID, 0
    if not _UTF_MIN[length] <= value <= _UTF_MAX[length] or 0xD800 <= value <= 0xDFFF:
        value = UTF_INVALID
    return value, length


def iter_codepoints(data: bytes | str) -> Iterator[int]:
    """Yield every code point of *data*, replacing malformed parts."""
    if isinstance(data, str):
        data = data.encode("utf-8", "surrogatepass")
    pos = 0
    while pos < len(data):
        codepoint, consumed = decode(data[pos:pos + UTF_SIZ])
        if not consumed:
            # truncated sequence at the end of the input
            consumed = len(data) - pos
        yield codepoint
        pos += consumed