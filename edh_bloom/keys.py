"""Fixed-width varint key encoding used by the FPR checks and benchmarks."""

from __future__ import annotations

from .errors import InvalidParameters


def varint_key(value: int, width: int = 8) -> bytes:
    """Encode ``value`` as a zig-zag signed LEB128 varint, zero-padded to ``width`` bytes.

    Raises:
        InvalidParameters: If the encoding needs more than ``width`` bytes.
    """
    zigzag = value << 1 if value >= 0 else ((-value) << 1) - 1
    out = bytearray()
    while zigzag >= 0x80:
        out.append((zigzag & 0x7F) | 0x80)
        zigzag >>= 7
    out.append(zigzag)
    if len(out) > width:
        raise InvalidParameters(f"{value} needs {len(out)} bytes, more than width={width}")
    return bytes(out) + bytes(width - len(out))
