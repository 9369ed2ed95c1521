"""
Fixed-width big-endian number serialisation.

``BigNumberCodec`` turns a non-negative integer into exactly ``width``
bytes (8 by default), zero-padded on the left.  It is *not* a
variable-length encoding: values needing more than ``width`` bytes are
rejected, never truncated.

The ``serialize_*`` helpers cover the fixed-size primitive types
(two's-complement integers and IEEE-754 doubles).
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .errors import EncodingError


@dataclass(frozen=True)
class BigNumberCodec:
    """Unsigned big-endian codec with a fixed output width."""

    width: int = 8

    def __post_init__(self) -> None:
        if self.width < 1:
            raise ValueError("width must be ≥ 1")

    @property
    def max_value(self) -> int:
        return (1 << (8 * self.width)) - 1

    def encode(self, value: int) -> bytes:
        """
        Encode *value* as ``width`` big-endian bytes.

        Raises ``EncodingError`` for negative values and for values whose
        natural representation is wider than ``width`` bytes.
        """
        if not isinstance(value, int) or isinstance(value, bool):
            raise EncodingError(f"expected int, got {type(value).__name__}")
        if value < 0:
            raise EncodingError("negative values are not encodable")
        if value > self.max_value:
            raise EncodingError(
                f"value needs {(value.bit_length() + 7) // 8} bytes, "
                f"codec width is {self.width}"
            )
        return value.to_bytes(self.width, "big")

    def decode(self, data: bytes) -> int:
        if len(data) != self.width:
            raise EncodingError(f"need {self.width} bytes, got {len(data)}")
        return int.from_bytes(data, "big")


# ── fixed-size primitives ───────────────────────────────────────────────

def _pack(fmt: str, value) -> bytes:
    try:
        return struct.pack(fmt, value)
    except struct.error as exc:
        raise EncodingError(str(exc)) from exc


def serialize_short(value: int) -> bytes:
    """Signed 16-bit, big-endian."""
    return _pack(">h", value)


def serialize_int(value: int) -> bytes:
    """Signed 32-bit, big-endian."""
    return _pack(">i", value)


def serialize_long(value: int) -> bytes:
    """Signed 64-bit, big-endian."""
    return _pack(">q", value)


def serialize_double(value: float) -> bytes:
    """IEEE-754 binary64, big-endian."""
    return _pack(">d", value)
