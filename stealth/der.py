"""
DER packaging of ECDSA signatures.

    Ecdsa-Sig-Value ::= SEQUENCE {
        r   INTEGER,
        s   INTEGER
    }

Only the subset of X.690 needed for this structure is implemented:
definite lengths (short or long form, minimal), minimally-encoded
positive INTEGERs.  Decoding is strict; any deviation raises
``SignatureDecodingError``.
"""

from __future__ import annotations

from typing import List, Tuple

from .errors import EncodingError, SignatureDecodingError

TAG_INTEGER = 0x02
TAG_SEQUENCE = 0x30


# ── encoding ────────────────────────────────────────────────────────────

def _encode_length(n: int) -> bytes:
    if n < 0x80:
        return bytes([n])
    body = n.to_bytes((n.bit_length() + 7) // 8, "big")
    return bytes([0x80 | len(body)]) + body


def encode_integer(value: int) -> bytes:
    """INTEGER TLV for a positive *value*, sign byte added when needed."""
    if value <= 0:
        raise EncodingError("signature integers must be positive")
    # one extra bit keeps the two's-complement sign bit clear
    body = value.to_bytes(value.bit_length() // 8 + 1, "big")
    return bytes([TAG_INTEGER]) + _encode_length(len(body)) + body


def encode_signature(r: int, s: int) -> bytes:
    """SEQUENCE { INTEGER r, INTEGER s }."""
    content = encode_integer(r) + encode_integer(s)
    return bytes([TAG_SEQUENCE]) + _encode_length(len(content)) + content


# ── decoding ────────────────────────────────────────────────────────────

def _read_length(data: bytes, pos: int) -> Tuple[int, int]:
    """Return (length, next position) for the length octets at *pos*."""
    if pos >= len(data):
        raise SignatureDecodingError("truncated length")
    first = data[pos]
    pos += 1
    if first < 0x80:
        return first, pos
    count = first & 0x7F
    if count == 0:
        raise SignatureDecodingError("indefinite length not allowed in DER")
    if pos + count > len(data):
        raise SignatureDecodingError("truncated long-form length")
    raw = data[pos:pos + count]
    if raw[0] == 0:
        raise SignatureDecodingError("non-minimal long-form length")
    length = int.from_bytes(raw, "big")
    if length < 0x80:
        raise SignatureDecodingError("long form used for short length")
    return length, pos + count


def _read_tlv(data: bytes, pos: int) -> Tuple[int, bytes, int]:
    if pos >= len(data):
        raise SignatureDecodingError("truncated element")
    tag = data[pos]
    length, pos = _read_length(data, pos + 1)
    end = pos + length
    if end > len(data):
        raise SignatureDecodingError("element length exceeds input")
    return tag, data[pos:end], end


def decode_integer(body: bytes) -> int:
    if not body:
        raise SignatureDecodingError("empty INTEGER")
    if body[0] & 0x80:
        raise SignatureDecodingError("negative INTEGER")
    if len(body) > 1 and body[0] == 0 and body[1] < 0x80:
        raise SignatureDecodingError("non-minimal INTEGER encoding")
    value = int.from_bytes(body, "big")
    if value == 0:
        raise SignatureDecodingError("INTEGER must be positive")
    return value


def decode_signature(data: bytes) -> Tuple[int, int]:
    """Parse DER bytes into ``(r, s)``."""
    if not isinstance(data, (bytes, bytearray)):
        raise SignatureDecodingError(f"expected bytes, got {type(data).__name__}")
    data = bytes(data)

    tag, content, end = _read_tlv(data, 0)
    if tag != TAG_SEQUENCE:
        raise SignatureDecodingError(f"expected SEQUENCE, got tag 0x{tag:02x}")
    if end != len(data):
        raise SignatureDecodingError("trailing bytes after SEQUENCE")

    values: List[int] = []
    pos = 0
    while pos < len(content):
        tag, body, pos = _read_tlv(content, pos)
        if tag != TAG_INTEGER:
            raise SignatureDecodingError(f"expected INTEGER, got tag 0x{tag:02x}")
        values.append(decode_integer(body))

    if len(values) != 2:
        raise SignatureDecodingError(
            f"signature must hold exactly 2 integers, found {len(values)}"
        )
    return values[0], values[1]
