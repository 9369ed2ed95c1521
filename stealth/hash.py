"""
Hash primitives used by the stealth-address protocol.

* ``digest``  — SHA-256, the message hash fed to ECDSA.
* ``hmac_digest``  — HMAC-SHA256.
* ``derive_shared_secret``  — the key-derivation function turning an
  ECDH point into 32 bytes:

      c = HMAC-SHA256( key = 0^64,  msg = compress(r·S) )

HMAC pads short keys with zeros up to the block size, so an all-zero key
of any length up to 64 bytes yields the same output.
"""

from __future__ import annotations

import hashlib
import hmac

from .curve import Point, Scalar
from .errors import InvalidScalarError

HASH_NAME = "sha256"
DIGEST_BYTES = 32
BLOCK_BYTES = 64

# default KDF key: all zeros, one SHA-256 block
KDF_KEY = bytes(BLOCK_BYTES)


def digest(data: bytes) -> bytes:
    """SHA-256 of *data*."""
    return hashlib.sha256(data).digest()


def hmac_digest(key: bytes, message: bytes) -> bytes:
    """HMAC-SHA256 of *message* under *key*."""
    return hmac.new(key, message, hashlib.sha256).digest()


def derive_shared_secret(shared_point: Point, key: bytes = KDF_KEY) -> bytes:
    """KDF over the compressed encoding of an ECDH shared point."""
    return hmac_digest(key, shared_point.to_bytes())


def shared_secret_to_scalar(secret: bytes) -> Scalar:
    """
    Read a KDF output as an unsigned big-endian integer modulo *n*.

    A zero result is rejected instead of re-sampled; it occurs with
    probability about 2^-256.
    """
    c = Scalar.from_bytes_reduce(secret)
    if c.is_zero():
        raise InvalidScalarError("shared secret reduces to zero")
    return c
