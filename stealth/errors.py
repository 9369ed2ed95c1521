"""
Exception hierarchy for the stealth-address package.

All errors are ``ValueError`` subclasses: each one means some input was
rejected.  None of them is transient, so callers should not retry.
"""

from __future__ import annotations


class StealthError(Exception):
    """Base class for every error raised by this package."""


class EncodingError(StealthError, ValueError):
    """A value does not fit the fixed-width or DER encoding requested."""


class InvalidScalarError(StealthError, ValueError):
    """A scalar lies outside  [1, n-1]."""


class InvalidPointError(StealthError, ValueError):
    """Bytes do not encode a point on secp256k1 (or the point is ∞)."""


class SignatureDecodingError(StealthError, ValueError):
    """A DER signature is structurally malformed."""
