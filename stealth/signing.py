"""
ECDSA over secp256k1 with DER-encoded signatures.

Signing:  e = SHA-256(m),  (r, s) = ECDSA_sign(x, e)  with RFC 6979
nonces and low-S normalisation (both from libsecp256k1), then
DER-encoded.

Verification:  decode DER → (r, s),  decode the compressed public key,
check ECDSA.  A well-formed but wrong signature is a plain ``False``.
Malformed DER is a different failure: in strict mode it raises
``SignatureDecodingError``; in lenient mode it is logged and reported as
``False`` so callers that only want a yes/no answer need not catch it.
Callers that must distinguish the two should use strict mode or
:func:`decode_signature` directly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from coincurve import PrivateKey as _SK, PublicKey as _PK

from .curve import CurveGroup, Point, PointLike, ScalarLike
from .der import decode_signature as _der_decode, encode_signature as _der_encode
from .errors import SignatureDecodingError
from .hash import digest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Signature:
    """ECDSA signature  (r, s)."""

    r: int
    s: int

    def to_der(self) -> bytes:
        return _der_encode(self.r, self.s)

    @classmethod
    def from_der(cls, data: bytes) -> Signature:
        r, s = _der_decode(data)
        return cls(r=r, s=s)

    def is_low_s(self, order: int) -> bool:
        return self.s <= order // 2

    def normalized(self, order: int) -> Signature:
        """Equivalent signature with  s ≤ n/2."""
        if self.is_low_s(order):
            return self
        return Signature(r=self.r, s=order - self.s)


def decode_signature(data: bytes) -> Signature:
    """Strict DER decode; raises ``SignatureDecodingError``."""
    return Signature.from_der(data)


class SignatureProvider:
    """Signs and verifies messages with secp256k1 ECDSA."""

    def __init__(
        self,
        group: Optional[CurveGroup] = None,
        strict: bool = False,
    ) -> None:
        self.group = group or CurveGroup.secp256k1()
        self.strict = strict

    def sign(self, message: bytes, private_key: ScalarLike) -> bytes:
        """Return the DER signature of SHA-256(*message*) under *private_key*."""
        x = self.group.check_private_scalar(private_key)
        e = digest(message)
        raw = _SK(x.to_bytes()).sign(e, hasher=None)
        # re-package through our own codec so the output is exactly ours
        return Signature.from_der(raw).to_der()

    def verify(
        self,
        message: bytes,
        signature: bytes,
        public_key: PointLike,
        *,
        strict: Optional[bool] = None,
    ) -> bool:
        """
        Check *signature* over *message* against *public_key*.

        Raises ``InvalidPointError`` for a bad public key regardless of
        mode, and ``SignatureDecodingError`` for malformed DER in strict
        mode.
        """
        strict = self.strict if strict is None else strict
        point = self.group.to_point(public_key)

        try:
            sig = Signature.from_der(signature)
        except SignatureDecodingError as exc:
            if strict:
                raise
            logger.warning("rejecting malformed signature: %s", exc)
            return False

        return self.verify_signature(message, sig, point)

    def verify_signature(self, message: bytes, sig: Signature, point: Point) -> bool:
        """ECDSA check on an already decoded signature."""
        n = self.group.order
        if not (0 < sig.r < n and 0 < sig.s < n):
            return False
        if point.is_inf():
            return False

        e = digest(message)
        # libsecp256k1 only accepts low-S; (r, s) and (r, n-s) are equivalent
        der = sig.normalized(n).to_der()
        return _PK(point.to_bytes()).verify(der, e, hasher=None)
