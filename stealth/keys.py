"""
secp256k1 key pairs.

A ``KeyPair`` owns one private scalar and the compressed public point
derived from it.  The same type serves every protocol role: scan, spend,
ephemeral and the derived one-time key.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .curve import CurveGroup, Point, Scalar, ScalarLike


@dataclass(frozen=True)
class KeyPair:
    """Private scalar  x  and public point  X = x·G."""

    private_scalar: Scalar = field(repr=False)
    public_point: Point

    @classmethod
    def generate(cls, group: Optional[CurveGroup] = None) -> KeyPair:
        """Sample x uniformly from [1, n-1] and compute x·G."""
        group = group or CurveGroup.secp256k1()
        x = group.random_scalar()
        return cls(private_scalar=x, public_point=x * group.base_point())

    @classmethod
    def from_private_scalar(
        cls,
        secret: ScalarLike,
        group: Optional[CurveGroup] = None,
    ) -> KeyPair:
        """
        Build the key pair for an existing private scalar.

        Raises ``InvalidScalarError`` unless 0 < secret < n.
        """
        group = group or CurveGroup.secp256k1()
        x = group.check_private_scalar(secret)
        return cls(private_scalar=x, public_point=x * group.base_point())

    # accessors --------------------------------------------------------------
    @property
    def private_key(self) -> int:
        return self.private_scalar.value

    @property
    def public_key(self) -> bytes:
        """33-byte compressed public point."""
        return self.public_point.to_bytes()
