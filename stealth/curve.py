"""
Elliptic curve arithmetic on secp256k1 via libsecp256k1.

Every expensive group operation (scalar multiplication, point addition)
is delegated to the C library ``coincurve``, which wraps Bitcoin Core's
libsecp256k1.  Scalars are plain Python integers modulo the group order.

Domain parameters are bundled in an immutable :class:`CurveGroup` that is
constructed once and handed to whichever component needs it, rather than
read from module globals.

Install
-------
    pip install coincurve>=18.0.0

References
----------
- SEC 1 v2 §2.3.3    compressed point encoding
- SEC 2 v2 §2.4.1    secp256k1 domain parameters
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Optional, Union

from coincurve import PrivateKey as _SK, PublicKey as _PK

from .errors import InvalidPointError, InvalidScalarError

# ── secp256k1 constants ─────────────────────────────────────────────────
ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
FIELD_PRIME = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
GENERATOR_COMPRESSED = bytes.fromhex(
    "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
)
SCALAR_BYTES = 32
COMPRESSED_BYTES = 33


# ── Scalar  (Z_n arithmetic, pure Python) ───────────────────────────────
class Scalar:
    """Element of the scalar field  Z_n  where *n* = ``ORDER``."""

    __slots__ = ("_v",)

    def __init__(self, value: int) -> None:
        self._v = value % ORDER

    # constructors -----------------------------------------------------------
    @classmethod
    def random(cls) -> Scalar:
        """Uniform in [1, n-1] via rejection sampling."""
        while True:
            c = int.from_bytes(secrets.token_bytes(SCALAR_BYTES), "big")
            if 0 < c < ORDER:
                return cls(c)

    @classmethod
    def from_int(cls, value: int) -> Scalar:
        """Strict constructor: *value* must already lie in [1, n-1]."""
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidScalarError(f"scalar must be an int, got {type(value).__name__}")
        if not 0 < value < ORDER:
            raise InvalidScalarError("scalar out of range [1, n-1]")
        return cls(value)

    @classmethod
    def from_bytes(cls, data: bytes) -> Scalar:
        if len(data) != SCALAR_BYTES:
            raise InvalidScalarError(f"need {SCALAR_BYTES} bytes, got {len(data)}")
        return cls.from_int(int.from_bytes(data, "big"))

    @classmethod
    def from_bytes_reduce(cls, data: bytes) -> Scalar:
        """Hash-output safe: reduce arbitrary length modulo *n*."""
        return cls(int.from_bytes(data, "big"))

    # serialisation ----------------------------------------------------------
    def to_bytes(self) -> bytes:
        return self._v.to_bytes(SCALAR_BYTES, "big")

    @property
    def value(self) -> int:
        return self._v

    def is_zero(self) -> bool:
        return self._v == 0

    # arithmetic -------------------------------------------------------------
    def __add__(self, o: Scalar) -> Scalar:
        if not isinstance(o, Scalar):
            return NotImplemented
        return Scalar(self._v + o._v)

    def __mul__(self, o):
        if isinstance(o, Scalar):
            return Scalar(self._v * o._v)
        if isinstance(o, Point):
            return o._smul(self)
        return NotImplemented

    def __neg__(self) -> Scalar:
        return Scalar(-self._v)

    # comparison / hashing ---------------------------------------------------
    def __eq__(self, o: object) -> bool:
        if isinstance(o, Scalar):
            return self._v == o._v
        if isinstance(o, int):
            return self._v == o % ORDER
        return False

    def __hash__(self) -> int:
        return hash(self._v)

    def __bool__(self) -> bool:
        return self._v != 0

    def __repr__(self) -> str:
        # never print full private material
        h = hex(self._v)
        return f"Scalar(0x{h[2:10]}…)" if len(h) > 14 else f"Scalar({h})"


# ── Point  (secp256k1 group element via libsecp256k1) ───────────────────
class Point:
    """
    Point on secp256k1.

    The identity (point at infinity) is represented by a flag rather than
    a ``coincurve.PublicKey``; libsecp256k1 cannot hold it, and it has no
    compressed encoding.
    """

    __slots__ = ("_pk", "_inf")

    def __init__(self, *, pk: Optional[_PK] = None, infinity: bool = False):
        self._pk: Optional[_PK] = pk
        self._inf: bool = infinity

    # constructors -----------------------------------------------------------
    @classmethod
    def identity(cls) -> Point:
        """Point at infinity — additive identity."""
        return cls(infinity=True)

    @classmethod
    def from_scalar(cls, s: Scalar) -> Point:
        """Compute *s · G*."""
        if s.is_zero():
            return cls.identity()
        return cls(pk=_SK(s.to_bytes()).public_key)

    @classmethod
    def from_bytes(cls, data: bytes) -> Point:
        """Deserialise a SEC 1 compressed (33 B) point."""
        if not isinstance(data, (bytes, bytearray)):
            raise InvalidPointError(f"expected bytes, got {type(data).__name__}")
        if len(data) != COMPRESSED_BYTES:
            raise InvalidPointError(
                f"compressed point needs {COMPRESSED_BYTES} bytes, got {len(data)}"
            )
        if data[0] not in (0x02, 0x03):
            raise InvalidPointError(f"bad parity prefix 0x{data[0]:02x}")
        try:
            return cls(pk=_PK(bytes(data)))
        except ValueError as exc:
            raise InvalidPointError("bytes do not encode a point on secp256k1") from exc

    # serialisation ----------------------------------------------------------
    def to_bytes(self) -> bytes:
        if self._inf:
            raise InvalidPointError("point at infinity has no compressed encoding")
        return self._pk.format(compressed=True)  # type: ignore[union-attr]

    @property
    def x(self) -> int:
        if self._inf:
            return 0
        return int.from_bytes(self.to_bytes()[1:], "big")

    def is_inf(self) -> bool:
        return self._inf

    # group operations -------------------------------------------------------
    def _smul(self, s: Scalar) -> Point:
        """Scalar multiplication  s · self  (C speed)."""
        if self._inf or s.is_zero():
            return Point.identity()
        copy = _PK(self._pk.format())  # type: ignore[union-attr]
        return Point(pk=copy.multiply(s.to_bytes()))

    def __neg__(self) -> Point:
        if self._inf:
            return self
        raw = bytearray(self.to_bytes())
        raw[0] ^= 0x01            # 0x02 ↔ 0x03 flip parity
        return Point(pk=_PK(bytes(raw)))

    def __add__(self, o: Point) -> Point:
        if not isinstance(o, Point):
            return NotImplemented
        if self._inf:
            return o
        if o._inf:
            return self
        # P + (-P) = O, which libsecp256k1 refuses to combine
        if self.to_bytes() == (-o).to_bytes():
            return Point.identity()
        return Point(pk=_PK.combine_keys(
            [self._pk, o._pk]))  # type: ignore[list-item]

    def __rmul__(self, s) -> Point:
        if isinstance(s, Scalar):
            return self._smul(s)
        if isinstance(s, int):
            return self._smul(Scalar(s))
        return NotImplemented

    def __eq__(self, o: object) -> bool:
        if not isinstance(o, Point):
            return False
        if self._inf and o._inf:
            return True
        if self._inf or o._inf:
            return False
        return self.to_bytes() == o.to_bytes()

    def __hash__(self) -> int:
        return hash(b"" if self._inf else self.to_bytes())

    def __repr__(self) -> str:
        if self._inf:
            return "Point(∞)"
        return f"Point(0x{self.x:064x})"[:42] + "…)"


# ── domain parameters ───────────────────────────────────────────────────
PointLike = Union[Point, bytes]
ScalarLike = Union[Scalar, int]


@dataclass(frozen=True)
class CurveGroup:
    """
    Immutable secp256k1 domain parameters plus the group operations the
    protocol needs.

    Construct once (``CurveGroup.secp256k1()``) and pass it around; every
    method is a pure function of its arguments.
    """

    name: str
    field_prime: int
    order: int
    generator: bytes
    cofactor: int = 1

    @classmethod
    def secp256k1(cls) -> CurveGroup:
        return cls(
            name="secp256k1",
            field_prime=FIELD_PRIME,
            order=ORDER,
            generator=GENERATOR_COMPRESSED,
        )

    def __post_init__(self) -> None:
        # libsecp256k1 implements exactly one curve
        if self.order != ORDER or self.field_prime != FIELD_PRIME:
            raise ValueError(f"unsupported curve parameters for {self.name!r}")
        if self.generator != GENERATOR_COMPRESSED:
            raise ValueError("generator does not match secp256k1")

    # group boundary ---------------------------------------------------------
    def base_point(self) -> Point:
        return Point.from_bytes(self.generator)

    def group_order(self) -> int:
        return self.order

    def scalar_multiply(self, point: PointLike, k: ScalarLike) -> Point:
        """``k · point``; a zero scalar yields the identity."""
        return self.to_scalar(k) * self.to_point(point)

    def point_add(self, p: PointLike, q: PointLike) -> Point:
        return self.to_point(p) + self.to_point(q)

    def encode_point_compressed(self, point: Point) -> bytes:
        return point.to_bytes()

    def decode_point_compressed(self, data: bytes) -> Point:
        return Point.from_bytes(data)

    def random_scalar(self) -> Scalar:
        return Scalar.random()

    # coercion ---------------------------------------------------------------
    def to_point(self, value: PointLike) -> Point:
        if isinstance(value, Point):
            return value
        return self.decode_point_compressed(value)

    def to_scalar(self, value: ScalarLike) -> Scalar:
        if isinstance(value, Scalar):
            return value
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidScalarError(f"scalar must be an int, got {type(value).__name__}")
        return Scalar(value)

    def check_private_scalar(self, value: ScalarLike) -> Scalar:
        """Validate a private key: must lie in [1, n-1] without reduction."""
        if isinstance(value, Scalar):
            if value.is_zero():
                raise InvalidScalarError("scalar must not be zero")
            return value
        return Scalar.from_int(value)
