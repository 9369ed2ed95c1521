"""Scalar / Point wrappers and the CurveGroup boundary."""

import pytest

from stealth import CurveGroup, InvalidPointError, InvalidScalarError, ORDER, Point, Scalar
from stealth.curve import GENERATOR_COMPRESSED

# 2·G on secp256k1
TWO_G = bytes.fromhex(
    "02c6047f9441ed7d6d3045406e95c07cd85c778e4b8cef3ca7abac09b95c709ee5"
)


def test_base_point_encoding(group):
    assert group.base_point().to_bytes() == GENERATOR_COMPRESSED
    assert group.group_order() == ORDER


def test_scalar_multiply_known_value(group):
    assert group.scalar_multiply(group.base_point(), 2).to_bytes() == TWO_G


def test_point_add_matches_doubling(group):
    G = group.base_point()
    assert group.point_add(G, G) == group.scalar_multiply(G, 2)


def test_point_add_accepts_bytes(group):
    assert group.point_add(GENERATOR_COMPRESSED, GENERATOR_COMPRESSED).to_bytes() == TWO_G


def test_inverse_sums_to_identity(group):
    G = group.base_point()
    assert (G + (-G)).is_inf()


def test_identity_has_no_encoding():
    with pytest.raises(InvalidPointError):
        Point.identity().to_bytes()


def test_zero_scalar_gives_identity(group):
    assert group.scalar_multiply(group.base_point(), 0).is_inf()


@pytest.mark.parametrize(
    "data",
    [
        b"",
        GENERATOR_COMPRESSED[:-1],
        b"\x04" + GENERATOR_COMPRESSED[1:],
        b"\x02" + b"\xff" * 32,
    ],
)
def test_decode_rejects_invalid(group, data):
    with pytest.raises(InvalidPointError):
        group.decode_point_compressed(data)


def test_decode_round_trip(group):
    P = group.scalar_multiply(group.base_point(), 12345)
    assert group.decode_point_compressed(group.encode_point_compressed(P)) == P


def test_random_scalar_in_range(group):
    for _ in range(8):
        k = group.random_scalar()
        assert 0 < k.value < ORDER


def test_scalar_arithmetic_reduces():
    assert Scalar(ORDER - 1) + Scalar(2) == Scalar(1)
    assert -Scalar(1) == Scalar(ORDER - 1)


def test_strict_scalar_constructor():
    with pytest.raises(InvalidScalarError):
        Scalar.from_int(0)
    with pytest.raises(InvalidScalarError):
        Scalar.from_int(ORDER)
    with pytest.raises(InvalidScalarError):
        Scalar.from_bytes(b"\x01")


def test_scalar_repr_is_truncated():
    assert "…" in repr(Scalar(ORDER - 1))


def test_rejects_foreign_parameters():
    with pytest.raises(ValueError):
        CurveGroup(name="other", field_prime=23, order=29, generator=GENERATOR_COMPRESSED)
