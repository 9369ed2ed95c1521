"""Test fixtures and utilities."""

import pytest

from stealth import CurveGroup, KeyPair, ProtocolConfig, StealthAddressProtocol


@pytest.fixture
def group() -> CurveGroup:
    return CurveGroup.secp256k1()


@pytest.fixture
def protocol(group: CurveGroup) -> StealthAddressProtocol:
    return StealthAddressProtocol(ProtocolConfig(group=group))


@pytest.fixture
def strict_protocol(group: CurveGroup) -> StealthAddressProtocol:
    return StealthAddressProtocol(ProtocolConfig(group=group, strict_verification=True))


@pytest.fixture
def fixed_keys(group: CurveGroup) -> dict:
    """Scan s=3, spend b=5, ephemeral r=7."""
    return {
        "scan": KeyPair.from_private_scalar(3, group),
        "spend": KeyPair.from_private_scalar(5, group),
        "ephemeral": KeyPair.from_private_scalar(7, group),
    }


def flip_byte(data: bytes, index: int) -> bytes:
    raw = bytearray(data)
    raw[index] ^= 0xFF
    return bytes(raw)
