"""ECDSA sign / verify with DER signatures."""

import pytest

from stealth import (
    InvalidPointError,
    InvalidScalarError,
    KeyPair,
    ORDER,
    Signature,
    SignatureDecodingError,
    SignatureProvider,
    decode_signature,
)

from conftest import flip_byte

MESSAGE = b"stealth payment #1"


@pytest.fixture
def provider(group) -> SignatureProvider:
    return SignatureProvider(group)


@pytest.fixture
def key(group) -> KeyPair:
    return KeyPair.generate(group)


def test_round_trip(provider, key):
    sig = provider.sign(MESSAGE, key.private_key)
    assert provider.verify(MESSAGE, sig, key.public_key)


def test_accepts_point_and_scalar_objects(provider, key):
    sig = provider.sign(MESSAGE, key.private_scalar)
    assert provider.verify(MESSAGE, sig, key.public_point)


def test_round_trip_many_keys(provider, group):
    for i in range(5):
        kp = KeyPair.generate(group)
        msg = MESSAGE + bytes([i])
        assert provider.verify(msg, provider.sign(msg, kp.private_key), kp.public_key)


def test_output_is_canonical_der(provider, key):
    sig = provider.sign(MESSAGE, key.private_key)
    decoded = decode_signature(sig)
    assert decoded.to_der() == sig
    assert decoded.is_low_s(ORDER)


def test_deterministic_nonces(provider, key):
    assert provider.sign(MESSAGE, key.private_key) == provider.sign(MESSAGE, key.private_key)


def test_wrong_key_fails(provider, key, group):
    sig = provider.sign(MESSAGE, key.private_key)
    other = KeyPair.generate(group)
    assert not provider.verify(MESSAGE, sig, other.public_key)


def test_every_signature_byte_is_tamper_evident(provider, key):
    sig = provider.sign(MESSAGE, key.private_key)
    for i in range(len(sig)):
        assert not provider.verify(MESSAGE, flip_byte(sig, i), key.public_key), i


def test_every_message_byte_is_tamper_evident(provider, key):
    sig = provider.sign(MESSAGE, key.private_key)
    for i in range(len(MESSAGE)):
        assert not provider.verify(flip_byte(MESSAGE, i), sig, key.public_key), i


def test_high_s_is_accepted(provider, key):
    sig = decode_signature(provider.sign(MESSAGE, key.private_key))
    high = Signature(r=sig.r, s=ORDER - sig.s)
    assert not high.is_low_s(ORDER)
    assert provider.verify(MESSAGE, high.to_der(), key.public_key)


def test_out_of_range_components_fail(provider, key):
    sig = decode_signature(provider.sign(MESSAGE, key.private_key))
    assert not provider.verify(MESSAGE, Signature(r=ORDER, s=sig.s).to_der(), key.public_key)
    assert not provider.verify(MESSAGE, Signature(r=sig.r, s=ORDER + 1).to_der(), key.public_key)


def test_lenient_mode_folds_malformed_der(provider, key):
    assert provider.verify(MESSAGE, b"\x30\x00", key.public_key) is False


def test_strict_mode_raises_on_malformed_der(group, key):
    strict = SignatureProvider(group, strict=True)
    with pytest.raises(SignatureDecodingError):
        strict.verify(MESSAGE, b"\x30\x03\x02\x01\x01", key.public_key)


def test_per_call_strict_override(provider, key):
    with pytest.raises(SignatureDecodingError):
        provider.verify(MESSAGE, b"garbage", key.public_key, strict=True)


def test_strict_mode_still_returns_false_for_bad_signature(group, key):
    strict = SignatureProvider(group, strict=True)
    sig = strict.sign(MESSAGE, key.private_key)
    assert strict.verify(MESSAGE + b"!", sig, key.public_key) is False


def test_invalid_public_key_raises(provider, key):
    sig = provider.sign(MESSAGE, key.private_key)
    with pytest.raises(InvalidPointError):
        provider.verify(MESSAGE, sig, b"\x02" + b"\xff" * 32)


@pytest.mark.parametrize("bad", [0, ORDER])
def test_sign_rejects_invalid_private_key(provider, bad):
    with pytest.raises(InvalidScalarError):
        provider.sign(MESSAGE, bad)
