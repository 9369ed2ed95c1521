"""ProtocolConfig defaults, validation and environment loading."""

import dataclasses

import pytest

from stealth import CurveGroup, ProtocolConfig, StealthAddressProtocol


def test_defaults():
    config = ProtocolConfig()
    assert config.group == CurveGroup.secp256k1()
    assert config.kdf_key == bytes(64)
    assert config.strict_verification is False


def test_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        ProtocolConfig().strict_verification = True  # type: ignore[misc]


@pytest.mark.parametrize("key", [b"", "00"])
def test_invalid_kdf_key(key):
    with pytest.raises(ValueError):
        ProtocolConfig(kdf_key=key)  # type: ignore[arg-type]


def test_invalid_strict_flag():
    with pytest.raises(ValueError):
        ProtocolConfig(strict_verification="yes")  # type: ignore[arg-type]


def test_from_env_defaults():
    assert ProtocolConfig.from_env({}) == ProtocolConfig()


@pytest.mark.parametrize("raw,expected", [("1", True), ("TRUE", True), ("off", False), ("0", False)])
def test_from_env_strict(raw, expected):
    config = ProtocolConfig.from_env({"STEALTH_STRICT_VERIFICATION": raw})
    assert config.strict_verification is expected


def test_from_env_bad_strict():
    with pytest.raises(ValueError):
        ProtocolConfig.from_env({"STEALTH_STRICT_VERIFICATION": "maybe"})


def test_from_env_kdf_key():
    config = ProtocolConfig.from_env({"STEALTH_KDF_KEY": "0102"})
    assert config.kdf_key == b"\x01\x02"


def test_from_env_bad_kdf_key():
    with pytest.raises(ValueError):
        ProtocolConfig.from_env({"STEALTH_KDF_KEY": "zz"})


def test_from_process_environment(monkeypatch):
    monkeypatch.setenv("STEALTH_STRICT_VERIFICATION", "yes")
    monkeypatch.delenv("STEALTH_KDF_KEY", raising=False)
    assert ProtocolConfig.from_env().strict_verification is True


def test_kdf_key_changes_addresses(fixed_keys):
    default = StealthAddressProtocol().run(b"x", **fixed_keys)
    keyed = StealthAddressProtocol(ProtocolConfig(kdf_key=b"\x01")).run(b"x", **fixed_keys)
    assert default.sender_address != keyed.sender_address
    assert keyed.is_consistent
