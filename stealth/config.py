"""Protocol configuration as an immutable value."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .curve import CurveGroup
from .hash import KDF_KEY

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class ProtocolConfig:
    """
    Settings shared by every component of one protocol deployment.

    group
        Curve domain parameters.
    kdf_key
        HMAC key of the shared-secret KDF (all zeros by default).
    strict_verification
        When true, ``verify`` raises on malformed DER instead of
        returning ``False``.
    """

    group: CurveGroup = field(default_factory=CurveGroup.secp256k1)
    kdf_key: bytes = KDF_KEY
    strict_verification: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.kdf_key, bytes) or not self.kdf_key:
            raise ValueError("kdf_key must be non-empty bytes")
        if not isinstance(self.strict_verification, bool):
            raise ValueError("strict_verification must be a bool")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ProtocolConfig:
        """
        Build a config from ``STEALTH_*`` environment variables.

        ``STEALTH_KDF_KEY`` is hex; ``STEALTH_STRICT_VERIFICATION`` is a
        boolean flag (1/0, true/false, yes/no, on/off).
        """
        env = os.environ if environ is None else environ

        kdf_key = KDF_KEY
        raw_key = env.get("STEALTH_KDF_KEY")
        if raw_key:
            try:
                kdf_key = bytes.fromhex(raw_key)
            except ValueError as exc:
                raise ValueError(f"STEALTH_KDF_KEY is not valid hex: {raw_key!r}") from exc

        raw_strict = env.get("STEALTH_STRICT_VERIFICATION", "").strip().lower()
        if raw_strict in _TRUE:
            strict = True
        elif raw_strict in _FALSE:
            strict = False
        else:
            raise ValueError(
                f"STEALTH_STRICT_VERIFICATION must be a boolean, got {raw_strict!r}"
            )

        return cls(kdf_key=kdf_key, strict_verification=strict)
