"""
stealth: dual-key stealth addresses on secp256k1.

A receiver publishes a **scan** public key S and a **spend** public key
B.  For every payment the sender draws an ephemeral pair (r, R) and pays
to the one-time address

    C = KDF(r·S)·G + B

which only the receiver can spend (private key  KDF(s·R) + b), while an
auditor holding just (s, B) can still recognise it.

Quick start
-----------
::

    from stealth import StealthAddressProtocol, Sender

    proto = StealthAddressProtocol()
    receiver = proto.generate_receiver()

    payment = Sender(proto).pay(receiver.public_keys)
    assert receiver.auditor().detects(payment)

    key = receiver.derive_one_time_key_pair(payment.ephemeral_public)
    sig = proto.prove_spendability(key, b"spend")
    assert proto.verify_spendability(payment.address, b"spend", sig)
"""

__version__ = "0.1.0"

# ── errors ──────────────────────────────────────────────────────────────
from .errors import (
    StealthError,
    EncodingError,
    InvalidScalarError,
    InvalidPointError,
    SignatureDecodingError,
)

# ── core types ──────────────────────────────────────────────────────────
from .curve import Scalar, Point, CurveGroup, ORDER
from .keys import KeyPair
from .codec import BigNumberCodec
from .config import ProtocolConfig

# ── signatures ──────────────────────────────────────────────────────────
from .signing import Signature, SignatureProvider, decode_signature

# ── protocol ────────────────────────────────────────────────────────────
from .protocol import (
    StealthAddressProtocol,
    StealthPublicKeys,
    StealthPayment,
    ProtocolTranscript,
    Receiver,
    Sender,
    Auditor,
)

# ── hashing ─────────────────────────────────────────────────────────────
from .hash import digest, hmac_digest, derive_shared_secret, shared_secret_to_scalar

__all__ = [
    # version
    "__version__",
    # errors
    "StealthError", "EncodingError", "InvalidScalarError",
    "InvalidPointError", "SignatureDecodingError",
    # core
    "Scalar", "Point", "CurveGroup", "ORDER", "KeyPair",
    "BigNumberCodec", "ProtocolConfig",
    # signatures
    "Signature", "SignatureProvider", "decode_signature",
    # protocol
    "StealthAddressProtocol", "StealthPublicKeys", "StealthPayment",
    "ProtocolTranscript", "Receiver", "Sender", "Auditor",
    # hashing
    "digest", "hmac_digest", "derive_shared_secret", "shared_secret_to_scalar",
]
