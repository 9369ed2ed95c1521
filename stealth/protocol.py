"""
Dual-key stealth-address protocol.

Roles and keys
--------------
* **Receiver** — scan pair (s, S = s·G) and spend pair (b, B = b·G);
  publishes (S, B).
* **Sender** — per payment, ephemeral pair (r, R = r·G); publishes R with
  the payment.
* **Auditor** — holds copies of s and B only.

Steps
-----
::

    1. receiver   generate (s, S) and (b, B)
    2. receiver   publish (S, B)
    3. sender     generate (r, R)
    4. sender     shared point  r·S
    5. receiver   shared point  s·R            (== r·S, ECDH)
    6. both       c = KDF(shared point)
    7. sender     C = c·G + B                  (destination address)
    8. receiver   (c + b)·G == C,  spend key c + b
    9. auditor    C = KDF(s·R)·G + B           (detection only)
   10. receiver   sign with c + b, anyone verifies against C

The auditor computes C from (s, B, R) and can therefore detect payments,
but c + b needs b, which it never receives.  The holder of c + b proves
spendability of C with an ECDSA signature checked against C.

Usage
-----
::

    proto = StealthAddressProtocol()
    receiver = proto.generate_receiver()
    payment = Sender(proto).pay(receiver.public_keys)
    assert receiver.owns(payment)

    key = receiver.derive_one_time_key_pair(payment.ephemeral_public)
    sig = proto.prove_spendability(key, b"tx")
    assert proto.verify_spendability(payment.address, b"tx", sig)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from .config import ProtocolConfig
from .curve import CurveGroup, Point, PointLike, Scalar, ScalarLike
from .hash import derive_shared_secret, shared_secret_to_scalar
from .keys import KeyPair
from .signing import SignatureProvider

logger = logging.getLogger(__name__)


# ── public data ─────────────────────────────────────────────────────────

@dataclass(frozen=True)
class StealthPublicKeys:
    """What the receiver publishes: scan point S and spend point B."""

    scan: Point
    spend: Point

    def to_bytes(self) -> bytes:
        return self.scan.to_bytes() + self.spend.to_bytes()


@dataclass(frozen=True)
class StealthPayment:
    """A payment as seen on the distribution channel: (R, C)."""

    ephemeral_public: Point
    address: Point


@dataclass(frozen=True)
class ProtocolTranscript:
    """Every intermediate value of one end-to-end run (public values only)."""

    data: bytes
    sender_secret: bytes
    receiver_secret: bytes
    auditor_secret: bytes
    sender_address: bytes
    receiver_address: bytes
    auditor_address: bytes
    one_time_public: bytes
    signature: bytes
    verified: bool

    @property
    def is_consistent(self) -> bool:
        return (
            self.sender_secret == self.receiver_secret == self.auditor_secret
            and self.sender_address
            == self.receiver_address
            == self.auditor_address
            == self.one_time_public
            and self.verified
        )


# ── protocol steps ──────────────────────────────────────────────────────

class StealthAddressProtocol:
    """
    The protocol's steps as stateless methods over one configuration.

    Steps 4–8 are exposed individually so each side's computation can be
    checked in isolation; ``run`` chains them end to end.
    """

    def __init__(self, config: Optional[ProtocolConfig] = None) -> None:
        self.config = config or ProtocolConfig()
        self.signer = SignatureProvider(
            self.config.group, strict=self.config.strict_verification,
        )

    @property
    def group(self) -> CurveGroup:
        return self.config.group

    # ── key generation (steps 1 & 3) ───────────────────────────────────

    def generate_receiver(self) -> Receiver:
        return Receiver(KeyPair.generate(self.group), KeyPair.generate(self.group), self)

    def generate_ephemeral(self) -> KeyPair:
        return KeyPair.generate(self.group)

    def key_pair(self, secret: ScalarLike) -> KeyPair:
        return KeyPair.from_private_scalar(secret, self.group)

    # ── ECDH (steps 4 & 5) ─────────────────────────────────────────────

    def sender_shared_point(self, scan_public: PointLike, ephemeral_private: ScalarLike) -> Point:
        """r·S"""
        return self.group.scalar_multiply(scan_public, ephemeral_private)

    def receiver_shared_point(self, ephemeral_public: PointLike, scan_private: ScalarLike) -> Point:
        """s·R"""
        return self.group.scalar_multiply(ephemeral_public, scan_private)

    # ── KDF (step 6) ───────────────────────────────────────────────────

    def shared_secret(self, shared_point: Point) -> bytes:
        return derive_shared_secret(shared_point, self.config.kdf_key)

    def shared_scalar(self, shared_point: Point) -> Scalar:
        """c = KDF(shared point), read as a scalar."""
        return shared_secret_to_scalar(self.shared_secret(shared_point))

    # ── addresses (steps 7 & 8) ────────────────────────────────────────

    def destination_address(self, c: Scalar, spend_public: PointLike) -> Point:
        """Sender side:  C = c·G + B."""
        cG = self.group.scalar_multiply(self.group.base_point(), c)
        return self.group.point_add(cG, spend_public)

    def one_time_private_scalar(self, c: Scalar, spend_private: ScalarLike) -> Scalar:
        """c + b  mod n."""
        return c + self.group.to_scalar(spend_private)

    def receiver_address(self, c: Scalar, spend_private: ScalarLike) -> Point:
        """Receiver side:  (c + b)·G."""
        return self.group.scalar_multiply(
            self.group.base_point(), self.one_time_private_scalar(c, spend_private),
        )

    def one_time_key_pair(self, c: Scalar, spend_private: ScalarLike) -> KeyPair:
        """Spendable key pair for the one-time address."""
        return self.key_pair(self.one_time_private_scalar(c, spend_private))

    # ── auditing (step 9) ──────────────────────────────────────────────

    def audit_address(
        self,
        ephemeral_public: PointLike,
        scan_private: ScalarLike,
        spend_public: PointLike,
    ) -> Point:
        """C from (R, s, B): no spend private key involved."""
        c = self.shared_scalar(self.receiver_shared_point(ephemeral_public, scan_private))
        return self.destination_address(c, spend_public)

    # ── spendability (step 10) ─────────────────────────────────────────

    def prove_spendability(self, one_time_key: KeyPair, data: bytes) -> bytes:
        return self.signer.sign(data, one_time_key.private_scalar)

    def verify_spendability(self, address: PointLike, data: bytes, signature: bytes) -> bool:
        return self.signer.verify(data, signature, address)

    # ── end to end ─────────────────────────────────────────────────────

    def run(
        self,
        data: bytes,
        scan: Optional[KeyPair] = None,
        spend: Optional[KeyPair] = None,
        ephemeral: Optional[KeyPair] = None,
    ) -> ProtocolTranscript:
        """
        Execute steps 1–10 once.

        Missing key pairs are generated; passing all three makes the run
        fully deterministic.
        """
        receiver = Receiver(
            scan or KeyPair.generate(self.group),
            spend or KeyPair.generate(self.group),
            self,
        )
        auditor = receiver.auditor()
        ephemeral = ephemeral or self.generate_ephemeral()

        payment = Sender(self).pay(receiver.public_keys, ephemeral)
        R = payment.ephemeral_public
        sender_point = self.sender_shared_point(
            receiver.public_keys.scan, ephemeral.private_scalar,
        )

        one_time = receiver.derive_one_time_key_pair(R)
        signature = self.prove_spendability(one_time, data)
        verified = self.verify_spendability(payment.address, data, signature)

        transcript = ProtocolTranscript(
            data=data,
            sender_secret=self.shared_secret(sender_point),
            receiver_secret=receiver.shared_secret(R),
            auditor_secret=auditor.shared_secret(R),
            sender_address=payment.address.to_bytes(),
            receiver_address=receiver.derive_address(R).to_bytes(),
            auditor_address=auditor.derive_address(R).to_bytes(),
            one_time_public=one_time.public_key,
            signature=signature,
            verified=verified,
        )
        logger.debug(
            "protocol run: address=%s consistent=%s",
            transcript.sender_address.hex(), transcript.is_consistent,
        )
        return transcript


# ── roles ───────────────────────────────────────────────────────────────

class Receiver:
    """Owner of the scan and spend private keys."""

    def __init__(
        self,
        scan: KeyPair,
        spend: KeyPair,
        protocol: Optional[StealthAddressProtocol] = None,
    ) -> None:
        self._scan = scan
        self._spend = spend
        self._proto = protocol or StealthAddressProtocol()

    @property
    def public_keys(self) -> StealthPublicKeys:
        return StealthPublicKeys(scan=self._scan.public_point, spend=self._spend.public_point)

    def shared_secret(self, ephemeral_public: PointLike) -> bytes:
        point = self._proto.receiver_shared_point(ephemeral_public, self._scan.private_scalar)
        return self._proto.shared_secret(point)

    def _shared_scalar(self, ephemeral_public: PointLike) -> Scalar:
        point = self._proto.receiver_shared_point(ephemeral_public, self._scan.private_scalar)
        return self._proto.shared_scalar(point)

    def derive_address(self, ephemeral_public: PointLike) -> Point:
        """(c + b)·G"""
        c = self._shared_scalar(ephemeral_public)
        return self._proto.receiver_address(c, self._spend.private_scalar)

    def derive_one_time_key_pair(self, ephemeral_public: PointLike) -> KeyPair:
        c = self._shared_scalar(ephemeral_public)
        return self._proto.one_time_key_pair(c, self._spend.private_scalar)

    def owns(self, payment: StealthPayment) -> bool:
        return self.derive_address(payment.ephemeral_public) == payment.address

    def auditor(self) -> Auditor:
        """Delegate detection: hands out s and B, never b."""
        return Auditor(
            scan_private=self._scan.private_scalar,
            spend_public=self._spend.public_point,
            protocol=self._proto,
        )

    def __repr__(self) -> str:
        return f"Receiver(scan={self._scan.public_point!r}, spend={self._spend.public_point!r})"


class Sender:
    """Derives one-time destination addresses for a receiver."""

    def __init__(self, protocol: Optional[StealthAddressProtocol] = None) -> None:
        self._proto = protocol or StealthAddressProtocol()

    def pay(
        self,
        public_keys: StealthPublicKeys,
        ephemeral: Optional[KeyPair] = None,
    ) -> StealthPayment:
        """Pick (r, R) and compute  C = KDF(r·S)·G + B."""
        ephemeral = ephemeral or self._proto.generate_ephemeral()
        point = self._proto.sender_shared_point(public_keys.scan, ephemeral.private_scalar)
        c = self._proto.shared_scalar(point)
        address = self._proto.destination_address(c, public_keys.spend)
        logger.debug(
            "sender derived address %s for R=%s",
            address.to_bytes().hex(), ephemeral.public_key.hex(),
        )
        return StealthPayment(ephemeral_public=ephemeral.public_point, address=address)


@dataclass(frozen=True)
class Auditor:
    """
    Detection-only delegate holding the scan private key and the spend
    public key.  It can recompute C but has no access to b.
    """

    scan_private: Scalar = field(repr=False)
    spend_public: Point
    protocol: StealthAddressProtocol = field(
        default_factory=StealthAddressProtocol, repr=False, compare=False,
    )

    def shared_secret(self, ephemeral_public: PointLike) -> bytes:
        point = self.protocol.receiver_shared_point(ephemeral_public, self.scan_private)
        return self.protocol.shared_secret(point)

    def derive_address(self, ephemeral_public: PointLike) -> Point:
        return self.protocol.audit_address(ephemeral_public, self.scan_private, self.spend_public)

    def detects(self, payment: StealthPayment) -> bool:
        found = self.derive_address(payment.ephemeral_public) == payment.address
        if found:
            logger.debug("auditor matched address %s", payment.address.to_bytes().hex())
        return found
