"""Signature schemes, key pairs and the default hash."""

from __future__ import annotations

import base64
import enum
import hashlib
from dataclasses import dataclass
from typing import Protocol

from nacl.signing import SigningKey

from .intent import IntentMessage
from .messages import TransactionData, encode_transaction_data

ED25519_PUBLIC_KEY_SIZE = 32
ED25519_SIGNATURE_SIZE = 64
ED25519_SUI_SIGNATURE_SIZE = ED25519_PUBLIC_KEY_SIZE + ED25519_SIGNATURE_SIZE + 1


class SignatureScheme(enum.IntEnum):
    ED25519 = 0
    SECP256K1 = 1
    SECP256R1 = 2
    MULTISIG = 3
    BLS12381 = 4

    @property
    def flag(self) -> int:
        return int(self)


def signature_scheme_from_flag(flag: int) -> SignatureScheme:
    """Return the scheme for a flag byte; only Ed25519 is supported."""
    if flag == SignatureScheme.ED25519:
        return SignatureScheme.ED25519
    raise ValueError("unsupported scheme")


def _blake2b256(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=32).digest()


@dataclass(frozen=True)
class Signature:
    """A flagged signature: flag byte, signature, then public key."""

    data: bytes
    scheme: SignatureScheme = SignatureScheme.ED25519

    def to_json(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    @classmethod
    def from_json(cls, value: str) -> Signature:
        raw = base64.b64decode(value, validate=True)
        if not raw:
            raise ValueError("empty signature")
        if raw[0] != SignatureScheme.ED25519:
            raise ValueError("unsupport signature")
        if len(raw) != ED25519_SUI_SIGNATURE_SIZE:
            raise ValueError("invalid ed25519 signature")
        return cls(raw, SignatureScheme.ED25519)


class Signer(Protocol):
    def sign(self, message: bytes) -> Signature: ...


class SuiKeyPair:
    """A key pair built from a 32-byte seed."""

    def __init__(self, scheme: SignatureScheme, seed: bytes) -> None:
        if scheme != SignatureScheme.ED25519:
            raise ValueError("unsupported scheme")
        self.scheme = scheme
        self._key = SigningKey(bytes(seed))

    def public_key(self) -> bytes:
        return bytes(self._key.verify_key)

    def private_key(self) -> bytes:
        """The 64-byte Ed25519 private key: seed followed by public key."""
        return bytes(self._key) + self.public_key()

    def sign(self, message: bytes) -> Signature:
        sig = self._key.sign(bytes(message)).signature
        return Signature(bytes([self.scheme.flag]) + sig + self.public_key(), self.scheme)


def use_default_hash(data: TransactionData) -> bytes:
    """Blake2b-256 of the type-name prefix followed by the BCS encoding."""
    if not isinstance(data, TransactionData):
        raise TypeError(f"cannot hash {type(data).__name__}")
    return _blake2b256(b"TransactionData::" + encode_transaction_data(data))


def new_signature_secure(message: IntentMessage, signer: Signer) -> Signature:
    """Sign the Blake2b-256 hash of an intent message."""
    return signer.sign(_blake2b256(message.to_bytes()))