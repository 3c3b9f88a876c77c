"""
Sui Toolbox - Keypair and Account Provisioning

Ed25519 keys, Sui address derivation, and transaction signing.

Address: blake2b-256 over the signature scheme flag (0x00 for Ed25519)
followed by the 32-byte public key, hex encoded with a 0x prefix.
"""

import base64
import hashlib
import logging
from typing import Optional

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from .models import TestAccount

logger = logging.getLogger(__name__)

ED25519_FLAG = 0x00

# IntentScope::TransactionData, IntentVersion::V0, AppId::Sui
TRANSACTION_INTENT = bytes([0, 0, 0])


def _blake2b_256(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=32).digest()


class Ed25519PublicKey:
    """Raw 32-byte Ed25519 public key."""

    def __init__(self, raw: bytes):
        if len(raw) != 32:
            raise ValueError(f"Ed25519 public key must be 32 bytes, got {len(raw)}")
        self._raw = raw

    def to_bytes(self) -> bytes:
        return self._raw

    def to_sui_address(self) -> str:
        return "0x" + _blake2b_256(bytes([ED25519_FLAG]) + self._raw).hex()

    def __eq__(self, other):
        return isinstance(other, Ed25519PublicKey) and other._raw == self._raw

    def __hash__(self):
        return hash(self._raw)


class Ed25519Keypair:
    """
    Ed25519 keypair able to sign Sui transaction bytes.

    Usage:
        keypair = Ed25519Keypair.generate()
        address = keypair.get_public_key().to_sui_address()
        signature = keypair.sign_transaction(tx_bytes)
    """

    def __init__(self, private_key: Optional[Ed25519PrivateKey] = None):
        self._private_key = private_key or Ed25519PrivateKey.generate()
        raw_public = self._private_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
        self._public_key = Ed25519PublicKey(raw_public)

    @classmethod
    def generate(cls) -> "Ed25519Keypair":
        return cls()

    @classmethod
    def from_secret_key(cls, secret: bytes) -> "Ed25519Keypair":
        """Rebuild a keypair from a 32-byte seed."""
        if len(secret) != 32:
            raise ValueError(f"Ed25519 secret key must be 32 bytes, got {len(secret)}")
        return cls(Ed25519PrivateKey.from_private_bytes(secret))

    def get_public_key(self) -> Ed25519PublicKey:
        return self._public_key

    def sign(self, data: bytes) -> bytes:
        return self._private_key.sign(data)

    def sign_transaction(self, tx_bytes: bytes) -> str:
        """
        Sign transaction bytes with the transaction intent.

        Returns:
            Base64 serialized signature: flag || signature || public key
        """
        digest = _blake2b_256(TRANSACTION_INTENT + tx_bytes)
        signature = self.sign(digest)
        serialized = bytes([ED25519_FLAG]) + signature + self._public_key.to_bytes()
        return base64.b64encode(serialized).decode("ascii")


def provision() -> TestAccount:
    """Generate a fresh keypair and derive its address. No network I/O."""
    keypair = Ed25519Keypair.generate()
    address = keypair.get_public_key().to_sui_address()
    logger.debug(f"Provisioned test account {address}")
    return TestAccount(keypair=keypair, address=address)
