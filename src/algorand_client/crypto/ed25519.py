"""
Ed25519 cryptographic operations for the Algorand protocol.

Provides Ed25519 key generation, signing, and verification. Private keys are
exchanged the way algod and the other SDKs exchange them: base64 of the 32-byte
seed followed by the 32-byte public key.
"""

from __future__ import annotations
import base64
import binascii
import hashlib
from typing import Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey as CryptoEd25519PrivateKey,
    Ed25519PublicKey as CryptoEd25519PublicKey,
)
from cryptography.hazmat.primitives import serialization

from ..runtime.errors import ValidationError

SEED_LENGTH = 32
PUBLIC_KEY_LENGTH = 32
SIGNATURE_LENGTH = 64


class Ed25519Error(ValidationError):
    """Malformed Ed25519 key or signature material."""
    pass


class Ed25519PublicKey:
    """
    Ed25519 public key.

    Provides verification operations and serialization.
    """

    def __init__(self, public_key_bytes: bytes):
        """
        Initialize from 32-byte public key.

        Args:
            public_key_bytes: 32-byte Ed25519 public key

        Raises:
            Ed25519Error: If key is invalid
        """
        if not isinstance(public_key_bytes, (bytes, bytearray)) or len(public_key_bytes) != PUBLIC_KEY_LENGTH:
            raise Ed25519Error(f"Ed25519 public key must be {PUBLIC_KEY_LENGTH} bytes")

        self._key_bytes = bytes(public_key_bytes)
        try:
            self._crypto_key = CryptoEd25519PublicKey.from_public_bytes(self._key_bytes)
        except ValueError as e:
            raise Ed25519Error(f"Invalid Ed25519 public key: {e}", cause=e)

    @classmethod
    def from_bytes(cls, key_bytes: bytes) -> Ed25519PublicKey:
        """Create public key from bytes."""
        return cls(key_bytes)

    def to_bytes(self) -> bytes:
        """Get the 32-byte public key."""
        return self._key_bytes

    def address(self) -> str:
        """Checksummed address string of this key."""
        from ..runtime.address import encode_address
        return encode_address(self._key_bytes)

    def verify(self, signature: bytes, message: bytes) -> bool:
        """
        Verify a signature against a message.

        Args:
            signature: 64-byte Ed25519 signature
            message: Message that was signed

        Returns:
            True if signature is valid
        """
        if not isinstance(signature, (bytes, bytearray)) or len(signature) != SIGNATURE_LENGTH:
            return False

        try:
            self._crypto_key.verify(bytes(signature), message)
            return True
        except InvalidSignature:
            return False

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ed25519PublicKey):
            return False
        return self._key_bytes == other._key_bytes

    def __hash__(self) -> int:
        return hash(self._key_bytes)

    def __repr__(self) -> str:
        return f"Ed25519PublicKey('{self.address()}')"


class Ed25519PrivateKey:
    """
    Ed25519 private key.

    Signing is deterministic: the same key and message always produce the
    same signature.
    """

    def __init__(self, seed: bytes):
        """
        Initialize from 32-byte private key seed.

        Args:
            seed: 32-byte Ed25519 seed

        Raises:
            Ed25519Error: If key is invalid
        """
        if not isinstance(seed, (bytes, bytearray)) or len(seed) != SEED_LENGTH:
            raise Ed25519Error(f"Ed25519 private key seed must be {SEED_LENGTH} bytes")

        self._seed = bytes(seed)
        self._crypto_key = CryptoEd25519PrivateKey.from_private_bytes(self._seed)
        self._public_key = Ed25519PublicKey(
            self._crypto_key.public_key().public_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PublicFormat.Raw
            )
        )

    @classmethod
    def generate(cls) -> Ed25519PrivateKey:
        """Generate a new random Ed25519 private key."""
        crypto_key = CryptoEd25519PrivateKey.generate()
        seed = crypto_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption()
        )
        return cls(seed)

    @classmethod
    def from_seed(cls, seed: Union[str, bytes]) -> Ed25519PrivateKey:
        """
        Derive a private key from an arbitrary seed using SHA-256.

        For deterministic test keys. A 32-byte seed is used as-is.
        """
        if isinstance(seed, str):
            seed = seed.encode("utf-8")
        if len(seed) == SEED_LENGTH:
            return cls(seed)
        return cls(hashlib.sha256(seed).digest())

    @classmethod
    def from_base64(cls, encoded: str) -> Ed25519PrivateKey:
        """
        Load a private key exported as base64(seed || public key).

        Raises:
            Ed25519Error: If the payload is malformed or the public half
                does not belong to the seed
        """
        try:
            raw = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            raise Ed25519Error("Private key is not valid base64", cause=e)
        if len(raw) != SEED_LENGTH + PUBLIC_KEY_LENGTH:
            raise Ed25519Error(
                f"Private key must decode to {SEED_LENGTH + PUBLIC_KEY_LENGTH} bytes, got {len(raw)}"
            )
        key = cls(raw[:SEED_LENGTH])
        if key.public_key().to_bytes() != raw[SEED_LENGTH:]:
            raise Ed25519Error("Private key public half does not match its seed")
        return key

    def to_base64(self) -> str:
        """Export as base64(seed || public key)."""
        return base64.b64encode(self._seed + self._public_key.to_bytes()).decode("ascii")

    def to_bytes(self) -> bytes:
        """Get the 32-byte seed."""
        return self._seed

    def public_key(self) -> Ed25519PublicKey:
        """Get the corresponding public key."""
        return self._public_key

    def address(self) -> str:
        """Checksummed address string of the public key."""
        return self._public_key.address()

    def sign(self, message: bytes) -> bytes:
        """
        Sign a message.

        Args:
            message: Message to sign

        Returns:
            64-byte Ed25519 signature
        """
        return self._crypto_key.sign(message)

    def __repr__(self) -> str:
        return f"Ed25519PrivateKey(address='{self.address()}')"


def verify_ed25519(public_key_bytes: bytes, signature: bytes, message: bytes) -> bool:
    """
    Verify an Ed25519 signature. Returns True if valid, False otherwise.

    Args:
        public_key_bytes: 32-byte public key
        signature: 64-byte signature
        message: Message that was signed
    """
    try:
        public_key = Ed25519PublicKey(public_key_bytes)
    except Ed25519Error:
        return False
    return public_key.verify(signature, message)


PrivateKeyLike = Union[Ed25519PrivateKey, str, bytes]


def to_private_key(key: PrivateKeyLike) -> Ed25519PrivateKey:
    """
    Accept an Ed25519PrivateKey, a 32-byte seed, or a base64 export.

    Raises:
        Ed25519Error: If the key cannot be interpreted
    """
    if isinstance(key, Ed25519PrivateKey):
        return key
    if isinstance(key, (bytes, bytearray)):
        return Ed25519PrivateKey(bytes(key))
    if isinstance(key, str):
        return Ed25519PrivateKey.from_base64(key)
    raise Ed25519Error(f"Unsupported private key type: {type(key).__name__}")


__all__ = [
    "SEED_LENGTH",
    "PUBLIC_KEY_LENGTH",
    "SIGNATURE_LENGTH",
    "Ed25519Error",
    "Ed25519PublicKey",
    "Ed25519PrivateKey",
    "PrivateKeyLike",
    "to_private_key",
    "verify_ed25519",
]
