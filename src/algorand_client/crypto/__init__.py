"""
Cryptographic primitives for the Algorand protocol.

Provides Ed25519 keys and the SHA-512/256 digest used for every content address.
"""

from .ed25519 import (
    Ed25519Error, Ed25519PrivateKey, Ed25519PublicKey,
    PrivateKeyLike, to_private_key, verify_ed25519,
)
from .hashing import sha512_256, checksum, digest_concat, base32_nopad, base32_decode_nopad

__all__ = [
    "Ed25519Error",
    "Ed25519PrivateKey",
    "Ed25519PublicKey",
    "PrivateKeyLike",
    "to_private_key",
    "verify_ed25519",
    "sha512_256",
    "checksum",
    "digest_concat",
    "base32_nopad",
    "base32_decode_nopad",
]
