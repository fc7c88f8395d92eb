"""
Ed25519 signer implementation.

Provides transaction signing plus signing of arbitrary application data.
Arbitrary data is always signed under the ``MX`` prefix so it can never be
mistaken for a transaction.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Union

from ..codec.hashes import BYTES_PREFIX, domain_bytes
from ..crypto.ed25519 import Ed25519PrivateKey, PrivateKeyLike, to_private_key, verify_ed25519
from ..runtime.address import AddressLike, to_address
from .signer import Signer

if TYPE_CHECKING:
    from ..tx.signed import SignedTransaction
    from ..tx.transaction import Transaction


class Ed25519Signer(Signer):
    """Ed25519 signer implementation."""

    def __init__(self, private_key: PrivateKeyLike):
        """
        Initialize Ed25519 signer.

        Args:
            private_key: Ed25519PrivateKey, 32-byte seed, or base64 export
        """
        self.private_key: Ed25519PrivateKey = to_private_key(private_key)
        self.public_key = self.private_key.public_key()

    def get_public_key(self) -> bytes:
        return self.public_key.to_bytes()

    def sign(self, data: bytes) -> bytes:
        return self.private_key.sign(data)

    def verify(self, signature: bytes, data: bytes) -> bool:
        return self.public_key.verify(signature, data)

    def sign_bytes(self, data: bytes) -> bytes:
        """
        Sign arbitrary data under the ``MX`` domain prefix.

        Args:
            data: Application data

        Returns:
            64-byte signature
        """
        return self.sign(domain_bytes(BYTES_PREFIX, data))

    def verify_bytes(self, data: bytes, signature: bytes) -> bool:
        return verify_bytes(data, signature, self.address())

    def __repr__(self) -> str:
        return f"Ed25519Signer(address='{self.address()}')"


def sign_transaction(txn: Transaction, private_key: Union[PrivateKeyLike, Ed25519Signer]) -> SignedTransaction:
    """
    Sign a transaction with a single key.

    Args:
        txn: Transaction to sign
        private_key: Signing key or signer

    Returns:
        SignedTransaction
    """
    signer = private_key if isinstance(private_key, Ed25519Signer) else Ed25519Signer(private_key)
    return signer.sign_transaction(txn)


def sign_bytes(data: bytes, private_key: PrivateKeyLike) -> bytes:
    """Sign arbitrary data under the ``MX`` prefix."""
    return Ed25519Signer(private_key).sign_bytes(data)


def verify_bytes(data: bytes, signature: bytes, address: AddressLike) -> bool:
    """
    Verify a signature made with sign_bytes.

    Args:
        data: Application data
        signature: 64-byte signature
        address: Address (or raw public key) of the signer

    Returns:
        True if signature is valid
    """
    public_key = to_address(address).public_key
    return verify_ed25519(public_key, signature, domain_bytes(BYTES_PREFIX, data))


__all__ = ["Ed25519Signer", "sign_transaction", "sign_bytes", "verify_bytes"]
