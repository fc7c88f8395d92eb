"""
Base signer interface.

A signer owns one Ed25519 key and authorizes transactions for the address
derived from it. When that address is not the transaction sender (a rekeyed
account), the signed transaction records it as the authorizer.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING
import logging

from ..runtime.address import Address
from ..runtime.errors import AlgorandError

if TYPE_CHECKING:
    from ..tx.signed import SignedTransaction
    from ..tx.transaction import Transaction

logger = logging.getLogger(__name__)


class SignerError(AlgorandError):
    """Base exception for signer operations."""
    pass


class Signer(ABC):
    """
    Base signer interface.

    Subclasses supply the raw key operations; transaction signing is shared.
    """

    @abstractmethod
    def get_public_key(self) -> bytes:
        """
        Get the public key bytes.

        Returns:
            32-byte public key
        """
        pass

    @abstractmethod
    def sign(self, data: bytes) -> bytes:
        """
        Sign raw bytes (already domain-prefixed).

        Args:
            data: Bytes to sign

        Returns:
            Signature bytes
        """
        pass

    @abstractmethod
    def verify(self, signature: bytes, data: bytes) -> bool:
        """
        Verify a signature over raw bytes.

        Returns:
            True if signature is valid
        """
        pass

    def address(self) -> Address:
        """The account address this signer authorizes for."""
        return Address(self.get_public_key())

    def sign_transaction(self, txn: Transaction) -> SignedTransaction:
        """
        Sign a transaction.

        The authorizer address is recorded when it differs from the sender.

        Args:
            txn: Transaction to sign

        Returns:
            SignedTransaction carrying a single signature
        """
        from ..tx.signed import SignedTransaction

        signature = self.sign(txn.signing_bytes())
        signer_address = self.address()
        auth_address = signer_address if signer_address != txn.sender else None
        if auth_address is not None:
            logger.debug(f"Signing for {txn.sender} with rekeyed key {auth_address}")
        return SignedTransaction(transaction=txn, signature=signature, auth_address=auth_address)


__all__ = ["SignerError", "Signer"]
