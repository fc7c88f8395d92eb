"""
Payment transaction builder.
"""

from __future__ import annotations

from ...runtime.address import AddressLike, to_address
from ..payloads import PaymentFields
from ..types import TransactionType
from .base import BaseTxBuilder


class PaymentBuilder(BaseTxBuilder[PaymentFields]):
    """Builder for payment transactions."""

    @property
    def tx_type(self) -> TransactionType:
        return TransactionType.PAYMENT

    @property
    def payload_cls(self):
        return PaymentFields

    def receiver(self, address: AddressLike) -> PaymentBuilder:
        """Set the receiving account."""
        return self.with_field("receiver", to_address(address))

    def amount(self, microalgos: int) -> PaymentBuilder:
        """Set the amount in microAlgos."""
        return self.with_field("amount", microalgos)

    def close_remainder_to(self, address: AddressLike) -> PaymentBuilder:
        """Close the sender account, sending the remaining balance here."""
        return self.with_field("close_remainder_to", to_address(address))


__all__ = ["PaymentBuilder"]
