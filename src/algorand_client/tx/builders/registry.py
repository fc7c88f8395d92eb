"""
Transaction builder registry.

Maps transaction types to their builders.
"""

from typing import Dict, List, Type, Union

from ...runtime.errors import ErrorCode
from ..types import TransactionType
from .applications import ApplicationCallBuilder
from .assets import AssetConfigBuilder, AssetFreezeBuilder, AssetTransferBuilder
from .base import BaseTxBuilder, BuilderError
from .keyreg import KeyRegistrationBuilder
from .payments import PaymentBuilder

BUILDER_REGISTRY: Dict[TransactionType, Type[BaseTxBuilder]] = {
    TransactionType.PAYMENT: PaymentBuilder,
    TransactionType.KEY_REGISTRATION: KeyRegistrationBuilder,
    TransactionType.ASSET_CONFIG: AssetConfigBuilder,
    TransactionType.ASSET_TRANSFER: AssetTransferBuilder,
    TransactionType.ASSET_FREEZE: AssetFreezeBuilder,
    TransactionType.APPLICATION_CALL: ApplicationCallBuilder,
}


def get_builder_for(tx_type: Union[TransactionType, str]) -> BaseTxBuilder:
    """
    Get a transaction builder for the specified transaction type.

    Args:
        tx_type: Transaction type or its wire code (e.g. 'pay', 'axfer')

    Returns:
        Transaction builder instance

    Raises:
        BuilderError: If transaction type has no builder
    """
    key = TransactionType.from_wire(tx_type) if isinstance(tx_type, str) else tx_type
    builder_cls = BUILDER_REGISTRY.get(key)
    if not builder_cls:
        raise BuilderError(f"Unsupported transaction type: {tx_type}", code=ErrorCode.INVALID_TRANSACTION)

    return builder_cls()


def list_transaction_types() -> List[str]:
    """Wire codes of all transaction types that have a builder."""
    return [t.value for t in BUILDER_REGISTRY]


def register_builder(tx_type: TransactionType, builder_cls: Type[BaseTxBuilder]) -> None:
    """
    Register a custom transaction builder.

    Args:
        tx_type: Transaction type
        builder_cls: Builder class
    """
    BUILDER_REGISTRY[tx_type] = builder_cls


__all__ = [
    "BUILDER_REGISTRY",
    "get_builder_for",
    "list_transaction_types",
    "register_builder",
]
