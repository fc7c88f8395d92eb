"""
Transaction builders.

Provides an immutable, chainable builder for each transaction kind.
"""

from .base import BaseTxBuilder, BuilderError
from .payments import PaymentBuilder
from .keyreg import KeyRegistrationBuilder
from .assets import AssetConfigBuilder, AssetTransferBuilder, AssetFreezeBuilder
from .applications import ApplicationCallBuilder
from .registry import get_builder_for, list_transaction_types, register_builder, BUILDER_REGISTRY

__all__ = [
    "BaseTxBuilder",
    "BuilderError",
    "PaymentBuilder",
    "KeyRegistrationBuilder",
    "AssetConfigBuilder",
    "AssetTransferBuilder",
    "AssetFreezeBuilder",
    "ApplicationCallBuilder",
    "BUILDER_REGISTRY",
    "register_builder",
    "get_builder_for",
    "list_transaction_types",
]
