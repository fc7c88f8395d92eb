"""
Asset transaction builders: configuration, transfer and freeze.
"""

from __future__ import annotations
from typing import Any, Optional

from ...runtime.address import AddressLike, to_address
from ..payloads import AssetConfigFields, AssetFreezeFields, AssetTransferFields
from ..types import TransactionType
from .base import BaseTxBuilder


class AssetConfigBuilder(BaseTxBuilder[AssetConfigFields]):
    """
    Builder for asset create, reconfigure and destroy.

    Leave asset_index unset to create; set it with params to reconfigure;
    use destroy() to delete.
    """

    @property
    def tx_type(self) -> TransactionType:
        return TransactionType.ASSET_CONFIG

    @property
    def payload_cls(self):
        return AssetConfigFields

    def _param(self, name: str, value: Any) -> AssetConfigBuilder:
        params = dict(self.get_field("params") or {})
        params[name] = value
        return self.with_field("params", params)

    def asset_index(self, index: int) -> AssetConfigBuilder:
        """Set the asset to reconfigure or destroy."""
        return self.with_field("asset_index", index)

    def destroy(self, index: int) -> AssetConfigBuilder:
        """Destroy the asset; all params are dropped."""
        return self._copy(fields={"asset_index": index, "params": None})

    def total(self, total: int) -> AssetConfigBuilder:
        return self._param("total", total)

    def decimals(self, decimals: int) -> AssetConfigBuilder:
        return self._param("decimals", decimals)

    def default_frozen(self, frozen: bool = True) -> AssetConfigBuilder:
        return self._param("default_frozen", frozen)

    def unit_name(self, name: str) -> AssetConfigBuilder:
        return self._param("unit_name", name)

    def asset_name(self, name: str) -> AssetConfigBuilder:
        return self._param("asset_name", name)

    def url(self, url: str) -> AssetConfigBuilder:
        return self._param("url", url)

    def metadata_hash(self, digest: bytes) -> AssetConfigBuilder:
        return self._param("metadata_hash", digest)

    def manager(self, address: Optional[AddressLike]) -> AssetConfigBuilder:
        return self._param("manager", to_address(address) if address is not None else None)

    def reserve(self, address: Optional[AddressLike]) -> AssetConfigBuilder:
        return self._param("reserve", to_address(address) if address is not None else None)

    def freeze(self, address: Optional[AddressLike]) -> AssetConfigBuilder:
        return self._param("freeze", to_address(address) if address is not None else None)

    def clawback(self, address: Optional[AddressLike]) -> AssetConfigBuilder:
        return self._param("clawback", to_address(address) if address is not None else None)


class AssetTransferBuilder(BaseTxBuilder[AssetTransferFields]):
    """Builder for asset transfers, opt-ins and clawbacks."""

    @property
    def tx_type(self) -> TransactionType:
        return TransactionType.ASSET_TRANSFER

    @property
    def payload_cls(self):
        return AssetTransferFields

    def asset_index(self, index: int) -> AssetTransferBuilder:
        return self.with_field("asset_index", index)

    def receiver(self, address: AddressLike) -> AssetTransferBuilder:
        return self.with_field("receiver", to_address(address))

    def amount(self, amount: int) -> AssetTransferBuilder:
        """Set the amount in base units of the asset."""
        return self.with_field("amount", amount)

    def close_assets_to(self, address: AddressLike) -> AssetTransferBuilder:
        return self.with_field("close_assets_to", to_address(address))

    def revocation_target(self, address: AddressLike) -> AssetTransferBuilder:
        """Claw the assets back from this account (sender must be the clawback)."""
        return self.with_field("revocation_target", to_address(address))

    def opt_in(self, address: AddressLike, index: int) -> AssetTransferBuilder:
        """Zero-amount transfer to self, which opts the account in."""
        account = to_address(address)
        return self.sender(account)._copy(fields={
            "asset_index": index,
            "receiver": account,
            "amount": 0,
        })


class AssetFreezeBuilder(BaseTxBuilder[AssetFreezeFields]):
    """Builder for asset freeze transactions."""

    @property
    def tx_type(self) -> TransactionType:
        return TransactionType.ASSET_FREEZE

    @property
    def payload_cls(self):
        return AssetFreezeFields

    def asset_index(self, index: int) -> AssetFreezeBuilder:
        return self.with_field("asset_index", index)

    def target(self, address: AddressLike) -> AssetFreezeBuilder:
        return self.with_field("freeze_target", to_address(address))

    def frozen(self, frozen: bool = True) -> AssetFreezeBuilder:
        return self.with_field("frozen", frozen)


__all__ = ["AssetConfigBuilder", "AssetTransferBuilder", "AssetFreezeBuilder"]
