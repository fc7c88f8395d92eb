"""
Base transaction builder.

Builders are immutable: every setter returns a new builder, so a partially
configured builder can be shared and specialised without surprises.
"""

from __future__ import annotations
from typing import Any, Dict, Generic, Optional, Type, TypeVar, Union
from abc import ABC, abstractmethod

from ...runtime.address import AddressLike, to_address
from ...runtime.errors import ValidationError
from ..fees import SuggestedParams, compute_fee
from ..fields import build_model
from ..header import TransactionHeader
from ..transaction import Transaction
from ..types import TransactionType

PayloadT = TypeVar("PayloadT")
BuilderT = TypeVar("BuilderT", bound="BaseTxBuilder")


class BuilderError(ValidationError):
    """Transaction builder specific errors."""
    pass


class BaseTxBuilder(Generic[PayloadT], ABC):
    """
    Base class for all transaction builders.

    Generic over PayloadT = the payload model the builder produces.
    """

    def __init__(self, header: Optional[Dict[str, Any]] = None,
                 fields: Optional[Dict[str, Any]] = None,
                 params: Optional[SuggestedParams] = None):
        self._header: Dict[str, Any] = dict(header or {})
        self._fields: Dict[str, Any] = dict(fields or {})
        self._params = params

    @property
    @abstractmethod
    def tx_type(self) -> TransactionType:
        """Get the transaction type."""
        pass

    @property
    @abstractmethod
    def payload_cls(self) -> Type[PayloadT]:
        """Get the payload model class."""
        pass

    def _copy(self: BuilderT, header: Optional[Dict[str, Any]] = None,
              fields: Optional[Dict[str, Any]] = None,
              params: Optional[SuggestedParams] = None) -> BuilderT:
        clone = self.__class__.__new__(self.__class__)
        clone._header = {**self._header, **(header or {})}
        clone._fields = {**self._fields, **(fields or {})}
        clone._params = params if params is not None else self._params
        return clone

    def with_field(self: BuilderT, name: str, value: Any) -> BuilderT:
        """
        Set a payload field.

        Args:
            name: Payload field name
            value: Field value

        Returns:
            New builder with the field set
        """
        return self._copy(fields={name: value})

    def with_header_field(self: BuilderT, name: str, value: Any) -> BuilderT:
        return self._copy(header={name: value})

    def get_field(self, name: str, default: Any = None) -> Any:
        return self._fields.get(name, default)

    # Header setters

    def sender(self: BuilderT, address: AddressLike) -> BuilderT:
        return self.with_header_field("sender", to_address(address))

    def fee(self: BuilderT, fee: int) -> BuilderT:
        """Set an explicit total fee, overriding suggested params."""
        return self.with_header_field("fee", fee)

    def suggested_params(self: BuilderT, params: SuggestedParams) -> BuilderT:
        """Take rounds, genesis and fee policy from suggested params."""
        return self._copy(params=params)

    def first_valid(self: BuilderT, round_: int) -> BuilderT:
        return self.with_header_field("first_valid", round_)

    def last_valid(self: BuilderT, round_: int) -> BuilderT:
        return self.with_header_field("last_valid", round_)

    def genesis(self: BuilderT, genesis_hash: Union[bytes, str],
                genesis_id: Optional[str] = None) -> BuilderT:
        return self._copy(header={"genesis_hash": genesis_hash, "genesis_id": genesis_id})

    def note(self: BuilderT, note: Union[bytes, str]) -> BuilderT:
        return self.with_header_field("note", note)

    def lease(self: BuilderT, lease: bytes) -> BuilderT:
        return self.with_header_field("lease", lease)

    def rekey_to(self: BuilderT, address: AddressLike) -> BuilderT:
        return self.with_header_field("rekey_to", to_address(address))

    def to_payload(self) -> PayloadT:
        """
        Create the payload model.

        Raises:
            FieldValidationError: If the payload fields are invalid
        """
        return build_model(self.payload_cls, **self._fields)

    def to_header(self, fee: int = 0) -> TransactionHeader:
        values: Dict[str, Any] = {}
        if self._params is not None:
            values.update(self._params.header_fields())
        values.update(self._header)
        values.setdefault("fee", fee)
        if "sender" not in values:
            raise BuilderError(f"{self.tx_type.value} transaction needs a sender")
        return build_model(TransactionHeader, **values)

    def build(self) -> Transaction:
        """
        Build the transaction.

        The fee is the explicit fee if one was set, otherwise it is computed
        from the suggested params, otherwise zero.

        Returns:
            Validated Transaction

        Raises:
            BuilderError: If no sender was set
            FieldValidationError: If any field is invalid
        """
        txn = Transaction(header=self.to_header(), payload=self.to_payload())
        if "fee" not in self._header and self._params is not None:
            txn = txn.with_fee(compute_fee(txn, self._params))
        return txn

    def validate(self) -> None:
        """
        Validate the builder without keeping the result.

        Raises:
            ValidationError: If validation fails
        """
        self.build()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(fields={sorted(self._fields)})"


__all__ = ["BuilderError", "BaseTxBuilder"]
