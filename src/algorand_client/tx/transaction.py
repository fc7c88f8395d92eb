"""
Transaction model: header plus exactly one kind-specific payload.

A Transaction turns into its canonical field set, canonical bytes, signing
bytes and id here. Everything is derived on demand from the immutable model,
so a transaction never carries a stale id.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Annotated, Any, Dict, Optional, Union

from pydantic import ConfigDict, Field

from ..codec.hashes import TX_PREFIX, domain_bytes
from ..codec.msgpack_codec import canonicalize, decode_canonical, encode_canonical
from ..crypto.hashing import base32_nopad, sha512_256
from ..runtime.address import Address
from .fields import FieldValidationError, WireModel, build_model, validate_bytes
from .header import TransactionHeader
from .payloads import (
    PAYLOAD_TYPES,
    ApplicationCallFields, AssetConfigFields, AssetFreezeFields, AssetTransferFields,
    KeyRegistrationFields, PaymentFields, StateProofFields,
)
from .types import HASH_LENGTH, TransactionType

if TYPE_CHECKING:
    from ..crypto.ed25519 import PrivateKeyLike
    from .signed import SignedTransaction


Payload = Annotated[
    Union[
        PaymentFields,
        KeyRegistrationFields,
        AssetConfigFields,
        AssetTransferFields,
        AssetFreezeFields,
        ApplicationCallFields,
        StateProofFields,
    ],
    Field(discriminator="type"),
]


class Transaction(WireModel):
    """
    An unsigned transaction.

    Example:
        >>> txn = Transaction(
        ...     header=TransactionHeader(sender=alice, fee=1000, first_valid=1,
        ...                              last_valid=1001, genesis_hash=gh),
        ...     payload=PaymentFields(receiver=bob, amount=5_000_000),
        ... )
        >>> txn.txid()
    """

    model_config = ConfigDict(frozen=True)

    header: TransactionHeader
    payload: Payload

    @property
    def type(self) -> TransactionType:
        return TransactionType(self.payload.type)

    @property
    def sender(self) -> Address:
        return self.header.sender

    def canonical_fields(self) -> Dict[str, Any]:
        """
        The canonical field set: short keys, sorted, zero values dropped.

        Addresses appear as raw 32-byte keys and enumerations as wire codes.
        """
        fields = self.header.to_fields()
        fields.update(self.payload.to_fields())
        fields["type"] = self.payload.type
        return canonicalize(fields)

    def encode(self) -> bytes:
        """Canonical msgpack encoding."""
        return encode_canonical(self.canonical_fields())

    def signing_bytes(self) -> bytes:
        """The exact bytes a signer signs: ``b"TX"`` followed by the encoding."""
        return domain_bytes(TX_PREFIX, self.encode())

    def raw_txid(self) -> bytes:
        return sha512_256(self.signing_bytes())

    def txid(self) -> str:
        """Transaction id: base32 (no padding) of the raw id, 52 characters."""
        return base32_nopad(self.raw_txid())

    def with_header(self, **changes: Any) -> Transaction:
        """
        Copy with header fields replaced.

        The new header is fully re-validated.

        Raises:
            FieldValidationError: If the changed header is invalid
        """
        values = dict(self.header)
        values.update(changes)
        return Transaction(header=build_model(TransactionHeader, **values), payload=self.payload)

    def with_group(self, group: Optional[bytes]) -> Transaction:
        """Copy with the group id set, or cleared when group is None."""
        if group is not None:
            group = validate_bytes(group, "group", HASH_LENGTH)
        return self.with_header(group=group)

    def with_fee(self, fee: int) -> Transaction:
        return self.with_header(fee=fee)

    def sign(self, private_key: PrivateKeyLike) -> SignedTransaction:
        """Sign with a single Ed25519 key."""
        from ..signers.ed25519 import sign_transaction
        return sign_transaction(self, private_key)

    @classmethod
    def from_canonical_fields(cls, fields: Dict[str, Any]) -> Transaction:
        """
        Rebuild a transaction from a decoded canonical map.

        Raises:
            ValidationError: On an unknown type code, a key that does not belong
                to the transaction kind, or an invalid field value
        """
        if not isinstance(fields, dict):
            raise FieldValidationError(f"Transaction must be a map, got {type(fields).__name__}")

        tx_type = TransactionType.from_wire(fields.get("type"))
        payload_cls = PAYLOAD_TYPES[tx_type]

        unknown = set(fields) - TransactionHeader.WIRE_KEYS - payload_cls.WIRE_KEYS - {"type"}
        if unknown:
            raise FieldValidationError(
                f"Fields {sorted(unknown)} do not belong to a {tx_type.value} transaction",
                details={"type": tx_type.value, "fields": sorted(unknown)},
            )

        try:
            header_values = TransactionHeader.fields_from_wire(fields)
            payload_values = payload_cls.fields_from_wire(fields)
        except (TypeError, AttributeError) as e:
            raise FieldValidationError(f"Malformed {tx_type.value} transaction: {e}", cause=e)

        return cls(
            header=build_model(TransactionHeader, **header_values),
            payload=build_model(payload_cls, **payload_values),
        )

    @classmethod
    def decode(cls, data: bytes, strict: bool = False) -> Transaction:
        """Decode canonical bytes into a transaction."""
        return cls.from_canonical_fields(decode_canonical(data, strict=strict))

    def __repr__(self) -> str:
        return f"Transaction(type={self.payload.type}, sender={self.header.sender})"


__all__ = ["Payload", "Transaction"]
