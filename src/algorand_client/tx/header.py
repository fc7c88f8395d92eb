"""
Transaction header shared by every transaction kind.

Canonical field table (wire key, omitted when):

    snd    sender            zero address
    fee    fee               0
    fv     first_valid       0
    lv     last_valid        0
    gen    genesis_id        None or ""
    gh     genesis_hash      all-zero
    note   note              None or b""
    lx     lease             None or all-zero
    rekey  rekey_to          None or zero address
    grp    group             None or all-zero
"""

from __future__ import annotations
from typing import Any, ClassVar, Dict, FrozenSet, Optional

from pydantic import ConfigDict, field_validator, model_validator

from ..runtime.address import Address
from ..runtime.errors import ErrorCode
from .fields import (
    Digest, FieldValidationError, UInt64, WireModel,
    address_bytes, address_or_none, digest_bytes, validate_bytes, validate_text,
)
from .types import NOTE_MAX_LENGTH


class TransactionHeader(WireModel):
    """
    Common transaction fields.

    Immutable; use ``model_copy(update=...)`` through the Transaction helpers
    to derive a modified header.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    WIRE_KEYS: ClassVar[FrozenSet[str]] = frozenset(
        {"snd", "fee", "fv", "lv", "gen", "gh", "note", "lx", "rekey", "grp"}
    )

    sender: Address
    fee: UInt64 = 0
    first_valid: UInt64 = 0
    last_valid: UInt64 = 0
    genesis_id: Optional[str] = None
    genesis_hash: Digest
    note: Optional[bytes] = None
    lease: Optional[Digest] = None
    rekey_to: Optional[Address] = None
    group: Optional[Digest] = None

    @field_validator("genesis_id", mode="before")
    @classmethod
    def validate_genesis_id(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return validate_text(v, "genesis_id")

    @field_validator("note", mode="before")
    @classmethod
    def validate_note(cls, v: Any) -> Optional[bytes]:
        """Notes are arbitrary bytes; text is stored as UTF-8."""
        if v is None:
            return None
        if isinstance(v, str):
            v = v.encode("utf-8")
        return validate_bytes(v, "note", max_length=NOTE_MAX_LENGTH)

    @model_validator(mode="after")
    def validate_round_range(self) -> TransactionHeader:
        if self.first_valid > self.last_valid:
            raise FieldValidationError(
                f"first_valid ({self.first_valid}) must not exceed last_valid ({self.last_valid})",
                code=ErrorCode.INVALID_ROUND_RANGE,
            )
        return self

    def to_fields(self) -> Dict[str, Any]:
        """Header entries of the canonical field set (before omit-empty)."""
        return {
            "snd": address_bytes(self.sender),
            "fee": self.fee,
            "fv": self.first_valid,
            "lv": self.last_valid,
            "gen": self.genesis_id,
            "gh": digest_bytes(self.genesis_hash),
            "note": self.note,
            "lx": digest_bytes(self.lease),
            "rekey": address_bytes(self.rekey_to),
            "grp": digest_bytes(self.group),
        }

    @classmethod
    def fields_from_wire(cls, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Constructor arguments recovered from a decoded canonical map."""
        return {
            "sender": address_or_none(fields.get("snd")) or Address.zero(),
            "fee": fields.get("fee", 0),
            "first_valid": fields.get("fv", 0),
            "last_valid": fields.get("lv", 0),
            "genesis_id": fields.get("gen"),
            "genesis_hash": fields.get("gh", bytes(32)),
            "note": fields.get("note"),
            "lease": fields.get("lx"),
            "rekey_to": address_or_none(fields.get("rekey")),
            "group": fields.get("grp"),
        }


__all__ = ["TransactionHeader"]
