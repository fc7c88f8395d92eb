"""
Kind-specific transaction payloads.

Each payload is a frozen pydantic model tagged with its wire ``type`` code,
so a Transaction can hold exactly one of them through a discriminated union.
Every payload knows its own wire keys, how to produce its canonical entries
and how to recover constructor arguments from a decoded map.
"""

from __future__ import annotations
from typing import Any, ClassVar, Dict, FrozenSet, Literal, Optional, Tuple

from pydantic import ConfigDict, field_validator, model_validator

from ..runtime.address import Address
from ..runtime.errors import ErrorCode
from .fields import (
    Digest, FieldValidationError, Key32, StateProofKey, UInt64, WireModel,
    address_bytes, address_or_none, build_model, digest_bytes, validate_text,
)
from .types import (
    MAX_APP_ACCOUNTS, MAX_APP_ARGS, MAX_APP_TOTAL_REFERENCES, MAX_ASSET_DECIMALS,
    MAX_ASSET_NAME_LENGTH, MAX_ASSET_URL_LENGTH, MAX_BOX_REFERENCES, MAX_EXTRA_PAGES,
    MAX_FOREIGN_APPS, MAX_FOREIGN_ASSETS, MAX_UNIT_NAME_LENGTH,
    OnComplete, StateProofType, TransactionType,
)

_FROZEN = ConfigDict(frozen=True, extra="forbid")


def _limit(items: Tuple[Any, ...], maximum: int, name: str) -> None:
    if len(items) > maximum:
        raise FieldValidationError(
            f"Too many {name}: {len(items)} (maximum {maximum})",
            code=ErrorCode.INVALID_FIELD_LENGTH,
        )


class PaymentFields(WireModel):
    """Algo transfer."""

    model_config = _FROZEN
    TX_TYPE: ClassVar[TransactionType] = TransactionType.PAYMENT
    WIRE_KEYS: ClassVar[FrozenSet[str]] = frozenset({"amt", "rcv", "close"})

    type: Literal["pay"] = "pay"
    receiver: Address = Address.zero()
    amount: UInt64 = 0
    close_remainder_to: Optional[Address] = None

    def to_fields(self) -> Dict[str, Any]:
        return {
            "amt": self.amount,
            "rcv": address_bytes(self.receiver),
            "close": address_bytes(self.close_remainder_to),
        }

    @classmethod
    def fields_from_wire(cls, fields: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "receiver": address_or_none(fields.get("rcv")) or Address.zero(),
            "amount": fields.get("amt", 0),
            "close_remainder_to": address_or_none(fields.get("close")),
        }


class KeyRegistrationFields(WireModel):
    """
    Participation key registration.

    Registering online needs both the vote and selection keys; leaving every
    key unset takes the account offline. ``non_participation`` marks the
    account as permanently non-participating and cannot be combined with keys.
    """

    model_config = _FROZEN
    TX_TYPE: ClassVar[TransactionType] = TransactionType.KEY_REGISTRATION
    WIRE_KEYS: ClassVar[FrozenSet[str]] = frozenset(
        {"votekey", "selkey", "sprfkey", "votefst", "votelst", "votekd", "nonpart"}
    )

    type: Literal["keyreg"] = "keyreg"
    vote_pk: Optional[Key32] = None
    selection_pk: Optional[Key32] = None
    state_proof_pk: Optional[StateProofKey] = None
    vote_first: UInt64 = 0
    vote_last: UInt64 = 0
    vote_key_dilution: UInt64 = 0
    non_participation: bool = False

    @property
    def is_online(self) -> bool:
        return self.vote_pk is not None

    @model_validator(mode="after")
    def validate_keys(self) -> KeyRegistrationFields:
        keys_set = [k is not None for k in (self.vote_pk, self.selection_pk)]
        if any(keys_set) and not all(keys_set):
            raise FieldValidationError("vote_pk and selection_pk must be set together")
        if self.state_proof_pk is not None and not self.is_online:
            raise FieldValidationError("state_proof_pk requires participation keys")
        if self.non_participation and self.is_online:
            raise FieldValidationError("non_participation cannot be combined with participation keys")
        if self.is_online and self.vote_first > self.vote_last:
            raise FieldValidationError(
                f"vote_first ({self.vote_first}) must not exceed vote_last ({self.vote_last})",
                code=ErrorCode.INVALID_ROUND_RANGE,
            )
        return self

    def to_fields(self) -> Dict[str, Any]:
        return {
            "votekey": self.vote_pk,
            "selkey": self.selection_pk,
            "sprfkey": self.state_proof_pk,
            "votefst": self.vote_first,
            "votelst": self.vote_last,
            "votekd": self.vote_key_dilution,
            "nonpart": self.non_participation,
        }

    @classmethod
    def fields_from_wire(cls, fields: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "vote_pk": fields.get("votekey"),
            "selection_pk": fields.get("selkey"),
            "state_proof_pk": fields.get("sprfkey"),
            "vote_first": fields.get("votefst", 0),
            "vote_last": fields.get("votelst", 0),
            "vote_key_dilution": fields.get("votekd", 0),
            "non_participation": fields.get("nonpart", False),
        }


class AssetParams(WireModel):
    """Asset parameters, encoded as the nested ``apar`` map."""

    model_config = _FROZEN

    total: UInt64 = 0
    decimals: UInt64 = 0
    default_frozen: bool = False
    unit_name: Optional[str] = None
    asset_name: Optional[str] = None
    url: Optional[str] = None
    metadata_hash: Optional[Digest] = None
    manager: Optional[Address] = None
    reserve: Optional[Address] = None
    freeze: Optional[Address] = None
    clawback: Optional[Address] = None

    @field_validator("decimals")
    @classmethod
    def validate_decimals(cls, v: int) -> int:
        if v > MAX_ASSET_DECIMALS:
            raise FieldValidationError(f"decimals must be at most {MAX_ASSET_DECIMALS}, got {v}")
        return v

    @field_validator("unit_name", mode="before")
    @classmethod
    def validate_unit_name(cls, v: Any) -> Optional[str]:
        return None if v is None else validate_text(v, "unit_name", MAX_UNIT_NAME_LENGTH)

    @field_validator("asset_name", mode="before")
    @classmethod
    def validate_asset_name(cls, v: Any) -> Optional[str]:
        return None if v is None else validate_text(v, "asset_name", MAX_ASSET_NAME_LENGTH)

    @field_validator("url", mode="before")
    @classmethod
    def validate_url(cls, v: Any) -> Optional[str]:
        return None if v is None else validate_text(v, "url", MAX_ASSET_URL_LENGTH)

    def to_fields(self) -> Dict[str, Any]:
        return {
            "t": self.total,
            "dc": self.decimals,
            "df": self.default_frozen,
            "un": self.unit_name,
            "an": self.asset_name,
            "au": self.url,
            "am": digest_bytes(self.metadata_hash),
            "m": address_bytes(self.manager),
            "r": address_bytes(self.reserve),
            "f": address_bytes(self.freeze),
            "c": address_bytes(self.clawback),
        }

    @classmethod
    def from_wire(cls, fields: Dict[str, Any]) -> AssetParams:
        if not isinstance(fields, dict):
            raise FieldValidationError("apar must be a map")
        unknown = set(fields) - {"t", "dc", "df", "un", "an", "au", "am", "m", "r", "f", "c"}
        if unknown:
            raise FieldValidationError(f"Unknown asset parameter keys: {sorted(unknown)}")
        return build_model(
            cls,
            total=fields.get("t", 0),
            decimals=fields.get("dc", 0),
            default_frozen=fields.get("df", False),
            unit_name=fields.get("un"),
            asset_name=fields.get("an"),
            url=fields.get("au"),
            metadata_hash=fields.get("am"),
            manager=address_or_none(fields.get("m")),
            reserve=address_or_none(fields.get("r")),
            freeze=address_or_none(fields.get("f")),
            clawback=address_or_none(fields.get("c")),
        )


class AssetConfigFields(WireModel):
    """
    Asset create, reconfigure or destroy.

    asset_index == 0 creates a new asset from ``params``; a non-zero index with
    params reconfigures it, and without params destroys it.
    """

    model_config = _FROZEN
    TX_TYPE: ClassVar[TransactionType] = TransactionType.ASSET_CONFIG
    WIRE_KEYS: ClassVar[FrozenSet[str]] = frozenset({"caid", "apar"})

    type: Literal["acfg"] = "acfg"
    asset_index: UInt64 = 0
    params: Optional[AssetParams] = None

    @model_validator(mode="after")
    def validate_create(self) -> AssetConfigFields:
        if self.asset_index == 0:
            if self.params is None:
                raise FieldValidationError("Asset creation requires params")
            if self.params.total == 0:
                raise FieldValidationError("Asset creation requires a non-zero total")
        return self

    def to_fields(self) -> Dict[str, Any]:
        return {
            "caid": self.asset_index,
            "apar": self.params.to_fields() if self.params is not None else None,
        }

    @classmethod
    def fields_from_wire(cls, fields: Dict[str, Any]) -> Dict[str, Any]:
        apar = fields.get("apar")
        return {
            "asset_index": fields.get("caid", 0),
            "params": AssetParams.from_wire(apar) if apar is not None else None,
        }


class AssetTransferFields(WireModel):
    """Asset transfer, opt-in (zero amount to self) or clawback (with revocation_target)."""

    model_config = _FROZEN
    TX_TYPE: ClassVar[TransactionType] = TransactionType.ASSET_TRANSFER
    WIRE_KEYS: ClassVar[FrozenSet[str]] = frozenset({"xaid", "aamt", "arcv", "aclose", "asnd"})

    type: Literal["axfer"] = "axfer"
    asset_index: UInt64 = 0
    amount: UInt64 = 0
    receiver: Optional[Address] = None
    close_assets_to: Optional[Address] = None
    revocation_target: Optional[Address] = None

    def to_fields(self) -> Dict[str, Any]:
        return {
            "xaid": self.asset_index,
            "aamt": self.amount,
            "arcv": address_bytes(self.receiver),
            "aclose": address_bytes(self.close_assets_to),
            "asnd": address_bytes(self.revocation_target),
        }

    @classmethod
    def fields_from_wire(cls, fields: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "asset_index": fields.get("xaid", 0),
            "amount": fields.get("aamt", 0),
            "receiver": address_or_none(fields.get("arcv")),
            "close_assets_to": address_or_none(fields.get("aclose")),
            "revocation_target": address_or_none(fields.get("asnd")),
        }


class AssetFreezeFields(WireModel):
    model_config = _FROZEN
    TX_TYPE: ClassVar[TransactionType] = TransactionType.ASSET_FREEZE
    WIRE_KEYS: ClassVar[FrozenSet[str]] = frozenset({"faid", "fadd", "afrz"})

    type: Literal["afrz"] = "afrz"
    asset_index: UInt64 = 0
    freeze_target: Optional[Address] = None
    frozen: bool = False

    def to_fields(self) -> Dict[str, Any]:
        return {
            "faid": self.asset_index,
            "fadd": address_bytes(self.freeze_target),
            "afrz": self.frozen,
        }

    @classmethod
    def fields_from_wire(cls, fields: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "asset_index": fields.get("faid", 0),
            "freeze_target": address_or_none(fields.get("fadd")),
            "frozen": fields.get("afrz", False),
        }


class StateSchema(WireModel):
    model_config = _FROZEN

    num_uints: UInt64 = 0
    num_byte_slices: UInt64 = 0

    def to_fields(self) -> Dict[str, Any]:
        return {"nui": self.num_uints, "nbs": self.num_byte_slices}

    @classmethod
    def from_wire(cls, fields: Optional[Dict[str, Any]]) -> Optional[StateSchema]:
        if fields is None:
            return None
        if not isinstance(fields, dict) or set(fields) - {"nui", "nbs"}:
            raise FieldValidationError(f"Invalid state schema: {fields!r}")
        return build_model(cls, num_uints=fields.get("nui", 0), num_byte_slices=fields.get("nbs", 0))


class BoxReference(WireModel):
    """
    A box the application call may touch.

    ``app_index`` is an application id: 0 (or the called app's own id) means
    the called app, anything else must be listed in foreign_apps.
    """

    model_config = _FROZEN

    app_index: UInt64 = 0
    name: bytes = b""


class ApplicationCallFields(WireModel):
    """Application create, call, update or delete."""

    model_config = _FROZEN
    TX_TYPE: ClassVar[TransactionType] = TransactionType.APPLICATION_CALL
    WIRE_KEYS: ClassVar[FrozenSet[str]] = frozenset({
        "apid", "apan", "apap", "apsu", "apgs", "apls",
        "apaa", "apat", "apfa", "apas", "apep", "apbx",
    })

    type: Literal["appl"] = "appl"
    app_id: UInt64 = 0
    on_complete: OnComplete = OnComplete.NO_OP
    approval_program: Optional[bytes] = None
    clear_program: Optional[bytes] = None
    global_schema: Optional[StateSchema] = None
    local_schema: Optional[StateSchema] = None
    app_args: Tuple[bytes, ...] = ()
    accounts: Tuple[Address, ...] = ()
    foreign_apps: Tuple[UInt64, ...] = ()
    foreign_assets: Tuple[UInt64, ...] = ()
    extra_pages: UInt64 = 0
    boxes: Tuple[BoxReference, ...] = ()

    @model_validator(mode="after")
    def validate_references(self) -> ApplicationCallFields:
        _limit(self.app_args, MAX_APP_ARGS, "application args")
        _limit(self.accounts, MAX_APP_ACCOUNTS, "accounts")
        _limit(self.foreign_apps, MAX_FOREIGN_APPS, "foreign apps")
        _limit(self.foreign_assets, MAX_FOREIGN_ASSETS, "foreign assets")
        _limit(self.boxes, MAX_BOX_REFERENCES, "box references")
        total = len(self.accounts) + len(self.foreign_apps) + len(self.foreign_assets) + len(self.boxes)
        if total > MAX_APP_TOTAL_REFERENCES:
            raise FieldValidationError(
                f"Too many references: {total} (maximum {MAX_APP_TOTAL_REFERENCES})",
                code=ErrorCode.INVALID_FIELD_LENGTH,
            )
        if self.extra_pages > MAX_EXTRA_PAGES:
            raise FieldValidationError(f"extra_pages must be at most {MAX_EXTRA_PAGES}")
        for box in self.boxes:
            self._box_index(box)
        return self

    def _box_index(self, box: BoxReference) -> int:
        if box.app_index == 0 or box.app_index == self.app_id:
            return 0
        try:
            return self.foreign_apps.index(box.app_index) + 1
        except ValueError:
            raise FieldValidationError(
                f"Box reference app {box.app_index} is not in foreign_apps"
            )

    def to_fields(self) -> Dict[str, Any]:
        return {
            "apid": self.app_id,
            "apan": int(self.on_complete),
            "apap": self.approval_program,
            "apsu": self.clear_program,
            "apgs": self.global_schema.to_fields() if self.global_schema else None,
            "apls": self.local_schema.to_fields() if self.local_schema else None,
            "apaa": list(self.app_args),
            "apat": [a.public_key for a in self.accounts],
            "apfa": list(self.foreign_apps),
            "apas": list(self.foreign_assets),
            "apep": self.extra_pages,
            "apbx": [{"i": self._box_index(b), "n": b.name} for b in self.boxes],
        }

    @classmethod
    def fields_from_wire(cls, fields: Dict[str, Any]) -> Dict[str, Any]:
        foreign_apps = list(fields.get("apfa", []))
        boxes = []
        for ref in fields.get("apbx", []):
            if not isinstance(ref, dict) or set(ref) - {"i", "n"}:
                raise FieldValidationError(f"Invalid box reference: {ref!r}")
            index = ref.get("i", 0)
            if index == 0:
                app_index = 0
            elif isinstance(index, int) and 0 < index <= len(foreign_apps):
                app_index = foreign_apps[index - 1]
            else:
                raise FieldValidationError(f"Box reference index {index!r} out of range")
            boxes.append(build_model(BoxReference, app_index=app_index, name=ref.get("n", b"")))
        return {
            "app_id": fields.get("apid", 0),
            "on_complete": OnComplete.from_wire(fields.get("apan", 0)),
            "approval_program": fields.get("apap"),
            "clear_program": fields.get("apsu"),
            "global_schema": StateSchema.from_wire(fields.get("apgs")),
            "local_schema": StateSchema.from_wire(fields.get("apls")),
            "app_args": fields.get("apaa", ()),
            "accounts": [address_or_none(a) for a in fields.get("apat", [])],
            "foreign_apps": foreign_apps,
            "foreign_assets": fields.get("apas", ()),
            "extra_pages": fields.get("apep", 0),
            "boxes": boxes,
        }


class StateProofFields(WireModel):
    """
    State proof transaction; the proof and message are opaque maps.

    Nested maps may be keyed by text or by uint64 (the proof's reveals are
    keyed by position), and round-trip through the canonical codec unchanged.
    """

    model_config = _FROZEN
    TX_TYPE: ClassVar[TransactionType] = TransactionType.STATE_PROOF
    WIRE_KEYS: ClassVar[FrozenSet[str]] = frozenset({"sptype", "sp", "spmsg"})

    type: Literal["stpf"] = "stpf"
    state_proof_type: StateProofType = StateProofType.BASIC
    state_proof: Optional[Dict[str, Any]] = None
    message: Optional[Dict[str, Any]] = None

    def to_fields(self) -> Dict[str, Any]:
        return {
            "sptype": int(self.state_proof_type),
            "sp": self.state_proof,
            "spmsg": self.message,
        }

    @classmethod
    def fields_from_wire(cls, fields: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "state_proof_type": StateProofType.from_wire(fields.get("sptype", 0)),
            "state_proof": fields.get("sp"),
            "message": fields.get("spmsg"),
        }


PAYLOAD_TYPES = {
    cls.TX_TYPE: cls
    for cls in (
        PaymentFields,
        KeyRegistrationFields,
        AssetConfigFields,
        AssetTransferFields,
        AssetFreezeFields,
        ApplicationCallFields,
        StateProofFields,
    )
}


__all__ = [
    "PaymentFields",
    "KeyRegistrationFields",
    "AssetParams",
    "AssetConfigFields",
    "AssetTransferFields",
    "AssetFreezeFields",
    "StateSchema",
    "BoxReference",
    "ApplicationCallFields",
    "StateProofFields",
    "PAYLOAD_TYPES",
]
