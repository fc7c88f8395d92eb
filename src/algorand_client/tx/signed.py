"""
Signed transaction envelope.

Wire form: ``{sig | msig | lsig, sgnr?, txn}``. Exactly one authorization is
present; ``sgnr`` names the authorizing account when it is not the sender.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ConfigDict, model_validator

from ..codec.msgpack_codec import canonicalize, decode_canonical, encode_canonical, iter_decode
from ..runtime.address import Address
from ..runtime.errors import ErrorCode, InvalidSignatureError, ValidationError
from ..crypto.ed25519 import verify_ed25519
from ..signers.logicsig import LogicSig
from ..signers.multisig import MultisigSignature
from .fields import FieldValidationError, Signature, WireModel, address_bytes, address_or_none, build_model
from .transaction import Transaction

SIGNED_WIRE_KEYS = frozenset({"sig", "msig", "lsig", "sgnr", "txn"})


class SignedTransaction(WireModel):
    """A transaction with its authorization."""

    model_config = ConfigDict(frozen=True)

    transaction: Transaction
    signature: Optional[Signature] = None
    multisig: Optional[MultisigSignature] = None
    logicsig: Optional[LogicSig] = None
    auth_address: Optional[Address] = None

    @model_validator(mode="after")
    def validate_authorization(self) -> SignedTransaction:
        present = [a for a in (self.signature, self.multisig, self.logicsig) if a is not None]
        if len(present) != 1:
            raise ValidationError(
                f"Signed transaction needs exactly one of sig, msig, lsig (got {len(present)})",
                code=ErrorCode.INVALID_AUTHORIZATION,
            )
        return self

    @property
    def authorizer(self) -> Address:
        """The account whose authorization is checked: sgnr, else the sender."""
        if self.auth_address is not None and not self.auth_address.is_zero():
            return self.auth_address
        return self.transaction.sender

    def txid(self) -> str:
        return self.transaction.txid()

    def canonical_fields(self) -> Dict[str, Any]:
        return canonicalize({
            "sig": self.signature,
            "msig": self.multisig.to_fields() if self.multisig is not None else None,
            "lsig": self.logicsig.to_fields() if self.logicsig is not None else None,
            "sgnr": address_bytes(self.auth_address),
            "txn": self.transaction.canonical_fields(),
        })

    def encode(self) -> bytes:
        """Canonical msgpack encoding, as submitted to the network."""
        return encode_canonical(self.canonical_fields())

    def verify(self) -> bool:
        """
        Check the authorization against the authorizer address.

        Returns:
            True if the signature, multisig or logic signature is valid
        """
        authorizer = self.authorizer
        message = self.transaction.signing_bytes()
        if self.signature is not None:
            return verify_ed25519(authorizer.public_key, self.signature, message)
        if self.multisig is not None:
            return self.multisig.address() == authorizer and self.multisig.verify(message)
        return self.logicsig.verify(authorizer)

    def ensure_valid(self) -> SignedTransaction:
        """
        Raises:
            InvalidSignatureError: If verify() fails
        """
        if not self.verify():
            raise InvalidSignatureError(
                f"Authorization for {self.txid()} does not verify",
                details={"txid": self.txid(), "authorizer": str(self.authorizer)},
            )
        return self

    @classmethod
    def from_canonical_fields(cls, fields: Dict[str, Any]) -> SignedTransaction:
        """
        Rebuild from a decoded canonical map.

        Raises:
            ValidationError: On unknown keys or invalid contents
        """
        if not isinstance(fields, dict):
            raise FieldValidationError(f"Signed transaction must be a map, got {type(fields).__name__}")
        unknown = set(fields) - SIGNED_WIRE_KEYS
        if unknown:
            raise FieldValidationError(f"Unknown signed transaction fields: {sorted(unknown)}")
        if "txn" not in fields:
            raise FieldValidationError("Signed transaction has no txn")

        msig = fields.get("msig")
        lsig = fields.get("lsig")
        try:
            values = {
                "transaction": Transaction.from_canonical_fields(fields["txn"]),
                "signature": fields.get("sig"),
                "multisig": MultisigSignature.from_wire(msig) if msig is not None else None,
                "logicsig": LogicSig.from_wire(lsig) if lsig is not None else None,
                "auth_address": address_or_none(fields.get("sgnr")),
            }
        except (TypeError, AttributeError) as e:
            raise FieldValidationError(f"Malformed signed transaction: {e}", cause=e)
        return build_model(cls, **values)

    @classmethod
    def decode(cls, data: bytes, strict: bool = False) -> SignedTransaction:
        return cls.from_canonical_fields(decode_canonical(data, strict=strict))

    def __repr__(self) -> str:
        kind = "sig" if self.signature is not None else "msig" if self.multisig is not None else "lsig"
        return f"SignedTransaction(txid={self.txid()}, auth={kind})"


def encode_signed_transactions(stxns: Iterable[SignedTransaction]) -> bytes:
    """Concatenate signed encodings, the form algod accepts for a group."""
    return b"".join(s.encode() for s in stxns)


def decode_signed_transactions(data: bytes) -> List[SignedTransaction]:
    """Decode back-to-back signed transaction encodings."""
    return [SignedTransaction.from_canonical_fields(fields) for fields in iter_decode(data)]


__all__ = [
    "SIGNED_WIRE_KEYS",
    "SignedTransaction",
    "encode_signed_transactions",
    "decode_signed_transactions",
]
