"""
Multisignature accounts and threshold signature aggregation.

A multisig account is an ordered list of member public keys and a threshold.
Signatures are collected per member slot in an immutable MultisigSignatureSet;
collections from different parties can be merged, and a set is finalized into
the wire MultisigSignature once enough slots hold valid signatures.
"""

from __future__ import annotations
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Sequence, Tuple
import logging

from pydantic import ConfigDict, model_validator

from ..codec.hashes import MULTISIG_ADDR_PREFIX, domain_hash
from ..crypto.ed25519 import PrivateKeyLike, to_private_key, verify_ed25519
from ..runtime.address import Address, AddressLike, to_address
from ..runtime.errors import (
    ErrorCode, MultisigIndexError, MultisigMismatchError, SignatureConflictError,
    ThresholdNotMetError, ValidationError,
)
from ..tx.fields import Key32, Signature, WireModel, build_model, validate_bytes
from ..tx.types import SIGNATURE_LENGTH

if TYPE_CHECKING:
    from ..tx.signed import SignedTransaction
    from ..tx.transaction import Transaction

logger = logging.getLogger(__name__)

MULTISIG_VERSION = 1
MAX_MULTISIG_KEYS = 255


class MultisigMetadataError(ValidationError):
    """Invalid version, threshold or member list."""

    default_code = ErrorCode.INVALID_MULTISIG_METADATA


class SlotStatus(str, Enum):
    """Verification status of one member slot."""

    EMPTY = "empty"
    VALID = "valid"
    INVALID = "invalid"


class MultisigState(str, Enum):
    """Collection progress of a signature set (by count, not verified)."""

    EMPTY = "empty"
    PARTIAL = "partial"
    COMPLETE = "complete"


class MultisigMetadata(WireModel):
    """
    Multisig account definition.

    The address commits to the version, the threshold and the ordered member
    keys, so reordering members yields a different account.
    """

    model_config = ConfigDict(frozen=True)

    version: int = MULTISIG_VERSION
    threshold: int
    public_keys: Tuple[Key32, ...]

    @model_validator(mode="after")
    def validate_metadata(self) -> MultisigMetadata:
        if self.version != MULTISIG_VERSION:
            raise MultisigMetadataError(f"Unsupported multisig version {self.version}")
        if not 1 <= len(self.public_keys) <= MAX_MULTISIG_KEYS:
            raise MultisigMetadataError(
                f"Multisig needs 1 to {MAX_MULTISIG_KEYS} members, got {len(self.public_keys)}"
            )
        if not 1 <= self.threshold <= len(self.public_keys):
            raise MultisigMetadataError(
                f"Threshold {self.threshold} must be between 1 and {len(self.public_keys)}"
            )
        return self

    @classmethod
    def from_addresses(cls, threshold: int, addresses: Iterable[AddressLike],
                       version: int = MULTISIG_VERSION) -> MultisigMetadata:
        """Build from member addresses (strings, raw keys or Address)."""
        keys = [to_address(a).public_key for a in addresses]
        return build_model(cls, version=version, threshold=threshold, public_keys=keys)

    def address(self) -> Address:
        """Multisig account address."""
        preimage = bytes([self.version, self.threshold]) + b"".join(self.public_keys)
        return Address(domain_hash(MULTISIG_ADDR_PREFIX, preimage))

    def indices_of(self, public_key: bytes) -> List[int]:
        """Every slot held by a key (a key may appear more than once)."""
        return [i for i, pk in enumerate(self.public_keys) if pk == public_key]


class MultisigSubsig(WireModel):
    """One member slot on the wire: key plus optional signature."""

    model_config = ConfigDict(frozen=True)

    public_key: Key32
    signature: Optional[Signature] = None

    def to_fields(self) -> Dict[str, Any]:
        return {"pk": self.public_key, "s": self.signature}


class MultisigSignature(WireModel):
    """
    Wire form of a multisig authorization (``msig``).

    Slots follow member order; unsigned slots carry only the public key.
    """

    model_config = ConfigDict(frozen=True)

    version: int = MULTISIG_VERSION
    threshold: int
    subsigs: Tuple[MultisigSubsig, ...]

    def metadata(self) -> MultisigMetadata:
        return build_model(
            MultisigMetadata,
            version=self.version,
            threshold=self.threshold,
            public_keys=[s.public_key for s in self.subsigs],
        )

    def address(self) -> Address:
        return self.metadata().address()

    @property
    def signature_count(self) -> int:
        return sum(1 for s in self.subsigs if s.signature is not None)

    def verify(self, message: bytes) -> bool:
        """
        Check the authorization over a message.

        Every present signature must be valid and there must be at least
        threshold of them.
        """
        try:
            self.metadata()
        except ValidationError:
            return False
        valid = 0
        for subsig in self.subsigs:
            if subsig.signature is None:
                continue
            if not verify_ed25519(subsig.public_key, subsig.signature, message):
                return False
            valid += 1
        return valid >= self.threshold

    def to_signature_set(self) -> MultisigSignatureSet:
        return MultisigSignatureSet(self.metadata(), [s.signature for s in self.subsigs])

    def to_fields(self) -> Dict[str, Any]:
        return {
            "subsig": [s.to_fields() for s in self.subsigs],
            "thr": self.threshold,
            "v": self.version,
        }

    @classmethod
    def from_wire(cls, fields: Any) -> MultisigSignature:
        """
        Rebuild from a decoded ``msig`` map.

        Raises:
            ValidationError: On unknown keys or malformed slots
        """
        if not isinstance(fields, dict) or set(fields) - {"subsig", "thr", "v"}:
            raise MultisigMetadataError(f"Invalid msig map: {fields!r}")
        subsigs = []
        for entry in fields.get("subsig", []):
            if not isinstance(entry, dict) or set(entry) - {"pk", "s"}:
                raise MultisigMetadataError(f"Invalid multisig slot: {entry!r}")
            subsigs.append(build_model(MultisigSubsig, public_key=entry.get("pk"), signature=entry.get("s")))
        return build_model(
            cls,
            version=fields.get("v", 0),
            threshold=fields.get("thr", 0),
            subsigs=subsigs,
        )


class MultisigSignatureSet:
    """
    Signatures collected for one multisig account over one message.

    Immutable: add_signature, sign and merge return new sets.
    """

    __slots__ = ("_metadata", "_signatures")

    def __init__(self, metadata: MultisigMetadata,
                 signatures: Optional[Sequence[Optional[bytes]]] = None):
        """
        Initialize signature set.

        Args:
            metadata: Multisig account definition
            signatures: Per-slot signatures (None for unsigned), member order
        """
        n = len(metadata.public_keys)
        if signatures is None:
            signatures = [None] * n
        if len(signatures) != n:
            raise MultisigMetadataError(f"Expected {n} slots, got {len(signatures)}")
        self._metadata = metadata
        self._signatures: Tuple[Optional[bytes], ...] = tuple(
            None if s is None else validate_bytes(s, "signature", SIGNATURE_LENGTH)
            for s in signatures
        )

    @classmethod
    def empty(cls, metadata: MultisigMetadata) -> MultisigSignatureSet:
        return cls(metadata)

    @property
    def metadata(self) -> MultisigMetadata:
        return self._metadata

    @property
    def signatures(self) -> Tuple[Optional[bytes], ...]:
        return self._signatures

    @property
    def signature_count(self) -> int:
        return sum(1 for s in self._signatures if s is not None)

    @property
    def state(self) -> MultisigState:
        count = self.signature_count
        if count == 0:
            return MultisigState.EMPTY
        if count < self._metadata.threshold:
            return MultisigState.PARTIAL
        return MultisigState.COMPLETE

    def add_signature(self, index: int, signature: bytes) -> MultisigSignatureSet:
        """
        Place a signature in a member slot.

        Re-adding the identical signature is a no-op.

        Raises:
            MultisigIndexError: If index is not a member slot
            SignatureConflictError: If the slot already holds a different signature
        """
        if not 0 <= index < len(self._signatures):
            raise MultisigIndexError(
                f"Slot {index} out of range for {len(self._signatures)} members",
                details={"index": index},
            )
        signature = validate_bytes(signature, "signature", SIGNATURE_LENGTH)
        current = self._signatures[index]
        if current == signature:
            return self
        if current is not None:
            raise SignatureConflictError(
                f"Slot {index} already holds a different signature",
                details={"index": index},
            )
        signatures = list(self._signatures)
        signatures[index] = signature
        logger.debug(f"Added signature to slot {index} ({self.signature_count + 1}/{self._metadata.threshold})")
        return MultisigSignatureSet(self._metadata, signatures)

    def sign(self, message: bytes, private_key: PrivateKeyLike) -> MultisigSignatureSet:
        """
        Sign the message into every slot held by the key.

        Raises:
            MultisigIndexError: If the key is not a member
        """
        key = to_private_key(private_key)
        public_key = key.public_key().to_bytes()
        indices = self._metadata.indices_of(public_key)
        if not indices:
            raise MultisigIndexError(f"Key {key.address()} is not a member of this multisig account")
        signature = key.sign(message)
        result = self
        for index in indices:
            result = result.add_signature(index, signature)
        return result

    def merge(self, other: MultisigSignatureSet) -> MultisigSignatureSet:
        """
        Combine two collections for the same account.

        Raises:
            MultisigMismatchError: If the accounts differ
            SignatureConflictError: If a slot holds different signatures
        """
        if self._metadata != other._metadata:
            raise MultisigMismatchError(
                "Cannot merge signatures of different multisig accounts",
                details={"left": str(self._metadata.address()), "right": str(other._metadata.address())},
            )
        merged: List[Optional[bytes]] = []
        for index, (mine, theirs) in enumerate(zip(self._signatures, other._signatures)):
            if mine is not None and theirs is not None and mine != theirs:
                raise SignatureConflictError(
                    f"Slot {index} holds different signatures",
                    details={"index": index},
                )
            merged.append(mine if mine is not None else theirs)
        return MultisigSignatureSet(self._metadata, merged)

    def slot_report(self, message: bytes) -> List[SlotStatus]:
        """Verify every slot against the message."""
        report = []
        for public_key, signature in zip(self._metadata.public_keys, self._signatures):
            if signature is None:
                report.append(SlotStatus.EMPTY)
            elif verify_ed25519(public_key, signature, message):
                report.append(SlotStatus.VALID)
            else:
                report.append(SlotStatus.INVALID)
        return report

    def finalize(self, message: bytes) -> MultisigSignature:
        """
        Produce the wire signature once the threshold is met.

        Invalid signatures are left out of the output (their slots are emitted
        empty) as long as enough valid ones remain.

        Raises:
            ThresholdNotMetError: If fewer than threshold signatures are valid;
                details carry the per-slot report
        """
        report = self.slot_report(message)
        valid = report.count(SlotStatus.VALID)
        invalid = [i for i, status in enumerate(report) if status is SlotStatus.INVALID]
        if invalid:
            logger.warning(f"Discarding invalid multisig signatures in slots {invalid}")
        if valid < self._metadata.threshold:
            raise ThresholdNotMetError(
                f"{valid} valid signatures, threshold is {self._metadata.threshold}",
                details={
                    "valid": valid,
                    "threshold": self._metadata.threshold,
                    "slots": [status.value for status in report],
                },
            )
        return self._to_wire(
            [s if status is SlotStatus.VALID else None for s, status in zip(self._signatures, report)]
        )

    def to_multisig_signature(self) -> MultisigSignature:
        """Wire form of the collection as it stands, without verification."""
        return self._to_wire(self._signatures)

    def _to_wire(self, signatures: Sequence[Optional[bytes]]) -> MultisigSignature:
        return MultisigSignature(
            version=self._metadata.version,
            threshold=self._metadata.threshold,
            subsigs=[
                MultisigSubsig(public_key=pk, signature=s)
                for pk, s in zip(self._metadata.public_keys, signatures)
            ],
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, MultisigSignatureSet):
            return NotImplemented
        return self._metadata == other._metadata and self._signatures == other._signatures

    def __hash__(self) -> int:
        return hash((self._metadata.address().public_key, self._signatures))

    def __repr__(self) -> str:
        return (f"MultisigSignatureSet(address='{self._metadata.address()}', "
                f"signed={self.signature_count}/{self._metadata.threshold})")


def sign_multisig_transaction(txn: Transaction, metadata: MultisigMetadata,
                              private_key: PrivateKeyLike) -> SignedTransaction:
    """
    Partially sign a transaction for a multisig account.

    The result carries the unverified collection so it can be passed on to the
    other members and merged with merge_multisig_transactions.
    """
    from ..tx.signed import SignedTransaction

    signatures = MultisigSignatureSet.empty(metadata).sign(txn.signing_bytes(), private_key)
    account = metadata.address()
    return SignedTransaction(
        transaction=txn,
        multisig=signatures.to_multisig_signature(),
        auth_address=account if account != txn.sender else None,
    )


def merge_multisig_transactions(signed_txns: Sequence[SignedTransaction]) -> SignedTransaction:
    """
    Merge partially signed copies of one multisig transaction.

    Raises:
        MultisigMismatchError: If the copies are of different transactions,
            different accounts, or not multisig-signed
        SignatureConflictError: If two copies disagree on a slot
    """
    from ..tx.signed import SignedTransaction

    if not signed_txns:
        raise MultisigMismatchError("Nothing to merge")
    first = signed_txns[0]
    txid = first.transaction.raw_txid()
    merged: Optional[MultisigSignatureSet] = None
    for stxn in signed_txns:
        if stxn.multisig is None:
            raise MultisigMismatchError("Only multisig-signed transactions can be merged")
        if stxn.transaction.raw_txid() != txid:
            raise MultisigMismatchError("Cannot merge signatures of different transactions")
        if stxn.auth_address != first.auth_address:
            raise MultisigMismatchError("Cannot merge transactions with different authorizers")
        current = stxn.multisig.to_signature_set()
        merged = current if merged is None else merged.merge(current)

    logger.debug(f"Merged {len(signed_txns)} multisig copies ({merged.signature_count} signatures)")
    return SignedTransaction(
        transaction=first.transaction,
        multisig=merged.to_multisig_signature(),
        auth_address=first.auth_address,
    )


def finalize_multisig_transaction(txn: Transaction,
                                  signatures: MultisigSignatureSet) -> SignedTransaction:
    """Verify and finalize a collected set into a submittable transaction."""
    from ..tx.signed import SignedTransaction

    account = signatures.metadata.address()
    return SignedTransaction(
        transaction=txn,
        multisig=signatures.finalize(txn.signing_bytes()),
        auth_address=account if account != txn.sender else None,
    )


__all__ = [
    "MULTISIG_VERSION",
    "MultisigMetadataError",
    "SlotStatus",
    "MultisigState",
    "MultisigMetadata",
    "MultisigSubsig",
    "MultisigSignature",
    "MultisigSignatureSet",
    "sign_multisig_transaction",
    "merge_multisig_transactions",
    "finalize_multisig_transaction",
]
