"""
Logic signatures.

A logic signature authorizes a transaction with a program instead of a key.
Undelegated, the program is its own account (the program address). Delegated,
an account signs the program once, with a single key or as a multisig, and the
program then authorizes transactions on its behalf.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional, Tuple
import logging

from pydantic import ConfigDict, field_validator, model_validator

from ..codec.hashes import PROGRAM_PREFIX, domain_bytes, domain_hash
from ..crypto.ed25519 import PrivateKeyLike, to_private_key, verify_ed25519
from ..runtime.address import Address, AddressLike, to_address
from ..runtime.errors import ErrorCode, InvalidProgramError, InvalidSignatureError, ValidationError
from ..tx.fields import Signature, WireModel, build_model
from ..tx.types import LOGIC_SIG_MAX_SIZE
from .multisig import MultisigMetadata, MultisigSignature, MultisigSignatureSet

if TYPE_CHECKING:
    from ..tx.signed import SignedTransaction
    from ..tx.transaction import Transaction

logger = logging.getLogger(__name__)


def program_signing_bytes(program: bytes) -> bytes:
    """The bytes a delegator signs: ``b"Program"`` followed by the program."""
    return domain_bytes(PROGRAM_PREFIX, program)


def program_address(program: bytes) -> Address:
    """Address of the account controlled by an undelegated program."""
    return Address(domain_hash(PROGRAM_PREFIX, program))


class LogicSig(WireModel):
    """
    Logic signature (``lsig`` on the wire).

    Args are opaque to this library and passed to the program unchanged.
    """

    model_config = ConfigDict(frozen=True)

    program: bytes
    args: Tuple[bytes, ...] = ()
    signature: Optional[Signature] = None
    multisig: Optional[MultisigSignature] = None

    @field_validator("program")
    @classmethod
    def validate_program(cls, v: bytes) -> bytes:
        if not v:
            raise InvalidProgramError("Program must not be empty")
        return v

    @model_validator(mode="after")
    def validate_lsig(self) -> LogicSig:
        size = len(self.program) + sum(len(arg) for arg in self.args)
        if size > LOGIC_SIG_MAX_SIZE:
            raise InvalidProgramError(
                f"Program and args are {size} bytes, limit is {LOGIC_SIG_MAX_SIZE}",
                details={"size": size},
            )
        if self.signature is not None and self.multisig is not None:
            raise ValidationError(
                "Logic signature cannot carry both sig and msig",
                code=ErrorCode.INVALID_AUTHORIZATION,
            )
        return self

    @property
    def is_delegated(self) -> bool:
        return self.signature is not None or self.multisig is not None

    def signing_bytes(self) -> bytes:
        return program_signing_bytes(self.program)

    def address(self, delegator: Optional[AddressLike] = None) -> Address:
        """
        Address this logic signature authorizes.

        A single-key delegation does not reveal the delegator, so it has to be
        supplied.

        Raises:
            ValidationError: If the delegator is needed but missing
        """
        if self.multisig is not None:
            return self.multisig.address()
        if self.signature is not None:
            if delegator is None:
                raise ValidationError(
                    "Delegated logic signature needs the delegator address",
                    code=ErrorCode.INVALID_AUTHORIZATION,
                )
            return to_address(delegator)
        return program_address(self.program)

    def verify(self, address: AddressLike) -> bool:
        """
        Check that this logic signature may authorize for an address.

        Returns:
            True if the program (undelegated) or the delegation is valid for address
        """
        account = to_address(address)
        if self.signature is not None:
            return verify_ed25519(account.public_key, self.signature, self.signing_bytes())
        if self.multisig is not None:
            return self.multisig.address() == account and self.multisig.verify(self.signing_bytes())
        return program_address(self.program) == account

    def to_fields(self) -> Dict[str, Any]:
        return {
            "l": self.program,
            "arg": list(self.args),
            "sig": self.signature,
            "msig": self.multisig.to_fields() if self.multisig is not None else None,
        }

    @classmethod
    def from_wire(cls, fields: Any) -> LogicSig:
        """
        Rebuild from a decoded ``lsig`` map.

        Raises:
            ValidationError: On unknown keys or invalid contents
        """
        if not isinstance(fields, dict) or set(fields) - {"l", "arg", "sig", "msig"}:
            raise ValidationError(f"Invalid lsig map: {fields!r}", code=ErrorCode.INVALID_AUTHORIZATION)
        msig = fields.get("msig")
        return build_model(
            cls,
            program=fields.get("l", b""),
            args=fields.get("arg", ()),
            signature=fields.get("sig"),
            multisig=MultisigSignature.from_wire(msig) if msig is not None else None,
        )


def build_undelegated(program: bytes, args: Iterable[bytes] = ()) -> LogicSig:
    """Logic signature for the program's own account."""
    return build_model(LogicSig, program=program, args=tuple(args))


def build_delegated_single(program: bytes, private_key: PrivateKeyLike,
                           args: Iterable[bytes] = ()) -> LogicSig:
    """
    Delegate an account's authority to a program with its key.

    Args:
        program: Compiled program bytes
        private_key: Key of the delegating account
        args: Program arguments
    """
    key = to_private_key(private_key)
    signature = key.sign(program_signing_bytes(program))
    logger.debug(f"Delegated program {program_address(program)} for {key.address()}")
    return build_model(LogicSig, program=program, args=tuple(args), signature=signature)


def build_delegated_multi(program: bytes, metadata: MultisigMetadata,
                          signatures: MultisigSignatureSet,
                          args: Iterable[bytes] = ()) -> LogicSig:
    """
    Delegate a multisig account's authority to a program.

    Args:
        program: Compiled program bytes
        metadata: The delegating multisig account
        signatures: Member signatures over program_signing_bytes(program)
        args: Program arguments

    Raises:
        MultisigMismatchError: If the signatures are for another account
        ThresholdNotMetError: If too few of them are valid
    """
    if signatures.metadata != metadata:
        signatures = MultisigSignatureSet.empty(metadata).merge(signatures)
    msig = signatures.finalize(program_signing_bytes(program))
    return build_model(LogicSig, program=program, args=tuple(args), multisig=msig)


def sign_logicsig_transaction(txn: Transaction, lsig: LogicSig,
                              delegator: Optional[AddressLike] = None) -> SignedTransaction:
    """
    Authorize a transaction with a logic signature.

    A single-key delegation is assumed to be for the sender unless a
    delegator is given.

    Raises:
        InvalidSignatureError: If the logic signature cannot authorize for the
            resolved address
    """
    from ..tx.signed import SignedTransaction

    if lsig.signature is not None and delegator is None:
        delegator = txn.sender
    authorizer = lsig.address(delegator)
    if not lsig.verify(authorizer):
        raise InvalidSignatureError(
            f"Logic signature does not authorize {authorizer}",
            details={"address": str(authorizer)},
        )
    return SignedTransaction(
        transaction=txn,
        logicsig=lsig,
        auth_address=authorizer if authorizer != txn.sender else None,
    )


__all__ = [
    "LogicSig",
    "program_signing_bytes",
    "program_address",
    "build_undelegated",
    "build_delegated_single",
    "build_delegated_multi",
    "sign_logicsig_transaction",
]
