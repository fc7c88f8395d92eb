"""
Transaction fee calculation and suggested network parameters.

Fees are either flat or per byte of the signed transaction. The signed size is
estimated with a placeholder signature, since the fee has to be known before
signing.
"""

from __future__ import annotations
from typing import Any, Dict, Optional, Union

from pydantic import ConfigDict, model_validator

from ..codec.msgpack_codec import encode_canonical
from ..runtime.errors import ErrorCode
from .fields import Digest, FieldValidationError, UInt64, WireModel
from .transaction import Transaction
from .types import MIN_TXN_FEE

PLACEHOLDER_SIGNATURE = bytes(64)


class SuggestedParams(WireModel):
    """
    Network parameters for building a transaction.

    ``fee`` is per byte unless ``flat_fee`` is set, in which case it is the
    total fee.
    """

    model_config = ConfigDict(frozen=True)

    fee: UInt64 = 0
    flat_fee: bool = False
    min_fee: UInt64 = MIN_TXN_FEE
    first_valid: UInt64
    last_valid: UInt64
    genesis_id: Optional[str] = None
    genesis_hash: Digest
    consensus_version: Optional[str] = None

    @model_validator(mode="after")
    def validate_round_range(self) -> SuggestedParams:
        if self.first_valid > self.last_valid:
            raise FieldValidationError(
                f"first_valid ({self.first_valid}) must not exceed last_valid ({self.last_valid})",
                code=ErrorCode.INVALID_ROUND_RANGE,
            )
        return self

    def header_fields(self) -> Dict[str, Any]:
        """Header constructor arguments carried by these params (fee excluded)."""
        return {
            "first_valid": self.first_valid,
            "last_valid": self.last_valid,
            "genesis_id": self.genesis_id,
            "genesis_hash": self.genesis_hash,
        }

    @classmethod
    def from_algod(cls, data: Dict[str, Any], validity_window: int = 1000) -> SuggestedParams:
        """
        Build from an algod ``/v2/transactions/params`` response.

        Args:
            data: Decoded JSON response
            validity_window: Rounds the transaction stays valid for
        """
        last_round = data["last-round"]
        return cls(
            fee=data.get("fee", 0),
            min_fee=data.get("min-fee", MIN_TXN_FEE),
            first_valid=last_round,
            last_valid=last_round + validity_window,
            genesis_id=data.get("genesis-id"),
            genesis_hash=data["genesis-hash"],
            consensus_version=data.get("consensus-version"),
        )


def estimate_size(txn: Transaction) -> int:
    """
    Estimate the signed size of a transaction in bytes.

    Args:
        txn: Unsigned transaction

    Returns:
        Length of the signed encoding with a placeholder signature
    """
    return len(encode_canonical({"sig": PLACEHOLDER_SIGNATURE, "txn": txn.canonical_fields()}))


def compute_fee(txn_or_size: Union[Transaction, int], params: SuggestedParams) -> int:
    """
    Compute the fee for a transaction.

    Args:
        txn_or_size: Transaction, or its estimated signed size
        params: Suggested params

    Returns:
        Flat fee as given, otherwise fee per byte times size, never below min_fee
    """
    if params.flat_fee:
        return params.fee

    if isinstance(txn_or_size, int):
        size = txn_or_size
    else:
        # the final fee key is part of the signed encoding
        size = estimate_size(txn_or_size.with_fee(max(params.fee, params.min_fee)))
    return max(params.fee * size, params.min_fee)


def apply_fee(txn: Transaction, params: SuggestedParams) -> Transaction:
    """Copy of the transaction with its fee computed from params."""
    return txn.with_fee(compute_fee(txn, params))


__all__ = [
    "PLACEHOLDER_SIGNATURE",
    "SuggestedParams",
    "estimate_size",
    "compute_fee",
    "apply_fee",
]
