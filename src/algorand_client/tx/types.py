"""
Transaction enumerations and protocol limits.

Enumerations are closed sets with an explicit wire representation; decoding
validates the wire value instead of trusting it.
"""

from __future__ import annotations
from enum import Enum, IntEnum

from ..runtime.errors import ErrorCode, ValidationError


class TransactionType(str, Enum):
    """Transaction kinds and their wire codes."""

    PAYMENT = "pay"
    KEY_REGISTRATION = "keyreg"
    ASSET_CONFIG = "acfg"
    ASSET_TRANSFER = "axfer"
    ASSET_FREEZE = "afrz"
    APPLICATION_CALL = "appl"
    STATE_PROOF = "stpf"

    @classmethod
    def from_wire(cls, code: str) -> TransactionType:
        """
        Map a wire code back to its enum member.

        Raises:
            ValidationError: If the code is not a known transaction type
        """
        try:
            return cls(code)
        except ValueError:
            raise ValidationError(
                f"Unknown transaction type: {code!r}",
                code=ErrorCode.INVALID_TRANSACTION,
            )


class OnComplete(IntEnum):
    """What an application call does after the approval program runs."""

    NO_OP = 0
    OPT_IN = 1
    CLOSE_OUT = 2
    CLEAR_STATE = 3
    UPDATE_APPLICATION = 4
    DELETE_APPLICATION = 5

    @classmethod
    def from_wire(cls, code: int) -> OnComplete:
        """
        Map a wire code back to its enum member.

        Raises:
            ValidationError: If the code is out of range
        """
        try:
            return cls(code)
        except ValueError:
            raise ValidationError(
                f"Unknown on-completion code: {code!r}",
                code=ErrorCode.INVALID_TRANSACTION,
            )


class StateProofType(IntEnum):
    """State proof kinds."""

    BASIC = 0

    @classmethod
    def from_wire(cls, code: int) -> StateProofType:
        try:
            return cls(code)
        except ValueError:
            raise ValidationError(
                f"Unknown state proof type: {code!r}",
                code=ErrorCode.INVALID_TRANSACTION,
            )


# Byte lengths
HASH_LENGTH = 32
LEASE_LENGTH = 32
METADATA_HASH_LENGTH = 32
VOTE_KEY_LENGTH = 32
SELECTION_KEY_LENGTH = 32
STATE_PROOF_KEY_LENGTH = 64
SIGNATURE_LENGTH = 64

# Protocol limits
MIN_TXN_FEE = 1000
NOTE_MAX_LENGTH = 1024
MAX_GROUP_SIZE = 16
MAX_ASSET_DECIMALS = 19
MAX_UNIT_NAME_LENGTH = 8
MAX_ASSET_NAME_LENGTH = 32
MAX_ASSET_URL_LENGTH = 96
MAX_APP_ARGS = 16
MAX_APP_ACCOUNTS = 4
MAX_FOREIGN_APPS = 8
MAX_FOREIGN_ASSETS = 8
MAX_BOX_REFERENCES = 8
MAX_APP_TOTAL_REFERENCES = 8
MAX_EXTRA_PAGES = 3
LOGIC_SIG_MAX_SIZE = 1000


__all__ = [
    "TransactionType",
    "OnComplete",
    "StateProofType",
    "HASH_LENGTH",
    "LEASE_LENGTH",
    "METADATA_HASH_LENGTH",
    "VOTE_KEY_LENGTH",
    "SELECTION_KEY_LENGTH",
    "STATE_PROOF_KEY_LENGTH",
    "SIGNATURE_LENGTH",
    "MIN_TXN_FEE",
    "NOTE_MAX_LENGTH",
    "MAX_GROUP_SIZE",
    "MAX_ASSET_DECIMALS",
    "MAX_UNIT_NAME_LENGTH",
    "MAX_ASSET_NAME_LENGTH",
    "MAX_ASSET_URL_LENGTH",
    "MAX_APP_ARGS",
    "MAX_APP_ACCOUNTS",
    "MAX_FOREIGN_APPS",
    "MAX_FOREIGN_ASSETS",
    "MAX_BOX_REFERENCES",
    "MAX_APP_TOTAL_REFERENCES",
    "MAX_EXTRA_PAGES",
    "LOGIC_SIG_MAX_SIZE",
]
