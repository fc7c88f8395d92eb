"""
Algorand transactions.

Key components:
- types.py: transaction kinds, enumerations and protocol limits
- header.py / payloads.py / transaction.py: the transaction model
- codec.py: wire encoding and decoding
- group.py: atomic group ids
- fees.py: suggested params and fee computation
- builders/: immutable builders for each kind
- signed.py: the signed transaction envelope
"""

from .types import OnComplete, StateProofType, TransactionType
from .fields import FieldValidationError
from .header import TransactionHeader
from .payloads import (
    ApplicationCallFields, AssetConfigFields, AssetFreezeFields, AssetParams,
    AssetTransferFields, BoxReference, KeyRegistrationFields, PaymentFields,
    StateProofFields, StateSchema,
)
from .transaction import Transaction
from .codec import decode_transaction, decode_transactions, encode_transaction, encode_transactions
from .group import assign_group_id, calculate_group_id
from .fees import SuggestedParams, apply_fee, compute_fee, estimate_size
from .signed import SignedTransaction, decode_signed_transactions, encode_signed_transactions
from .builders import (
    ApplicationCallBuilder, AssetConfigBuilder, AssetFreezeBuilder, AssetTransferBuilder,
    BuilderError, KeyRegistrationBuilder, PaymentBuilder, get_builder_for, list_transaction_types,
)

__all__ = [
    "TransactionType",
    "OnComplete",
    "StateProofType",
    "FieldValidationError",
    "TransactionHeader",
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
    "Transaction",
    "encode_transaction",
    "encode_transactions",
    "decode_transaction",
    "decode_transactions",
    "calculate_group_id",
    "assign_group_id",
    "SuggestedParams",
    "estimate_size",
    "compute_fee",
    "apply_fee",
    "SignedTransaction",
    "encode_signed_transactions",
    "decode_signed_transactions",
    "BuilderError",
    "PaymentBuilder",
    "KeyRegistrationBuilder",
    "AssetConfigBuilder",
    "AssetTransferBuilder",
    "AssetFreezeBuilder",
    "ApplicationCallBuilder",
    "get_builder_for",
    "list_transaction_types",
]
