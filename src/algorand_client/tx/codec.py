"""
Transaction wire codec.

Encodes transactions to canonical msgpack and decodes them back, validating
type codes and field ownership at the boundary.
"""

from __future__ import annotations
from typing import Iterable, List

from ..codec.msgpack_codec import encode_canonical, iter_decode
from .transaction import Transaction


def encode_transaction(txn: Transaction) -> bytes:
    """
    Encode a transaction to canonical bytes.

    Args:
        txn: Transaction to encode

    Returns:
        Canonical msgpack bytes
    """
    return txn.encode()


def encode_transactions(txns: Iterable[Transaction]) -> bytes:
    """Concatenate the canonical encodings of several transactions."""
    return b"".join(encode_canonical(t.canonical_fields()) for t in txns)


def decode_transaction(data: bytes, strict: bool = False) -> Transaction:
    """
    Decode canonical bytes into a Transaction.

    Args:
        data: Canonical msgpack of exactly one transaction
        strict: Also reject input that is not in canonical form

    Returns:
        Decoded transaction

    Raises:
        UnmarshalError: If the bytes are not a well-formed map
        ValidationError: If the map is not a valid transaction
    """
    return Transaction.decode(data, strict=strict)


def decode_transactions(data: bytes) -> List[Transaction]:
    """Decode back-to-back transaction encodings."""
    return [Transaction.from_canonical_fields(fields) for fields in iter_decode(data)]


__all__ = [
    "encode_transaction",
    "encode_transactions",
    "decode_transaction",
    "decode_transactions",
]
