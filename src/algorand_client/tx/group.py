"""
Atomic transaction groups.

The group id commits to the ordered list of member ids. Each member is hashed
with its own group field cleared, so computing the id before or after
assignment gives the same result.
"""

from __future__ import annotations
from typing import List, Optional, Sequence
import logging

from ..codec.hashes import TX_GROUP_PREFIX, domain_hash
from ..codec.msgpack_codec import encode_canonical
from ..runtime.address import AddressLike, to_address
from ..runtime.errors import GroupSizeError
from .transaction import Transaction
from .types import MAX_GROUP_SIZE

logger = logging.getLogger(__name__)


def calculate_group_id(txns: Sequence[Transaction]) -> bytes:
    """
    Compute the group id of an ordered list of transactions.

    Args:
        txns: 1 to 16 transactions, in submission order

    Returns:
        32-byte group id

    Raises:
        GroupSizeError: If the group is empty or too large
    """
    if not 1 <= len(txns) <= MAX_GROUP_SIZE:
        raise GroupSizeError(
            f"Group must contain 1 to {MAX_GROUP_SIZE} transactions, got {len(txns)}",
            details={"size": len(txns)},
        )

    txids = [t.with_group(None).raw_txid() for t in txns]
    group_id = domain_hash(TX_GROUP_PREFIX, encode_canonical({"txlist": txids}))
    logger.debug(f"Computed group id over {len(txids)} transactions")
    return group_id


def assign_group_id(txns: Sequence[Transaction],
                    sender: Optional[AddressLike] = None) -> List[Transaction]:
    """
    Set the group id on every member of a group.

    Args:
        txns: The complete group, in order
        sender: If given, only the transactions from this sender are returned

    Returns:
        New transactions carrying the group id
    """
    group_id = calculate_group_id(txns)
    only = to_address(sender) if sender is not None else None
    return [
        t.with_group(group_id)
        for t in txns
        if only is None or t.sender == only
    ]


__all__ = ["calculate_group_id", "assign_group_id"]
