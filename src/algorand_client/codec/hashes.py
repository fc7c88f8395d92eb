"""
Domain-separated hashing.

Every signed or hashed structure is prefixed with a short tag so the same bytes
can never be reinterpreted as a different object type.
"""

from ..crypto.hashing import sha512_256

TX_PREFIX = b"TX"
"""Transactions: signing bytes and transaction ids."""
TX_GROUP_PREFIX = b"TG"
"""Transaction groups: group id."""
PROGRAM_PREFIX = b"Program"
"""Logic signature programs: program address and delegation signatures."""
MULTISIG_ADDR_PREFIX = b"MultisigAddr"
"""Multisig group address derivation."""
BYTES_PREFIX = b"MX"
"""Arbitrary data signed with an account key."""


def domain_bytes(prefix: bytes, payload: bytes) -> bytes:
    """
    Build the buffer that is hashed or signed for a tagged payload.

    Args:
        prefix: Domain tag
        payload: Canonical payload bytes

    Returns:
        prefix || payload
    """
    return prefix + payload


def domain_hash(prefix: bytes, payload: bytes) -> bytes:
    """SHA-512/256 of prefix || payload."""
    return sha512_256(domain_bytes(prefix, payload))


__all__ = [
    "TX_PREFIX",
    "TX_GROUP_PREFIX",
    "PROGRAM_PREFIX",
    "MULTISIG_ADDR_PREFIX",
    "BYTES_PREFIX",
    "domain_bytes",
    "domain_hash",
]
