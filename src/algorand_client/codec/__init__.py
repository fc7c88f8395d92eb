"""
Algorand Canonical Codec Module

Provides the consensus-critical canonical msgpack encoding and the
domain-separated hashing built on top of it.

Key components:
- msgpack_codec.py: canonical field-set normalization, encoding and decoding
- hashes.py: domain prefixes and domain-separated SHA-512/256
"""

from .hashes import (
    BYTES_PREFIX, MULTISIG_ADDR_PREFIX, PROGRAM_PREFIX, TX_GROUP_PREFIX, TX_PREFIX,
    domain_bytes, domain_hash,
)
from .msgpack_codec import (
    MAX_UINT64, canonicalize, decode_all, decode_canonical, encode_canonical,
    is_empty, iter_decode,
)

__all__ = [
    "TX_PREFIX",
    "TX_GROUP_PREFIX",
    "PROGRAM_PREFIX",
    "MULTISIG_ADDR_PREFIX",
    "BYTES_PREFIX",
    "domain_bytes",
    "domain_hash",
    "MAX_UINT64",
    "canonicalize",
    "encode_canonical",
    "decode_canonical",
    "iter_decode",
    "decode_all",
    "is_empty",
]
