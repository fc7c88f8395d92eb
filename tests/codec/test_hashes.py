"""
Tests for domain separation prefixes.
"""

from algorand_client.codec.hashes import (
    BYTES_PREFIX, MULTISIG_ADDR_PREFIX, PROGRAM_PREFIX, TX_GROUP_PREFIX, TX_PREFIX,
    domain_bytes, domain_hash,
)
from algorand_client.crypto.hashing import sha512_256


def test_prefix_values():
    assert TX_PREFIX == b"TX"
    assert TX_GROUP_PREFIX == b"TG"
    assert PROGRAM_PREFIX == b"Program"
    assert MULTISIG_ADDR_PREFIX == b"MultisigAddr"
    assert BYTES_PREFIX == b"MX"


def test_domain_bytes_prepends_prefix():
    assert domain_bytes(TX_PREFIX, b"payload") == b"TXpayload"


def test_domain_hash_is_hash_of_prefixed_payload():
    assert domain_hash(TX_GROUP_PREFIX, b"abc") == sha512_256(b"TGabc")


def test_prefixes_separate_domains():
    assert domain_hash(TX_PREFIX, b"same") != domain_hash(BYTES_PREFIX, b"same")
