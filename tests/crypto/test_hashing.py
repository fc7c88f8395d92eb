"""
Tests for SHA-512/256 and base32 helpers.
"""

import pytest
from cryptography.hazmat.primitives import hashes

from algorand_client.crypto.hashing import (
    base32_decode_nopad, base32_nopad, checksum, digest_concat, sha512_256,
)


def _reference_sha512_256(data: bytes) -> bytes:
    digest = hashes.Hash(hashes.SHA512_256())
    digest.update(data)
    return digest.finalize()


def test_sha512_256_known_vector():
    expected = bytes.fromhex("53048e2681941ef99b2e29b76b4c7dabe4c2d0c634fc6d46e0e2f13107e7af23")
    assert sha512_256(b"abc") == expected


@pytest.mark.parametrize("data", [b"", b"TX", bytes(range(256)) * 3])
def test_sha512_256_matches_independent_implementation(data):
    assert sha512_256(data) == _reference_sha512_256(data)


def test_sha512_256_rejects_text():
    with pytest.raises(TypeError):
        sha512_256("abc")


def test_checksum_is_last_four_digest_bytes():
    assert checksum(b"key") == sha512_256(b"key")[-4:]


def test_digest_concat():
    assert digest_concat([b"a", b"b"]) == sha512_256(b"ab")


def test_base32_without_padding():
    assert base32_nopad(b"f") == "MY"
    assert base32_nopad(bytes(5)) == "AAAAAAAA"
    assert base32_decode_nopad("MY") == b"f"
