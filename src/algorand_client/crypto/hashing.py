"""
Hash utilities for the Algorand protocol.

Every content address on the network (addresses, transaction ids, group ids,
program hashes) is a SHA-512/256 digest.
"""

import base64
from typing import List

from Crypto.Hash import SHA512

DIGEST_LENGTH = 32
CHECKSUM_LENGTH = 4


def sha512_256(data: bytes) -> bytes:
    """
    Compute the SHA-512/256 digest of data.

    Args:
        data: Data to hash

    Returns:
        32-byte digest
    """
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError(f"data must be bytes, got {type(data).__name__}")

    return SHA512.new(bytes(data), truncate="256").digest()


def checksum(data: bytes) -> bytes:
    """Return the last 4 bytes of the SHA-512/256 digest of data."""
    return sha512_256(data)[-CHECKSUM_LENGTH:]


def digest_concat(parts: List[bytes]) -> bytes:
    """
    Hash the concatenation of several byte strings.

    Args:
        parts: Byte strings, hashed in order

    Returns:
        SHA-512/256(parts[0] + parts[1] + ...)
    """
    return sha512_256(b"".join(parts))


def base32_nopad(data: bytes) -> str:
    """Base32-encode data without the trailing '=' padding."""
    return base64.b32encode(data).decode("ascii").rstrip("=")


def base32_decode_nopad(text: str) -> bytes:
    """
    Decode an unpadded base32 string.

    Raises:
        binascii.Error: If the string is not valid base32
    """
    padding = (-len(text)) % 8
    return base64.b32decode(text + "=" * padding)


__all__ = [
    "DIGEST_LENGTH",
    "CHECKSUM_LENGTH",
    "sha512_256",
    "checksum",
    "digest_concat",
    "base32_nopad",
    "base32_decode_nopad",
]
