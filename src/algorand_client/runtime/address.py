"""
Address Pydantic custom type for Algorand checksummed addresses.

An address is the 32-byte public key followed by the last 4 bytes of its
SHA-512/256 digest, base32-encoded without padding (58 characters).
"""

import binascii
from typing import Any, Union

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from ..crypto.hashing import (
    CHECKSUM_LENGTH, base32_decode_nopad, base32_nopad, checksum,
)
from .errors import ChecksumError, InvalidAddressError

PUBLIC_KEY_LENGTH = 32
ADDRESS_LENGTH = 58


def encode_address(public_key: bytes) -> str:
    """
    Encode a 32-byte public key as a checksummed address string.

    Raises:
        InvalidAddressError: If the key is not 32 bytes
    """
    if not isinstance(public_key, (bytes, bytearray)) or len(public_key) != PUBLIC_KEY_LENGTH:
        length = len(public_key) if isinstance(public_key, (bytes, bytearray)) else type(public_key).__name__
        raise InvalidAddressError(
            f"Public key must be {PUBLIC_KEY_LENGTH} bytes, got {length}"
        )
    public_key = bytes(public_key)
    return base32_nopad(public_key + checksum(public_key))


def decode_address(address: str) -> bytes:
    """
    Decode an address string into its 32-byte public key.

    Raises:
        InvalidAddressError: If the string is not a well-formed address
        ChecksumError: If the embedded checksum does not match the key
    """
    if not isinstance(address, str):
        raise InvalidAddressError(f"Address must be a string, got {type(address).__name__}")
    if len(address) != ADDRESS_LENGTH:
        raise InvalidAddressError(
            f"Address must be {ADDRESS_LENGTH} characters, got {len(address)}"
        )

    try:
        raw = base32_decode_nopad(address)
    except (binascii.Error, ValueError) as e:
        raise InvalidAddressError(f"Address is not valid base32: {address}", cause=e)

    public_key, expected = raw[:PUBLIC_KEY_LENGTH], raw[PUBLIC_KEY_LENGTH:]
    if len(expected) != CHECKSUM_LENGTH:
        raise InvalidAddressError(f"Address has wrong decoded length: {len(raw)}")
    if checksum(public_key) != expected:
        raise ChecksumError(
            "Address checksum mismatch",
            details={"address": address},
        )
    # the last character carries 2 padding bits that must be zero
    if encode_address(public_key) != address:
        raise ChecksumError(
            "Address is not in canonical form",
            details={"address": address},
        )
    return public_key


def is_valid_address(address: Any) -> bool:
    """Check whether a string is a well-formed address with a valid checksum."""
    try:
        decode_address(address)
        return True
    except (InvalidAddressError, ChecksumError):
        return False


class Address:
    """Custom Pydantic type for Algorand addresses."""

    __slots__ = ("_public_key",)

    def __init__(self, public_key: bytes):
        if not isinstance(public_key, (bytes, bytearray)) or len(public_key) != PUBLIC_KEY_LENGTH:
            raise InvalidAddressError(f"Address public key must be {PUBLIC_KEY_LENGTH} bytes")
        self._public_key = bytes(public_key)

    @classmethod
    def from_string(cls, address: str) -> "Address":
        """Parse and checksum-verify an address string."""
        return cls(decode_address(address))

    @classmethod
    def zero(cls) -> "Address":
        """The all-zero address, used where an account is absent."""
        return cls(bytes(PUBLIC_KEY_LENGTH))

    @property
    def public_key(self) -> bytes:
        """The raw 32-byte public key."""
        return self._public_key

    def is_zero(self) -> bool:
        return self._public_key == bytes(PUBLIC_KEY_LENGTH)

    def __str__(self) -> str:
        return encode_address(self._public_key)

    def __repr__(self) -> str:
        return f"Address('{self}')"

    def __bytes__(self) -> bytes:
        return self._public_key

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Address):
            return self._public_key == other._public_key
        elif isinstance(other, str):
            return str(self) == other
        return False

    def __hash__(self) -> int:
        return hash(self._public_key)

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        """Return a Pydantic CoreSchema that validates the Address."""
        return core_schema.no_info_before_validator_function(
            cls._validate,
            core_schema.is_instance_schema(cls),
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    @classmethod
    def _validate(cls, value: Any, _info=None) -> "Address":
        """Validate and convert the input to an Address."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_string(value)
        if isinstance(value, (bytes, bytearray)):
            return cls(bytes(value))
        raise InvalidAddressError(f"Invalid address: {value!r}")


AddressLike = Union[Address, str, bytes]


def to_address(value: AddressLike) -> Address:
    """Coerce an address string, raw public key or Address into an Address."""
    return Address._validate(value)


ZERO_ADDRESS = encode_address(bytes(PUBLIC_KEY_LENGTH))


__all__ = [
    "PUBLIC_KEY_LENGTH",
    "ADDRESS_LENGTH",
    "ZERO_ADDRESS",
    "Address",
    "AddressLike",
    "encode_address",
    "decode_address",
    "is_valid_address",
    "to_address",
]
