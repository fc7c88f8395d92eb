"""
Transaction field validation for the Algorand protocol.

Provides the annotated pydantic types used by the transaction models, plus
the helpers that turn model values into canonical wire values. Validation
failures raise FieldValidationError, which pydantic lets through unchanged,
so callers always see a typed error.
"""

from __future__ import annotations
from typing import Annotated, Any, Callable, Optional, Type, TypeVar
import base64
import binascii

import pydantic
from pydantic import BaseModel, BeforeValidator

from ..codec.msgpack_codec import MAX_UINT64
from ..runtime.address import Address
from ..runtime.errors import ErrorCode, ValidationError
from .types import HASH_LENGTH, SIGNATURE_LENGTH, STATE_PROOF_KEY_LENGTH

ModelT = TypeVar("ModelT", bound=BaseModel)


class FieldValidationError(ValidationError):
    """Field validation specific errors."""

    default_code = ErrorCode.INVALID_TRANSACTION


def validate_uint64(value: Any, name: str = "value") -> int:
    """
    Validate an unsigned 64-bit integer.

    Raises:
        FieldValidationError: If value is not an int in [0, 2**64 - 1]
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise FieldValidationError(f"Field {name} must be an integer, got {type(value).__name__}")
    if value < 0 or value > MAX_UINT64:
        raise FieldValidationError(f"Field {name} must be an unsigned 64-bit integer, got {value}")
    return value


def validate_bytes(value: Any, name: str = "value", length: Optional[int] = None,
                   max_length: Optional[int] = None, allow_base64: bool = False) -> bytes:
    """
    Validate a byte string, optionally of fixed or bounded length.

    Args:
        value: bytes, or a base64 string when allow_base64 is set
        name: Field name for error messages
        length: Exact length required
        max_length: Maximum length allowed
        allow_base64: Accept base64 text

    Raises:
        FieldValidationError: On wrong type or length
    """
    if isinstance(value, str) and allow_base64:
        try:
            value = base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            raise FieldValidationError(f"Field {name} is not valid base64", cause=e)
    if not isinstance(value, (bytes, bytearray)):
        raise FieldValidationError(f"Field {name} must be bytes, got {type(value).__name__}")
    value = bytes(value)
    if length is not None and len(value) != length:
        raise FieldValidationError(
            f"Field {name} must be {length} bytes, got {len(value)}",
            code=ErrorCode.INVALID_FIELD_LENGTH,
        )
    if max_length is not None and len(value) > max_length:
        raise FieldValidationError(
            f"Field {name} must be at most {max_length} bytes, got {len(value)}",
            code=ErrorCode.INVALID_FIELD_LENGTH,
        )
    return value


def validate_text(value: Any, name: str = "value", max_length: Optional[int] = None) -> str:
    """Validate a string whose UTF-8 encoding is at most max_length bytes."""
    if not isinstance(value, str):
        raise FieldValidationError(f"Field {name} must be a string, got {type(value).__name__}")
    if max_length is not None and len(value.encode("utf-8")) > max_length:
        raise FieldValidationError(
            f"Field {name} must be at most {max_length} bytes",
            code=ErrorCode.INVALID_FIELD_LENGTH,
        )
    return value


def _before(func: Callable[[Any], Any]) -> BeforeValidator:
    def wrapper(value: Any) -> Any:
        if value is None:
            return None
        return func(value)
    return BeforeValidator(wrapper)


UInt64 = Annotated[int, _before(validate_uint64)]
Digest = Annotated[bytes, _before(lambda v: validate_bytes(v, "digest", HASH_LENGTH, allow_base64=True))]
Key32 = Annotated[bytes, _before(lambda v: validate_bytes(v, "key", 32, allow_base64=True))]
Signature = Annotated[bytes, _before(lambda v: validate_bytes(v, "signature", SIGNATURE_LENGTH, allow_base64=True))]
StateProofKey = Annotated[
    bytes, _before(lambda v: validate_bytes(v, "state proof key", STATE_PROOF_KEY_LENGTH, allow_base64=True))
]


def address_bytes(address: Optional[Address]) -> Optional[bytes]:
    """Wire value of an address field; the zero address is the same as absent."""
    if address is None or address.is_zero():
        return None
    return address.public_key


def digest_bytes(value: Optional[bytes]) -> Optional[bytes]:
    """Wire value of a fixed-size digest field; all-zero is the same as absent."""
    if value is None or value == bytes(len(value)):
        return None
    return value


def address_or_none(value: Optional[bytes]) -> Optional[Address]:
    """Decode a raw 32-byte wire key into an Address."""
    if value is None:
        return None
    return Address(validate_bytes(value, "address", 32))


class WireModel(BaseModel):
    """
    Base for the protocol models.

    pydantic's own structural failures (missing required fields, unknown
    keys, wrong container types) are re-raised as FieldValidationError so
    direct construction reports the same typed errors as decoding.
    """

    def __init__(self, /, **data: Any) -> None:
        try:
            super().__init__(**data)
        except pydantic.ValidationError as e:
            raise FieldValidationError(f"Invalid {type(self).__name__}: {e}", cause=e)


def build_model(cls: Type[ModelT], **values: Any) -> ModelT:
    """
    Construct a pydantic model, reporting structural failures as FieldValidationError.

    Semantic checks already raise typed errors; this covers what pydantic itself
    rejects (missing required fields, wrong container types).
    """
    try:
        return cls(**values)
    except pydantic.ValidationError as e:
        raise FieldValidationError(f"Invalid {cls.__name__}: {e}", cause=e)


__all__ = [
    "FieldValidationError",
    "validate_uint64",
    "validate_bytes",
    "validate_text",
    "UInt64",
    "Digest",
    "Key32",
    "StateProofKey",
    "Signature",
    "address_bytes",
    "digest_bytes",
    "address_or_none",
    "WireModel",
    "build_model",
]
