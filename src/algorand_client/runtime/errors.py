"""
Algorand Client Error Model

This module provides the error handling framework for the Algorand Python client.
Every failure raised by the encoding and signing core is local, synchronous and
carries an ErrorCode discriminant so callers can decide whether to fix their
input, collect more signatures, or abort.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes grouped by failure family."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2

    # Encoding errors (100-199)
    ENCODING_ERROR = 100
    MARSHAL_ERROR = 101
    UNMARSHAL_ERROR = 102
    NON_CANONICAL = 103

    # Network errors (200-299)
    NETWORK_ERROR = 200
    CONNECTION_FAILED = 201
    TIMEOUT = 202
    HTTP_ERROR = 203

    # Verification errors (300-399)
    VERIFICATION_FAILED = 300
    INVALID_CHECKSUM = 301
    INVALID_SIGNATURE = 302

    # Malformed input (400-499)
    INVALID_INPUT = 400
    INVALID_ADDRESS = 401
    INVALID_TRANSACTION = 402
    INVALID_FIELD_LENGTH = 403
    INVALID_ROUND_RANGE = 404
    INVALID_MULTISIG_INDEX = 405
    INVALID_MULTISIG_METADATA = 406
    INVALID_GROUP_SIZE = 407
    INVALID_PROGRAM = 408
    INVALID_AUTHORIZATION = 409

    # Policy violations (500-599)
    POLICY_VIOLATION = 500
    THRESHOLD_NOT_MET = 501
    MULTISIG_MISMATCH = 502
    SIGNATURE_CONFLICT = 503


class AlgorandError(Exception):
    """
    Base class for all client errors.

    Provides structured error information: a message, a code, optional
    details and the underlying cause.
    """

    default_code = ErrorCode.UNKNOWN

    def __init__(self, message: str, code: Optional[ErrorCode] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize an error.

        Args:
            message: Error message
            code: Error code (defaults to the class default)
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AlgorandError:
        """Create error from dictionary representation."""
        try:
            code = ErrorCode(data.get("code", ErrorCode.UNKNOWN))
        except ValueError:
            code = ErrorCode.UNKNOWN
        message = data.get("message", "Unknown error")
        details = data.get("details")
        return cls(message, code, details)


class EncodingError(AlgorandError):
    """Canonical encoding/decoding errors."""

    default_code = ErrorCode.ENCODING_ERROR


class MarshalError(EncodingError):
    """A value cannot be represented in the canonical encoding."""

    default_code = ErrorCode.MARSHAL_ERROR


class UnmarshalError(EncodingError):
    """Bytes could not be decoded into the expected structure."""

    default_code = ErrorCode.UNMARSHAL_ERROR


class ValidationError(AlgorandError):
    """Malformed input: bad field combination, wrong length, out of range."""

    default_code = ErrorCode.INVALID_INPUT


class InvalidAddressError(ValidationError):
    """Address string or public key has the wrong shape."""

    default_code = ErrorCode.INVALID_ADDRESS


class MultisigIndexError(ValidationError):
    """Member index (or key) does not belong to the multisig group."""

    default_code = ErrorCode.INVALID_MULTISIG_INDEX


class GroupSizeError(ValidationError):
    """Transaction group is empty or too large."""

    default_code = ErrorCode.INVALID_GROUP_SIZE


class InvalidProgramError(ValidationError):
    """Logic signature program or arguments are not acceptable."""

    default_code = ErrorCode.INVALID_PROGRAM


class VerificationError(AlgorandError):
    """Cryptographic verification failed (tampering, corruption or wrong key)."""

    default_code = ErrorCode.VERIFICATION_FAILED


class ChecksumError(VerificationError):
    """Address checksum does not match its public key."""

    default_code = ErrorCode.INVALID_CHECKSUM


class InvalidSignatureError(VerificationError):
    """Signature does not verify."""

    default_code = ErrorCode.INVALID_SIGNATURE


class PolicyError(AlgorandError):
    """Group or threshold inconsistency; recoverable by the caller."""

    default_code = ErrorCode.POLICY_VIOLATION


class ThresholdNotMetError(PolicyError):
    """Not enough valid signatures to satisfy the multisig threshold."""

    default_code = ErrorCode.THRESHOLD_NOT_MET


class MultisigMismatchError(PolicyError):
    """Two signature sets belong to different multisig groups."""

    default_code = ErrorCode.MULTISIG_MISMATCH


class SignatureConflictError(PolicyError):
    """A slot already holds a different signature."""

    default_code = ErrorCode.SIGNATURE_CONFLICT


class NetworkError(AlgorandError):
    """Network-related errors."""

    default_code = ErrorCode.NETWORK_ERROR


class AlgodHTTPError(NetworkError):
    """algod answered with a non-success HTTP status."""

    default_code = ErrorCode.HTTP_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.HTTP_ERROR, details, cause)
        self.status_code = status_code


def error_from_response(status_code: int, body: Any) -> Optional[AlgorandError]:
    """
    Create an appropriate error from an algod response.

    Args:
        status_code: HTTP status code
        body: Decoded JSON body (or raw text)

    Returns:
        Appropriate error instance or None if no error
    """
    if 200 <= status_code < 300:
        return None

    if isinstance(body, dict):
        message = body.get("message", "Unknown error")
        details = body.get("data")
        if not isinstance(details, dict):
            details = {"data": details} if details is not None else None
    else:
        message = str(body) if body else f"HTTP {status_code}"
        details = None

    if status_code in (401, 403):
        return AlgodHTTPError(f"Unauthorized: {message}", status_code, details)
    if status_code == 408 or status_code == 504:
        error = AlgodHTTPError(message, status_code, details)
        error.code = ErrorCode.TIMEOUT
        return error
    return AlgodHTTPError(message, status_code, details)


__all__ = [
    "ErrorCode",
    "AlgorandError",
    "EncodingError",
    "MarshalError",
    "UnmarshalError",
    "ValidationError",
    "InvalidAddressError",
    "MultisigIndexError",
    "GroupSizeError",
    "InvalidProgramError",
    "VerificationError",
    "ChecksumError",
    "InvalidSignatureError",
    "PolicyError",
    "ThresholdNotMetError",
    "MultisigMismatchError",
    "SignatureConflictError",
    "NetworkError",
    "AlgodHTTPError",
    "error_from_response",
]
