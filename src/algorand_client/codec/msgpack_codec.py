"""
Canonical msgpack codec.

Implements the network's consensus encoding: msgpack maps with keys sorted in
byte-lexicographic order, every zero-valued entry omitted, integers in their
smallest representation, byte strings as msgpack ``bin`` and text as ``str``.
The encoding is self-delimiting, so independently encoded objects can be
concatenated and read back one after another.
"""

from __future__ import annotations
from typing import Any, Dict, Iterator, List

import msgpack

from ..runtime.errors import ErrorCode, MarshalError, UnmarshalError

MAX_UINT64 = 2**64 - 1


def is_empty(value: Any) -> bool:
    """
    Check whether a value is the zero value of its type.

    None, False, 0, "", b"", empty arrays and empty maps are all empty.
    """
    if value is None or value is False:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value == 0
    if isinstance(value, (str, bytes, bytearray, list, tuple, dict)):
        return len(value) == 0
    return False


def _is_uint_key(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool) and 0 <= key <= MAX_UINT64


def _sorted_keys(value: Dict[Any, Any]) -> List[Any]:
    """
    Order map keys canonically.

    Field maps use text keys, sorted by their UTF-8 bytes. Opaque maps nested
    in some payloads (state proof reveals) are keyed by uint64 and sorted
    numerically. A map may not mix the two.
    """
    if all(isinstance(key, str) for key in value):
        return sorted(value, key=lambda key: key.encode("utf-8"))
    if all(_is_uint_key(key) for key in value):
        return sorted(value)
    kinds = sorted({type(key).__name__ for key in value})
    raise MarshalError(
        f"Map keys must be all strings or all unsigned 64-bit integers, got {', '.join(kinds)}"
    )


def _check_keys(value: Any) -> None:
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str) and not _is_uint_key(key):
                raise UnmarshalError(f"Unsupported map key: {key!r}")
            _check_keys(item)
    elif isinstance(value, list):
        for item in value:
            _check_keys(item)


def canonicalize(value: Any) -> Any:
    """
    Normalize a value into canonical form.

    - Maps: text keys sorted byte-lexicographically, uint64 keys numerically,
      empty entries dropped
      (recursively, so a nested map that ends up empty is dropped too)
    - Arrays: elements canonicalized, order and empty elements preserved
    - Scalars: type and range checked

    Args:
        value: Field set or nested value

    Returns:
        Canonical copy of the value

    Raises:
        MarshalError: If a value has an unsupported type or range
    """
    if isinstance(value, dict):
        out: Dict[Any, Any] = {}
        for key in _sorted_keys(value):
            item = canonicalize(value[key])
            if is_empty(item):
                continue
            out[key] = item
        return out

    if isinstance(value, (list, tuple)):
        return [canonicalize(item) for item in value]

    if isinstance(value, bool) or value is None:
        return value

    if isinstance(value, int):
        if value < 0 or value > MAX_UINT64:
            raise MarshalError(
                f"Integer {value} is outside the unsigned 64-bit range",
                details={"value": value},
            )
        return value

    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)

    if isinstance(value, str):
        return value

    raise MarshalError(f"Unsupported value type for canonical encoding: {type(value).__name__}")


def encode_canonical(fields: Dict[str, Any]) -> bytes:
    """
    Encode a field set as canonical msgpack.

    Args:
        fields: Mapping of short field names to values

    Returns:
        Canonical encoding bytes

    Raises:
        MarshalError: If the field set cannot be encoded
    """
    if not isinstance(fields, dict):
        raise MarshalError(f"Canonical encoding requires a map, got {type(fields).__name__}")

    canonical = canonicalize(fields)
    try:
        return msgpack.packb(canonical, use_bin_type=True)
    except (TypeError, ValueError, OverflowError) as e:
        raise MarshalError(f"msgpack encoding failed: {e}", cause=e)


def decode_canonical(data: bytes, strict: bool = False) -> Dict[str, Any]:
    """
    Decode one canonical msgpack map.

    Args:
        data: Encoded bytes (exactly one object)
        strict: Reject input that is not already in canonical form

    Returns:
        Decoded map (byte strings stay bytes, text becomes str)

    Raises:
        UnmarshalError: If the data is not a single well-formed map
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise UnmarshalError(f"Expected bytes, got {type(data).__name__}")

    try:
        decoded = msgpack.unpackb(bytes(data), raw=False, strict_map_key=False)
    except (msgpack.exceptions.UnpackException, ValueError, TypeError) as e:
        raise UnmarshalError(f"msgpack decoding failed: {e}", cause=e)

    if not isinstance(decoded, dict):
        raise UnmarshalError(f"Expected a map, got {type(decoded).__name__}")
    _check_keys(decoded)

    if strict and encode_canonical(decoded) != bytes(data):
        raise UnmarshalError("Input is not in canonical form", code=ErrorCode.NON_CANONICAL)

    return decoded


def iter_decode(data: bytes) -> Iterator[Dict[str, Any]]:
    """
    Decode a concatenation of canonical msgpack maps.

    Args:
        data: Back-to-back encodings

    Yields:
        Each decoded map in order

    Raises:
        UnmarshalError: If an object is malformed or the data is truncated
    """
    unpacker = msgpack.Unpacker(raw=False, strict_map_key=False)
    unpacker.feed(bytes(data))
    try:
        for obj in unpacker:
            if not isinstance(obj, dict):
                raise UnmarshalError(f"Expected a map, got {type(obj).__name__}")
            _check_keys(obj)
            yield obj
    except (msgpack.exceptions.UnpackException, ValueError, TypeError) as e:
        raise UnmarshalError(f"msgpack decoding failed: {e}", cause=e)

    if unpacker.tell() != len(data):
        raise UnmarshalError(
            f"Trailing {len(data) - unpacker.tell()} bytes do not form a complete object"
        )


def decode_all(data: bytes) -> List[Dict[str, Any]]:
    """Decode every map in a concatenated buffer."""
    return list(iter_decode(data))


__all__ = [
    "MAX_UINT64",
    "is_empty",
    "canonicalize",
    "encode_canonical",
    "decode_canonical",
    "iter_decode",
    "decode_all",
]
