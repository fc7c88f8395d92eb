"""
Runtime support: error model and the address type.
"""

from .errors import *
from .address import (
    Address, AddressLike, ADDRESS_LENGTH, PUBLIC_KEY_LENGTH, ZERO_ADDRESS,
    decode_address, encode_address, is_valid_address, to_address,
)
