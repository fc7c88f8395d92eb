"""
Algorand Python client.

Builds, canonically encodes and signs Algorand transactions (single key,
multisig and logic signature), computes transaction and group ids, and submits
signed bytes to an algod node.
"""

from .runtime import *
from .codec import encode_canonical, decode_canonical, iter_decode
from .crypto import Ed25519PrivateKey, Ed25519PublicKey, sha512_256
from .tx import *
from .signers import *
from .client import AlgodClient, ClientConfig, mainnet_client, testnet_client, local_client

__version__ = "0.1.0"
