"""
Algod transport.
"""

from .algod import (
    API_TOKEN_HEADER, ENDPOINTS, AlgodClient, ClientConfig,
    local_client, mainnet_client, testnet_client,
)

__all__ = [
    "API_TOKEN_HEADER",
    "ENDPOINTS",
    "AlgodClient",
    "ClientConfig",
    "mainnet_client",
    "testnet_client",
    "local_client",
]
