"""
Algod REST client.

A thin transport for signed transactions: it submits canonical bytes, fetches
suggested params and polls pending transactions. Everything about building and
signing transactions happens before this layer.
"""

from __future__ import annotations
import time
import logging
from typing import Any, Dict, Iterable, Optional, Union
from dataclasses import dataclass
from urllib.parse import quote

import requests

from ..runtime.errors import AlgorandError, ErrorCode, NetworkError, error_from_response
from ..tx.fees import SuggestedParams
from ..tx.signed import SignedTransaction, encode_signed_transactions

API_TOKEN_HEADER = "X-Algo-API-Token"

ENDPOINTS = {
    "mainnet": "https://mainnet-api.algonode.cloud",
    "testnet": "https://testnet-api.algonode.cloud",
    "betanet": "https://betanet-api.algonode.cloud",
    "local": "http://127.0.0.1:4001",
}


@dataclass
class ClientConfig:
    """Configuration for the algod client."""

    endpoint: str
    token: Optional[str] = None
    timeout: float = 30.0
    max_retries: int = 3
    retry_delay: float = 1.0
    retry_backoff: float = 2.0
    debug: bool = False
    verify_ssl: bool = True
    user_agent: str = "algorand-client-python/0.1.0"

    @property
    def base_url(self) -> str:
        """Endpoint URL with well-known network names resolved."""
        url = ENDPOINTS.get(self.endpoint.lower(), self.endpoint)
        return url.rstrip("/")


class AlgodClient:
    """
    Algod API client.

    Network failures are retried with exponential backoff; HTTP error
    responses are not retried and surface as AlgodHTTPError.
    """

    def __init__(self, config: Union[str, ClientConfig], token: Optional[str] = None):
        """
        Initialize the algod client.

        Args:
            config: Either an endpoint URL / network name or a ClientConfig
            token: API token (overrides config.token)
        """
        if isinstance(config, str):
            self.config = ClientConfig(endpoint=config)
        else:
            self.config = config
        if token is not None:
            self.config.token = token

        self.logger = logging.getLogger(__name__)
        if self.config.debug:
            self.logger.setLevel(logging.DEBUG)

        self._session = requests.Session()

    @classmethod
    def for_network(cls, network: str, **kwargs) -> AlgodClient:
        """
        Create a client for a well-known network.

        Args:
            network: Network name ('mainnet', 'testnet', 'betanet', 'local')
            **kwargs: Additional configuration options
        """
        return cls(ClientConfig(endpoint=network, **kwargs))

    @property
    def session(self) -> requests.Session:
        return self._session

    def _headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers = {
            "User-Agent": self.config.user_agent,
            "Accept": "application/json",
        }
        if self.config.token:
            headers[API_TOKEN_HEADER] = self.config.token
        if extra:
            headers.update(extra)
        return headers

    def _request(self, method: str, path: str, data: Optional[bytes] = None,
                 params: Optional[Dict[str, Any]] = None,
                 headers: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """
        Make an HTTP request with retry logic.

        Returns:
            Decoded JSON body

        Raises:
            AlgodHTTPError: On an error response
            NetworkError: When the node cannot be reached after all retries
        """
        url = f"{self.config.base_url}{path}"
        last_error: Optional[AlgorandError] = None

        for attempt in range(self.config.max_retries + 1):
            if attempt > 0:
                delay = self.config.retry_delay * (self.config.retry_backoff ** (attempt - 1))
                self.logger.debug(f"Retrying {method} {path} in {delay:.2f}s (attempt {attempt + 1})")
                time.sleep(delay)

            try:
                response = self._session.request(
                    method,
                    url,
                    data=data,
                    params=params,
                    headers=self._headers(headers),
                    timeout=self.config.timeout,
                    verify=self.config.verify_ssl,
                )
            except requests.exceptions.Timeout as e:
                last_error = NetworkError(f"Request to {path} timed out", code=ErrorCode.TIMEOUT, cause=e)
                continue
            except requests.exceptions.ConnectionError as e:
                last_error = NetworkError(f"Cannot reach {self.config.base_url}: {e}",
                                          code=ErrorCode.CONNECTION_FAILED, cause=e)
                continue

            try:
                body = response.json()
            except ValueError:
                body = response.text

            error = error_from_response(response.status_code, body)
            if error is not None:
                raise error

            self.logger.debug(f"{method} {path} -> {response.status_code}")
            return body if isinstance(body, dict) else {"result": body}

        raise last_error

    def send_raw_transaction(self, data: bytes) -> str:
        """
        Submit canonical signed transaction bytes (one or a concatenated group).

        Args:
            data: Signed transaction encoding(s)

        Returns:
            Transaction id reported by the node
        """
        result = self._request(
            "POST",
            "/v2/transactions",
            data=data,
            headers={"Content-Type": "application/x-binary"},
        )
        return result["txId"]

    def send_transaction(self, stxn: SignedTransaction) -> str:
        """Submit one signed transaction."""
        self.logger.debug(f"Submitting {stxn.txid()}")
        return self.send_raw_transaction(stxn.encode())

    def send_transactions(self, stxns: Iterable[SignedTransaction]) -> str:
        """
        Submit a group of signed transactions as one buffer.

        Returns:
            Id of the first transaction in the group
        """
        return self.send_raw_transaction(encode_signed_transactions(stxns))

    def suggested_params(self, validity_window: int = 1000) -> SuggestedParams:
        """Fetch suggested params for new transactions."""
        return SuggestedParams.from_algod(self._request("GET", "/v2/transactions/params"), validity_window)

    def pending_transaction_info(self, txid: str) -> Dict[str, Any]:
        """Status of a submitted transaction that may not be confirmed yet."""
        return self._request("GET", f"/v2/transactions/pending/{quote(txid)}", params={"format": "json"})

    def status(self) -> Dict[str, Any]:
        """Node status."""
        return self._request("GET", "/v2/status")


def mainnet_client(**kwargs) -> AlgodClient:
    """Create a client for Algorand mainnet."""
    return AlgodClient.for_network("mainnet", **kwargs)


def testnet_client(**kwargs) -> AlgodClient:
    """Create a client for Algorand testnet."""
    return AlgodClient.for_network("testnet", **kwargs)


def local_client(**kwargs) -> AlgodClient:
    """Create a client for a local algod node."""
    return AlgodClient.for_network("local", **kwargs)


__all__ = [
    "API_TOKEN_HEADER",
    "ENDPOINTS",
    "ClientConfig",
    "AlgodClient",
    "mainnet_client",
    "testnet_client",
    "local_client",
]
