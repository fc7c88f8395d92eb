"""
Tests for the algod transport, with the HTTP session mocked out.
"""

import base64
from unittest.mock import Mock, patch

import pytest
import requests

from helpers import GENESIS_HASH, make_payment

from algorand_client.client import (
    API_TOKEN_HEADER,
    AlgodClient,
    ClientConfig,
    local_client,
    mainnet_client,
    testnet_client,
)
from algorand_client.runtime.errors import AlgodHTTPError, ErrorCode, NetworkError
from algorand_client.tx import SuggestedParams


def response(status_code=200, body=None):
    mock = Mock()
    mock.status_code = status_code
    if isinstance(body, (dict, list)):
        mock.json.return_value = body
    else:
        mock.json.side_effect = ValueError("not json")
        mock.text = body or ""
    return mock


@pytest.fixture
def client():
    client = AlgodClient(ClientConfig(endpoint="http://node:4001/", token="secret", retry_delay=0.01))
    client._session = Mock()
    return client


class TestConfig:

    def test_network_names(self):
        assert ClientConfig(endpoint="testnet").base_url == "https://testnet-api.algonode.cloud"
        assert ClientConfig(endpoint="LOCAL").base_url == "http://127.0.0.1:4001"

    def test_trailing_slash(self):
        assert ClientConfig(endpoint="http://node:4001/").base_url == "http://node:4001"

    def test_factories(self):
        assert mainnet_client().config.base_url == "https://mainnet-api.algonode.cloud"
        assert testnet_client(timeout=5).config.timeout == 5
        assert local_client(token="t").config.token == "t"

    def test_token_override(self):
        assert AlgodClient("local", token="abc").config.token == "abc"


class TestSubmission:

    def test_send_raw_transaction(self, client):
        client._session.request.return_value = response(200, {"txId": "ABC"})
        assert client.send_raw_transaction(b"\x82raw") == "ABC"

        args, kwargs = client._session.request.call_args
        assert args == ("POST", "http://node:4001/v2/transactions")
        assert kwargs["data"] == b"\x82raw"
        assert kwargs["headers"]["Content-Type"] == "application/x-binary"
        assert kwargs["headers"][API_TOKEN_HEADER] == "secret"

    def test_send_transaction(self, client, payment, alice_key):
        stxn = payment.sign(alice_key)
        client._session.request.return_value = response(200, {"txId": stxn.txid()})
        assert client.send_transaction(stxn) == stxn.txid()
        assert client._session.request.call_args.kwargs["data"] == stxn.encode()

    def test_send_group(self, client, alice, bob, alice_key, bob_key):
        stxns = [
            make_payment(alice, bob, amount=1).sign(alice_key),
            make_payment(bob, alice, amount=2).sign(bob_key),
        ]
        client._session.request.return_value = response(200, {"txId": stxns[0].txid()})
        client.send_transactions(stxns)
        assert client._session.request.call_args.kwargs["data"] == stxns[0].encode() + stxns[1].encode()

    def test_no_token_header(self):
        client = AlgodClient("http://node:4001")
        client._session = Mock()
        client._session.request.return_value = response(200, {"txId": "X"})
        client.send_raw_transaction(b"\x00")
        assert API_TOKEN_HEADER not in client._session.request.call_args.kwargs["headers"]


class TestQueries:

    def test_suggested_params(self, client):
        client._session.request.return_value = response(200, {
            "consensus-version": "v1",
            "fee": 0,
            "genesis-hash": base64.b64encode(GENESIS_HASH).decode(),
            "genesis-id": "testnet-v1.0",
            "last-round": 2000,
            "min-fee": 1000,
        })
        params = client.suggested_params(validity_window=500)
        assert isinstance(params, SuggestedParams)
        assert params.first_valid == 2000
        assert params.last_valid == 2500
        assert params.genesis_hash == GENESIS_HASH

        args, _ = client._session.request.call_args
        assert args == ("GET", "http://node:4001/v2/transactions/params")

    def test_pending_transaction_info(self, client):
        client._session.request.return_value = response(200, {"confirmed-round": 12})
        info = client.pending_transaction_info("TXID")
        assert info["confirmed-round"] == 12

        args, kwargs = client._session.request.call_args
        assert args[1] == "http://node:4001/v2/transactions/pending/TXID"
        assert kwargs["params"] == {"format": "json"}

    def test_non_dict_body_wrapped(self, client):
        client._session.request.return_value = response(200, [1, 2])
        assert client.status() == {"result": [1, 2]}


class TestErrors:

    def test_http_error(self, client):
        client._session.request.return_value = response(400, {"message": "overspend", "data": {"txid": "X"}})
        with pytest.raises(AlgodHTTPError) as exc_info:
            client.send_raw_transaction(b"\x00")
        assert exc_info.value.status_code == 400
        assert exc_info.value.details == {"txid": "X"}
        assert "overspend" in str(exc_info.value)
        assert client._session.request.call_count == 1

    def test_unauthorized(self, client):
        client._session.request.return_value = response(401, "Invalid API Token")
        with pytest.raises(AlgodHTTPError) as exc_info:
            client.status()
        assert exc_info.value.status_code == 401

    @patch("algorand_client.client.algod.time.sleep")
    def test_retry_then_success(self, sleep, client):
        client._session.request.side_effect = [
            requests.exceptions.ConnectionError("refused"),
            response(200, {"last-round": 1}),
        ]
        assert client.status() == {"last-round": 1}
        assert client._session.request.call_count == 2
        sleep.assert_called_once()

    @patch("algorand_client.client.algod.time.sleep")
    def test_retries_exhausted(self, sleep, client):
        client._session.request.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(NetworkError) as exc_info:
            client.status()
        assert exc_info.value.code == ErrorCode.CONNECTION_FAILED
        assert client._session.request.call_count == client.config.max_retries + 1
        delays = [call.args[0] for call in sleep.call_args_list]
        assert delays == pytest.approx([0.01, 0.02, 0.04])

    @patch("algorand_client.client.algod.time.sleep")
    def test_timeout(self, sleep, client):
        client._session.request.side_effect = requests.exceptions.Timeout("slow")
        with pytest.raises(NetworkError) as exc_info:
            client.status()
        assert exc_info.value.code == ErrorCode.TIMEOUT
