"""
Shared fixtures: deterministic keys, addresses and a reference payment.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))
from helpers import GENESIS_HASH, make_key, make_payment

from algorand_client.runtime.address import Address


@pytest.fixture
def alice_key():
    return make_key(1)


@pytest.fixture
def bob_key():
    return make_key(2)


@pytest.fixture
def carol_key():
    return make_key(3)


@pytest.fixture
def alice(alice_key):
    return Address(alice_key.public_key().to_bytes())


@pytest.fixture
def bob(bob_key):
    return Address(bob_key.public_key().to_bytes())


@pytest.fixture
def carol(carol_key):
    return Address(carol_key.public_key().to_bytes())


@pytest.fixture
def genesis_hash():
    return GENESIS_HASH


@pytest.fixture
def payment(alice, bob):
    """Reference payment from alice to bob."""
    return make_payment(alice, bob)
