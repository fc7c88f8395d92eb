"""
Test helpers shared across test packages.
"""

from algorand_client.crypto.ed25519 import Ed25519PrivateKey
from algorand_client.tx import PaymentFields, Transaction, TransactionHeader

GENESIS_ID = "testnet-v1.0"
GENESIS_HASH = bytes(31) + b"\x01"


def make_key(n: int) -> Ed25519PrivateKey:
    """Deterministic key from a small integer."""
    return Ed25519PrivateKey(bytes([n]) * 32)


def make_payment(sender, receiver, amount=5_000_000, fee=1000, first_valid=100,
                 last_valid=1000, **header) -> Transaction:
    return Transaction(
        header=TransactionHeader(
            sender=sender,
            fee=fee,
            first_valid=first_valid,
            last_valid=last_valid,
            genesis_id=GENESIS_ID,
            genesis_hash=GENESIS_HASH,
            **header,
        ),
        payload=PaymentFields(receiver=receiver, amount=amount),
    )
