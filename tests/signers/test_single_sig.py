"""
Tests for single-key signing, rekeyed authorization and data signing.
"""

import pytest
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from helpers import make_key, make_payment

from algorand_client.codec.msgpack_codec import decode_canonical, encode_canonical
from algorand_client.crypto.ed25519 import verify_ed25519
from algorand_client.runtime.errors import ErrorCode, InvalidSignatureError, ValidationError
from algorand_client.signers import (
    Ed25519Signer,
    LogicSig,
    sign_bytes,
    sign_transaction,
    verify_bytes,
)
from algorand_client.tx import (
    SignedTransaction,
    decode_signed_transactions,
    encode_signed_transactions,
)


class TestEd25519Signer:

    def test_address(self, alice_key, alice):
        assert Ed25519Signer(alice_key).address() == alice

    def test_from_seed_bytes(self, alice):
        assert Ed25519Signer(bytes([1]) * 32).address() == alice

    def test_from_base64(self, alice_key, alice):
        assert Ed25519Signer(alice_key.to_base64()).address() == alice

    def test_sign_verify(self, alice_key):
        signer = Ed25519Signer(alice_key)
        signature = signer.sign(b"data")
        assert len(signature) == 64
        assert signer.verify(signature, b"data")
        assert not signer.verify(signature, b"other")


class TestSignTransaction:

    def test_signature_over_prefixed_encoding(self, payment, alice_key, alice):
        stxn = sign_transaction(payment, alice_key)
        # raises InvalidSignature on mismatch
        Ed25519PublicKey.from_public_bytes(alice.public_key).verify(
            stxn.signature, b"TX" + payment.encode()
        )

    def test_no_auth_address_for_own_key(self, payment, alice_key):
        stxn = sign_transaction(payment, alice_key)
        assert stxn.auth_address is None
        assert "sgnr" not in stxn.canonical_fields()
        assert stxn.verify()

    def test_method_and_function_agree(self, payment, alice_key):
        assert payment.sign(alice_key).encode() == sign_transaction(payment, alice_key).encode()

    def test_accepts_signer(self, payment, alice_key):
        assert sign_transaction(payment, Ed25519Signer(alice_key)).verify()

    def test_txid_unchanged_by_signing(self, payment, alice_key):
        assert payment.sign(alice_key).txid() == payment.txid()

    def test_rekeyed_signer(self, payment, bob_key, bob):
        stxn = sign_transaction(payment, bob_key)
        assert stxn.auth_address == bob
        assert stxn.authorizer == bob
        assert stxn.canonical_fields()["sgnr"] == bob.public_key
        assert stxn.verify()

    def test_rekeyed_signature_without_sgnr_fails(self, payment, bob_key):
        stxn = sign_transaction(payment, bob_key)
        stripped = SignedTransaction(transaction=payment, signature=stxn.signature)
        assert not stripped.verify()
        with pytest.raises(InvalidSignatureError):
            stripped.ensure_valid()

    def test_tampered_transaction_fails(self, payment, alice_key, alice, bob):
        stxn = sign_transaction(payment, alice_key)
        other = make_payment(alice, bob, amount=1)
        assert not SignedTransaction(transaction=other, signature=stxn.signature).verify()

    def test_ensure_valid_returns_self(self, payment, alice_key):
        stxn = payment.sign(alice_key)
        assert stxn.ensure_valid() is stxn


class TestSignedTransactionEnvelope:

    def test_layout(self, payment, alice_key):
        stxn = payment.sign(alice_key)
        encoded = stxn.encode()
        assert encoded.startswith(b"\x82\xa3sig\xc4\x40" + stxn.signature + b"\xa3txn")
        assert encoded.endswith(payment.encode())

    def test_round_trip(self, payment, bob_key):
        stxn = sign_transaction(payment, bob_key)
        decoded = SignedTransaction.decode(stxn.encode())
        assert decoded == stxn
        assert decoded.verify()

    def test_requires_authorization(self, payment):
        with pytest.raises(ValidationError) as exc_info:
            SignedTransaction(transaction=payment)
        assert exc_info.value.code == ErrorCode.INVALID_AUTHORIZATION

    def test_rejects_two_authorizations(self, payment, alice_key):
        with pytest.raises(ValidationError) as exc_info:
            SignedTransaction(
                transaction=payment,
                signature=alice_key.sign(b"x"),
                logicsig=LogicSig(program=b"\x01\x20\x01\x01\x22"),
            )
        assert exc_info.value.code == ErrorCode.INVALID_AUTHORIZATION

    def test_signature_length(self, payment):
        with pytest.raises(ValidationError):
            SignedTransaction(transaction=payment, signature=b"\x01" * 63)

    def test_unknown_key_rejected(self, payment, alice_key):
        fields = payment.sign(alice_key).canonical_fields()
        fields["extra"] = 1
        with pytest.raises(ValidationError):
            SignedTransaction.decode(encode_canonical(fields))

    def test_missing_txn_rejected(self, alice_key):
        with pytest.raises(ValidationError):
            SignedTransaction.decode(encode_canonical({"sig": alice_key.sign(b"x")}))

    def test_group_encoding(self, alice, bob, alice_key, bob_key):
        stxns = [
            make_payment(alice, bob, amount=1).sign(alice_key),
            make_payment(bob, alice, amount=2).sign(bob_key),
        ]
        data = encode_signed_transactions(stxns)
        assert data == stxns[0].encode() + stxns[1].encode()
        decoded = decode_signed_transactions(data)
        assert [s.txid() for s in decoded] == [s.txid() for s in stxns]

    def test_decoded_fields(self, payment, alice_key):
        stxn = payment.sign(alice_key)
        assert decode_canonical(stxn.encode()) == {"sig": stxn.signature, "txn": payment.canonical_fields()}


class TestDataSigning:

    def test_sign_and_verify(self, alice_key, alice):
        signature = sign_bytes(b"hello", alice_key)
        assert verify_bytes(b"hello", signature, alice)
        assert verify_bytes(b"hello", signature, str(alice))

    def test_uses_mx_prefix(self, alice_key, alice):
        signature = sign_bytes(b"hello", alice_key)
        assert verify_ed25519(alice.public_key, signature, b"MXhello")
        assert not verify_ed25519(alice.public_key, signature, b"hello")

    def test_wrong_data(self, alice_key, alice):
        assert not verify_bytes(b"other", sign_bytes(b"hello", alice_key), alice)

    def test_wrong_signer(self, alice_key, bob):
        assert not verify_bytes(b"hello", sign_bytes(b"hello", alice_key), bob)

    def test_signer_methods(self, alice_key):
        signer = Ed25519Signer(alice_key)
        assert signer.verify_bytes(b"data", signer.sign_bytes(b"data"))

    def test_cannot_pass_as_transaction_signature(self, payment, alice_key):
        signature = sign_bytes(payment.encode(), alice_key)
        assert not SignedTransaction(transaction=payment, signature=signature).verify()

    def test_independent_key(self):
        key = make_key(9)
        signature = sign_bytes(b"abc", key)
        public = Ed25519PublicKey.from_public_bytes(key.public_key().to_bytes())
        public.verify(signature, b"MXabc")
        with pytest.raises(InvalidSignature):
            public.verify(signature, b"abc")
