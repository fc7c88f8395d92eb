"""
Tests for Ed25519 keys.
"""

import pytest

from algorand_client.crypto.ed25519 import (
    Ed25519Error, Ed25519PrivateKey, Ed25519PublicKey, to_private_key, verify_ed25519,
)

# RFC 8032, section 7.1, test 1
RFC_SEED = bytes.fromhex("9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60")
RFC_PUBLIC = bytes.fromhex("d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a")
RFC_SIGNATURE = bytes.fromhex(
    "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e065224901555fb8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b"
)


class TestEd25519Keys:
    """Key derivation, signing and verification."""

    def test_rfc8032_vector(self):
        key = Ed25519PrivateKey(RFC_SEED)
        assert key.public_key().to_bytes() == RFC_PUBLIC
        assert key.sign(b"") == RFC_SIGNATURE
        assert verify_ed25519(RFC_PUBLIC, RFC_SIGNATURE, b"")

    def test_signing_is_deterministic(self, alice_key):
        assert alice_key.sign(b"message") == alice_key.sign(b"message")

    def test_verify_rejects_tampered_message(self, alice_key):
        signature = alice_key.sign(b"message")
        public_key = alice_key.public_key()
        assert public_key.verify(signature, b"message")
        assert not public_key.verify(signature, b"messagf")

    def test_verify_rejects_other_key(self, alice_key, bob_key):
        signature = alice_key.sign(b"message")
        assert not bob_key.public_key().verify(signature, b"message")

    def test_verify_rejects_malformed_signature(self, alice_key):
        assert not alice_key.public_key().verify(b"short", b"message")

    def test_verify_ed25519_rejects_malformed_key(self):
        assert not verify_ed25519(b"\x00" * 31, RFC_SIGNATURE, b"")

    def test_seed_must_be_32_bytes(self):
        with pytest.raises(Ed25519Error):
            Ed25519PrivateKey(b"\x01" * 31)

    def test_public_key_must_be_32_bytes(self):
        with pytest.raises(Ed25519Error):
            Ed25519PublicKey(b"\x01" * 33)


class TestKeyExport:
    """base64(seed || public key) export format."""

    def test_base64_round_trip(self, alice_key):
        restored = Ed25519PrivateKey.from_base64(alice_key.to_base64())
        assert restored.to_bytes() == alice_key.to_bytes()

    def test_mismatched_public_half_rejected(self, alice_key, bob_key):
        import base64
        forged = base64.b64encode(alice_key.to_bytes() + bob_key.public_key().to_bytes()).decode()
        with pytest.raises(Ed25519Error):
            Ed25519PrivateKey.from_base64(forged)

    def test_invalid_base64_rejected(self):
        with pytest.raises(Ed25519Error):
            Ed25519PrivateKey.from_base64("not base64!")

    def test_from_seed_hashes_arbitrary_input(self):
        assert Ed25519PrivateKey.from_seed("phrase").to_bytes() == Ed25519PrivateKey.from_seed(b"phrase").to_bytes()

    def test_to_private_key_accepts_all_forms(self, alice_key):
        seed = alice_key.to_bytes()
        assert to_private_key(alice_key) is alice_key
        assert to_private_key(seed).to_bytes() == seed
        assert to_private_key(alice_key.to_base64()).to_bytes() == seed
        with pytest.raises(Ed25519Error):
            to_private_key(42)

    def test_address_matches_public_key(self, alice_key, alice):
        assert alice_key.address() == str(alice)
        assert alice_key.public_key().address() == str(alice)
