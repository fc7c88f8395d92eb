"""
Tests for atomic group id calculation and assignment.
"""

import pytest
from cryptography.hazmat.primitives import hashes

from helpers import make_payment

from algorand_client.runtime.errors import ErrorCode, GroupSizeError
from algorand_client.tx import assign_group_id, calculate_group_id


def independent_sha512_256(data: bytes) -> bytes:
    digest = hashes.Hash(hashes.SHA512_256())
    digest.update(data)
    return digest.finalize()


@pytest.fixture
def pair(alice, bob):
    return [make_payment(alice, bob, amount=1), make_payment(bob, alice, amount=2)]


class TestCalculateGroupId:

    def test_matches_hand_built_encoding(self, pair):
        # {"txlist": [bin32, bin32]} spelled out byte by byte
        encoded = b"\x81\xa6txlist\x92" + b"".join(b"\xc4\x20" + t.raw_txid() for t in pair)
        assert calculate_group_id(pair) == independent_sha512_256(b"TG" + encoded)

    def test_length(self, pair):
        assert len(calculate_group_id(pair)) == 32

    def test_order_matters(self, pair):
        assert calculate_group_id(pair) != calculate_group_id(list(reversed(pair)))

    def test_single_member(self, payment):
        assert len(calculate_group_id([payment])) == 32

    def test_empty_group(self):
        with pytest.raises(GroupSizeError) as exc_info:
            calculate_group_id([])
        assert exc_info.value.code == ErrorCode.INVALID_GROUP_SIZE
        assert exc_info.value.details == {"size": 0}

    def test_maximum_size(self, alice, bob):
        txns = [make_payment(alice, bob, amount=n + 1) for n in range(16)]
        assert len(calculate_group_id(txns)) == 32

    def test_too_large(self, alice, bob):
        txns = [make_payment(alice, bob, amount=n + 1) for n in range(17)]
        with pytest.raises(GroupSizeError):
            calculate_group_id(txns)


class TestAssignGroupId:

    def test_all_members_share_id(self, pair):
        grouped = assign_group_id(pair)
        assert len(grouped) == 2
        group_id = calculate_group_id(pair)
        assert all(t.header.group == group_id for t in grouped)

    def test_id_stable_after_assignment(self, pair):
        grouped = assign_group_id(pair)
        assert calculate_group_id(grouped) == calculate_group_id(pair)

    def test_reassignment_is_idempotent(self, pair):
        once = assign_group_id(pair)
        twice = assign_group_id(once)
        assert [t.encode() for t in once] == [t.encode() for t in twice]

    def test_txids_change(self, pair):
        grouped = assign_group_id(pair)
        assert grouped[0].txid() != pair[0].txid()
        assert "grp" in grouped[0].canonical_fields()

    def test_originals_untouched(self, pair):
        assign_group_id(pair)
        assert pair[0].header.group is None

    def test_sender_filter(self, pair, alice):
        grouped = assign_group_id(pair, sender=alice)
        assert len(grouped) == 1
        assert grouped[0].sender == alice
        assert grouped[0].header.group == calculate_group_id(pair)

    def test_sender_filter_accepts_string(self, pair, bob):
        grouped = assign_group_id(pair, sender=str(bob))
        assert [t.sender for t in grouped] == [bob]
