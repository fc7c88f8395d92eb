"""
Tests for the fluent transaction builders and the builder registry.
"""

import pytest

from helpers import GENESIS_HASH, GENESIS_ID

from algorand_client.runtime.errors import ValidationError
from algorand_client.tx import (
    ApplicationCallBuilder,
    AssetConfigBuilder,
    AssetFreezeBuilder,
    AssetTransferBuilder,
    BuilderError,
    FieldValidationError,
    KeyRegistrationBuilder,
    OnComplete,
    PaymentBuilder,
    SuggestedParams,
    TransactionType,
    estimate_size,
    get_builder_for,
    list_transaction_types,
)


@pytest.fixture
def params():
    return SuggestedParams(
        fee=10, first_valid=100, last_valid=1100,
        genesis_id=GENESIS_ID, genesis_hash=GENESIS_HASH,
    )


class TestPaymentBuilder:

    def test_build(self, alice, bob, params):
        txn = PaymentBuilder().sender(alice).receiver(bob).amount(5).suggested_params(params).build()
        assert txn.type == TransactionType.PAYMENT
        assert txn.payload.receiver == bob
        assert txn.payload.amount == 5
        assert txn.header.first_valid == 100
        assert txn.header.last_valid == 1100
        assert txn.header.genesis_id == GENESIS_ID

    def test_fee_from_params(self, alice, bob, params):
        txn = PaymentBuilder().sender(alice).receiver(bob).amount(5).suggested_params(params).build()
        # sized with the fee key the final encoding carries
        assert txn.header.fee > 1000
        assert txn.header.fee == 10 * estimate_size(txn)

    def test_explicit_fee_wins(self, alice, bob, params):
        txn = PaymentBuilder().sender(alice).receiver(bob).suggested_params(params).fee(1234).build()
        assert txn.header.fee == 1234

    def test_without_params(self, alice, bob):
        txn = (PaymentBuilder().sender(alice).receiver(bob).amount(1)
               .first_valid(1).last_valid(10).genesis(GENESIS_HASH, GENESIS_ID).build())
        assert txn.header.fee == 0
        assert txn.header.genesis_hash == GENESIS_HASH

    def test_explicit_rounds_override_params(self, alice, bob, params):
        txn = PaymentBuilder().sender(alice).receiver(bob).suggested_params(params).last_valid(500).build()
        assert txn.header.last_valid == 500

    def test_header_extras(self, alice, bob, carol, params):
        txn = (PaymentBuilder().sender(alice).receiver(bob).suggested_params(params)
               .note("hi").lease(b"\x01" * 32).rekey_to(carol).close_remainder_to(carol).build())
        assert txn.header.note == b"hi"
        assert txn.header.rekey_to == carol
        assert txn.payload.close_remainder_to == carol

    def test_immutable(self, alice, bob):
        base = PaymentBuilder().sender(alice)
        derived = base.receiver(bob).amount(5)
        assert base.get_field("amount") is None
        assert derived.get_field("amount") == 5

    def test_missing_sender(self, bob, params):
        with pytest.raises(BuilderError):
            PaymentBuilder().receiver(bob).suggested_params(params).build()

    def test_invalid_field(self, alice, params):
        with pytest.raises(FieldValidationError):
            PaymentBuilder().sender(alice).amount(-1).suggested_params(params).build()

    def test_validate(self, alice, params):
        builder = PaymentBuilder().sender(alice).suggested_params(params).with_header_field("first_valid", 5000)
        with pytest.raises(FieldValidationError):
            builder.validate()

    def test_sender_string(self, alice, bob, params):
        txn = PaymentBuilder().sender(str(alice)).receiver(str(bob)).suggested_params(params).build()
        assert txn.sender == alice


class TestKeyRegistrationBuilder:

    def test_online(self, alice, params):
        txn = (KeyRegistrationBuilder().sender(alice).suggested_params(params)
               .online(b"\x11" * 32, b"\x22" * 32, 1, 1000, 100).build())
        assert txn.payload.is_online
        assert txn.payload.vote_key_dilution == 100

    def test_offline_clears_keys(self, alice, params):
        online = (KeyRegistrationBuilder().sender(alice).suggested_params(params)
                  .online(b"\x11" * 32, b"\x22" * 32, 1, 1000, 100))
        txn = online.offline().build()
        assert not txn.payload.is_online
        assert txn.sender == alice

    def test_non_participating(self, alice, params):
        txn = KeyRegistrationBuilder().sender(alice).suggested_params(params).non_participating().build()
        assert txn.payload.non_participation is True


class TestAssetBuilders:

    def test_create(self, alice, params):
        txn = (AssetConfigBuilder().sender(alice).suggested_params(params)
               .total(1000).decimals(2).unit_name("GOLD").asset_name("Gold").manager(alice).build())
        assert txn.payload.asset_index == 0
        assert txn.payload.params.total == 1000
        assert txn.payload.params.manager == alice

    def test_create_without_total(self, alice, params):
        with pytest.raises(FieldValidationError):
            AssetConfigBuilder().sender(alice).suggested_params(params).unit_name("X").build()

    def test_destroy(self, alice, params):
        txn = AssetConfigBuilder().sender(alice).suggested_params(params).total(5).destroy(7).build()
        assert txn.payload.asset_index == 7
        assert txn.payload.params is None

    def test_reconfigure(self, alice, bob, params):
        txn = AssetConfigBuilder().sender(alice).suggested_params(params).asset_index(7).manager(bob).build()
        assert txn.payload.params.manager == bob

    def test_transfer(self, alice, bob, params):
        txn = (AssetTransferBuilder().sender(alice).suggested_params(params)
               .asset_index(9).receiver(bob).amount(3).build())
        assert txn.canonical_fields()["xaid"] == 9

    def test_opt_in(self, bob, params):
        txn = AssetTransferBuilder().suggested_params(params).opt_in(bob, 9).build()
        assert txn.sender == bob
        assert txn.payload.receiver == bob
        assert txn.payload.amount == 0

    def test_clawback(self, alice, bob, carol, params):
        txn = (AssetTransferBuilder().sender(alice).suggested_params(params)
               .asset_index(9).receiver(bob).amount(1).revocation_target(carol).build())
        assert txn.payload.revocation_target == carol

    def test_freeze(self, alice, bob, params):
        txn = AssetFreezeBuilder().sender(alice).suggested_params(params).asset_index(9).target(bob).frozen().build()
        assert txn.payload.frozen is True
        assert txn.payload.freeze_target == bob


class TestApplicationCallBuilder:

    def test_call(self, alice, bob, params):
        txn = (ApplicationCallBuilder().sender(alice).suggested_params(params)
               .app_id(10).on_complete(OnComplete.OPT_IN).add_arg(b"a").add_arg(b"b")
               .accounts([bob]).foreign_apps([20]).box(b"box", 20).build())
        assert txn.payload.app_args == (b"a", b"b")
        assert txn.canonical_fields()["apbx"] == [{"i": 1, "n": b"box"}]

    def test_on_complete_from_int(self, alice, params):
        txn = ApplicationCallBuilder().sender(alice).suggested_params(params).app_id(10).on_complete(5).build()
        assert txn.payload.on_complete == OnComplete.DELETE_APPLICATION

    def test_unknown_on_complete(self):
        with pytest.raises(ValidationError):
            ApplicationCallBuilder().on_complete(9)

    def test_create(self, alice, params):
        txn = (ApplicationCallBuilder().sender(alice).suggested_params(params)
               .approval_program(b"\x06\x81\x01").clear_program(b"\x06\x81\x01")
               .global_schema(1, 2).local_schema(0, 1).extra_pages(1).build())
        fields = txn.canonical_fields()
        assert fields["apgs"] == {"nbs": 2, "nui": 1}
        assert fields["apls"] == {"nbs": 1}

    def test_args_replace(self, alice, params):
        builder = ApplicationCallBuilder().sender(alice).suggested_params(params).app_id(1).add_arg(b"x")
        assert builder.args([b"y"]).build().payload.app_args == (b"y",)


class TestRegistry:

    @pytest.mark.parametrize("code,builder_cls", [
        ("pay", PaymentBuilder),
        ("keyreg", KeyRegistrationBuilder),
        ("acfg", AssetConfigBuilder),
        ("axfer", AssetTransferBuilder),
        ("afrz", AssetFreezeBuilder),
        ("appl", ApplicationCallBuilder),
    ])
    def test_get_builder_for(self, code, builder_cls):
        assert isinstance(get_builder_for(code), builder_cls)

    def test_by_enum(self):
        assert isinstance(get_builder_for(TransactionType.PAYMENT), PaymentBuilder)

    def test_state_proof_has_no_builder(self):
        with pytest.raises(BuilderError):
            get_builder_for("stpf")

    def test_unknown_code(self):
        with pytest.raises(ValidationError):
            get_builder_for("bogus")

    def test_list(self):
        assert list_transaction_types() == ["pay", "keyreg", "acfg", "axfer", "afrz", "appl"]
