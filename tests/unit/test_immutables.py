"""
Resolver Fill Immutables Unit Tests
Tests for core/schemas/immutables.py
"""
import pytest
from pydantic import ValidationError

from core.schemas.errors import EncodingErrorKind, EncodingException
from core.schemas.immutables import TIMELOCK_STAGES, U128_MAX, Immutables, TimeLock

from fixtures import make_immutables, make_timelock


class TestTimeLock:
    """Tests for TimeLock."""

    def test_combined_bytes_big_endian(self):
        timelock = TimeLock(**{stage: i + 1 for i, stage in enumerate(TIMELOCK_STAGES)})
        expected = b"".join((i + 1).to_bytes(8, "big") for i in range(7))
        assert timelock.combined_bytes() == expected

    def test_is_ordered(self):
        assert make_timelock().is_ordered()

    def test_out_of_order(self):
        timelock = make_timelock().model_copy(update={"src_cancellation": 0})
        assert not timelock.is_ordered()

    def test_stage_out_of_range(self):
        timelock = make_timelock().model_copy(update={"dst_cancellation": 2**64})
        with pytest.raises(EncodingException) as exc_info:
            timelock.combined_bytes()
        assert exc_info.value.kind == EncodingErrorKind.VALUE_OUT_OF_RANGE


class TestImmutables:
    """Tests for Immutables."""

    def test_preimage_layout(self, immutables):
        im = immutables
        expected = (
            im.salt.encode()
            + im.order_root_hash.encode()
            + im.hashlock.encode()
            + im.making_token.encode()
            + im.taking_token.encode()
            + im.making_amount.to_bytes(16, "big")
            + im.taking_amount.to_bytes(16, "big")
            + im.src_safety_deposit.to_bytes(16, "big")
            + im.dst_safety_deposit.to_bytes(16, "big")
            + im.timelock.combined_bytes()
            + im.maker.encode()
            + im.taker.encode()
        )
        assert im.hash_preimage() == expected

    def test_amounts_accept_decimal_strings(self):
        im = Immutables.model_validate({
            **make_immutables().to_json_args(),
            "making_amount": "1000000000000000000000000",
        })
        assert im.making_amount == 10**24

    def test_json_args_use_contract_names(self, immutables):
        args = immutables.to_json_args()
        assert "src_safty_deposit" in args
        assert "dst_safty_deposit" in args
        assert args["making_amount"] == str(immutables.making_amount)
        assert isinstance(args["timelock"]["src_withdrawal"], int)

    def test_json_args_round_trip(self, immutables):
        assert Immutables.model_validate(immutables.to_json_args()) == immutables

    def test_amount_out_of_range(self):
        im = make_immutables(making_amount=U128_MAX + 1)
        with pytest.raises(EncodingException) as exc_info:
            im.hash_preimage()
        assert exc_info.value.field_name == "making_amount"

    def test_negative_amount(self):
        im = make_immutables(taking_amount=-1)
        with pytest.raises(EncodingException) as exc_info:
            im.hash_preimage()
        assert exc_info.value.kind == EncodingErrorKind.INVALID_VALUE

    def test_unknown_field_rejected(self, immutables):
        with pytest.raises(ValidationError):
            Immutables.model_validate({**immutables.to_json_args(), "extra": 1})
