"""
Schemas - Resolver Fill Immutables
File: immutables.py

Purpose: The parameters a resolver locks when filling (part of) a maker
order. The escrow keys each fill by keccak256 of hash_preimage() below.

Preimage layout (big-endian, unlike the little-endian order payload):
    salt | order_root_hash | hashlock | making_token | taking_token   (raw UTF-8)
    making_amount | taking_amount | src deposit | dst deposit         (u128 BE)
    timelock stages                                                   (7 x u64 BE)
    maker | taker                                                     (raw UTF-8)

Strings are concatenated without length prefixes, exactly as the escrow does.
"""

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    field_serializer,
    field_validator,
)

from .errors import EncodingErrorKind, EncodingException

U64_MAX = (1 << 64) - 1
U128_MAX = (1 << 128) - 1

TIMELOCK_STAGES: tuple[str, ...] = (
    "src_withdrawal",
    "src_public_withdrawal",
    "src_cancellation",
    "src_public_cancellation",
    "dst_withdrawal",
    "dst_public_withdrawal",
    "dst_cancellation",
)


def _be(value: int, width: int, max_value: int, field_name: str) -> bytes:
    if value < 0:
        raise EncodingException(
            EncodingErrorKind.INVALID_VALUE,
            f"{field_name} must be unsigned, got {value}",
            field_name=field_name,
        )
    if value > max_value:
        raise EncodingException(
            EncodingErrorKind.VALUE_OUT_OF_RANGE,
            f"{field_name} does not fit in {width * 8} bits: {value}",
            field_name=field_name,
        )
    return value.to_bytes(width, "big")


def _parse_amount(value: Any) -> Any:
    # NEAR JSON carries u128 amounts as decimal strings
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return value


class TimeLock(BaseModel):
    """Stage boundaries of a swap, nanosecond timestamps."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    src_withdrawal: StrictInt = Field(..., description="Taker may withdraw on source chain")
    src_public_withdrawal: StrictInt = Field(..., description="Anyone may withdraw on source chain")
    src_cancellation: StrictInt = Field(..., description="Taker may cancel on source chain")
    src_public_cancellation: StrictInt = Field(..., description="Anyone may cancel on source chain")
    dst_withdrawal: StrictInt = Field(..., description="Maker may withdraw on destination chain")
    dst_public_withdrawal: StrictInt = Field(..., description="Anyone may withdraw on destination chain")
    dst_cancellation: StrictInt = Field(..., description="Resolver may cancel on destination chain")

    def combined_bytes(self) -> bytes:
        return b"".join(
            _be(getattr(self, stage), 8, U64_MAX, stage) for stage in TIMELOCK_STAGES
        )

    def is_ordered(self) -> bool:
        """Check each chain's stages are non-decreasing in time."""
        src = [self.src_withdrawal, self.src_public_withdrawal,
               self.src_cancellation, self.src_public_cancellation]
        dst = [self.dst_withdrawal, self.dst_public_withdrawal, self.dst_cancellation]
        return src == sorted(src) and dst == sorted(dst)


class Immutables(BaseModel):
    """Parameters of a single resolver fill."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    salt: StrictStr = Field(..., description="Random string distinguishing fills")
    order_root_hash: StrictStr = Field(..., description="root_hash of the maker order being filled")
    hashlock: StrictStr = Field(..., description="Hash-lock of this part of the fill")
    making_token: StrictStr = Field(..., description="Token the maker sells")
    taking_token: StrictStr = Field(..., description="Token the maker wants")
    making_amount: StrictInt = Field(..., description="Amount taken from the maker order")
    taking_amount: StrictInt = Field(..., description="Amount the maker receives")
    src_safety_deposit: StrictInt = Field(..., alias="src_safty_deposit")
    dst_safety_deposit: StrictInt = Field(..., alias="dst_safty_deposit")
    timelock: TimeLock
    maker: StrictStr
    taker: StrictStr

    @field_validator(
        "making_amount", "taking_amount", "src_safety_deposit", "dst_safety_deposit",
        mode="before",
    )
    @classmethod
    def _amounts_from_decimal(cls, value: Any) -> Any:
        return _parse_amount(value)

    @field_serializer(
        "making_amount", "taking_amount", "src_safety_deposit", "dst_safety_deposit",
    )
    def _amounts_to_decimal(self, value: int) -> str:
        return str(value)

    def hash_preimage(self) -> bytes:
        """Bytes the escrow hashes to key this fill."""
        parts = [
            self.salt.encode("utf-8"),
            self.order_root_hash.encode("utf-8"),
            self.hashlock.encode("utf-8"),
            self.making_token.encode("utf-8"),
            self.taking_token.encode("utf-8"),
            _be(self.making_amount, 16, U128_MAX, "making_amount"),
            _be(self.taking_amount, 16, U128_MAX, "taking_amount"),
            _be(self.src_safety_deposit, 16, U128_MAX, "src_safety_deposit"),
            _be(self.dst_safety_deposit, 16, U128_MAX, "dst_safety_deposit"),
            self.timelock.combined_bytes(),
            self.maker.encode("utf-8"),
            self.taker.encode("utf-8"),
        ]
        return b"".join(parts)

    def to_json_args(self) -> dict[str, Any]:
        """JSON form accepted by the escrow's create_resolver_fill_order."""
        return self.model_dump(mode="json", by_alias=True)
