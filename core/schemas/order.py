"""
Schemas - Maker Order
File: order.py

Purpose: The MakerOrder record locked into the source-chain escrow.

The wire layout is declared once in MAKER_ORDER_LAYOUT and both the codec
and the JSON transport form are driven from it. The order of that tuple is
part of the contract with the escrow and must never change.

The model enforces types only. Integer widths are checked by the codec
(so out-of-range values surface as encoding errors) and relational
invariants are reported by MakerOrder.invariant_violations().
"""

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

FieldKind = Literal["string", "u16", "u64", "u128"]

# (field name, wire kind) in wire order
MAKER_ORDER_LAYOUT: tuple[tuple[str, FieldKind], ...] = (
    ("root_hash", "string"),
    ("token", "string"),
    ("total_amount", "u128"),
    ("parts", "u16"),
    ("filled_amount", "u128"),
    ("withdrawn_amount", "u128"),
    ("maker", "string"),
    ("expiration", "u64"),
)

ROOT_HASH_PATTERN = re.compile(r"[0-9a-f]{64}")

NANOS_PER_MILLI = 1_000_000


class MakerOrder(BaseModel):
    """
    Escrow commitment created by the maker of a cross-chain swap.

    root_hash is the hash-lock of a single secret for one-part orders and
    the Merkle root of indexed secret hashes for multi-part orders.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    root_hash: StrictStr = Field(
        ...,
        description="Hash-lock or secret Merkle root, 64 lowercase hex chars",
    )
    token: StrictStr = Field(
        ...,
        description="Fungible token contract account the maker is selling",
    )
    total_amount: StrictInt = Field(
        ...,
        description="Full order size in token base units (u128)",
    )
    parts: StrictInt = Field(
        default=1,
        description="Number of partial fills permitted (u16)",
    )
    filled_amount: StrictInt = Field(
        default=0,
        description="Amount already taken by resolvers (u128)",
    )
    withdrawn_amount: StrictInt = Field(
        default=0,
        description="Amount already withdrawn (u128)",
    )
    maker: StrictStr = Field(
        ...,
        description="Maker account id",
    )
    expiration: StrictInt = Field(
        ...,
        description="Self-withdrawal deadline, nanoseconds since the epoch (u64)",
    )

    @property
    def is_multi_fill(self) -> bool:
        return self.parts > 1

    @property
    def remaining_amount(self) -> int:
        """Amount still available to resolvers."""
        return self.total_amount - self.filled_amount

    @property
    def expiration_ms(self) -> int:
        return self.expiration // NANOS_PER_MILLI

    def invariant_violations(self) -> list[str]:
        """
        List every record invariant this order breaks.

        Returns:
            Human-readable messages, empty when the order is well-formed.
        """
        problems: list[str] = []

        if not ROOT_HASH_PATTERN.fullmatch(self.root_hash):
            problems.append(
                "root_hash must be 64 lowercase hex chars without 0x prefix"
            )
        if not self.token:
            problems.append("token must be non-empty")
        if not self.maker:
            problems.append("maker must be non-empty")
        if self.parts < 1:
            problems.append(f"parts must be >= 1, got {self.parts}")
        if self.total_amount < 0:
            problems.append("total_amount must be >= 0")
        if not 0 <= self.filled_amount <= self.total_amount:
            problems.append(
                f"filled_amount must be within [0, total_amount], got {self.filled_amount}"
            )
        if not 0 <= self.withdrawn_amount <= self.filled_amount:
            problems.append(
                f"withdrawn_amount must be within [0, filled_amount], got {self.withdrawn_amount}"
            )
        if self.expiration < 0:
            problems.append("expiration must be >= 0")

        return problems

    def is_valid(self) -> bool:
        return not self.invariant_violations()
