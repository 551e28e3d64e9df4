"""
Orders - Partial Fill Arithmetic
Client-side mirror of the escrow's multi-fill bookkeeping.

A resolver filling part of an order must reveal the secret whose index
matches how far the order will be filled after its fill. These helpers let
a resolver pick the right secret and proof before submitting, using the
same integer arithmetic as the contract.
"""
from __future__ import annotations

from core.schemas.errors import FillException
from core.schemas.order import MakerOrder


def compute_valid_index(total_amount: int, filled_amount: int, making_amount: int, parts: int) -> int:
    """
    Index of the secret a fill of ``making_amount`` must reveal.

    index = parts                                    if the fill completes the order
    index = (filled + making - 1) * parts // total   otherwise

    Raises:
        FillException: If total is zero, the fill is empty, or it overfills
    """
    if total_amount <= 0:
        raise FillException("Total amount must be greater than zero")
    if parts < 1:
        raise FillException(f"parts must be >= 1, got {parts}")

    current_filled = filled_amount + making_amount
    if current_filled <= 0:
        raise FillException("Current filled amount must be positive")
    if current_filled > total_amount:
        raise FillException(
            f"Fill of {making_amount} exceeds remaining amount {total_amount - filled_amount}",
            details={
                "total_amount": str(total_amount),
                "filled_amount": str(filled_amount),
                "making_amount": str(making_amount),
            },
        )

    if current_filled == total_amount:
        return parts

    return (current_filled - 1) * parts // total_amount


def completes_last_partial_fill(total_amount: int, filled_amount: int, making_amount: int, parts: int) -> bool:
    """
    Check a fill covers what is left of the part currently being filled.

    Raises:
        FillException: If total is zero or parts is not positive
    """
    if total_amount <= 0:
        raise FillException("Total amount must be greater than zero")
    if parts < 1:
        raise FillException(f"parts must be >= 1, got {parts}")

    parts_done = filled_amount * parts // total_amount
    remaining = filled_amount - (total_amount // parts) * parts_done
    return making_amount > remaining


def fill_index_for(order: MakerOrder, making_amount: int) -> int:
    """compute_valid_index for an order's current state."""
    return compute_valid_index(
        order.total_amount, order.filled_amount, making_amount, order.parts
    )


def part_size(order: MakerOrder) -> int:
    """Nominal size of one part (integer division, remainder goes to the last)."""
    return order.total_amount // order.parts


__all__ = [
    "compute_valid_index",
    "completes_last_partial_fill",
    "fill_index_for",
    "part_size",
]
