"""
Order construction, fill arithmetic and pre-submission checks.

Usage:
    from core.orders import build_maker_order, preflight_order
    from core.codec import encode_order_msg

    order = build_maker_order("token.near", 10**24, "maker.near", secret=secret)
    assert preflight_order(order, "maker.near", "token.near", 10**24).ok
    msg = encode_order_msg(order)
"""
from .builder import (
    build_maker_order,
    current_time_ms,
    expiration_from_ttl,
    normalize_root_hash,
    root_hash_for,
)
from .fills import (
    compute_valid_index,
    completes_last_partial_fill,
    fill_index_for,
    part_size,
)
from .preflight import preflight_order

__all__ = [
    "build_maker_order",
    "current_time_ms",
    "expiration_from_ttl",
    "normalize_root_hash",
    "root_hash_for",
    "compute_valid_index",
    "completes_last_partial_fill",
    "fill_index_for",
    "part_size",
    "preflight_order",
]
