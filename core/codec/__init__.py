"""
Binary codec for escrow payloads.

Usage:
    from core.codec import encode_maker_order, decode_maker_order

    payload = encode_maker_order(order)
    assert decode_maker_order(payload) == order
"""
from .borsh import (
    UINT_WIDTHS,
    uint_max,
    BorshWriter,
    BorshReader,
    encode_field,
    decode_field,
)
from .order_codec import (
    encode_maker_order,
    decode_maker_order,
    encoded_length,
    encode_order_msg,
    decode_order_msg,
)

__all__ = [
    "UINT_WIDTHS",
    "uint_max",
    "BorshWriter",
    "BorshReader",
    "encode_field",
    "decode_field",
    "encode_maker_order",
    "decode_maker_order",
    "encoded_length",
    "encode_order_msg",
    "decode_order_msg",
]
