"""
Codec - Maker Order
Canonical Borsh encoding of MakerOrder, the payload the source escrow
deserializes in ft_on_transfer.

Encoding Rules (Hard Contracts):
1. Fields in MAKER_ORDER_LAYOUT order, never reordered
2. Strings: u32 LE length + UTF-8; u128/u16/u64 little-endian fixed width
3. Plain concatenation: no overall length, no checksum
4. Decoding consumes the whole input; leftover bytes are rejected

The escrow receives the payload hex-encoded as the ``msg`` argument of
``ft_transfer_call``; encode_order_msg/decode_order_msg handle that form.

Decoding does not check relational invariants (filled <= total, ...).
A payload the escrow would accept is decoded as-is; callers that need a
well-formed order call MakerOrder.invariant_violations().
"""
from __future__ import annotations

from core.codec.borsh import (
    UINT_WIDTHS,
    BorshReader,
    BorshWriter,
    decode_field,
    encode_field,
)
from core.crypto.hashing import from_hex, to_hex
from core.schemas.order import MAKER_ORDER_LAYOUT, MakerOrder


def encode_maker_order(order: MakerOrder) -> bytes:
    """
    Serialize a MakerOrder to its canonical byte sequence.

    Args:
        order: The order to encode

    Returns:
        Borsh bytes, identical for identical orders

    Raises:
        EncodingException: If any field is negative, not an integer where one
            is required, or exceeds its declared width
    """
    writer = BorshWriter()
    for name, kind in MAKER_ORDER_LAYOUT:
        encode_field(writer, kind, getattr(order, name), name)
    return writer.getvalue()


def decode_maker_order(data: bytes) -> MakerOrder:
    """
    Deserialize a canonical byte sequence back into a MakerOrder.

    Args:
        data: Borsh bytes

    Returns:
        The decoded order

    Raises:
        DecodingException: TRUNCATED when a field runs past the end,
            TRAILING_DATA when bytes remain, INVALID_ENCODING for
            non-UTF-8 string bytes
    """
    reader = BorshReader(data)
    values = {name: decode_field(reader, kind, name) for name, kind in MAKER_ORDER_LAYOUT}
    reader.finish()
    return MakerOrder(**values)


def encoded_length(order: MakerOrder) -> int:
    """
    Size in bytes of the encoding of order, computed without encoding it.
    """
    total = 0
    for name, kind in MAKER_ORDER_LAYOUT:
        if kind == "string":
            total += UINT_WIDTHS["u32"] + len(getattr(order, name).encode("utf-8"))
        else:
            total += UINT_WIDTHS[kind]
    return total


def encode_order_msg(order: MakerOrder) -> str:
    """Encode an order as the lowercase hex ``msg`` for ft_transfer_call."""
    return to_hex(encode_maker_order(order))


def decode_order_msg(msg: str) -> MakerOrder:
    """
    Decode a hex ``msg`` payload (0x prefix tolerated).

    Raises:
        HexFormatException: If msg is not valid hex
        DecodingException: If the bytes are not a valid MakerOrder
    """
    return decode_maker_order(from_hex(msg))


# Short names for the codec pair
encode = encode_maker_order
decode = decode_maker_order


__all__ = [
    "encode_maker_order",
    "decode_maker_order",
    "encoded_length",
    "encode_order_msg",
    "decode_order_msg",
    "encode",
    "decode",
]
