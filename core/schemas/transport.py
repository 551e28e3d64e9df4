"""
Schemas - JSON Transport Form
File: transport.py

Purpose: Convert MakerOrder to and from its JSON form.

The binary codec works on native ints. At the process boundary (CLI
output, JSON files, RPC view results) u128 amounts travel as decimal
strings because JSON numbers lose precision past 2**53. u16 and u64
fields stay JSON numbers.
"""

import re
from typing import Any

from .errors import SchemaValidationException
from .order import MAKER_ORDER_LAYOUT, MakerOrder

_DECIMAL_RE = re.compile(r"0|[1-9][0-9]*")


def to_transport_dict(order: MakerOrder) -> dict[str, Any]:
    """
    Render an order with u128 amounts as decimal strings.

    Keys follow wire order.
    """
    data: dict[str, Any] = {}
    for name, kind in MAKER_ORDER_LAYOUT:
        value = getattr(order, name)
        data[name] = str(value) if kind == "u128" else value
    return data


def parse_decimal(value: Any, field_path: str) -> int:
    """
    Parse a canonical unsigned decimal (no sign, no leading zeros).

    Ints are accepted as-is; bools and floats are rejected.

    Raises:
        SchemaValidationException: If value is not a canonical decimal
    """
    if isinstance(value, bool):
        raise SchemaValidationException(
            f"{field_path} must be a decimal string, got bool",
            field_path=field_path,
        )
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _DECIMAL_RE.fullmatch(value):
        return int(value)
    raise SchemaValidationException(
        f"{field_path} must be an unsigned decimal string, got {value!r}",
        field_path=field_path,
    )


def order_from_transport(data: dict[str, Any]) -> MakerOrder:
    """
    Build an order from its JSON form.

    Raises:
        SchemaValidationException: On missing/unknown keys or malformed values
    """
    expected = {name for name, _ in MAKER_ORDER_LAYOUT}
    missing = expected - data.keys()
    if missing:
        raise SchemaValidationException(
            f"Missing order fields: {sorted(missing)}",
            details={"missing": sorted(missing)},
        )
    unknown = data.keys() - expected
    if unknown:
        raise SchemaValidationException(
            f"Unknown order fields: {sorted(unknown)}",
            details={"unknown": sorted(unknown)},
        )

    values: dict[str, Any] = {}
    for name, kind in MAKER_ORDER_LAYOUT:
        raw = data[name]
        if kind == "string":
            if not isinstance(raw, str):
                raise SchemaValidationException(
                    f"{name} must be a string", field_path=name
                )
            values[name] = raw
        else:
            values[name] = parse_decimal(raw, name)

    return MakerOrder(**values)
