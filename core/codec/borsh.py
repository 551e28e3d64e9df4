"""
Codec - Borsh Primitives
Fixed-width little-endian integers and length-prefixed strings.

Wire Rules (Hard Contracts):
1. Unsigned integers are little-endian, exactly their declared width
2. Strings are a u32 little-endian byte length followed by UTF-8 bytes
3. No padding, no tags, no separators between values

BorshWriter accumulates bytes; BorshReader consumes them with an explicit
cursor and refuses to read past the end. Neither object is shared between
calls, so both are safe to use from any number of threads.
"""
from __future__ import annotations

from typing import Any

from core.schemas.errors import (
    DecodingErrorKind,
    DecodingException,
    EncodingErrorKind,
    EncodingException,
)


# Width in bytes of every unsigned kind the schema uses
UINT_WIDTHS: dict[str, int] = {
    "u8": 1,
    "u16": 2,
    "u32": 4,
    "u64": 8,
    "u128": 16,
}

STRING_LENGTH_KIND = "u32"


def uint_max(kind: str) -> int:
    """Largest value representable by an unsigned kind."""
    return (1 << (8 * UINT_WIDTHS[kind])) - 1


class BorshWriter:
    """Append-only buffer producing a Borsh byte sequence."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def __len__(self) -> int:
        return len(self._buf)

    def write_uint(self, value: Any, kind: str, field_name: str | None = None) -> None:
        """
        Write an unsigned integer in its declared width.

        Raises:
            EncodingException: INVALID_VALUE for negatives and non-integers,
                VALUE_OUT_OF_RANGE when the value exceeds the width
        """
        if kind not in UINT_WIDTHS:
            raise ValueError(f"Unknown integer kind: {kind}")

        # bool is an int subclass but never a valid amount
        if isinstance(value, bool) or not isinstance(value, int):
            raise EncodingException(
                EncodingErrorKind.INVALID_VALUE,
                f"{field_name or kind} must be an integer, got {type(value).__name__}",
                field_name=field_name,
                details={"kind": kind},
            )
        if value < 0:
            raise EncodingException(
                EncodingErrorKind.INVALID_VALUE,
                f"{field_name or kind} must be unsigned, got {value}",
                field_name=field_name,
                details={"kind": kind, "value": str(value)},
            )
        if value > uint_max(kind):
            raise EncodingException(
                EncodingErrorKind.VALUE_OUT_OF_RANGE,
                f"{field_name or kind} does not fit in {kind}: {value}",
                field_name=field_name,
                details={"kind": kind, "value": str(value), "max": str(uint_max(kind))},
            )

        self._buf += value.to_bytes(UINT_WIDTHS[kind], "little")

    def write_string(self, value: Any, field_name: str | None = None) -> None:
        """
        Write a u32 length prefix followed by the UTF-8 bytes of value.

        Raises:
            EncodingException: INVALID_VALUE for non-str or unencodable text,
                VALUE_OUT_OF_RANGE when the byte length exceeds u32
        """
        if not isinstance(value, str):
            raise EncodingException(
                EncodingErrorKind.INVALID_VALUE,
                f"{field_name or 'string'} must be str, got {type(value).__name__}",
                field_name=field_name,
            )
        try:
            raw = value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise EncodingException(
                EncodingErrorKind.INVALID_VALUE,
                f"{field_name or 'string'} is not valid UTF-8 text: {e}",
                field_name=field_name,
            ) from e

        if len(raw) > uint_max(STRING_LENGTH_KIND):
            raise EncodingException(
                EncodingErrorKind.VALUE_OUT_OF_RANGE,
                f"{field_name or 'string'} is too long: {len(raw)} bytes",
                field_name=field_name,
                details={"length": len(raw)},
            )

        self._buf += len(raw).to_bytes(UINT_WIDTHS[STRING_LENGTH_KIND], "little")
        self._buf += raw

    def getvalue(self) -> bytes:
        return bytes(self._buf)


class BorshReader:
    """Cursor over a Borsh byte sequence."""

    def __init__(self, data: bytes) -> None:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"BorshReader expects bytes-like input, got {type(data).__name__}")
        self._data = bytes(data)
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def _take(self, size: int, field_name: str | None) -> bytes:
        if size > self.remaining:
            raise DecodingException(
                DecodingErrorKind.TRUNCATED,
                f"Need {size} bytes for {field_name or 'value'} at offset {self._pos}, "
                f"only {self.remaining} left",
                field_name=field_name,
                offset=self._pos,
                details={"needed": size, "available": self.remaining},
            )
        chunk = self._data[self._pos:self._pos + size]
        self._pos += size
        return chunk

    def read_uint(self, kind: str, field_name: str | None = None) -> int:
        if kind not in UINT_WIDTHS:
            raise ValueError(f"Unknown integer kind: {kind}")
        return int.from_bytes(self._take(UINT_WIDTHS[kind], field_name), "little")

    def read_string(self, field_name: str | None = None) -> str:
        length = self.read_uint(STRING_LENGTH_KIND, field_name)
        start = self._pos
        raw = self._take(length, field_name)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodingException(
                DecodingErrorKind.INVALID_ENCODING,
                f"{field_name or 'string'} is not valid UTF-8: {e.reason}",
                field_name=field_name,
                offset=start,
            ) from e

    def finish(self) -> None:
        """
        Assert every byte was consumed.

        Raises:
            DecodingException: TRAILING_DATA if bytes remain
        """
        if self.remaining:
            raise DecodingException(
                DecodingErrorKind.TRAILING_DATA,
                f"{self.remaining} trailing bytes after offset {self._pos}",
                offset=self._pos,
                details={"trailing": self.remaining},
            )


def encode_field(writer: BorshWriter, kind: str, value: Any, field_name: str | None = None) -> None:
    """Write one value according to its wire kind."""
    if kind == "string":
        writer.write_string(value, field_name)
    else:
        writer.write_uint(value, kind, field_name)


def decode_field(reader: BorshReader, kind: str, field_name: str | None = None) -> Any:
    """Read one value according to its wire kind."""
    if kind == "string":
        return reader.read_string(field_name)
    return reader.read_uint(kind, field_name)


__all__ = [
    "UINT_WIDTHS",
    "uint_max",
    "BorshWriter",
    "BorshReader",
    "encode_field",
    "decode_field",
]
