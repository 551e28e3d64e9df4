"""
Crypto - Hashing Utilities
Keccak-256 hashing and hex helpers shared by commitments and Merkle trees.

This module provides:
- Keccak-256 hashing for raw bytes (Ethereum / NEAR ``keccak256``)
- Hex encoding/decoding with optional 0x prefix
- Sorted-pair hashing used by the secret Merkle tree

Security/Determinism Notes:
- Keccak-256 is the pre-standard padding variant, NOT ``hashlib.sha3_256``.
  The escrow contract hashes with ``env::keccak256`` so the two must match.
- Always hash raw bytes exactly as given
- All operations are deterministic
"""
from __future__ import annotations

import re

from eth_utils import keccak

from core.schemas.errors import HexFormatException


DIGEST_SIZE = 32
HEX_DIGEST_LENGTH = DIGEST_SIZE * 2

_HEX_RE = re.compile(r"[0-9a-fA-F]*")


def keccak256(data: bytes) -> bytes:
    """
    Compute the Keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"keccak256 expects bytes-like input, got {type(data).__name__}")
    return keccak(primitive=bytes(data))


def strip_0x(value: str) -> str:
    """Remove a single leading '0x' prefix if present."""
    if value.startswith("0x"):
        return value[2:]
    return value


def to_hex(data: bytes, prefix: bool = False) -> str:
    """
    Convert bytes to a lowercase hexadecimal string.

    The escrow contract stores hashes without a prefix, so the default
    output carries none.

    Args:
        data: Raw bytes
        prefix: Prepend '0x' when True

    Returns:
        Hex string (e.g., "deadbeef" or "0xdeadbeef")
    """
    hex_str = bytes(data).hex()
    return "0x" + hex_str if prefix else hex_str


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hexadecimal string (with or without 0x prefix) to bytes.

    Args:
        hex_string: Hex string

    Returns:
        Decoded bytes

    Raises:
        HexFormatException: If the string has odd length or contains
                            invalid hex characters
    """
    hex_content = strip_0x(hex_string.strip())

    if len(hex_content) % 2 != 0:
        raise HexFormatException(
            f"Hex string must have even length, got length {len(hex_content)}",
            details={"length": len(hex_content)},
        )

    if not _HEX_RE.fullmatch(hex_content):
        raise HexFormatException(
            f"Invalid hex characters in string: {hex_content[:16]}...",
        )

    return bytes.fromhex(hex_content)


def is_hex_digest(value: str) -> bool:
    """Check that a string is exactly 64 lowercase hex chars (no prefix)."""
    return (
        len(value) == HEX_DIGEST_LENGTH
        and _HEX_RE.fullmatch(value) is not None
        and value == value.lower()
    )


def hash_concat(left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two byte sequences: keccak256(left + right).
    """
    return keccak256(left + right)


def hash_pair(a: bytes, b: bytes) -> bytes:
    """
    Hash two nodes in sorted order.

    parent = keccak256(min(a, b) + max(a, b))

    Sorting makes the parent independent of left/right position, so
    proofs need no direction bits.
    """
    if a <= b:
        return hash_concat(a, b)
    return hash_concat(b, a)


__all__ = [
    "DIGEST_SIZE",
    "HEX_DIGEST_LENGTH",
    "keccak256",
    "strip_0x",
    "to_hex",
    "from_hex",
    "is_hex_digest",
    "hash_concat",
    "hash_pair",
]
