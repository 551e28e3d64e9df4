"""
Crypto - Hash-Lock Commitments
Derives the root hash a maker order is locked with.

A maker picks a secret, publishes keccak256(secret) inside the order, and
reveals the secret later to release the escrow. For orders split into
several parts the maker commits to one secret per fill index and publishes
the Merkle root of their indexed hashes instead (see core.merkle).

Rules:
1. derive(secret) = keccak256(secret bytes); str secrets are UTF-8 encoded
2. The embedded form is 64 lowercase hex chars, no 0x prefix
3. indexed leaf = keccak256(u16_be(index) + keccak256(secret))
"""
from __future__ import annotations

import secrets as _secrets
from typing import Union

from core.crypto.hashing import from_hex, keccak256, strip_0x, to_hex
from core.schemas.immutables import Immutables

Secret = Union[bytes, str]

MAX_FILL_INDEX = 0xFFFF


def _secret_bytes(secret: Secret) -> bytes:
    if isinstance(secret, str):
        return secret.encode("utf-8")
    if isinstance(secret, (bytes, bytearray, memoryview)):
        return bytes(secret)
    raise TypeError(f"secret must be bytes or str, got {type(secret).__name__}")


def derive(secret: Secret) -> bytes:
    """
    Map a secret to its 32-byte hash-lock digest.

    Empty secrets hash fine; choosing a strong secret is the caller's job.

    Args:
        secret: Raw secret bytes, or a str hashed as its UTF-8 bytes

    Returns:
        32-byte Keccak-256 digest
    """
    return keccak256(_secret_bytes(secret))


def derive_hex(secret: Secret) -> str:
    """
    Derive the hash-lock and render it for embedding in a MakerOrder.

    Returns:
        64-char lowercase hex string without 0x prefix
    """
    return to_hex(derive(secret))


def validate_secret(secret: Secret, hashlock: str) -> bool:
    """
    Check a revealed secret against a published hash-lock.

    The hash-lock may carry a 0x prefix; comparison is on the bare hex.
    """
    return derive_hex(secret) == strip_0x(hashlock).lower()


def indexed_secret_hash(index: int, hashed_secret: bytes | str) -> bytes:
    """
    Compute the Merkle leaf for the secret used at a given fill index.

    leaf = keccak256(index as u16 big-endian + hashed_secret)

    Args:
        index: Fill index, 0..65535
        hashed_secret: derive(secret) as bytes or hex (0x optional)

    Returns:
        32-byte leaf hash
    """
    if not 0 <= index <= MAX_FILL_INDEX:
        raise ValueError(f"Fill index must fit in u16, got {index}")
    if isinstance(hashed_secret, str):
        hashed_secret = from_hex(hashed_secret)
    return keccak256(index.to_bytes(2, "big") + hashed_secret)


def generate_secret(nbytes: int = 32) -> str:
    """Generate a random hex secret suitable for a hash-lock."""
    if nbytes < 16:
        raise ValueError(f"Secrets shorter than 16 bytes are guessable, got {nbytes}")
    return _secrets.token_hex(nbytes)


def hash_immutables(immutables: Immutables) -> str:
    """
    Key of a resolver fill: keccak256 of the Immutables preimage, as hex.
    """
    return to_hex(keccak256(immutables.hash_preimage()))


__all__ = [
    "Secret",
    "MAX_FILL_INDEX",
    "derive",
    "derive_hex",
    "validate_secret",
    "indexed_secret_hash",
    "generate_secret",
    "hash_immutables",
]
