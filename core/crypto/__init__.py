"""
Core cryptographic utilities.

Keccak-256 hashing, hex helpers and hash-lock commitment derivation.
"""
from .hashing import (
    DIGEST_SIZE,
    HEX_DIGEST_LENGTH,
    keccak256,
    strip_0x,
    to_hex,
    from_hex,
    is_hex_digest,
    hash_concat,
    hash_pair,
)
from .commitment import (
    derive,
    derive_hex,
    validate_secret,
    indexed_secret_hash,
    generate_secret,
    hash_immutables,
)

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
    "derive",
    "derive_hex",
    "validate_secret",
    "indexed_secret_hash",
    "generate_secret",
    "hash_immutables",
]
