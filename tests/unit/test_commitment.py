"""
Hash-Lock Commitment Unit Tests
Tests for core/crypto/commitment.py
"""
import pytest

from core.crypto.commitment import (
    derive,
    derive_hex,
    generate_secret,
    hash_immutables,
    indexed_secret_hash,
    validate_secret,
)
from core.crypto.hashing import is_hex_digest, keccak256


class TestDerive:
    """Tests for derive()/derive_hex()."""

    def test_derive_is_keccak_of_utf8(self):
        assert derive("test_secret_123") == keccak256(b"test_secret_123")

    def test_str_and_bytes_agree(self):
        assert derive("s3cr3t") == derive(b"s3cr3t")

    def test_non_ascii_secret_is_utf8_encoded(self):
        assert derive("clé") == keccak256("clé".encode("utf-8"))

    def test_empty_secret(self):
        assert derive_hex(b"") == (
            "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
        )

    def test_derive_hex_format(self):
        root = derive_hex("test_secret_123")
        assert len(root) == 64
        assert is_hex_digest(root)
        assert not root.startswith("0x")

    def test_deterministic(self):
        assert derive_hex("a") == derive_hex("a")
        assert derive_hex("a") != derive_hex("b")

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            derive(123)


class TestValidateSecret:
    """Tests for validate_secret()."""

    def test_matching_secret(self):
        assert validate_secret("open", derive_hex("open"))

    def test_prefixed_hashlock(self):
        assert validate_secret("open", "0x" + derive_hex("open"))

    def test_uppercase_hashlock(self):
        assert validate_secret("open", derive_hex("open").upper())

    def test_wrong_secret(self):
        assert not validate_secret("closed", derive_hex("open"))


class TestIndexedSecretHash:
    """Tests for indexed_secret_hash()."""

    def test_layout(self):
        hashed = derive("s0")
        assert indexed_secret_hash(3, hashed) == keccak256(b"\x00\x03" + hashed)

    def test_index_is_big_endian(self):
        hashed = derive("s0")
        assert indexed_secret_hash(0x0102, hashed) == keccak256(b"\x01\x02" + hashed)

    def test_accepts_hex(self):
        hashed = derive("s0")
        assert indexed_secret_hash(1, hashed.hex()) == indexed_secret_hash(1, hashed)
        assert indexed_secret_hash(1, "0x" + hashed.hex()) == indexed_secret_hash(1, hashed)

    def test_index_bounds(self):
        hashed = derive("s0")
        indexed_secret_hash(0xFFFF, hashed)
        with pytest.raises(ValueError):
            indexed_secret_hash(0x10000, hashed)
        with pytest.raises(ValueError):
            indexed_secret_hash(-1, hashed)


class TestGenerateSecret:
    """Tests for generate_secret()."""

    def test_length(self):
        assert len(generate_secret()) == 64
        assert len(generate_secret(16)) == 32

    def test_unique(self):
        assert generate_secret() != generate_secret()

    def test_too_short(self):
        with pytest.raises(ValueError):
            generate_secret(8)


class TestHashImmutables:
    """Tests for hash_immutables()."""

    def test_hash_is_keccak_of_preimage(self, immutables):
        assert hash_immutables(immutables) == keccak256(immutables.hash_preimage()).hex()

    def test_salt_changes_hash(self):
        from fixtures import make_immutables
        assert hash_immutables(make_immutables(salt="a")) != hash_immutables(make_immutables(salt="b"))
