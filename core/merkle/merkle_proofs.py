"""
Merkle - Secret Trees and Hex Verification
Class-based helpers around merkle_tree.py for multi-fill orders.

This module provides:
- SecretTree: commit to one secret per fill index and publish the root
- MerkleVerifier: hex-level proof check mirroring the escrow contract

An order split into N parts uses N + 1 secrets. Fill index i < N reveals
secret i; the fill that completes the order reveals secret N.
"""
from __future__ import annotations

from typing import Sequence

from core.crypto.commitment import Secret, derive, indexed_secret_hash
from core.crypto.hashing import from_hex, to_hex
from core.merkle.merkle_tree import (
    MerkleProof,
    build_merkle_proof,
    build_merkle_root,
    compute_root_from_proof,
    verify_merkle_proof,
)
from core.schemas.errors import HexFormatException, MerkleVerificationException


class SecretTree:
    """
    Merkle commitment over the secrets of a multi-fill order.

    Example:
        >>> tree = SecretTree.from_secrets(["s0", "s1", "s2"])
        >>> proof = tree.proof(1)
        >>> MerkleVerifier.verify(tree.leaf_hex(1), proof.siblings_hex(), tree.root_hex)
        True
    """

    def __init__(self, hashed_secrets: Sequence[bytes]) -> None:
        if not hashed_secrets:
            raise MerkleVerificationException("A secret tree needs at least one secret")
        self.hashed_secrets: list[bytes] = list(hashed_secrets)
        self.leaves: list[bytes] = [
            indexed_secret_hash(i, h) for i, h in enumerate(self.hashed_secrets)
        ]
        self.root: bytes = build_merkle_root(self.leaves)

    @classmethod
    def from_secrets(cls, secrets: Sequence[Secret]) -> "SecretTree":
        return cls([derive(s) for s in secrets])

    @classmethod
    def for_parts(cls, secrets: Sequence[Secret], parts: int) -> "SecretTree":
        """Build the tree for an order with ``parts`` parts (parts + 1 secrets)."""
        if len(secrets) != parts + 1:
            raise MerkleVerificationException(
                f"An order in {parts} parts needs {parts + 1} secrets, got {len(secrets)}",
                details={"parts": parts, "secrets": len(secrets)},
            )
        return cls.from_secrets(secrets)

    def __len__(self) -> int:
        return len(self.leaves)

    @property
    def root_hex(self) -> str:
        return to_hex(self.root)

    def hashlock_hex(self, index: int) -> str:
        """The per-fill hash-lock a resolver puts in its Immutables."""
        return to_hex(self.hashed_secrets[index])

    def leaf_hex(self, index: int) -> str:
        return to_hex(self.leaves[index])

    def proof(self, index: int) -> MerkleProof:
        try:
            return build_merkle_proof(self.leaves, index)
        except IndexError as e:
            raise MerkleVerificationException(str(e), leaf_index=index) from e


class MerkleVerifier:
    """Hex-level proof verification. All inputs may carry a 0x prefix."""

    @staticmethod
    def verify(leaf_hex: str, proof_hex: Sequence[str], root_hex: str) -> bool:
        """
        Check that leaf folds up to root through the given siblings.

        Raises:
            MerkleVerificationException: If any input is not valid hex
        """
        try:
            leaf = from_hex(leaf_hex)
            root = from_hex(root_hex)
            siblings = [from_hex(p) for p in proof_hex]
        except HexFormatException as e:
            raise MerkleVerificationException(f"Invalid proof hex: {e.message}") from e
        return compute_root_from_proof(leaf, siblings) == root

    @staticmethod
    def verify_proof(proof: MerkleProof) -> bool:
        return verify_merkle_proof(proof)

    @staticmethod
    def verify_fill(
        index: int,
        hashlock: str,
        proof_hex: Sequence[str],
        root_hex: str,
    ) -> bool:
        """
        Check a resolver's claim that ``hashlock`` is the secret hash for
        fill ``index`` of the order committed to ``root_hex``.

        Raises:
            MerkleVerificationException: If index is not a u16 or any input
                                         is not valid hex
        """
        try:
            leaf = indexed_secret_hash(index, hashlock)
        except HexFormatException as e:
            raise MerkleVerificationException(
                f"Invalid hashlock hex: {e.message}", leaf_index=index
            ) from e
        except ValueError as e:
            raise MerkleVerificationException(str(e), leaf_index=index) from e
        return MerkleVerifier.verify(to_hex(leaf), proof_hex, root_hex)


__all__ = [
    "SecretTree",
    "MerkleVerifier",
]
