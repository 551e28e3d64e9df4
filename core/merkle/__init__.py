"""
Merkle Trees for Multi-Fill Orders
Deterministic secret-tree construction + proof generation/verification.

This module provides:
- MerkleProof: Dataclass representing a Merkle inclusion proof
- build_merkle_root: Compute root from leaf hashes
- build_merkle_proof: Generate proof for a specific leaf
- verify_merkle_proof: Verify a proof against its claimed root
- SecretTree / MerkleVerifier: secret-level and hex-level wrappers

Commitment Rules:
1. Leaf: keccak256(u16_be(index) + keccak256(secret))
2. Parent hashing: keccak256(sorted(left, right))
3. Padding: Duplicate last node if odd number at any level
4. Empty tree: keccak256(b"")
5. Single leaf: root = leaf

Usage:
    from core.merkle import SecretTree, MerkleVerifier

    tree = SecretTree.for_parts(secrets, parts=4)
    order_root = tree.root_hex

    proof = tree.proof(2)
    assert MerkleVerifier.verify_fill(
        2, tree.hashlock_hex(2), proof.siblings_hex(), order_root
    )
"""
from .merkle_tree import (
    EMPTY_TREE_ROOT,
    MerkleProof,
    merkle_parent,
    build_levels,
    build_merkle_root,
    build_merkle_proof,
    compute_root_from_proof,
    verify_merkle_proof,
    compute_tree_depth,
)

from .merkle_proofs import (
    SecretTree,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "MerkleProof",
    "EMPTY_TREE_ROOT",
    # Core functions
    "merkle_parent",
    "build_levels",
    "build_merkle_root",
    "build_merkle_proof",
    "compute_root_from_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
    # Convenience classes
    "SecretTree",
    "MerkleVerifier",
]
