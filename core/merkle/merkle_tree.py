"""
Merkle - Secret Tree Primitives
Root, proof and verification over pre-hashed leaves.

Tree shape:
- Leaves are the indexed secret hashes of an order, used as given
- An odd level is padded by repeating its last node
- parent = keccak256(min(a, b) + max(a, b)), so a proof is just the list of
  siblings from the leaf upwards, with no left/right flags
- No leaves: keccak256(b""); one leaf: the leaf itself

The escrow folds a resolver's proof with the same sorted-pair rule, so any
proof produced here verifies on chain.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from core.crypto.hashing import hash_pair, keccak256


EMPTY_TREE_ROOT: bytes = keccak256(b"")


@dataclass(frozen=True)
class MerkleProof:
    """Inclusion proof for leaves[index] under root."""
    leaf: bytes
    index: int
    siblings: list[bytes]
    root: bytes

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")

    def siblings_hex(self) -> list[str]:
        """Siblings as bare hex strings, the form the escrow accepts."""
        return [s.hex() for s in self.siblings]


def merkle_parent(left: bytes, right: bytes) -> bytes:
    return hash_pair(left, right)


def _padded(level: list[bytes]) -> list[bytes]:
    return level + [level[-1]] if len(level) % 2 else level


def build_levels(leaves: Sequence[bytes]) -> list[list[bytes]]:
    """
    Every level of the tree, leaves first and root last.

    Levels are stored unpadded; callers pad on read with the last node.
    """
    levels = [list(leaves)]
    while len(levels[-1]) > 1:
        level = _padded(levels[-1])
        levels.append([merkle_parent(level[i], level[i + 1]) for i in range(0, len(level), 2)])
    return levels


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """
    Root over leaves, in the given order.

    [a, b, c] is hashed as [a, b, c, c] -> [ab, cc] -> root.
    """
    if not leaves:
        return EMPTY_TREE_ROOT
    return build_levels(leaves)[-1][0]


def build_merkle_proof(leaves: Sequence[bytes], index: int) -> MerkleProof:
    """
    Proof for the leaf at index.

    Raises:
        ValueError: If leaves is empty
        IndexError: If index is outside leaves
    """
    if not leaves:
        raise ValueError("Cannot generate proof for empty leaf list")
    if not 0 <= index < len(leaves):
        raise IndexError(f"Leaf index {index} out of range for {len(leaves)} leaves")

    levels = build_levels(leaves)
    siblings = []
    position = index
    for level in levels[:-1]:
        siblings.append(_padded(level)[position ^ 1])
        position //= 2

    return MerkleProof(leaf=leaves[index], index=index, siblings=siblings, root=levels[-1][0])


def compute_root_from_proof(leaf: bytes, siblings: Sequence[bytes]) -> bytes:
    node = leaf
    for sibling in siblings:
        node = merkle_parent(node, sibling)
    return node


def verify_merkle_proof(proof: MerkleProof) -> bool:
    return compute_root_from_proof(proof.leaf, proof.siblings) == proof.root


def compute_tree_depth(num_leaves: int) -> int:
    """Number of levels including leaves and root; 0 for no leaves."""
    if num_leaves <= 0:
        return 0
    return (num_leaves - 1).bit_length() + 1


__all__ = [
    "EMPTY_TREE_ROOT",
    "MerkleProof",
    "merkle_parent",
    "build_levels",
    "build_merkle_root",
    "build_merkle_proof",
    "compute_root_from_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
]
