"""
Merkle Nodes
Leaf and internal nodes of the mutable Merkle tree.

Digest rules ('++' is concatenation, H the tree's hasher):
- Leaf: H(raw data), computed once at construction
- Internal, two children: H(left.digest ++ right.digest)
- Internal, one child (either side): H(child.digest)
- Internal, no children: None

A child whose digest is None (an empty leaf slot, or an internal node
over an empty subtree) counts as absent.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO, Optional

from mutable_merkle.crypto.hashing import HashValue, Hasher


def combine_digests(
    hasher: Hasher,
    left: Optional[HashValue],
    right: Optional[HashValue],
) -> Optional[HashValue]:
    """
    Compute an internal node digest from its children's digests.

    Args:
        hasher: Hasher of the tree
        left: Left child digest, or None if absent
        right: Right child digest, or None if absent

    Returns:
        The combined digest, or None when both children are absent
    """
    if left is None and right is None:
        return None
    # a lone child is hashed on its own, whichever side it sits on
    if left is None:
        left, right = right, None
    return hasher.hash(left.concat(right))


class MerkleNode(ABC):
    """Any node in the Merkle tree."""

    @property
    @abstractmethod
    def digest(self) -> Optional[HashValue]:
        """The node's digest, or None if the node holds no data."""


def _digest_of(node: Optional[MerkleNode]) -> Optional[HashValue]:
    return node.digest if node is not None else None


class LeafNode(MerkleNode):
    """
    A leaf node, created from data held in memory or read from a stream.

    The source data is not retained, only its digest.
    """

    def __init__(self, digest: HashValue) -> None:
        self._digest = digest

    @classmethod
    def from_data(cls, data: bytes | str, hasher: Hasher) -> "LeafNode":
        """Create a leaf by hashing bytes, or the UTF-8 encoding of a string."""
        if isinstance(data, str):
            return cls(hasher.hash_text(data))
        return cls(hasher.hash(data))

    @classmethod
    def from_stream(cls, stream: BinaryIO, hasher: Hasher) -> "LeafNode":
        """
        Create a leaf by hashing data read from a binary stream.

        Raises:
            OSError: Upon issues reading from the stream
        """
        return cls(hasher.hash_stream(stream))

    @property
    def digest(self) -> HashValue:
        return self._digest

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LeafNode):
            return NotImplemented
        return self._digest == other._digest

    def __hash__(self) -> int:
        return hash(self._digest)

    def __repr__(self) -> str:
        return f"LeafNode({self._digest.to_hex()!r})"


class InternalNode(MerkleNode):
    """
    A non-leaf node with zero to two children.

    Internal nodes are created as leaves are appended and can become
    childless again when their leaves are removed. A node keeps its
    identity for its whole life; update() only replaces its digest.
    """

    def __init__(self, hasher: Hasher) -> None:
        self._hasher = hasher
        self._digest: Optional[HashValue] = None

    @classmethod
    def from_children(
        cls,
        left: Optional[MerkleNode],
        right: Optional[MerkleNode],
        hasher: Hasher,
    ) -> "InternalNode":
        """Create an internal node over up to two children."""
        node = cls(hasher)
        node.update(left, right)
        return node

    @property
    def digest(self) -> Optional[HashValue]:
        return self._digest

    def update(self, left: Optional[MerkleNode], right: Optional[MerkleNode]) -> None:
        """Recompute the digest from the current state of the children."""
        self._digest = combine_digests(self._hasher, _digest_of(left), _digest_of(right))

    def __repr__(self) -> str:
        digest = self._digest.to_hex() if self._digest is not None else None
        return f"InternalNode({digest!r})"


__all__ = [
    "MerkleNode",
    "LeafNode",
    "InternalNode",
    "combine_digests",
]
