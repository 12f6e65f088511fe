"""
Mutable Merkle Tree
A binary hash tree supporting insertion, in-place update and deletion of
leaves, with existence proofs.

Layout:
- levels[0] holds the leaves, levels[k] the parents of levels[k-1]
- position p at level k+1 is the parent of positions 2p and 2p+1 at level k
- the single node of the top level is the root

Deleted leaves (and leaves added as None) stay in place as empty slots
instead of compacting the leaf level, since compaction would move the
parents of every leaf after the gap. New leaves fill empty slots first,
oldest vacancy first, before the leaf level grows.

Every mutation walks one path from the touched leaf to the root, so it
costs O(log n) hash computations.
"""
from __future__ import annotations

import logging
from collections import deque
from typing import BinaryIO, Iterator, Optional

from mutable_merkle.config.runtime import get_default_config
from mutable_merkle.crypto.hashing import HashValue, Hasher, create_hasher
from mutable_merkle.merkle.existence_proof import ExistenceProof, Side, Sibling
from mutable_merkle.merkle.nodes import InternalNode, LeafNode, MerkleNode
from mutable_merkle.schemas.errors import (
    HashValueException,
    LeafNotFoundException,
    LeafPositionException,
)

logger = logging.getLogger(__name__)


def parent_index(child_index: int) -> int:
    return child_index // 2


class MerkleTree:
    """
    A dynamic Merkle tree.

    Not safe for concurrent mutation: callers sharing a tree across
    threads must serialize access themselves. Proofs built from the tree
    are immutable snapshots and can be shared freely.

    Example:
        >>> tree = MerkleTree(Sha256Hasher())
        >>> tree.add_data(b"a")
        0
        >>> proof = tree.build_existence_proof(tree.hasher.hash(b"a"))
        >>> proof.validate(tree.hasher.hash(b"a"), tree.root_digest)
        True
    """

    def __init__(self, hasher: Optional[Hasher] = None) -> None:
        """
        Create an empty tree.

        Args:
            hasher: Hashing capability for every digest of this tree;
                    defaults to the hasher named by the runtime config
        """
        self.hasher = hasher or create_hasher(get_default_config().hashing)
        # levels[0] may contain None for empty leaf slots
        self._levels: list[list[Optional[MerkleNode]]] = [[]]
        self._leaf_positions: dict[HashValue, int] = {}
        self._empty_positions: deque[int] = deque()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def height(self) -> int:
        """Number of levels, leaf level included."""
        return len(self._levels)

    @property
    def leaf_count(self) -> int:
        """Number of occupied leaf slots."""
        return len(self._levels[0]) - len(self._empty_positions)

    @property
    def empty_positions(self) -> tuple[int, ...]:
        """Empty leaf slots, in the order they will be reused."""
        return tuple(self._empty_positions)

    def get_root(self) -> Optional[MerkleNode]:
        """Return the root node, or None if no leaf was ever added."""
        if self.height < 2:
            return None
        return self._levels[-1][0]

    @property
    def root_digest(self) -> Optional[HashValue]:
        """Digest of the root, or None for an empty tree."""
        root = self.get_root()
        return root.digest if root is not None else None

    def get_leaf(self, position: int) -> Optional[LeafNode]:
        """
        Return the leaf at a position, or None for an empty slot.

        Raises:
            LeafPositionException: If position is outside the leaf level
        """
        self._check_position(position)
        return self._levels[0][position]

    def position_of(self, digest: HashValue) -> Optional[int]:
        """Position of the leaf with the given digest, if present."""
        return self._leaf_positions.get(digest)

    def __contains__(self, digest: object) -> bool:
        return digest in self._leaf_positions

    def __len__(self) -> int:
        return len(self._levels[0])

    def __iter__(self) -> Iterator[Optional[LeafNode]]:
        return iter(list(self._levels[0]))

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def add_leaf(self, leaf: Optional[LeafNode]) -> int:
        """
        Add a leaf, filling the oldest empty slot if there is one.

        Passing None adds an explicit empty slot.

        Returns:
            The leaf-level position the leaf was placed at
        """
        if leaf is not None:
            self._check_leaf(leaf)

        leaves = self._levels[0]
        appending = not self._empty_positions
        position = len(leaves) if appending else self._empty_positions.popleft()

        if leaf is not None:
            self._leaf_positions[leaf.digest] = position
        else:
            self._empty_positions.append(position)

        if appending:
            leaves.append(leaf)
            self._propagate_creation(0, position)
        else:
            leaves[position] = leaf
            self._propagate_update(1, parent_index(position))

        logger.debug(
            "Added leaf %s at position %d (%s)",
            leaf.digest.to_hex() if leaf is not None else None,
            position,
            "appended" if appending else "reused",
        )
        return position

    def add_data(self, data: bytes | str) -> int:
        """Hash data with the tree's hasher and add it as a leaf."""
        return self.add_leaf(LeafNode.from_data(data, self.hasher))

    def add_stream(self, stream: BinaryIO) -> int:
        """
        Hash a binary stream with the tree's hasher and add it as a leaf.

        Raises:
            OSError: Upon issues reading from the stream
        """
        return self.add_leaf(LeafNode.from_stream(stream, self.hasher))

    def update_leaf(self, digest: HashValue, new_leaf: LeafNode) -> LeafNode:
        """
        Replace the leaf with the given digest and rehash its ancestors.

        Raises:
            LeafNotFoundException: If no leaf has that digest
        """
        position = self._require_position(digest, "Updating a non-existing leaf")
        return self.update_leaf_at(position, new_leaf)

    def update_leaf_at(self, position: int, new_leaf: LeafNode) -> LeafNode:
        """
        Replace the leaf at a position and rehash its ancestors.

        Updating an empty slot fills it.

        Raises:
            LeafPositionException: If position is outside the leaf level
        """
        self._check_position(position)
        self._check_leaf(new_leaf)

        leaves = self._levels[0]
        old_leaf = leaves[position]
        if old_leaf is None:
            self._empty_positions.remove(position)
        else:
            self._forget(old_leaf.digest, position)

        self._leaf_positions[new_leaf.digest] = position
        leaves[position] = new_leaf
        self._propagate_update(1, parent_index(position))

        logger.debug("Updated leaf at position %d to %s", position, new_leaf.digest.to_hex())
        return new_leaf

    def remove_leaf(self, digest: HashValue) -> None:
        """
        Remove the leaf with the given digest and rehash its ancestors.

        Raises:
            LeafNotFoundException: If no leaf has that digest
        """
        position = self._require_position(digest, "Removing a non-existing leaf")
        self.remove_leaf_at(position)

    def remove_leaf_at(self, position: int) -> None:
        """
        Empty the leaf slot at a position and rehash its ancestors.

        Raises:
            LeafPositionException: If position is outside the leaf level
            LeafNotFoundException: If the slot is already empty
        """
        self._check_position(position)

        leaves = self._levels[0]
        old_leaf = leaves[position]
        if old_leaf is None:
            raise LeafNotFoundException(
                f"Removing an empty leaf slot at position {position}",
                position=position,
            )

        self._forget(old_leaf.digest, position)
        leaves[position] = None
        self._empty_positions.append(position)
        self._propagate_update(1, parent_index(position))

        logger.debug("Removed leaf %s from position %d", old_leaf.digest.to_hex(), position)

    # -------------------------------------------------------------------------
    # Proofs
    # -------------------------------------------------------------------------

    def build_existence_proof(self, digest: HashValue) -> Optional[ExistenceProof]:
        """
        Build a proof that the leaf with the given digest is in the tree.

        Returns:
            The proof, or None if no leaf has that digest
        """
        index = self._leaf_positions.get(digest)
        if index is None:
            logger.debug("No leaf %s, cannot build existence proof", digest.to_hex())
            return None

        siblings: list[Sibling] = []
        for level in range(self.height - 1):
            if index % 2 == 0:
                sibling = self._node_at(level, index + 1)
                side = Side.RIGHT
            else:
                sibling = self._node_at(level, index - 1)
                side = Side.LEFT
            siblings.append(Sibling(sibling.digest if sibling is not None else None, side))
            index = parent_index(index)

        return ExistenceProof(siblings=tuple(siblings), hasher=self.hasher)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _propagate_creation(self, level: int, index: int) -> None:
        """
        Link a newly appended node into the tree.

        Creates missing ancestors on the way up; a missing level above
        the current top becomes the new root level.
        """
        while True:
            up_level, up_index = level + 1, parent_index(index)
            if self._node_at(up_level, up_index) is not None:
                self._propagate_update(up_level, up_index)
                return

            left, right = self._children(up_level, up_index)
            node = InternalNode.from_children(left, right, self.hasher)

            if up_level == self.height:
                self._levels.append([node])
                logger.debug("Tree grew to height %d", self.height)
                return

            self._levels[up_level].append(node)
            level, index = up_level, up_index

    def _propagate_update(self, level: int, index: int) -> None:
        """Rehash the internal node at (level, index) and every ancestor."""
        while True:
            node = self._levels[level][index]
            node.update(*self._children(level, index))
            if level >= self.height - 1:
                return
            level, index = level + 1, parent_index(index)

    def _node_at(self, level: int, index: int) -> Optional[MerkleNode]:
        if level >= self.height:
            return None
        nodes = self._levels[level]
        if index >= len(nodes):
            return None
        return nodes[index]

    def _children(self, level: int, index: int) -> tuple[Optional[MerkleNode], Optional[MerkleNode]]:
        first = 2 * index
        return self._node_at(level - 1, first), self._node_at(level - 1, first + 1)

    def _check_position(self, position: int) -> None:
        size = len(self._levels[0])
        if not 0 <= position < size:
            raise LeafPositionException(
                f"Leaf position {position} out of range for {size} leaf slots",
                position=position,
                size=size,
            )

    def _check_leaf(self, leaf: LeafNode) -> None:
        if len(leaf.digest) != self.hasher.digest_size:
            raise HashValueException(
                f"Leaf digest has {len(leaf.digest)} bytes, "
                f"tree hasher produces {self.hasher.digest_size}",
                expected_size=self.hasher.digest_size,
                actual_size=len(leaf.digest),
            )

    def _require_position(self, digest: HashValue, message: str) -> int:
        position = self._leaf_positions.get(digest)
        if position is None:
            raise LeafNotFoundException(message, digest=digest.to_hex())
        return position

    def _forget(self, digest: HashValue, position: int) -> None:
        # a colliding digest may have been remapped to a later position
        if self._leaf_positions.get(digest) == position:
            del self._leaf_positions[digest]

    def __repr__(self) -> str:
        root = self.root_digest
        return (
            f"MerkleTree(height={self.height}, leaves={self.leaf_count}, "
            f"root={root.to_hex() if root is not None else None!r})"
        )


__all__ = [
    "MerkleTree",
    "parent_index",
]
