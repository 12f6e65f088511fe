"""
Mutable Merkle tree and existence proofs.

This module provides:
- MerkleTree: leaf-level storage with insert/update/delete and O(log n) rehashing
- LeafNode / InternalNode: node model and digest-combination rules
- ExistenceProof: sibling path from a leaf to the root, with validation
- MerkleProver / MerkleVerifier: convenience wrappers

Digest Rules:
1. Leaf: H(data)
2. Internal node, two children: H(left ++ right)
3. Internal node, one child: H(child)
4. Internal node, no children: no digest
5. Empty tree: no root

Usage:
    from mutable_merkle.crypto import Sha256Hasher
    from mutable_merkle.merkle import MerkleTree

    tree = MerkleTree(Sha256Hasher())
    for item in items:
        tree.add_data(item)

    digest = tree.hasher.hash(items[2])
    proof = tree.build_existence_proof(digest)
    assert proof.validate(digest, tree.root_digest)
"""
from .nodes import (
    MerkleNode,
    LeafNode,
    InternalNode,
    combine_digests,
)

from .existence_proof import (
    Side,
    Sibling,
    ExistenceProof,
)

from .merkle_tree import (
    MerkleTree,
    parent_index,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Nodes
    "MerkleNode",
    "LeafNode",
    "InternalNode",
    "combine_digests",
    # Proofs
    "Side",
    "Sibling",
    "ExistenceProof",
    # Tree
    "MerkleTree",
    "parent_index",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
