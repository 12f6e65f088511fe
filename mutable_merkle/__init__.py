"""
mutable_merkle - a dynamically mutable Merkle tree with existence proofs.
"""
from mutable_merkle.crypto import HashValue, Hasher, Sha256Hasher, Sha512_256Hasher, create_hasher
from mutable_merkle.merkle import ExistenceProof, LeafNode, MerkleTree, Side, Sibling

__version__ = "0.1.0"

__all__ = [
    "HashValue",
    "Hasher",
    "Sha256Hasher",
    "Sha512_256Hasher",
    "create_hasher",
    "ExistenceProof",
    "LeafNode",
    "MerkleTree",
    "Side",
    "Sibling",
]
