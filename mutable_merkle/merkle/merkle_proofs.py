"""
Merkle Proofs Convenience Wrappers
Thin wrappers around MerkleTree and ExistenceProof for cleaner API.

This module provides class-based interfaces:
- MerkleProver: Build proofs for data or digests, raising on absence
- MerkleVerifier: Verify proofs, including from their wire form
"""
from __future__ import annotations

from typing import Optional

from mutable_merkle.crypto.hashing import HashValue, Hasher
from mutable_merkle.merkle.existence_proof import ExistenceProof
from mutable_merkle.merkle.merkle_tree import MerkleTree
from mutable_merkle.merkle.nodes import LeafNode
from mutable_merkle.schemas.errors import LeafNotFoundException
from mutable_merkle.schemas.proof import ExistenceProofDocument


class MerkleProver:
    """
    Convenience class for building existence proofs.

    Unlike MerkleTree.build_existence_proof(), which reports a missing
    leaf by returning None, these helpers raise LeafNotFoundException.

    Example:
        >>> tree.add_data(b"a")
        0
        >>> proof = MerkleProver.prove(tree, b"a")
        >>> len(proof)
        1
    """

    @staticmethod
    def prove_digest(tree: MerkleTree, digest: HashValue) -> ExistenceProof:
        """
        Build a proof for the leaf with the given digest.

        Raises:
            LeafNotFoundException: If the tree has no such leaf
        """
        proof = tree.build_existence_proof(digest)
        if proof is None:
            raise LeafNotFoundException(
                "Cannot build existence proof for a leaf not in the tree",
                digest=digest.to_hex(),
            )
        return proof

    @staticmethod
    def prove(tree: MerkleTree, data: bytes | str) -> ExistenceProof:
        """
        Build a proof for a leaf given its raw data.

        The data is hashed with the tree's own hasher.

        Raises:
            LeafNotFoundException: If the tree has no such leaf
        """
        digest = LeafNode.from_data(data, tree.hasher).digest
        return MerkleProver.prove_digest(tree, digest)

    @staticmethod
    def prove_document(tree: MerkleTree, digest: HashValue) -> ExistenceProofDocument:
        """Build a proof and return its serializable form."""
        return MerkleProver.prove_digest(tree, digest).to_document()


class MerkleVerifier:
    """
    Convenience class for verifying existence proofs.

    Verification needs only the proof, the target digest and the
    claimed root, never the tree.
    """

    @staticmethod
    def verify(proof: ExistenceProof, target: HashValue, root: Optional[HashValue]) -> bool:
        """Verify a proof against a claimed root."""
        return proof.validate(target, root)

    @staticmethod
    def verify_document(
        document: ExistenceProofDocument,
        target_hex: str,
        root_hex: str,
        hasher: Hasher,
    ) -> bool:
        """
        Verify a proof given entirely in its external encoding.

        Args:
            document: Serialized proof
            target_hex: Hex digest of the leaf being proven
            root_hex: Hex digest of the claimed root
            hasher: Hasher the tree was built with

        Returns:
            True if the proof is valid, False otherwise

        Raises:
            HashValueException: If any digest is malformed or has the
                wrong size for the hasher
        """
        proof = ExistenceProof.from_document(document, hasher)
        return proof.validate(hasher.from_hex(target_hex), hasher.from_hex(root_hex))


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
