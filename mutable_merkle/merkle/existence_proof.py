"""
Existence Proofs
Proof that a leaf digest belongs to a tree with a given root digest.

A proof is a sequence of siblings, leaf-to-root, each telling on which
side of the path node it sits. Validation folds the siblings over the
target digest and compares the result with the claimed root. It never
touches the tree, so a proof stays checkable after the tree has moved on.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from mutable_merkle.crypto.hashing import HashValue, Hasher
from mutable_merkle.schemas.proof import ExistenceProofDocument, SiblingRecord


class Side(str, Enum):
    """Position of a sibling relative to the path node."""
    LEFT = "LEFT"
    RIGHT = "RIGHT"


@dataclass(frozen=True)
class Sibling:
    """
    A sibling of a node on the path between the target leaf and the root.

    Attributes:
        digest: The sibling's digest, or None if the sibling is absent
        side: LEFT means concatenate sibling-then-current,
              RIGHT means current-then-sibling
    """
    digest: Optional[HashValue]
    side: Side

    def concatenate(self, current: Optional[HashValue]) -> bytes:
        """Bytes to hash for this step, ordered according to side."""
        if self.digest is None and current is None:
            return b""
        if self.side is Side.LEFT:
            if self.digest is None:
                return current.to_bytes()
            return self.digest.concat(current)
        if current is None:
            return self.digest.to_bytes()
        return current.concat(self.digest)

    def combine(self, current: Optional[HashValue], hasher: Hasher) -> HashValue:
        """Digest of the parent of the path node."""
        return hasher.hash(self.concatenate(current))

    def to_record(self) -> SiblingRecord:
        return SiblingRecord(
            digest=self.digest.to_hex() if self.digest is not None else None,
            side=self.side.value,
        )


@dataclass(frozen=True)
class ExistenceProof:
    """
    An immutable existence proof.

    Built by MerkleTree.build_existence_proof(), or rebuilt from its wire
    form with from_document(). Holds digests only, never tree nodes.

    Attributes:
        siblings: Sibling records, leaf-to-root
        hasher: Hasher used to recombine digests
    """
    siblings: tuple[Sibling, ...]
    hasher: Hasher = field(compare=False, repr=False)

    def validate(self, target: Optional[HashValue], root: Optional[HashValue]) -> bool:
        """
        Check that target is a leaf of the tree whose root digest is root.

        Note that when both the running digest and a sibling are absent the
        step hashes the empty byte string, unlike the tree itself which
        gives a childless internal node no digest at all.

        Args:
            target: Digest of the leaf being proven
            root: Claimed root digest

        Returns:
            True if folding the siblings over target yields root
        """
        if root is None:
            return False

        current = target
        for sibling in self.siblings:
            current = sibling.combine(current, self.hasher)

        if current is None:
            return False
        return current.to_hex() == root.to_hex()

    def to_document(self) -> ExistenceProofDocument:
        """Serializable form of this proof."""
        return ExistenceProofDocument(
            algorithm=self.hasher.name,
            siblings=[s.to_record() for s in self.siblings],
        )

    @classmethod
    def from_document(cls, document: ExistenceProofDocument, hasher: Hasher) -> "ExistenceProof":
        """
        Rebuild a proof from its serializable form.

        Raises:
            HashValueException: If a sibling digest does not match the
                hasher's digest size
        """
        siblings = tuple(
            Sibling(
                digest=hasher.from_hex(record.digest) if record.digest is not None else None,
                side=Side(record.side),
            )
            for record in document.siblings
        )
        return cls(siblings=siblings, hasher=hasher)

    def __len__(self) -> int:
        return len(self.siblings)

    def __iter__(self) -> Iterator[Sibling]:
        return iter(self.siblings)


__all__ = [
    "Side",
    "Sibling",
    "ExistenceProof",
]
