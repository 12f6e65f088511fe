"""
Test fixtures package for mutable_merkle tests.

- hashers.py: the readable "1x9" test hasher and helpers for golden digests

Usage:
    from fixtures import ReadableTestHasher, readable

    def test_something():
        tree = MerkleTree(ReadableTestHasher())
        tree.add_data(b"\\x0a")
        assert tree.root_digest == readable("11a99")
"""

from .hashers import (
    DIGEST_SIZE_BITS,
    FailingStream,
    ReadableTestHasher,
    padded_hash,
    readable,
)

__all__ = [
    "DIGEST_SIZE_BITS",
    "FailingStream",
    "ReadableTestHasher",
    "padded_hash",
    "readable",
]
