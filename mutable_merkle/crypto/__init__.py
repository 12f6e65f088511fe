"""
Cryptographic utilities: digests and pluggable hashers.
"""
from .hashing import (
    HashValue,
    Hasher,
    HashlibHasher,
    Sha256Hasher,
    Sha512_256Hasher,
    HASHERS,
    create_hasher,
)

__all__ = [
    "HashValue",
    "Hasher",
    "HashlibHasher",
    "Sha256Hasher",
    "Sha512_256Hasher",
    "HASHERS",
    "create_hasher",
]
