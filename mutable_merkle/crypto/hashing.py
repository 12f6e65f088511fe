"""
Hashing Capability
Digest values and pluggable hash algorithms for the Merkle tree.

This module provides:
- HashValue: immutable fixed-size digest with byte/hex conversion
- Hasher: abstract hashing capability (bytes, streams, digest size)
- Sha256Hasher / Sha512_256Hasher: hashlib-backed 256-bit hashers
- create_hasher: factory selecting a hasher from configuration

Determinism Notes:
- Raw bytes are hashed exactly as given
- Streams are read to EOF; the digest equals hashing the same bytes in memory
- All HashValues of one tree come from the same Hasher instance
"""
from __future__ import annotations

import binascii
import hashlib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO, Optional

from mutable_merkle.config.runtime import DEFAULT_STREAM_CHUNK_SIZE, HashingConfig
from mutable_merkle.schemas.errors import HashValueException, UnknownHashAlgorithmException


@dataclass(frozen=True)
class HashValue:
    """
    An opaque fixed-size digest.

    Instances are normally produced by a Hasher; use from_bytes/from_hex
    to rebuild one from an external encoding.

    Attributes:
        value: The raw digest bytes
    """
    value: bytes

    @classmethod
    def from_bytes(cls, data: bytes, digest_size: int) -> "HashValue":
        """
        Build a HashValue from raw digest bytes.

        Raises:
            HashValueException: If len(data) != digest_size
        """
        if len(data) != digest_size:
            raise HashValueException(
                f"Invalid digest size: expected {digest_size} bytes, got {len(data)}",
                expected_size=digest_size,
                actual_size=len(data),
            )
        return cls(bytes(data))

    @classmethod
    def from_hex(cls, text: str, digest_size: int) -> "HashValue":
        """
        Build a HashValue from its hex encoding.

        Raises:
            HashValueException: If text is not valid hex or decodes to the
                wrong number of bytes
        """
        try:
            data = binascii.unhexlify(text)
        except ValueError as e:
            raise HashValueException(
                f"Invalid hex digest: {text[:16]}...",
                expected_size=digest_size,
            ) from e
        return cls.from_bytes(data, digest_size)

    def to_bytes(self) -> bytes:
        return self.value

    def to_hex(self) -> str:
        """Canonical lowercase hex encoding."""
        return self.value.hex()

    def concat(self, other: Optional["HashValue"] = None) -> bytes:
        """
        Concatenate this digest with another one.

        Returns this digest's bytes alone when other is None.
        """
        if other is None:
            return self.value
        return self.value + other.value

    def __len__(self) -> int:
        return len(self.value)

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"HashValue({self.to_hex()!r})"


class Hasher(ABC):
    """
    A hashing capability.

    Needs to hash data held in memory as well as data read from
    (possibly buffered) binary streams.
    """

    name: str = "abstract"

    @property
    @abstractmethod
    def digest_size_bits(self) -> int:
        """Number of bits in every digest this hasher outputs."""

    @abstractmethod
    def hash(self, data: bytes) -> HashValue:
        """Hash data held in memory."""

    @abstractmethod
    def hash_stream(self, stream: BinaryIO) -> HashValue:
        """
        Hash data read from a binary stream until EOF.

        Raises:
            OSError: Upon issues reading from the stream
        """

    @property
    def digest_size(self) -> int:
        """Digest size in bytes."""
        return self.digest_size_bits // 8

    @property
    def hex_length(self) -> int:
        """Length of a digest's hex encoding."""
        return self.digest_size_bits // 4

    def hash_text(self, text: str) -> HashValue:
        """Hash the UTF-8 encoding of a string."""
        return self.hash(text.encode("utf-8"))

    def from_digest(self, data: bytes) -> HashValue:
        """Wrap raw digest bytes, checking them against this hasher's size."""
        return HashValue.from_bytes(data, self.digest_size)

    def from_hex(self, text: str) -> HashValue:
        """Decode a hex digest, checking it against this hasher's size."""
        return HashValue.from_hex(text, self.digest_size)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(digest_size_bits={self.digest_size_bits})"


class HashlibHasher(Hasher):
    """Hasher backed by a hashlib algorithm."""

    algorithm: str = ""

    def __init__(self, chunk_size: int = DEFAULT_STREAM_CHUNK_SIZE) -> None:
        self.chunk_size = chunk_size
        # fail at construction if the local OpenSSL lacks the algorithm
        self._digest_size_bits = hashlib.new(self.algorithm).digest_size * 8

    @property
    def digest_size_bits(self) -> int:
        return self._digest_size_bits

    def hash(self, data: bytes) -> HashValue:
        return self.from_digest(hashlib.new(self.algorithm, data).digest())

    def hash_stream(self, stream: BinaryIO) -> HashValue:
        h = hashlib.new(self.algorithm)
        while True:
            chunk = stream.read(self.chunk_size)
            if not chunk:
                break
            h.update(chunk)
        return self.from_digest(h.digest())


class Sha256Hasher(HashlibHasher):
    """
    SHA-256 hasher.

    Example:
        >>> Sha256Hasher().hash(b"hello").to_hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """

    name = "sha256"
    algorithm = "sha256"


class Sha512_256Hasher(HashlibHasher):
    """SHA-512/256 hasher (SHA-512 truncated to 256 bits, distinct IV)."""

    name = "sha512_256"
    algorithm = "sha512_256"


HASHERS: dict[str, type[HashlibHasher]] = {
    Sha256Hasher.name: Sha256Hasher,
    Sha512_256Hasher.name: Sha512_256Hasher,
}


def create_hasher(config: Optional[HashingConfig] = None) -> Hasher:
    """
    Create the hasher named by a hashing configuration.

    Args:
        config: Hashing configuration; defaults to SHA-256

    Returns:
        A new Hasher instance

    Raises:
        UnknownHashAlgorithmException: If no hasher is registered under
            the configured algorithm name
    """
    config = config or HashingConfig()
    hasher_cls = HASHERS.get(config.algorithm)
    if hasher_cls is None:
        raise UnknownHashAlgorithmException(
            f"Unknown hash algorithm: {config.algorithm!r} "
            f"(available: {sorted(HASHERS)})",
            algorithm=config.algorithm,
        )
    return hasher_cls(chunk_size=config.stream_chunk_size)


__all__ = [
    "HashValue",
    "Hasher",
    "HashlibHasher",
    "Sha256Hasher",
    "Sha512_256Hasher",
    "HASHERS",
    "create_hasher",
]
