"""
Schemas: error taxonomy and wire formats.
"""
from .errors import (
    ErrorCodes,
    MerkleError,
    MerkleException,
    HashValueException,
    LeafNotFoundException,
    LeafPositionException,
    UnknownHashAlgorithmException,
)
from .proof import (
    SideTag,
    SiblingRecord,
    ExistenceProofDocument,
)
from .versioning import (
    SCHEMA_VERSION,
    SUPPORTED_SCHEMA_VERSIONS,
    UnsupportedSchemaVersionError,
)

__all__ = [
    # Errors
    "ErrorCodes",
    "MerkleError",
    "MerkleException",
    "HashValueException",
    "LeafNotFoundException",
    "LeafPositionException",
    "UnknownHashAlgorithmException",
    # Wire formats
    "SideTag",
    "SiblingRecord",
    "ExistenceProofDocument",
    # Versioning
    "SCHEMA_VERSION",
    "SUPPORTED_SCHEMA_VERSIONS",
    "UnsupportedSchemaVersionError",
]
