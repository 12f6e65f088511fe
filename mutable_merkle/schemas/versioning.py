"""
Schemas - Versioning
File: versioning.py

Purpose: Centralize wire schema version constants.
This file has no imports from other schema files to avoid circular
dependencies.
"""

from typing import Literal

# Current schema version - used by all wire documents
SCHEMA_VERSION: str = "v1"

# Type alias for schema version (future-proof for migrations)
SchemaVersion = Literal["v1"]

# Supported versions for forward compatibility
SUPPORTED_SCHEMA_VERSIONS: frozenset[str] = frozenset({"v1"})


class UnsupportedSchemaVersionError(ValueError):
    """Raised when an unsupported schema version is encountered."""

    def __init__(self, version: str, supported: frozenset[str] | None = None) -> None:
        self.version = version
        self.supported = supported or SUPPORTED_SCHEMA_VERSIONS
        super().__init__(
            f"Unsupported schema version: '{version}'. "
            f"Supported versions: {sorted(self.supported)}"
        )


def is_supported_schema_version(version: str) -> bool:
    """Check whether a schema version string is supported."""
    return version in SUPPORTED_SCHEMA_VERSIONS


__all__ = [
    "SCHEMA_VERSION",
    "SchemaVersion",
    "SUPPORTED_SCHEMA_VERSIONS",
    "UnsupportedSchemaVersionError",
    "is_supported_schema_version",
]
