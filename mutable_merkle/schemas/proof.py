"""
Schemas - Existence Proof Wire Format
File: proof.py

Purpose: Serializable shape of an existence proof. A proof is fully
described by its ordered list of (optional hex digest, side) pairs,
leaf-to-root. This is what an embedder persists or transmits.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from .versioning import SCHEMA_VERSION, UnsupportedSchemaVersionError, is_supported_schema_version


SideTag = Literal["LEFT", "RIGHT"]

HexDigest = Annotated[str, StringConstraints(pattern=r"^[0-9a-f]+$")]


class SiblingRecord(BaseModel):
    """One step of an existence proof."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    digest: HexDigest | None = Field(
        default=None,
        description="Lowercase hex digest of the sibling, or null when the sibling is absent",
    )
    side: SideTag = Field(
        ...,
        description="Position of the sibling relative to the path node",
    )

    @field_validator("digest", mode="before")
    @classmethod
    def _lowercase_digest(cls, v: object) -> object:
        if isinstance(v, str):
            return v.lower()
        return v


class ExistenceProofDocument(BaseModel):
    """
    Wire representation of an existence proof.

    The hash algorithm is informational: verification always uses the
    hasher supplied by the verifying party.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default=SCHEMA_VERSION)
    algorithm: str | None = Field(
        default=None,
        description="Name of the hash algorithm the proof was built with",
    )
    siblings: list[SiblingRecord] = Field(
        default_factory=list,
        description="Sibling records in leaf-to-root order",
    )

    @field_validator("schema_version")
    @classmethod
    def _check_schema_version(cls, v: str) -> str:
        if not is_supported_schema_version(v):
            raise UnsupportedSchemaVersionError(v)
        return v


__all__ = [
    "SideTag",
    "HexDigest",
    "SiblingRecord",
    "ExistenceProofDocument",
]
