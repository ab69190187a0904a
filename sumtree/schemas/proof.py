"""
Module 01 - Schemas & Canonicalization
File: proof.py

Purpose: Wire schemas for commitments, published roots and inclusion
proofs. These models carry no hashing logic; conversion to and from the
domain objects lives next to those objects.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from sumtree.crypto.hashing import HASH_FUNCTIONS, MAX_AMOUNT, from_hex

from .versioning import SCHEMA_VERSION, SchemaVersion


# Lowercase 0x-prefixed 32-byte digest
DIGEST_PATTERN = r"^0x[0-9a-f]{64}$"


def _check_hash_algorithm(value: str) -> str:
    value = value.lower()
    if value not in HASH_FUNCTIONS:
        raise ValueError(
            f"Unsupported hash algorithm: {value!r}. "
            f"Supported algorithms: {sorted(HASH_FUNCTIONS)}"
        )
    return value


class CommitmentModel(BaseModel):
    """Serialized sum commitment: an amount and its hex digest."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    amount: int = Field(..., ge=0, le=MAX_AMOUNT, strict=True, description="Committed amount (u64)")
    digest: str = Field(..., pattern=DIGEST_PATTERN, description="0x-prefixed 32-byte digest")

    def digest_bytes(self) -> bytes:
        """Decode the digest to raw bytes."""
        return from_hex(self.digest)


class ProofStepModel(BaseModel):
    """One level of an inclusion proof."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    sibling: CommitmentModel
    direction: Literal["left", "right"] = Field(
        ...,
        description="Side of the running commitment; the sibling is on the other side",
    )
    sibling_node_index: int = Field(..., ge=0, strict=True)


class InclusionProofModel(BaseModel):
    """
    Serialized inclusion proof.

    The path is ordered from the leaf's immediate sibling up to the
    sibling just below the root.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: SchemaVersion = Field(default=SCHEMA_VERSION)
    hash_algorithm: str = Field(default="sha256")
    position: int = Field(..., ge=0, strict=True, description="0-based leaf index")
    leaf_count: int = Field(..., ge=1, strict=True, description="Leaves in the proven tree")
    path: list[ProofStepModel] = Field(default_factory=list)

    @field_validator("hash_algorithm")
    @classmethod
    def _validate_hash_algorithm(cls, value: str) -> str:
        return _check_hash_algorithm(value)

    @model_validator(mode="after")
    def _validate_position(self) -> "InclusionProofModel":
        if self.position >= self.leaf_count:
            raise ValueError(
                f"position {self.position} out of range for leaf_count {self.leaf_count}"
            )
        return self


class PublishedRoot(BaseModel):
    """
    Root commitment as published by the tree owner.

    A verifier holding only this and an InclusionProofModel can check
    inclusion of a balance without the tree.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: SchemaVersion = Field(default=SCHEMA_VERSION)
    hash_algorithm: str = Field(default="sha256")
    leaf_count: int = Field(..., ge=1, strict=True)
    root: CommitmentModel

    @field_validator("hash_algorithm")
    @classmethod
    def _validate_hash_algorithm(cls, value: str) -> str:
        return _check_hash_algorithm(value)


__all__ = [
    "DIGEST_PATTERN",
    "CommitmentModel",
    "InclusionProofModel",
    "ProofStepModel",
    "PublishedRoot",
]
