"""
Module 01 - Schemas & Canonicalization
File: __init__.py

Purpose: Export the public API for the schemas module.
"""

# Version constants
from .versioning import (
    SCHEMA_VERSION,
    SchemaVersion,
)

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    dumps_canonical,
)

# Error models and exceptions
from .errors import (
    AmountOverflowException,
    CanonicalizationException,
    EmptyInputException,
    ErrorCodes,
    InvalidAmountException,
    PositionOutOfRangeException,
    SchemaValidationException,
    SumTreeError,
    SumTreeException,
)

# Wire schemas
from .proof import (
    DIGEST_PATTERN,
    CommitmentModel,
    InclusionProofModel,
    ProofStepModel,
    PublishedRoot,
)

__all__ = [
    # Versioning
    "SCHEMA_VERSION",
    "SchemaVersion",
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "dumps_canonical",
    # Errors
    "AmountOverflowException",
    "CanonicalizationException",
    "EmptyInputException",
    "ErrorCodes",
    "InvalidAmountException",
    "PositionOutOfRangeException",
    "SchemaValidationException",
    "SumTreeError",
    "SumTreeException",
    # Wire schemas
    "DIGEST_PATTERN",
    "CommitmentModel",
    "InclusionProofModel",
    "ProofStepModel",
    "PublishedRoot",
]
