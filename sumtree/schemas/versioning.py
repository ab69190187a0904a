"""
Module 01 - Schemas & Canonicalization
File: versioning.py

Purpose: Wire schema version for serialized proofs and published roots.
Kept free of other schema imports so every model can depend on it.
"""

from typing import Literal

SCHEMA_VERSION: str = "v1"

# Pydantic rejects any other value when a proof is parsed
SchemaVersion = Literal["v1"]
