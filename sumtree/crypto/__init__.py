"""
Core cryptographic utilities.

Module 02 provides the digest primitive and amount encoding
shared by commitments and proofs.
"""
from .hashing import (
    AMOUNT_WIDTH,
    DIGEST_SIZE,
    HASH_FUNCTIONS,
    HashFunction,
    LEAF_TAG,
    MAX_AMOUNT,
    NODE_TAG,
    blake2b_256,
    encode_amount,
    from_hex,
    get_hash_function,
    sha256,
    to_hex,
)

__all__ = [
    "AMOUNT_WIDTH",
    "DIGEST_SIZE",
    "HASH_FUNCTIONS",
    "HashFunction",
    "LEAF_TAG",
    "MAX_AMOUNT",
    "NODE_TAG",
    "blake2b_256",
    "encode_amount",
    "from_hex",
    "get_hash_function",
    "sha256",
    "to_hex",
]
