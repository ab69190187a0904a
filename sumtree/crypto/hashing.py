"""
Module 02 - Hashing Utilities
Digest primitives and fixed-width encodings for sum commitments.

This module provides:
- SHA-256 and BLAKE2b-256 hashing for raw bytes
- Hash function lookup by algorithm name
- Fixed-width amount encoding used before hashing
- Leaf/internal domain tags
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Amounts are always encoded as 8-byte big-endian before hashing
- Leaf and internal hash inputs carry distinct one-byte tags
- All operations are deterministic
"""
from __future__ import annotations

import hashlib
from typing import Callable


HashFunction = Callable[[bytes], bytes]

# Width of an encoded amount (u64)
AMOUNT_WIDTH: int = 8

# Largest amount representable by a commitment
MAX_AMOUNT: int = 2**64 - 1

# Digest size produced by every supported hash function
DIGEST_SIZE: int = 32

# Domain separation tags
LEAF_TAG: bytes = b"\x00"
NODE_TAG: bytes = b"\x01"


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def blake2b_256(data: bytes) -> bytes:
    """
    Compute BLAKE2b hash of raw bytes truncated to a 32-byte digest.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte BLAKE2b digest
    """
    return hashlib.blake2b(data, digest_size=DIGEST_SIZE).digest()


HASH_FUNCTIONS: dict[str, HashFunction] = {
    "sha256": sha256,
    "blake2b": blake2b_256,
}


def get_hash_function(name: str) -> HashFunction:
    """
    Look up a hash function by algorithm name.

    Args:
        name: Algorithm name ("sha256" or "blake2b", case-insensitive)

    Returns:
        The hash function

    Raises:
        ValueError: If the algorithm is not supported
    """
    try:
        return HASH_FUNCTIONS[name.lower()]
    except (KeyError, AttributeError):
        raise ValueError(
            f"Unsupported hash algorithm: {name!r}. "
            f"Supported algorithms: {sorted(HASH_FUNCTIONS)}"
        ) from None


def encode_amount(amount: int) -> bytes:
    """
    Encode an amount as fixed-width big-endian bytes.

    A fixed width keeps digests compatible across implementations;
    variable-length encodings would make the hash input ambiguous.

    Args:
        amount: Integer in [0, MAX_AMOUNT]

    Returns:
        8-byte big-endian encoding

    Raises:
        OverflowError: If the amount does not fit in 8 unsigned bytes
    """
    return amount.to_bytes(AMOUNT_WIDTH, "big", signed=False)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


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
