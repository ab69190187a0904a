"""
Common test fixtures: balance lists, a stub commitment type and proof
tampering helpers.
"""

import dataclasses
import hashlib

from sumtree.commitments import HashSumCommitment
from sumtree.merkle import InclusionProof


SCENARIO_BALANCES = [100, 200, 300, 400, 500]


def make_balances(count: int, start: int = 1) -> list[int]:
    """Deterministic, distinct balances."""
    return [start + 7 * i for i in range(count)]


def _stub_hash(data: bytes) -> bytes:
    # Non-cryptographic stand-in with the right digest size
    return hashlib.md5(data).digest() * 2


class StubSumCommitment(HashSumCommitment):
    """Commitment over a cheap 32-byte stub hash."""

    algorithm = "stub"
    hash_function = staticmethod(_stub_hash)


def flip_digest_bit(digest: bytes, index: int = 0) -> bytes:
    """Flip the low bit of one digest byte."""
    return digest[:index] + bytes([digest[index] ^ 1]) + digest[index + 1:]


def replace_step(proof: InclusionProof, level: int, **changes) -> InclusionProof:
    """Return a proof with one step's fields replaced."""
    path = list(proof.path)
    path[level] = dataclasses.replace(path[level], **changes)
    return dataclasses.replace(proof, path=tuple(path))


def replace_sibling(proof: InclusionProof, level: int, **changes) -> InclusionProof:
    """Return a proof with one sibling commitment's fields replaced."""
    sibling = dataclasses.replace(proof.path[level].sibling, **changes)
    return replace_step(proof, level, sibling=sibling)
