"""
Module 03 - Sum Commitments

This module provides:
- SumCommitment: Capability every tree node type implements
- HashSumCommitment: Hash-backed implementation (Sha256 / Blake2b variants)
- commitments_match: Explicit amount + digest comparison used by verification
"""
from .sum_commitment import (
    COMMITMENT_CLASSES,
    Blake2bSumCommitment,
    HashSumCommitment,
    Sha256SumCommitment,
    SumCommitment,
    check_amount,
    commitment_class_for,
    commitments_match,
)

__all__ = [
    "COMMITMENT_CLASSES",
    "Blake2bSumCommitment",
    "HashSumCommitment",
    "Sha256SumCommitment",
    "SumCommitment",
    "check_amount",
    "commitment_class_for",
    "commitments_match",
]
