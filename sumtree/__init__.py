"""
Merkle sum tree commitments with succinct inclusion proofs.

Every node commits to the total amount below it and to a digest binding
that subtree, so a published root fixes both the aggregate and each
individual balance.
"""
from sumtree.commitments import (
    Blake2bSumCommitment,
    HashSumCommitment,
    Sha256SumCommitment,
    SumCommitment,
)
from sumtree.merkle import (
    Direction,
    InclusionProof,
    MerkleSumTree,
    ProofStep,
    SumTreeProver,
    SumTreeVerifier,
)
from sumtree.schemas.errors import (
    AmountOverflowException,
    EmptyInputException,
    InvalidAmountException,
    PositionOutOfRangeException,
    SumTreeException,
)

__version__ = "0.1.0"

__all__ = [
    "AmountOverflowException",
    "Blake2bSumCommitment",
    "Direction",
    "EmptyInputException",
    "HashSumCommitment",
    "InclusionProof",
    "InvalidAmountException",
    "MerkleSumTree",
    "PositionOutOfRangeException",
    "ProofStep",
    "Sha256SumCommitment",
    "SumCommitment",
    "SumTreeException",
    "SumTreeProver",
    "SumTreeVerifier",
]
