"""
Modules 04/05 - Merkle Sum Tree and Inclusion Proofs
Deterministic sum tree construction + proof generation/verification.

This module provides:
- MerkleSumTree: Build from balances, compute root, generate proofs
- InclusionProof / ProofStep / Direction: Leaf-to-root proof path
- Shape policy helpers shared by construction and verification
- SumTreeProver / SumTreeVerifier: Convenience wrappers

Canonical Commitment Rules:
1. Leaf:     H(0x00 || u64be(amount))
2. Internal: H(0x01 || u64be(l.amount) || l.digest || u64be(r.amount) || r.digest)
3. Split:    [start, mid) / [mid, end) with mid = start + (end - start) // 2
4. Empty tree: not allowed (EmptyInputException)
5. Single leaf: root = leaf

Usage:
    from sumtree.merkle import MerkleSumTree

    tree = MerkleSumTree.build([100, 200, 300, 400, 500])
    root = tree.root()
    proof = tree.prove(2)
    assert proof.verify(300, root)
"""
from .shape import (
    Direction,
    PathLevel,
    leaf_depth,
    path_to_leaf,
    split_point,
    tree_height,
)
from .inclusion_proof import (
    InclusionProof,
    ProofStep,
    commitment_from_model,
    commitment_to_model,
)
from .sum_tree import MerkleSumTree
from .verifier import SumTreeProver, SumTreeVerifier


__all__ = [
    # Shape policy
    "Direction",
    "PathLevel",
    "leaf_depth",
    "path_to_leaf",
    "split_point",
    "tree_height",
    # Core types
    "MerkleSumTree",
    "InclusionProof",
    "ProofStep",
    "commitment_from_model",
    "commitment_to_model",
    # Convenience classes
    "SumTreeProver",
    "SumTreeVerifier",
]
