"""
Module 05 - Prover / Verifier Convenience Wrappers
Thin wrappers around MerkleSumTree and InclusionProof for callers that
work with raw balance lists or serialized JSON.

This module provides class-based interfaces:
- SumTreeProver: Compute roots and proofs from balance lists
- SumTreeVerifier: Verify proofs, including from serialized JSON
"""
from __future__ import annotations

import logging
from typing import Sequence

from pydantic import ValidationError

from sumtree.commitments import SumCommitment, commitment_class_for
from sumtree.merkle.inclusion_proof import InclusionProof, commitment_from_model
from sumtree.merkle.sum_tree import MerkleSumTree
from sumtree.schemas.errors import SumTreeException
from sumtree.schemas.proof import InclusionProofModel, PublishedRoot


logger = logging.getLogger(__name__)


class SumTreeProver:
    """
    Convenience class for building roots and proofs from balances.

    Example:
        >>> proof = SumTreeProver.prove([100, 200, 300], position=1)
        >>> proof.position
        1
    """

    @staticmethod
    def compute_root(
        balances: Sequence[int],
        commitment_cls: type[SumCommitment] | None = None,
    ) -> SumCommitment:
        """
        Compute the root commitment for a balance list.

        Raises:
            EmptyInputException: If balances is empty
        """
        return MerkleSumTree.build(balances, commitment_cls=commitment_cls).root()

    @staticmethod
    def prove(
        balances: Sequence[int],
        position: int,
        commitment_cls: type[SumCommitment] | None = None,
    ) -> InclusionProof:
        """
        Generate an inclusion proof for one balance.

        Raises:
            EmptyInputException: If balances is empty
            PositionOutOfRangeException: If position is out of range
        """
        return MerkleSumTree.build(balances, commitment_cls=commitment_cls).prove(position)


class SumTreeVerifier:
    """
    Convenience class for verifying inclusion proofs.

    All methods return booleans; malformed input is a failed
    verification, not an exception.
    """

    @staticmethod
    def verify(proof: InclusionProof, leaf_amount: int, root: SumCommitment) -> bool:
        """Verify a proof object against a root commitment."""
        return proof.verify(leaf_amount, root)

    @staticmethod
    def verify_against_published(
        proof: InclusionProof,
        leaf_amount: int,
        published: PublishedRoot,
    ) -> bool:
        """
        Verify a proof against a published root.

        The proof must name the same hash algorithm and leaf count as
        the published root.
        """
        if proof.commitment_cls.algorithm != published.hash_algorithm:
            logger.warning(
                f"Hash algorithm mismatch: proof={proof.commitment_cls.algorithm!r} "
                f"root={published.hash_algorithm!r}"
            )
            return False
        if proof.leaf_count != published.leaf_count:
            logger.warning(
                f"Leaf count mismatch: proof={proof.leaf_count} root={published.leaf_count}"
            )
            return False

        try:
            commitment_cls = commitment_class_for(published.hash_algorithm)
            root = commitment_from_model(published.root, commitment_cls)
        except SumTreeException as e:
            logger.warning(f"Rejecting published root: {e.code}: {e.message}")
            return False

        return proof.verify(leaf_amount, root)

    @staticmethod
    def verify_serialized(
        proof_json: str | bytes,
        leaf_amount: int,
        root_json: str | bytes,
    ) -> bool:
        """
        Verify a JSON proof against a JSON published root.

        Args:
            proof_json: Serialized InclusionProofModel
            leaf_amount: Balance claimed for the proven leaf
            root_json: Serialized PublishedRoot

        Returns:
            True if the proof is valid, False otherwise
        """
        try:
            proof = InclusionProof.from_model(
                InclusionProofModel.model_validate_json(proof_json)
            )
            published = PublishedRoot.model_validate_json(root_json)
        except (ValidationError, SumTreeException, ValueError) as e:
            logger.warning(f"Rejecting serialized proof: {e}")
            return False

        return SumTreeVerifier.verify_against_published(proof, leaf_amount, published)


__all__ = [
    "SumTreeProver",
    "SumTreeVerifier",
]
