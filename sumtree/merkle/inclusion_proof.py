"""
Module 05 - Inclusion Proofs
Proof that one leaf balance is included in a sum tree root.

A proof is the ordered list of sibling commitments met walking from the
leaf up to the root, each tagged with the side of the running commitment.
Verification replays the combination rule and compares the result to a
claimed root by amount and digest.

Verification Rules (Hard Contracts):
1. Path length must equal the leaf's depth under the shape policy
2. Directions and sibling node indexes must match the shape policy
3. Reconstructed amount and digest must both equal the claimed root
4. verify() never raises; every failure is a False result
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sumtree.commitments import (
    SumCommitment,
    Sha256SumCommitment,
    commitment_class_for,
    commitments_match,
)
from sumtree.crypto.hashing import to_hex
from sumtree.merkle.shape import Direction, path_to_leaf
from sumtree.schemas.canonical import dumps_canonical
from sumtree.schemas.errors import SumTreeException
from sumtree.schemas.proof import CommitmentModel, InclusionProofModel, ProofStepModel


logger = logging.getLogger(__name__)


def commitment_to_model(commitment: SumCommitment) -> CommitmentModel:
    """Convert a commitment to its wire model."""
    return CommitmentModel(amount=commitment.amount, digest=to_hex(commitment.digest))


def commitment_from_model(
    model: CommitmentModel,
    commitment_cls: type[SumCommitment] = Sha256SumCommitment,
) -> SumCommitment:
    """Rebuild a commitment of the given class from its wire model."""
    return commitment_cls(amount=model.amount, digest=model.digest_bytes())


@dataclass(frozen=True)
class ProofStep:
    """
    One level of an inclusion proof.

    Attributes:
        sibling: Commitment of the subtree next to the running commitment
        direction: LEFT if the running commitment is the left child
        sibling_node_index: Heap-style index of the sibling node
    """
    sibling: SumCommitment
    direction: Direction
    sibling_node_index: int


@dataclass(frozen=True)
class InclusionProof:
    """
    Inclusion proof for a single leaf.

    Holds no reference to the tree; it can be serialized and checked
    independently by any number of verifiers.

    Attributes:
        position: 0-based index of the proven leaf
        leaf_count: Number of leaves in the tree the proof was built from
        path: Proof steps from the leaf's sibling up to the root's child
        commitment_cls: Commitment type used to rebuild the leaf
    """
    position: int
    leaf_count: int
    path: tuple[ProofStep, ...]
    commitment_cls: type[SumCommitment] = field(default=Sha256SumCommitment)

    def __len__(self) -> int:
        return len(self.path)

    def is_well_formed(self) -> bool:
        """
        Check the path against the shape policy for (position, leaf_count).

        A proof with missing, extra or reordered levels is malformed even
        if its commitments happen to hash to something.
        """
        if not isinstance(self.path, (tuple, list)):
            return False
        if not all(isinstance(step, ProofStep) for step in self.path):
            return False
        if not (
            isinstance(self.commitment_cls, type)
            and issubclass(self.commitment_cls, SumCommitment)
        ):
            return False

        try:
            expected = path_to_leaf(self.position, self.leaf_count)
        except SumTreeException:
            return False

        if len(expected) != len(self.path):
            return False

        # path_to_leaf is root-first, proofs are leaf-first
        for step, level in zip(self.path, reversed(expected)):
            if step.direction != level.direction:
                return False
            if step.sibling_node_index != level.sibling_node_index:
                return False
            if type(step.sibling) is not self.commitment_cls:
                return False
        return True

    def reconstruct_root(self, leaf_amount: int) -> SumCommitment:
        """
        Rebuild the root commitment implied by this proof.

        Args:
            leaf_amount: Balance claimed for the proven leaf

        Returns:
            The reconstructed root commitment

        Raises:
            InvalidAmountException: If leaf_amount is not a valid amount
            AmountOverflowException: If a combination overflows
            SchemaValidationException: If a sibling has the wrong commitment type
        """
        cls = self.commitment_cls
        running = cls.leaf(leaf_amount)
        for step in self.path:
            if step.direction == Direction.LEFT:
                running = cls.combine(running, step.sibling)
            else:
                running = cls.combine(step.sibling, running)
        return running

    def verify(self, leaf_amount: int, claimed_root: SumCommitment) -> bool:
        """
        Verify that leaf_amount at this position is included in claimed_root.

        Args:
            leaf_amount: Balance claimed for the proven leaf
            claimed_root: Root commitment to check against

        Returns:
            True if the proof is valid, False otherwise
        """
        if not self.is_well_formed():
            logger.debug(
                f"Rejecting malformed proof for position {self.position} "
                f"({len(self.path)} steps, leaf_count={self.leaf_count})"
            )
            return False

        try:
            reconstructed = self.reconstruct_root(leaf_amount)
        except SumTreeException as e:
            logger.debug(f"Proof reconstruction failed: {e.code}: {e.message}")
            return False

        return commitments_match(reconstructed, claimed_root)

    def to_model(self) -> InclusionProofModel:
        """Convert to the wire model."""
        return InclusionProofModel(
            hash_algorithm=self.commitment_cls.algorithm,
            position=self.position,
            leaf_count=self.leaf_count,
            path=[
                ProofStepModel(
                    sibling=commitment_to_model(step.sibling),
                    direction=Direction(step.direction).value,
                    sibling_node_index=step.sibling_node_index,
                )
                for step in self.path
            ],
        )

    @classmethod
    def from_model(cls, model: InclusionProofModel) -> "InclusionProof":
        """
        Rebuild a proof from its wire model.

        Raises:
            SchemaValidationException: If the hash algorithm is unknown
        """
        commitment_cls = commitment_class_for(model.hash_algorithm)
        path = tuple(
            ProofStep(
                sibling=commitment_from_model(step.sibling, commitment_cls),
                direction=Direction(step.direction),
                sibling_node_index=step.sibling_node_index,
            )
            for step in model.path
        )
        return cls(
            position=model.position,
            leaf_count=model.leaf_count,
            path=path,
            commitment_cls=commitment_cls,
        )

    def to_json(self) -> str:
        """Serialize to canonical JSON."""
        return dumps_canonical(self.to_model())

    @classmethod
    def from_json(cls, data: str | bytes) -> "InclusionProof":
        """
        Parse a proof from JSON.

        Raises:
            pydantic.ValidationError: If the JSON does not match the schema
            SchemaValidationException: If the hash algorithm is unknown
        """
        return cls.from_model(InclusionProofModel.model_validate_json(data))


__all__ = [
    "Direction",
    "InclusionProof",
    "ProofStep",
    "commitment_from_model",
    "commitment_to_model",
]
