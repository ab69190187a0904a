"""
Module 04 - Merkle Sum Tree
Deterministic sum tree construction and inclusion proof generation.

This module provides:
- MerkleSumTree.build: Leaf commitments from an ordered balance list
- MerkleSumTree.root: Root commitment under the shared shape policy
- MerkleSumTree.prove: One sibling per level, leaf to root

Determinism Notes:
- Leaf i is always balances[i]; leaves are never sorted or padded
- Internal commitments are derived from the leaves, optionally memoized
- The tree is read-only after build and may be shared across threads
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from sumtree.commitments import SumCommitment, commitment_class_for
from sumtree.config.runtime import RuntimeConfig, get_default_config
from sumtree.merkle.inclusion_proof import InclusionProof, ProofStep, commitment_to_model
from sumtree.merkle.shape import check_position, path_to_leaf, split_point, tree_height
from sumtree.schemas.errors import (
    AmountOverflowException,
    EmptyInputException,
    InvalidAmountException,
)
from sumtree.schemas.proof import PublishedRoot


logger = logging.getLogger(__name__)


class MerkleSumTree:
    """
    Binary sum tree over an ordered list of balances.

    Every node commits to the total of the leaves below it and to a
    digest binding their amounts and digests. Use ``build`` to construct.

    Example:
        >>> tree = MerkleSumTree.build([100, 200, 300, 400, 500])
        >>> tree.root().amount
        1500
        >>> tree.prove(2).verify(300, tree.root())
        True
    """

    def __init__(
        self,
        leaves: tuple[SumCommitment, ...],
        commitment_cls: type[SumCommitment],
        cache_subtrees: bool = True,
    ) -> None:
        if not leaves:
            raise EmptyInputException()
        self._leaves = leaves
        self._commitment_cls = commitment_cls
        self._cache: Optional[dict[tuple[int, int], SumCommitment]] = (
            {} if cache_subtrees else None
        )

    @classmethod
    def build(
        cls,
        balances: Iterable[int],
        commitment_cls: type[SumCommitment] | None = None,
        config: RuntimeConfig | None = None,
    ) -> "MerkleSumTree":
        """
        Build a sum tree from an ordered sequence of balances.

        Args:
            balances: Balances in position order (position i = leaf i)
            commitment_cls: Commitment type; defaults to the configured algorithm
            config: Runtime config; defaults to the process-wide config

        Returns:
            The constructed tree

        Raises:
            EmptyInputException: If balances is empty
            InvalidAmountException: If a balance is not a non-negative int
            AmountOverflowException: If a balance exceeds 2**64 - 1
        """
        config = config or get_default_config()
        if commitment_cls is None:
            commitment_cls = commitment_class_for(config.hash_algorithm)

        leaves: list[SumCommitment] = []
        for position, balance in enumerate(balances):
            try:
                leaves.append(commitment_cls.leaf(balance))
            except (InvalidAmountException, AmountOverflowException) as e:
                e.details["position"] = position
                raise

        if not leaves:
            raise EmptyInputException()

        logger.debug(
            f"Built sum tree: {len(leaves)} leaves, "
            f"commitment={commitment_cls.__name__}, cache={config.tree.cache_subtrees}"
        )
        return cls(tuple(leaves), commitment_cls, cache_subtrees=config.tree.cache_subtrees)

    @property
    def leaf_count(self) -> int:
        return len(self._leaves)

    @property
    def leaves(self) -> tuple[SumCommitment, ...]:
        return self._leaves

    @property
    def commitment_cls(self) -> type[SumCommitment]:
        return self._commitment_cls

    @property
    def height(self) -> int:
        """Depth of the deepest leaf."""
        return tree_height(self.leaf_count)

    def __len__(self) -> int:
        return len(self._leaves)

    def leaf(self, position: int) -> SumCommitment:
        """
        Get the leaf commitment at a position.

        Raises:
            PositionOutOfRangeException: If position is out of range
        """
        return self._leaves[check_position(position, self.leaf_count)]

    def subtree_commitment(self, start: int, end: int) -> SumCommitment:
        """
        Commitment of the leaves [start, end) combined under the shape policy.

        Raises:
            ValueError: If the range is empty or outside the tree
            AmountOverflowException: If the subtree total overflows
        """
        if not 0 <= start < end <= self.leaf_count:
            raise ValueError(
                f"Invalid leaf range [{start}, {end}) for {self.leaf_count} leaves"
            )
        return self._commit(start, end)

    def _commit(self, start: int, end: int) -> SumCommitment:
        if end - start == 1:
            return self._leaves[start]

        key = (start, end)
        if self._cache is not None:
            cached = self._cache.get(key)
            if cached is not None:
                return cached

        mid = split_point(start, end)
        commitment = self._commitment_cls.combine(
            self._commit(start, mid),
            self._commit(mid, end),
        )

        if self._cache is not None:
            self._cache[key] = commitment
        return commitment

    def root(self) -> SumCommitment:
        """
        Compute the root commitment.

        A single-leaf tree's root is its leaf.

        Raises:
            AmountOverflowException: If the total exceeds 2**64 - 1
        """
        return self._commit(0, self.leaf_count)

    def prove(self, position: int) -> InclusionProof:
        """
        Generate an inclusion proof for the leaf at position.

        At every level the whole subtree on the other side of the target
        becomes one proof step.

        Args:
            position: 0-based leaf index

        Returns:
            InclusionProof with one step per level, leaf to root

        Raises:
            PositionOutOfRangeException: If position >= leaf_count (or invalid)
        """
        levels = path_to_leaf(position, self.leaf_count)

        path = tuple(
            ProofStep(
                sibling=self._commit(level.sibling_start, level.sibling_end),
                direction=level.direction,
                sibling_node_index=level.sibling_node_index,
            )
            for level in reversed(levels)
        )

        logger.debug(f"Generated proof for position {position}: {len(path)} steps")
        return InclusionProof(
            position=position,
            leaf_count=self.leaf_count,
            path=path,
            commitment_cls=self._commitment_cls,
        )

    def publish_root(self) -> PublishedRoot:
        """Root commitment in its wire form, with leaf count and algorithm."""
        return PublishedRoot(
            hash_algorithm=self._commitment_cls.algorithm,
            leaf_count=self.leaf_count,
            root=commitment_to_model(self.root()),
        )


__all__ = ["MerkleSumTree"]
