"""
Module 04 - Tree Shape Policy
Deterministic rule mapping a leaf range to its left/right subtrees.

Shape Rules (Hard Contracts):
1. A range [start, end) with one leaf is that leaf
2. Otherwise split at mid = start + (end - start) // 2
3. Left subtree is [start, mid), right subtree is [mid, end)
4. Odd ranges give the extra leaf to the right subtree
5. Nodes are numbered heap-style: root 0, children 2i+1 and 2i+2

Construction, proof generation and proof verification all walk
ranges through this module; changing it changes every root.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from sumtree.schemas.errors import EmptyInputException, PositionOutOfRangeException


class Direction(str, Enum):
    """
    Side of the prover's running commitment at one level of a proof.

    LEFT means the running commitment is the left child and the sibling
    sits on the right; RIGHT is the mirror case.
    """

    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class PathLevel:
    """
    One level of the walk from the root down to a leaf.

    Attributes:
        direction: Side of the subtree containing the target leaf
        sibling_start: First leaf index of the sibling subtree
        sibling_end: One past the last leaf index of the sibling subtree
        sibling_node_index: Heap-style index of the sibling node
    """
    direction: Direction
    sibling_start: int
    sibling_end: int
    sibling_node_index: int


def split_point(start: int, end: int) -> int:
    """
    Compute where the range [start, end) splits into two subtrees.

    Raises:
        ValueError: If the range holds fewer than two leaves
    """
    if end - start < 2:
        raise ValueError(f"Cannot split range [{start}, {end}) with fewer than 2 leaves")
    return start + (end - start) // 2


def check_leaf_count(leaf_count: Any) -> int:
    """Validate a leaf count, raising EmptyInputException for anything below one."""
    if isinstance(leaf_count, bool) or not isinstance(leaf_count, int) or leaf_count < 1:
        raise EmptyInputException(
            message=f"A sum tree needs at least one leaf, got leaf_count={leaf_count!r}",
            details={"leaf_count": repr(leaf_count)},
        )
    return leaf_count


def check_position(position: Any, leaf_count: int) -> int:
    """Validate a leaf position against a leaf count."""
    if (
        isinstance(position, bool)
        or not isinstance(position, int)
        or position < 0
        or position >= leaf_count
    ):
        raise PositionOutOfRangeException(position, leaf_count)
    return position


def path_to_leaf(position: int, leaf_count: int) -> list[PathLevel]:
    """
    List the sibling subtrees met walking from the root to a leaf.

    Args:
        position: 0-based leaf index
        leaf_count: Number of leaves in the tree

    Returns:
        PathLevel entries ordered root-first (reverse for leaf-to-root)

    Raises:
        EmptyInputException: If leaf_count < 1
        PositionOutOfRangeException: If position is not in [0, leaf_count)
    """
    check_leaf_count(leaf_count)
    check_position(position, leaf_count)

    levels: list[PathLevel] = []
    start, end, node_index = 0, leaf_count, 0

    while end - start > 1:
        mid = split_point(start, end)
        if position < mid:
            levels.append(PathLevel(Direction.LEFT, mid, end, 2 * node_index + 2))
            end = mid
            node_index = 2 * node_index + 1
        else:
            levels.append(PathLevel(Direction.RIGHT, start, mid, 2 * node_index + 1))
            start = mid
            node_index = 2 * node_index + 2

    return levels


def leaf_depth(position: int, leaf_count: int) -> int:
    """Number of levels between a leaf and the root (its proof length)."""
    return len(path_to_leaf(position, leaf_count))


def tree_height(leaf_count: int) -> int:
    """
    Height of the tree: the deepest leaf's depth.

    Equals ceil(log2(leaf_count)); 0 for a single leaf. Leaf depths
    differ by at most one across a tree.
    """
    check_leaf_count(leaf_count)
    return (leaf_count - 1).bit_length()


__all__ = [
    "Direction",
    "PathLevel",
    "check_leaf_count",
    "check_position",
    "leaf_depth",
    "path_to_leaf",
    "split_point",
    "tree_height",
]
