"""
Module 03 - Sum Commitments
A sum commitment pairs an aggregate amount with a digest binding the
structure that produced it.

Commitment Rules (Hard Contracts):
1. Leaf digest:     H(LEAF_TAG || u64be(amount))
2. Internal digest: H(NODE_TAG || u64be(l.amount) || l.digest || u64be(r.amount) || r.digest)
3. Internal amount: l.amount + r.amount, checked against 2**64 - 1
4. Amounts never wrap; overflow raises AmountOverflowException

Both children's amounts are bound into the parent digest. Hashing only
the child digests would let a prover move value between siblings
without changing the root digest.
"""
from __future__ import annotations

import hmac
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, TypeVar

from sumtree.crypto.hashing import (
    DIGEST_SIZE,
    LEAF_TAG,
    MAX_AMOUNT,
    NODE_TAG,
    HashFunction,
    blake2b_256,
    encode_amount,
    sha256,
    to_hex,
)
from sumtree.schemas.errors import (
    AmountOverflowException,
    InvalidAmountException,
    SchemaValidationException,
)


C = TypeVar("C", bound="SumCommitment")


def check_amount(amount: Any) -> int:
    """
    Validate that a value is usable as a u64 amount.

    Raises:
        InvalidAmountException: If the value is not a non-negative int
        AmountOverflowException: If the value exceeds MAX_AMOUNT
    """
    # bool is an int subclass but never a balance
    if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
        raise InvalidAmountException(amount)
    if amount > MAX_AMOUNT:
        raise AmountOverflowException(
            message=f"Amount {amount} exceeds maximum {MAX_AMOUNT}",
            details={"amount": amount, "max_amount": MAX_AMOUNT},
        )
    return amount


class SumCommitment(ABC):
    """
    Capability shared by every commitment type a sum tree can hold.

    Implementations are immutable values exposing ``amount`` and
    ``digest`` and defining how leaves are made and how two nodes combine.
    Tree and proof logic only go through this interface.
    """

    amount: int
    digest: bytes

    @classmethod
    @abstractmethod
    def leaf(cls: type[C], amount: int) -> C:
        """Create the commitment for a single balance."""

    @classmethod
    @abstractmethod
    def combine(cls: type[C], left: C, right: C) -> C:
        """Create the parent commitment of two children."""


@dataclass(frozen=True, repr=False)
class HashSumCommitment(SumCommitment):
    """
    Hash-backed sum commitment.

    Subclasses pick the digest primitive through ``hash_function`` and
    name it through ``algorithm``.

    Attributes:
        amount: Aggregate amount committed to (0 <= amount <= 2**64 - 1)
        digest: 32-byte digest binding the amounts and digests below
    """

    amount: int
    digest: bytes

    algorithm: ClassVar[str] = ""
    hash_function: ClassVar[HashFunction]

    def __post_init__(self) -> None:
        """Validate commitment fields."""
        check_amount(self.amount)
        if not isinstance(self.digest, bytes) or len(self.digest) != DIGEST_SIZE:
            raise SchemaValidationException(
                message=f"Digest must be {DIGEST_SIZE} bytes",
                field_path="digest",
                details={"type": type(self.digest).__name__},
            )

    @classmethod
    def _hash(cls, data: bytes) -> bytes:
        hash_function = getattr(cls, "hash_function", None)
        if hash_function is None:
            raise SchemaValidationException(
                message=f"{cls.__name__} has no hash function; use a concrete subclass",
                field_path="hash_function",
            )
        return hash_function(data)

    @classmethod
    def leaf(cls, amount: int) -> "HashSumCommitment":
        """
        Create a leaf commitment.

        Args:
            amount: Balance held by the leaf

        Returns:
            Commitment with digest H(LEAF_TAG || u64be(amount))

        Raises:
            InvalidAmountException: If amount is not a non-negative int
            AmountOverflowException: If amount exceeds 2**64 - 1
        """
        check_amount(amount)
        digest = cls._hash(LEAF_TAG + encode_amount(amount))
        return cls(amount=amount, digest=digest)

    @classmethod
    def combine(
        cls,
        left: "HashSumCommitment",
        right: "HashSumCommitment",
    ) -> "HashSumCommitment":
        """
        Combine two child commitments into their parent.

        Args:
            left: Left child commitment
            right: Right child commitment

        Returns:
            Parent commitment whose amount is the exact sum of the children

        Raises:
            SchemaValidationException: If the children are not both of this class
            AmountOverflowException: If the sum exceeds 2**64 - 1
        """
        if type(left) is not cls or type(right) is not cls:
            raise SchemaValidationException(
                message=(
                    f"Cannot combine {type(left).__name__} and "
                    f"{type(right).__name__} as {cls.__name__}"
                ),
                details={"left": type(left).__name__, "right": type(right).__name__},
            )

        total = left.amount + right.amount
        if total > MAX_AMOUNT:
            raise AmountOverflowException(
                message=f"Combined amount {left.amount} + {right.amount} overflows",
                details={
                    "left_amount": left.amount,
                    "right_amount": right.amount,
                    "max_amount": MAX_AMOUNT,
                },
            )

        digest = cls._hash(
            NODE_TAG
            + encode_amount(left.amount)
            + left.digest
            + encode_amount(right.amount)
            + right.digest
        )
        return cls(amount=total, digest=digest)

    def to_hex(self) -> str:
        """Digest as a 0x-prefixed hex string."""
        return to_hex(self.digest)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(amount={self.amount}, digest={self.to_hex()})"


class Sha256SumCommitment(HashSumCommitment):
    """Sum commitment over SHA-256 (the default)."""

    algorithm: ClassVar[str] = "sha256"
    hash_function = staticmethod(sha256)


class Blake2bSumCommitment(HashSumCommitment):
    """Sum commitment over BLAKE2b with a 32-byte digest."""

    algorithm: ClassVar[str] = "blake2b"
    hash_function = staticmethod(blake2b_256)


COMMITMENT_CLASSES: dict[str, type[HashSumCommitment]] = {
    Sha256SumCommitment.algorithm: Sha256SumCommitment,
    Blake2bSumCommitment.algorithm: Blake2bSumCommitment,
}


def commitment_class_for(algorithm: str) -> type[HashSumCommitment]:
    """
    Look up the commitment class for a hash algorithm name.

    Raises:
        SchemaValidationException: If the algorithm has no commitment class
    """
    try:
        return COMMITMENT_CLASSES[algorithm.lower()]
    except (KeyError, AttributeError):
        raise SchemaValidationException(
            message=f"No commitment type for hash algorithm {algorithm!r}",
            field_path="hash_algorithm",
            details={"supported": sorted(COMMITMENT_CLASSES)},
        ) from None


def commitments_match(a: SumCommitment, b: SumCommitment) -> bool:
    """
    Compare two commitments field by field.

    Verification goes through this rather than ``==`` so that amount and
    digest are always both checked, the digest in constant time.
    """
    if type(a) is not type(b):
        return False
    if a.amount != b.amount:
        return False
    return hmac.compare_digest(a.digest, b.digest)


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
