"""
Module 05 - Inclusion Proof Unit Tests
Tests for sumtree/merkle/inclusion_proof.py

Required tests:
1. Round trip - every proof verifies against its tree's root
2. Tamper detection - sibling amount/digest, leaf amount, root changes fail
3. Malformed proofs - missing/extra/reordered steps fail, never raise
4. Amount substitution - moving value between leaf and sibling fails
"""
import dataclasses

import pytest

from sumtree.commitments import Blake2bSumCommitment, Sha256SumCommitment
from sumtree.crypto.hashing import MAX_AMOUNT
from sumtree.merkle import Direction, InclusionProof, MerkleSumTree, ProofStep
from sumtree.schemas.errors import AmountOverflowException, InvalidAmountException

from fixtures.common import (
    StubSumCommitment,
    flip_digest_bit,
    make_balances,
    replace_sibling,
    replace_step,
)


class TestScenario:
    """The five-balance scenario."""

    def test_prove_two_verifies(self, five_balance_tree):
        proof = five_balance_tree.prove(2)

        assert proof.verify(300, five_balance_tree.root())

    def test_prove_two_wrong_amount_fails(self, five_balance_tree):
        proof = five_balance_tree.prove(2)

        assert not proof.verify(301, five_balance_tree.root())

    def test_scenario_directions(self, five_balance_tree):
        proof = five_balance_tree.prove(2)

        assert [step.direction for step in proof.path] == [Direction.LEFT, Direction.RIGHT]
        assert [step.sibling_node_index for step in proof.path] == [6, 1]

    def test_reconstruct_root(self, five_balance_tree):
        root = five_balance_tree.prove(2).reconstruct_root(300)

        assert root == five_balance_tree.root()


class TestRoundTrip:
    """Every proof verifies against its own tree."""

    def test_every_position_verifies(self, sized_balances):
        tree = MerkleSumTree.build(sized_balances)
        root = tree.root()

        for position, balance in enumerate(sized_balances):
            assert tree.prove(position).verify(balance, root), f"Proof failed for {position}"

    def test_blake2b_tree_verifies(self):
        balances = make_balances(10)
        tree = MerkleSumTree.build(balances, commitment_cls=Blake2bSumCommitment)

        for position, balance in enumerate(balances):
            assert tree.prove(position).verify(balance, tree.root())

    def test_stub_hash_tree_verifies(self):
        balances = make_balances(6)
        tree = MerkleSumTree.build(balances, commitment_cls=StubSumCommitment)

        for position, balance in enumerate(balances):
            assert tree.prove(position).verify(balance, tree.root())

    def test_single_leaf_verifies(self):
        tree = MerkleSumTree.build([55])

        assert tree.prove(0).verify(55, tree.root())
        assert not tree.prove(0).verify(56, tree.root())

    def test_zero_balances_verify(self):
        tree = MerkleSumTree.build([0, 0, 0])

        assert tree.prove(1).verify(0, tree.root())

    def test_max_total_verifies(self):
        balances = [MAX_AMOUNT - 3, 1, 2]
        tree = MerkleSumTree.build(balances)

        assert tree.prove(0).verify(MAX_AMOUNT - 3, tree.root())


class TestTamperDetection:
    """Any change to a valid proof or its inputs fails verification."""

    @pytest.fixture
    def tree(self):
        return MerkleSumTree.build(make_balances(9))

    def test_wrong_leaf_amount(self, tree):
        proof = tree.prove(4)

        assert not proof.verify(tree.leaf(4).amount + 1, tree.root())

    def test_proof_for_other_position(self, tree):
        proof = tree.prove(4)

        assert not proof.verify(tree.leaf(5).amount, tree.root())

    @pytest.mark.parametrize("level", [0, 1, 2])
    def test_tampered_sibling_digest(self, tree, level):
        proof = tree.prove(0)
        digest = proof.path[level].sibling.digest
        tampered = replace_sibling(proof, level, digest=flip_digest_bit(digest, 31))

        assert not tampered.verify(tree.leaf(0).amount, tree.root())

    @pytest.mark.parametrize("level", [0, 1, 2])
    def test_tampered_sibling_amount(self, tree, level):
        proof = tree.prove(0)
        amount = proof.path[level].sibling.amount
        tampered = replace_sibling(proof, level, amount=amount + 1)

        assert not tampered.verify(tree.leaf(0).amount, tree.root())

    def test_flipped_direction(self, tree):
        proof = tree.prove(0)
        tampered = replace_step(proof, 0, direction=Direction.RIGHT)

        assert not tampered.verify(tree.leaf(0).amount, tree.root())

    def test_tampered_root_digest(self, tree):
        root = tree.root()
        forged = Sha256SumCommitment(amount=root.amount, digest=flip_digest_bit(root.digest))

        assert not tree.prove(3).verify(tree.leaf(3).amount, forged)

    def test_tampered_root_amount(self, tree):
        root = tree.root()
        forged = Sha256SumCommitment(amount=root.amount + 1, digest=root.digest)

        assert not tree.prove(3).verify(tree.leaf(3).amount, forged)

    def test_amount_substitution_between_leaf_and_sibling(self):
        """Shifting value from the sibling to the leaf keeps the sum but breaks the digest."""
        tree = MerkleSumTree.build([100, 200])
        proof = tree.prove(0)
        sibling = proof.path[0].sibling
        shifted = replace_sibling(proof, 0, amount=sibling.amount - 50)

        assert shifted.reconstruct_root(150).amount == tree.root().amount
        assert not shifted.verify(150, tree.root())

    def test_sibling_overflow_returns_false(self, tree):
        proof = tree.prove(0)
        tampered = replace_sibling(proof, 0, amount=MAX_AMOUNT)

        with pytest.raises(AmountOverflowException):
            tampered.reconstruct_root(tree.leaf(0).amount)
        assert not tampered.verify(tree.leaf(0).amount, tree.root())

    def test_proof_against_other_tree_root(self, tree):
        other = MerkleSumTree.build(make_balances(9, start=2))

        assert not tree.prove(0).verify(tree.leaf(0).amount, other.root())

    def test_root_of_other_commitment_type(self):
        balances = make_balances(4)
        sha_tree = MerkleSumTree.build(balances)
        blake_tree = MerkleSumTree.build(balances, commitment_cls=Blake2bSumCommitment)

        assert not sha_tree.prove(1).verify(balances[1], blake_tree.root())


class TestMalformedProofs:
    """Structurally wrong proofs are rejected, not mis-verified."""

    @pytest.fixture
    def tree(self):
        return MerkleSumTree.build(make_balances(8))

    def test_missing_step(self, tree):
        proof = tree.prove(2)
        truncated = dataclasses.replace(proof, path=proof.path[:-1])

        assert not truncated.is_well_formed()
        assert not truncated.verify(tree.leaf(2).amount, tree.root())

    def test_extra_step(self, tree):
        proof = tree.prove(2)
        padded = dataclasses.replace(proof, path=proof.path + (proof.path[-1],))

        assert not padded.verify(tree.leaf(2).amount, tree.root())

    def test_reordered_steps(self, tree):
        proof = tree.prove(2)
        reordered = dataclasses.replace(proof, path=tuple(reversed(proof.path)))

        assert not reordered.verify(tree.leaf(2).amount, tree.root())

    def test_top_sibling_only(self, tree):
        """A proof carrying just the root's other child is not enough."""
        proof = tree.prove(2)
        short = dataclasses.replace(proof, path=(proof.path[-1],))

        assert not short.verify(tree.leaf(2).amount, tree.root())

    def test_wrong_sibling_node_index(self, tree):
        proof = tree.prove(2)
        tampered = replace_step(proof, 0, sibling_node_index=proof.path[0].sibling_node_index + 1)

        assert not tampered.verify(tree.leaf(2).amount, tree.root())

    def test_wrong_leaf_count(self, tree):
        proof = dataclasses.replace(tree.prove(2), leaf_count=5)

        assert not proof.verify(tree.leaf(2).amount, tree.root())

    def test_position_outside_leaf_count(self, tree):
        proof = dataclasses.replace(tree.prove(2), position=8)

        assert not proof.is_well_formed()
        assert not proof.verify(tree.leaf(2).amount, tree.root())

    def test_zero_leaf_count(self):
        proof = InclusionProof(position=0, leaf_count=0, path=())

        assert not proof.verify(1, Sha256SumCommitment.leaf(1))

    def test_mixed_commitment_types(self, tree):
        proof = tree.prove(2)
        foreign = Blake2bSumCommitment.leaf(proof.path[0].sibling.amount)
        tampered = replace_step(proof, 0, sibling=foreign)

        assert not tampered.verify(tree.leaf(2).amount, tree.root())

    @pytest.mark.parametrize("leaf_amount", [-1, MAX_AMOUNT + 1, 1.5, None, "5"])
    def test_invalid_leaf_amount_returns_false(self, tree, leaf_amount):
        assert not tree.prove(2).verify(leaf_amount, tree.root())

    def test_invalid_leaf_amount_reconstruct_raises(self, tree):
        with pytest.raises(InvalidAmountException):
            tree.prove(2).reconstruct_root(-1)

    def test_non_commitment_root_returns_false(self, tree):
        assert not tree.prove(2).verify(tree.leaf(2).amount, None)

    def test_missing_path_returns_false(self, five_balance_tree):
        proof = InclusionProof(position=2, leaf_count=5, path=None)

        assert not proof.is_well_formed()
        assert not proof.verify(300, five_balance_tree.root())

    def test_non_step_entries_return_false(self, five_balance_tree):
        proof = InclusionProof(position=2, leaf_count=5, path=(None, None))

        assert not proof.is_well_formed()
        assert not proof.verify(300, five_balance_tree.root())

    def test_raw_commitments_as_steps_return_false(self, five_balance_tree):
        siblings = tuple(step.sibling for step in five_balance_tree.prove(2).path)
        proof = InclusionProof(position=2, leaf_count=5, path=siblings)

        assert not proof.verify(300, five_balance_tree.root())

    def test_non_commitment_class_returns_false(self, five_balance_tree):
        proof = dataclasses.replace(five_balance_tree.prove(2), commitment_cls=dict)

        assert not proof.verify(300, five_balance_tree.root())


class TestProofStep:
    """ProofStep and InclusionProof are immutable values."""

    def test_proof_is_frozen(self, five_balance_tree):
        proof = five_balance_tree.prove(0)

        with pytest.raises(dataclasses.FrozenInstanceError):
            proof.position = 1

    def test_step_direction_accepts_string_value(self, five_balance_tree):
        proof = five_balance_tree.prove(2)
        step = proof.path[0]
        as_string = ProofStep(step.sibling, "left", step.sibling_node_index)

        assert as_string.direction == Direction.LEFT

    def test_len_is_path_length(self, five_balance_tree):
        assert len(five_balance_tree.prove(4)) == 3
