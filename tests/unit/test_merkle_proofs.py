"""
Merkle Proof Unit Tests
Tests for spvtree/merkle/proofs.py

Covers:
1. Concrete scenarios (four leaves, three leaves padded to four)
2. Round trip - every index of every tree size verifies
3. Tamper detection - altered leaf, sibling or root gives False
4. Wrong index - mismatched index gives False
5. Boundaries - out-of-range indices and empty trees raise
6. Proof records through MerkleProver / MerkleVerifier
"""
import pytest

from spvtree.crypto.hashing import sha256
from spvtree.merkle.proofs import (
    MerkleProver,
    MerkleVerifier,
    check_index,
    generate_proof,
    verify_proof,
)
from spvtree.merkle.tree import PaddingPolicy, build_tree
from spvtree.schemas.errors import (
    EmptyTreeException,
    ErrorCodes,
    IndexOutOfRangeException,
)
from spvtree.schemas.proof import InclusionProof


def _flip(data: bytes, position: int) -> bytes:
    return data[:position] + bytes([data[position] ^ 0x01]) + data[position + 1:]


class TestScenarios:
    """Hand-computed expectations."""

    def test_scenario_a_proof_for_index_zero(self, abcd_tree):
        h = sha256

        proof = generate_proof(abcd_tree, 0)

        assert proof == [h(b"b"), h(h(b"c") + h(b"d"))]
        assert verify_proof(0, b"a", proof, abcd_tree.root_digest)

    def test_scenario_a_proof_for_index_three(self, abcd_tree):
        h = sha256

        proof = generate_proof(abcd_tree, 3)

        assert proof == [h(b"c"), h(h(b"a") + h(b"b"))]
        assert verify_proof(3, b"d", proof, abcd_tree.root_digest)

    def test_scenario_b_padded_indices_both_verify(self, abc_tree):
        root = abc_tree.root_digest

        assert verify_proof(2, b"c", generate_proof(abc_tree, 2), root)
        assert verify_proof(3, b"c", generate_proof(abc_tree, 3), root)

    def test_proof_ordered_leaf_to_root(self, eight_records):
        tree = build_tree(eight_records)

        proof = generate_proof(tree, 5)

        # Nearest sibling is leaf 4, farthest is the left half of the tree.
        assert proof[0] == sha256(eight_records[4])
        assert proof[-1] == tree.root.left.digest


class TestRoundTrip:
    """Every valid index verifies against the tree root."""

    @pytest.mark.parametrize("count", [1, 2, 3, 4, 7, 8, 16, 32])
    def test_all_indices_verify(self, count):
        tree = build_tree([f"leaf{i}".encode() for i in range(count)])

        for i, leaf in enumerate(tree.leaves):
            proof = generate_proof(tree, i)
            assert verify_proof(i, leaf, proof, tree.root_digest), f"index {i}"

    @pytest.mark.parametrize("count", [2, 4, 8, 16, 32, 64])
    def test_proof_length_equals_depth(self, count):
        tree = build_tree([bytes([i]) for i in range(count)])

        for i in range(count):
            assert len(generate_proof(tree, i)) == tree.depth

    def test_next_power_of_two_tree_round_trip(self):
        tree = build_tree([bytes([i]) for i in range(11)], PaddingPolicy.NEXT_POWER_OF_TWO)

        for i, leaf in enumerate(tree.leaves):
            assert verify_proof(i, leaf, generate_proof(tree, i), tree.root_digest)

    def test_generation_does_not_change_tree(self, eight_records):
        tree = build_tree(eight_records)
        snapshot = (tree.root_digest, tree.leaves)

        for i in range(tree.leaf_count):
            generate_proof(tree, i)

        assert (tree.root_digest, tree.leaves) == snapshot


class TestTamperDetection:
    """Altered inputs are rejected with False, never an exception."""

    def test_flipped_leaf_byte_fails_for_every_index(self, eight_records):
        tree = build_tree(eight_records)

        for i, leaf in enumerate(tree.leaves):
            proof = generate_proof(tree, i)
            for position in range(len(leaf)):
                assert not verify_proof(i, _flip(leaf, position), proof, tree.root_digest)

    def test_tampered_sibling_fails(self, abcd_tree):
        proof = generate_proof(abcd_tree, 1)
        proof[0] = sha256(b"tampered")

        assert not verify_proof(1, b"b", proof, abcd_tree.root_digest)

    def test_wrong_root_fails(self, abcd_tree):
        proof = generate_proof(abcd_tree, 1)

        assert not verify_proof(1, b"b", proof, sha256(b"other root"))

    def test_truncated_proof_fails(self, eight_records):
        tree = build_tree(eight_records)
        proof = generate_proof(tree, 3)

        assert not verify_proof(3, eight_records[3], proof[:-1], tree.root_digest)

    def test_extended_proof_fails(self, eight_records):
        tree = build_tree(eight_records)
        proof = generate_proof(tree, 3) + [sha256(b"extra")]

        assert not verify_proof(3, eight_records[3], proof, tree.root_digest)

    def test_sibling_order_matters(self, eight_records):
        tree = build_tree(eight_records)
        proof = list(reversed(generate_proof(tree, 2)))

        assert not verify_proof(2, eight_records[2], proof, tree.root_digest)

    def test_empty_proof_fails_for_multi_leaf_tree(self, abcd_tree):
        assert not verify_proof(0, b"a", [], abcd_tree.root_digest)


class TestWrongIndex:
    """A proof checked under another index is rejected."""

    def test_every_mismatched_index_fails(self, eight_records):
        tree = build_tree(eight_records)

        for j in range(tree.leaf_count):
            proof = generate_proof(tree, j)
            for i in range(tree.leaf_count):
                if i == j:
                    continue
                assert not verify_proof(i, tree.leaves[j], proof, tree.root_digest), (i, j)

    def test_index_beyond_known_count_raises(self, abcd_tree):
        proof = generate_proof(abcd_tree, 0)

        with pytest.raises(IndexOutOfRangeException):
            verify_proof(4, b"a", proof, abcd_tree.root_digest, leaf_count=4)


class TestBoundaries:
    """Structural failures raise; they are not reported as False."""

    @pytest.mark.parametrize("index", [-1, 4, 100])
    def test_generate_out_of_range(self, abcd_tree, index):
        with pytest.raises(IndexOutOfRangeException) as exc_info:
            generate_proof(abcd_tree, index)

        assert exc_info.value.code == ErrorCodes.INDEX_OUT_OF_RANGE
        assert exc_info.value.details["index"] == index

    def test_out_of_range_is_an_index_error(self, abcd_tree):
        with pytest.raises(IndexError):
            generate_proof(abcd_tree, 4)

    def test_generate_on_empty_tree(self):
        tree = build_tree([])

        with pytest.raises(EmptyTreeException) as exc_info:
            generate_proof(tree, 0)

        assert exc_info.value.code == ErrorCodes.EMPTY_TREE

    def test_empty_tree_checked_before_index(self):
        with pytest.raises(EmptyTreeException):
            generate_proof(build_tree([]), -1)

    def test_verify_negative_index_raises(self, abcd_tree):
        proof = generate_proof(abcd_tree, 0)

        with pytest.raises(IndexOutOfRangeException):
            verify_proof(-1, b"a", proof, abcd_tree.root_digest)

    def test_verify_raises_regardless_of_hash_outcome(self, abcd_tree):
        """A valid proof under an out-of-range index still raises."""
        proof = generate_proof(abcd_tree, 0)

        with pytest.raises(IndexOutOfRangeException):
            verify_proof(8, b"a", proof, abcd_tree.root_digest, leaf_count=4)

    def test_non_int_index_rejected(self, abcd_tree):
        with pytest.raises(TypeError):
            generate_proof(abcd_tree, "1")

    def test_check_index_without_count(self):
        check_index(10**6)

        with pytest.raises(IndexOutOfRangeException):
            check_index(-5)


class TestTreeBoundMethods:
    """MerkleTree.prove / MerkleTree.verify."""

    def test_prove_and_verify(self, abcd_tree):
        for i in range(abcd_tree.leaf_count):
            assert abcd_tree.verify(i, abcd_tree.prove(i))

    def test_verify_rejects_other_leafs_proof(self, abcd_tree):
        assert not abcd_tree.verify(0, abcd_tree.prove(1))

    def test_verify_out_of_range(self, abcd_tree):
        with pytest.raises(IndexOutOfRangeException):
            abcd_tree.verify(4, abcd_tree.prove(0))

    def test_verify_on_empty_tree(self):
        with pytest.raises(IndexOutOfRangeException):
            build_tree([]).verify(0, [])


class TestProverVerifier:
    """InclusionProof records."""

    def test_prove_builds_record(self, abcd_tree):
        proof = MerkleProver.prove(abcd_tree, 2)

        assert isinstance(proof, InclusionProof)
        assert proof.index == 2
        assert proof.leaf_bytes == b"c"
        assert proof.root_digest == abcd_tree.root_digest
        assert proof.leaf_count == 4
        assert proof.sibling_digests == generate_proof(abcd_tree, 2)

    def test_verify_record(self, abcd_tree):
        proof = MerkleProver.prove(abcd_tree, 1)

        assert MerkleVerifier.verify(proof)
        assert MerkleVerifier.verify(proof, expected_root=abcd_tree.root_digest)

    def test_verify_record_against_other_root(self, abcd_tree):
        proof = MerkleProver.prove(abcd_tree, 1)

        assert not MerkleVerifier.verify(proof, expected_root=sha256(b"untrusted"))

    def test_prove_all(self, abc_tree):
        proofs = MerkleProver.prove_all(abc_tree)

        assert [p.index for p in proofs] == [0, 1, 2, 3]
        assert all(MerkleVerifier.verify(p) for p in proofs)

    def test_prove_all_empty_tree(self):
        assert MerkleProver.prove_all(build_tree([])) == []

    def test_verify_leaf_in_root(self, abcd_tree):
        siblings = generate_proof(abcd_tree, 3)

        assert MerkleVerifier.verify_leaf_in_root(b"d", 3, siblings, abcd_tree.root_digest)
        assert not MerkleVerifier.verify_leaf_in_root(b"x", 3, siblings, abcd_tree.root_digest)

    def test_tree_inclusion_proof(self, abcd_tree):
        assert abcd_tree.inclusion_proof(0) == MerkleProver.prove(abcd_tree, 0)

    def test_prove_out_of_range(self, abcd_tree):
        with pytest.raises(IndexOutOfRangeException):
            MerkleProver.prove(abcd_tree, 9)
