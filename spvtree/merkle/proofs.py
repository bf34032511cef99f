"""
SPV inclusion proofs: generation from a built tree and independent verification.

Proof ordering contract: siblings are returned leaf-to-root. The verifier
consumes them in that order, deciding the concatenation side from the
parity of the running index:
- even index: current node is a left child  -> H(current || sibling)
- odd index:  current node is a right child -> H(sibling || current)
then index //= 2.

A proof that does not reproduce the expected root is a normal outcome and
returns False. Exceptions are raised only for structural violations
(empty tree, index out of range).
"""
from __future__ import annotations

import logging
from typing import Sequence

from spvtree.crypto.hashing import hash_bytes, hash_concat
from spvtree.merkle.nodes import InternalNode
from spvtree.merkle.tree import MerkleTree
from spvtree.schemas.errors import EmptyTreeException, IndexOutOfRangeException
from spvtree.schemas.proof import InclusionProof


logger = logging.getLogger(__name__)


def check_index(index: int, leaf_count: int | None = None) -> None:
    """
    Validate a leaf index.

    Without a known leaf count only non-negativity can be checked.

    Raises:
        TypeError: If index is not an int
        IndexOutOfRangeException: If index < 0 or index >= leaf_count
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeError(f"Leaf index must be an int, got {type(index).__name__}")
    if index < 0:
        raise IndexOutOfRangeException(
            f"Leaf index {index} is negative",
            index=index,
            leaf_count=leaf_count,
        )
    if leaf_count is not None and index >= leaf_count:
        raise IndexOutOfRangeException(
            f"Leaf index {index} out of range for {leaf_count} leaves",
            index=index,
            leaf_count=leaf_count,
        )


def generate_proof(tree: MerkleTree, index: int) -> list[bytes]:
    """
    Generate the inclusion proof for the leaf at `index`.

    Algorithm:
    1. Measure the leaf span by walking the right spine (2^depth leaves)
    2. Descend from the root keeping the logical range [low, low + width):
       - index in the right half: record the LEFT child digest, go right,
         low += half
       - otherwise: record the RIGHT child digest, go left
    3. Reverse, so the proof reads leaf-to-root

    Args:
        tree: A built tree (read-only here)
        index: 0-based index into tree.leaves

    Returns:
        Exactly tree.depth sibling digests, leaf-to-root

    Raises:
        EmptyTreeException: If the tree has no root
        IndexOutOfRangeException: If index is outside [0, leaf_count)
    """
    if tree.root is None:
        raise EmptyTreeException(
            f"Cannot generate proof for index {index}: tree is empty",
            details={"index": index},
        )
    check_index(index, tree.leaf_count)

    width = 1
    node = tree.root
    while isinstance(node, InternalNode):
        width *= 2
        node = node.right

    proof: list[bytes] = []
    low = 0
    node = tree.root
    while width > 1:
        width //= 2
        if index >= low + width:
            proof.append(node.left.digest)
            node = node.right
            low += width
        else:
            proof.append(node.right.digest)
            node = node.left

    proof.reverse()
    logger.debug(f"Generated proof for leaf {index}: {len(proof)} siblings")
    return proof


def verify_proof(
    index: int,
    leaf: bytes,
    proof: Sequence[bytes],
    expected_root: bytes,
    leaf_count: int | None = None,
) -> bool:
    """
    Verify an inclusion proof against a trusted root digest.

    Args:
        index: Claimed 0-based leaf index
        leaf: Raw leaf record bytes (hashed here)
        proof: Sibling digests, leaf-to-root
        expected_root: Trusted root digest
        leaf_count: Padded leaf count, if the verifier knows it

    Returns:
        True if the recomputed root equals expected_root, False otherwise
        (tampered leaf, wrong index, wrong or truncated proof)

    Raises:
        IndexOutOfRangeException: If index < 0, or leaf_count is given and
            index >= leaf_count
    """
    check_index(index, leaf_count)

    current = hash_bytes(leaf)
    position = index
    for sibling in proof:
        if position % 2 == 0:
            current = hash_concat(current, sibling)
        else:
            current = hash_concat(sibling, current)
        position //= 2

    ok = current == expected_root
    if ok:
        logger.debug(f"Proof for leaf {index} verified")
    else:
        logger.info(f"Proof for leaf {index} rejected: recomputed root does not match")
    return ok


class MerkleProver:
    """
    Builds serializable InclusionProof records from a tree.

    Example:
        >>> tree = build_tree([b"a", b"b", b"c", b"d"])
        >>> proof = MerkleProver.prove(tree, 2)
        >>> MerkleVerifier.verify(proof)
        True
    """

    @staticmethod
    def prove(tree: MerkleTree, index: int) -> InclusionProof:
        """
        Raises:
            EmptyTreeException: If the tree has no root
            IndexOutOfRangeException: If index is out of range
        """
        siblings = generate_proof(tree, index)
        return InclusionProof.from_components(
            index=index,
            leaf=tree.leaves[index],
            siblings=siblings,
            root=tree.root_digest,
            leaf_count=tree.leaf_count,
        )

    @staticmethod
    def prove_all(tree: MerkleTree) -> list[InclusionProof]:
        """One proof per leaf, in leaf order. Empty for an empty tree."""
        return [MerkleProver.prove(tree, i) for i in range(tree.leaf_count)]


class MerkleVerifier:
    """Checks InclusionProof records."""

    @staticmethod
    def verify(proof: InclusionProof, expected_root: bytes | None = None) -> bool:
        """
        Verify a proof record.

        Args:
            proof: The proof record
            expected_root: Trusted root obtained out of band. When omitted the
                proof's own root is used, which only shows internal consistency.
        """
        root = expected_root if expected_root is not None else proof.root_digest
        return verify_proof(
            proof.index,
            proof.leaf_bytes,
            proof.sibling_digests,
            root,
            leaf_count=proof.leaf_count,
        )

    @staticmethod
    def verify_leaf_in_root(
        leaf: bytes,
        index: int,
        siblings: Sequence[bytes],
        root: bytes,
        leaf_count: int | None = None,
    ) -> bool:
        return verify_proof(index, leaf, siblings, root, leaf_count=leaf_count)


__all__ = [
    "check_index",
    "generate_proof",
    "verify_proof",
    "MerkleProver",
    "MerkleVerifier",
]
