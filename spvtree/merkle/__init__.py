"""
Merkle tree construction and SPV inclusion proofs.

This package provides:
- build_tree / MerkleTree: deterministic construction from ordered records
- generate_proof: sibling digests for one leaf, leaf-to-root
- verify_proof: recompute the root from a leaf and its proof
- MerkleProver / MerkleVerifier: the same, over serializable InclusionProof records

Commitment Rules:
1. Leaf hashing: sha256(record)
2. Parent hashing: sha256(left + right)
3. Padding: odd count gets one duplicate of the last record; the result must
   be a power of two unless PaddingPolicy.NEXT_POWER_OF_TWO is chosen
4. Empty input: empty tree, no root

Usage:
    from spvtree.merkle import build_tree, generate_proof, verify_proof

    tree = build_tree([b"a", b"b", b"c", b"d"])
    proof = generate_proof(tree, index=2)
    assert verify_proof(2, b"c", proof, tree.root_digest)
"""
from .nodes import (
    LeafNode,
    InternalNode,
    Node,
    make_leaf,
    make_internal,
    is_leaf,
)

from .tree import (
    PaddingPolicy,
    MerkleTree,
    is_power_of_two,
    pad_records,
    build_tree,
)

from .proofs import (
    check_index,
    generate_proof,
    verify_proof,
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Nodes
    "LeafNode",
    "InternalNode",
    "Node",
    "make_leaf",
    "make_internal",
    "is_leaf",
    # Construction
    "PaddingPolicy",
    "MerkleTree",
    "is_power_of_two",
    "pad_records",
    "build_tree",
    # Proofs
    "check_index",
    "generate_proof",
    "verify_proof",
    "MerkleProver",
    "MerkleVerifier",
]
