"""
spvtree - Merkle trees over ordered byte records with SPV inclusion proofs.

Usage:
    from spvtree import build_tree, generate_proof, verify_proof

    tree = build_tree([b"a", b"b", b"c", b"d"])
    proof = generate_proof(tree, 0)
    verify_proof(0, b"a", proof, tree.root_digest)  # True
"""

__version__ = "0.1.0"

from spvtree.merkle import (
    MerkleTree,
    PaddingPolicy,
    build_tree,
    generate_proof,
    verify_proof,
    MerkleProver,
    MerkleVerifier,
)
from spvtree.schemas import (
    InclusionProof,
    SpvTreeException,
    InvalidLeafCountException,
    EmptyTreeException,
    IndexOutOfRangeException,
)
from spvtree.sources import AddressSource

__all__ = [
    "__version__",
    "MerkleTree",
    "PaddingPolicy",
    "build_tree",
    "generate_proof",
    "verify_proof",
    "MerkleProver",
    "MerkleVerifier",
    "InclusionProof",
    "SpvTreeException",
    "InvalidLeafCountException",
    "EmptyTreeException",
    "IndexOutOfRangeException",
    "AddressSource",
]
