"""
Tree vertices.

A node is either a leaf (digest of one record, no children) or an internal
node (digest of its two children's digests, owning exactly two children).
Nodes are frozen: a digest never changes after construction, and there are
no parent pointers, so a tree is a strict hierarchy of exclusively owned
values.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from spvtree.crypto.hashing import hash_bytes, hash_concat


@dataclass(frozen=True)
class LeafNode:
    """Leaf vertex: digest = H(record)."""
    digest: bytes


@dataclass(frozen=True)
class InternalNode:
    """Internal vertex: digest = H(left.digest || right.digest)."""
    digest: bytes
    left: "Node"
    right: "Node"


Node = Union[LeafNode, InternalNode]


def make_leaf(record: bytes) -> LeafNode:
    """Create a leaf node by hashing the raw record bytes."""
    return LeafNode(digest=hash_bytes(record))


def make_internal(left: Node, right: Node) -> InternalNode:
    """Create a parent of two nodes, left-then-right."""
    return InternalNode(
        digest=hash_concat(left.digest, right.digest),
        left=left,
        right=right,
    )


def is_leaf(node: Node) -> bool:
    return isinstance(node, LeafNode)


__all__ = [
    "LeafNode",
    "InternalNode",
    "Node",
    "make_leaf",
    "make_internal",
    "is_leaf",
]
