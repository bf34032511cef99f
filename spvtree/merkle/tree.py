"""
Merkle tree construction.

Builds a complete binary hash tree over an ordered sequence of byte records.

Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = sha256(record)
2. Parent hashing: parent = sha256(left + right)
3. Padding: an odd record count gets ONE duplicate of the last record
4. The padded count must then be a power of two, otherwise construction
   is refused with InvalidLeafCountException (default policy)
5. Empty input: an empty tree with no root and no leaves (not an error)

Determinism Notes:
- No randomness or non-deterministic ordering
- Leaves are paired strictly left-to-right in input order; this module
  never sorts records
- The padded record sequence is stored, since verification re-hashes
  the raw leaf
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Sequence

from spvtree.merkle.nodes import InternalNode, Node, make_internal, make_leaf
from spvtree.schemas.errors import InvalidLeafCountException
from spvtree.sources import AddressSource, records_from_sources

if TYPE_CHECKING:
    from spvtree.schemas.proof import InclusionProof


logger = logging.getLogger(__name__)


class PaddingPolicy(str, Enum):
    """How a record sequence is padded before the tree is built."""

    # Duplicate the last record once if the count is odd, then require a
    # power of two.
    DUPLICATE_ONCE = "duplicate_once"
    # Keep duplicating the last record until the count is a power of two.
    NEXT_POWER_OF_TWO = "next_power_of_two"


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def pad_records(
    records: Sequence[bytes],
    policy: PaddingPolicy | str = PaddingPolicy.DUPLICATE_ONCE,
) -> list[bytes]:
    """
    Apply the padding policy to a record sequence.

    Args:
        records: Ordered record byte-strings
        policy: Padding policy (enum member or its string value)

    Returns:
        New list of records whose length is a power of two
        (or empty if records is empty)

    Raises:
        InvalidLeafCountException: If the padded count is not a power of two
        TypeError: If a record is not bytes-like
    """
    policy = PaddingPolicy(policy)
    padded: list[bytes] = []
    for i, record in enumerate(records):
        if not isinstance(record, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"Record {i} must be bytes-like, got {type(record).__name__}"
            )
        padded.append(bytes(record))

    if not padded:
        return padded

    if len(padded) % 2 == 1:
        padded.append(padded[-1])

    if policy is PaddingPolicy.NEXT_POWER_OF_TWO:
        while not is_power_of_two(len(padded)):
            padded.append(padded[-1])

    if not is_power_of_two(len(padded)):
        raise InvalidLeafCountException(
            f"Leaf count {len(padded)} after padding {len(records)} records "
            f"is not a power of two",
            leaf_count=len(padded),
            details={"record_count": len(records), "padding_policy": policy.value},
        )

    return padded


@dataclass(frozen=True)
class MerkleTree:
    """
    An immutable Merkle tree.

    Attributes:
        root: The root node, or None for a tree built from zero records
        leaves: The padded record sequence; leaf index i refers to leaves[i]
    """
    root: Node | None
    leaves: tuple[bytes, ...]

    @property
    def is_empty(self) -> bool:
        return self.root is None

    @property
    def leaf_count(self) -> int:
        return len(self.leaves)

    @property
    def root_digest(self) -> bytes | None:
        return self.root.digest if self.root is not None else None

    @property
    def depth(self) -> int:
        """Tree height, found by following the right spine from the root."""
        depth = 0
        node = self.root
        while isinstance(node, InternalNode):
            depth += 1
            node = node.right
        return depth

    @classmethod
    def build(
        cls,
        records: Iterable[bytes],
        padding_policy: PaddingPolicy | str = PaddingPolicy.DUPLICATE_ONCE,
    ) -> "MerkleTree":
        return build_tree(records, padding_policy)

    @classmethod
    def from_sources(
        cls,
        sources: Iterable[AddressSource],
        padding_policy: PaddingPolicy | str = PaddingPolicy.DUPLICATE_ONCE,
    ) -> "MerkleTree":
        """Build a tree whose leaves are the address bytes of each source."""
        return build_tree(records_from_sources(sources), padding_policy)

    def prove(self, index: int) -> list[bytes]:
        """Sibling digests for leaf `index`, ordered leaf-to-root."""
        from spvtree.merkle.proofs import generate_proof

        return generate_proof(self, index)

    def verify(self, index: int, proof: Sequence[bytes]) -> bool:
        """
        Check a proof against this tree's own leaf and root.

        The leaf count is known here, so an index outside [0, leaf_count)
        raises IndexOutOfRangeException; an empty tree has no valid index.
        """
        from spvtree.merkle.proofs import check_index, verify_proof

        check_index(index, self.leaf_count)
        return verify_proof(
            index,
            self.leaves[index],
            proof,
            self.root_digest,
            leaf_count=self.leaf_count,
        )

    def inclusion_proof(self, index: int) -> "InclusionProof":
        """Serializable proof record for leaf `index`."""
        from spvtree.merkle.proofs import MerkleProver

        return MerkleProver.prove(self, index)


def build_tree(
    records: Iterable[bytes],
    padding_policy: PaddingPolicy | str = PaddingPolicy.DUPLICATE_ONCE,
) -> MerkleTree:
    """
    Build a Merkle tree from an ordered sequence of records.

    Algorithm:
    1. If empty: return an empty tree
    2. Pad the records (see pad_records)
    3. Hash each padded record into a leaf node
    4. Pair adjacent nodes left-to-right into parents, level by level,
       until a single root remains

    Example: [a, b, c] -> [a, b, c, c] -> [parent(a,b), parent(c,c)] -> root

    Args:
        records: Ordered record byte-strings. Order matters and is preserved.
        padding_policy: Padding policy, DUPLICATE_ONCE by default

    Returns:
        MerkleTree holding the root and the padded leaf records

    Raises:
        InvalidLeafCountException: If the padded count is not a power of two
    """
    records = list(records)
    if not records:
        logger.debug("Built empty tree from zero records")
        return MerkleTree(root=None, leaves=())

    leaves = pad_records(records, padding_policy)

    level: list[Node] = [make_leaf(record) for record in leaves]
    while len(level) > 1:
        level = [
            make_internal(level[i], level[i + 1])
            for i in range(0, len(level), 2)
        ]

    tree = MerkleTree(root=level[0], leaves=tuple(leaves))
    logger.debug(
        f"Built tree: {len(records)} records, {tree.leaf_count} leaves, "
        f"depth {tree.depth}, root {tree.root_digest.hex()}"
    )
    return tree


__all__ = [
    "PaddingPolicy",
    "MerkleTree",
    "is_power_of_two",
    "pad_records",
    "build_tree",
]
