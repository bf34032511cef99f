"""
Serializable records for inclusion proofs and stored trees.

Binary values are carried as 0x-prefixed hex strings so the records can be
written as canonical JSON. Accessors return raw bytes.
"""

from __future__ import annotations

from typing import Literal, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from spvtree.crypto.hashing import DIGEST_SIZE, from_hex, to_hex
from .versioning import SCHEMA_VERSION, assert_supported_schema_version


PaddingPolicyName = Literal["duplicate_once", "next_power_of_two"]


def _check_hex(value: str) -> str:
    from_hex(value)
    return value.lower()


def _check_digest(value: str) -> str:
    raw = from_hex(value)
    if len(raw) != DIGEST_SIZE:
        raise ValueError(
            f"Digest must be {DIGEST_SIZE} bytes, got {len(raw)}"
        )
    return value.lower()


class InclusionProof(BaseModel):
    """
    An SPV inclusion proof for a single leaf.

    Siblings are ordered leaf-to-root: the sibling nearest the leaf first,
    the sibling nearest the root last. The verifier depends on that order.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: str = Field(default=SCHEMA_VERSION)
    index: int = Field(..., ge=0, description="Leaf index in the padded leaf sequence")
    leaf: str = Field(..., description="Raw leaf record, 0x-hex")
    siblings: list[str] = Field(default_factory=list, description="Sibling digests, leaf-to-root")
    root: str = Field(..., description="Root digest the proof was generated against")
    leaf_count: int | None = Field(default=None, ge=1, description="Padded leaf count, if known")

    @field_validator("schema_version")
    @classmethod
    def _supported_version(cls, v: str) -> str:
        assert_supported_schema_version(v)
        return v

    @field_validator("leaf")
    @classmethod
    def _leaf_hex(cls, v: str) -> str:
        return _check_hex(v)

    @field_validator("root")
    @classmethod
    def _root_digest(cls, v: str) -> str:
        return _check_digest(v)

    @field_validator("siblings")
    @classmethod
    def _sibling_digests(cls, v: list[str]) -> list[str]:
        return [_check_digest(s) for s in v]

    @classmethod
    def from_components(
        cls,
        index: int,
        leaf: bytes,
        siblings: Sequence[bytes],
        root: bytes,
        leaf_count: int | None = None,
    ) -> "InclusionProof":
        return cls(
            index=index,
            leaf=to_hex(leaf),
            siblings=[to_hex(s) for s in siblings],
            root=to_hex(root),
            leaf_count=leaf_count,
        )

    @property
    def leaf_bytes(self) -> bytes:
        return from_hex(self.leaf)

    @property
    def sibling_digests(self) -> list[bytes]:
        return [from_hex(s) for s in self.siblings]

    @property
    def root_digest(self) -> bytes:
        return from_hex(self.root)


class TreeSnapshot(BaseModel):
    """
    Stored form of a built tree: the padded leaves plus the root they commit to.

    Only the leaves are authoritative; the root is kept so a reader can
    detect a file whose leaves were altered after writing.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: str = Field(default=SCHEMA_VERSION)
    padding_policy: PaddingPolicyName = Field(default="duplicate_once")
    leaf_count: int = Field(..., ge=0)
    depth: int = Field(..., ge=0)
    root: str | None = Field(default=None)
    leaves: list[str] = Field(default_factory=list, description="Padded leaf records, 0x-hex")

    @field_validator("schema_version")
    @classmethod
    def _supported_version(cls, v: str) -> str:
        assert_supported_schema_version(v)
        return v

    @field_validator("root")
    @classmethod
    def _root_digest(cls, v: str | None) -> str | None:
        return _check_digest(v) if v is not None else None

    @field_validator("leaves")
    @classmethod
    def _leaves_hex(cls, v: list[str]) -> list[str]:
        return [_check_hex(leaf) for leaf in v]

    @model_validator(mode="after")
    def _consistent_shape(self) -> "TreeSnapshot":
        if self.leaf_count != len(self.leaves):
            raise ValueError(
                f"leaf_count {self.leaf_count} does not match {len(self.leaves)} stored leaves"
            )
        if (self.root is None) != (self.leaf_count == 0):
            raise ValueError("root must be present exactly when the tree has leaves")
        if self.leaf_count:
            depth_fits = 2 ** self.depth == self.leaf_count
        else:
            depth_fits = self.depth == 0
        if not depth_fits:
            raise ValueError(
                f"depth {self.depth} does not fit {self.leaf_count} leaves"
            )
        return self

    @property
    def leaf_records(self) -> list[bytes]:
        return [from_hex(leaf) for leaf in self.leaves]

    @property
    def root_digest(self) -> bytes | None:
        return from_hex(self.root) if self.root is not None else None


__all__ = [
    "InclusionProof",
    "TreeSnapshot",
    "PaddingPolicyName",
]
