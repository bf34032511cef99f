"""
Record, tree and proof files.

Purpose: read record lists from disk and save/load built trees and
inclusion proofs as canonical JSON.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from spvtree.crypto.hashing import to_hex
from spvtree.merkle.tree import MerkleTree, PaddingPolicy, build_tree
from spvtree.schemas.canonical import dumps_canonical
from spvtree.schemas.errors import (
    ArtifactIOException,
    ErrorCodes,
    RootMismatchException,
)
from spvtree.schemas.proof import InclusionProof, TreeSnapshot
from spvtree.schemas.versioning import SCHEMA_VERSION, is_compatible_schema_version


logger = logging.getLogger(__name__)


def read_records(path: str | Path, encoding: str = "utf-8") -> list[bytes]:
    """
    Read one record per line.

    Args:
        path: Records file
        encoding: "utf-8" takes each line's bytes as the record;
            "hex" decodes each line as hex (optional 0x prefix)

    Returns:
        Records in file order. A blank line is an empty record.

    Raises:
        ArtifactIOException: If the file is missing or a hex line is invalid
    """
    path = Path(path)
    if encoding not in ("utf-8", "hex"):
        raise ValueError(f"Unknown records encoding: {encoding!r}")
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ArtifactIOException(f"Cannot read records file: {e}", path=str(path)) from e

    lines = data.splitlines()
    if encoding == "utf-8":
        records = list(lines)
    else:
        records = []
        for lineno, line in enumerate(lines, start=1):
            text = line.strip().decode("ascii", errors="replace")
            if text.startswith(("0x", "0X")):
                text = text[2:]
            try:
                records.append(bytes.fromhex(text))
            except ValueError as e:
                raise ArtifactIOException(
                    f"Invalid hex record on line {lineno}: {e}",
                    path=str(path),
                    details={"line": lineno},
                ) from e

    logger.info(f"Read {len(records)} records from {path}")
    return records


def tree_to_snapshot(
    tree: MerkleTree,
    padding_policy: PaddingPolicy | str = PaddingPolicy.DUPLICATE_ONCE,
) -> TreeSnapshot:
    return TreeSnapshot(
        padding_policy=PaddingPolicy(padding_policy).value,
        leaf_count=tree.leaf_count,
        depth=tree.depth,
        root=to_hex(tree.root_digest) if tree.root_digest is not None else None,
        leaves=[to_hex(leaf) for leaf in tree.leaves],
    )


def _write_json_file(path: Path, obj: Any) -> Path:
    content = dumps_canonical(obj)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ArtifactIOException(f"Cannot write file: {e}", path=str(path)) from e
    return path


def _read_json_file(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ArtifactIOException(f"Cannot read file: {e}", path=str(path)) from e
    except UnicodeDecodeError as e:
        raise ArtifactIOException(f"File is not valid UTF-8: {e}", path=str(path)) from e
    except json.JSONDecodeError as e:
        raise ArtifactIOException(f"Invalid JSON: {e}", path=str(path)) from e


def _check_schema_version(data: Any, path: Path) -> None:
    if not isinstance(data, dict):
        return
    version = data.get("schema_version", SCHEMA_VERSION)
    if not isinstance(version, str) or not is_compatible_schema_version(version):
        raise ArtifactIOException(
            f"Unsupported schema version: {version!r}",
            path=str(path),
            code=ErrorCodes.UNSUPPORTED_VERSION,
            details={"schema_version": version},
        )


def save_tree(
    tree: MerkleTree,
    path: str | Path,
    padding_policy: PaddingPolicy | str = PaddingPolicy.DUPLICATE_ONCE,
) -> Path:
    """Write a tree's padded leaves and root as canonical JSON."""
    path = Path(path)
    _write_json_file(path, tree_to_snapshot(tree, padding_policy))
    logger.info(f"Saved tree ({tree.leaf_count} leaves) to {path}")
    return path


def load_tree(path: str | Path) -> MerkleTree:
    """
    Load a tree file and rebuild the tree from its stored leaves.

    Raises:
        ArtifactIOException: If the file is unreadable, malformed, or its
            leaves are not in padded form
        RootMismatchException: If the rebuilt root differs from the stored root
    """
    path = Path(path)
    data = _read_json_file(path)
    _check_schema_version(data, path)
    try:
        snapshot = TreeSnapshot.model_validate(data)
    except ValidationError as e:
        raise ArtifactIOException(
            f"Invalid tree file: {e}",
            path=str(path),
            code=ErrorCodes.SCHEMA_VALIDATION_ERROR,
        ) from e

    tree = build_tree(snapshot.leaf_records, snapshot.padding_policy)

    if tree.leaf_count != snapshot.leaf_count:
        raise ArtifactIOException(
            f"Stored leaves are not padded: {snapshot.leaf_count} stored, "
            f"{tree.leaf_count} after padding",
            path=str(path),
        )

    actual = to_hex(tree.root_digest) if tree.root_digest is not None else None
    if actual != snapshot.root:
        raise RootMismatchException(
            expected=str(snapshot.root),
            actual=str(actual),
            path=str(path),
        )

    logger.info(f"Loaded tree ({tree.leaf_count} leaves) from {path}")
    return tree


def save_proof(proof: InclusionProof, path: str | Path) -> Path:
    """Write an inclusion proof as canonical JSON."""
    path = Path(path)
    _write_json_file(path, proof)
    logger.info(f"Saved proof for leaf {proof.index} to {path}")
    return path


def load_proof(path: str | Path) -> InclusionProof:
    """
    Load an inclusion proof file.

    Raises:
        ArtifactIOException: If the file is unreadable or malformed
    """
    path = Path(path)
    data = _read_json_file(path)
    _check_schema_version(data, path)
    try:
        return InclusionProof.model_validate(data)
    except ValidationError as e:
        raise ArtifactIOException(
            f"Invalid proof file: {e}",
            path=str(path),
            code=ErrorCodes.SCHEMA_VALIDATION_ERROR,
        ) from e


__all__ = [
    "read_records",
    "tree_to_snapshot",
    "save_tree",
    "load_tree",
    "save_proof",
    "load_proof",
]
