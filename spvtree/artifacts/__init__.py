"""
Record, tree and proof files.
"""

from .io import (
    read_records,
    tree_to_snapshot,
    save_tree,
    load_tree,
    save_proof,
    load_proof,
)

__all__ = [
    "read_records",
    "tree_to_snapshot",
    "save_tree",
    "load_tree",
    "save_proof",
    "load_proof",
]
