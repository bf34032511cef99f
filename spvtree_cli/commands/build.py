"""
CLI Build Command

Build a Merkle tree from a records file and optionally save it.

Usage:
    spvtree build records.txt [--out tree.json] [--encoding utf-8|hex]
                              [--pad duplicate_once|next_power_of_two] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from typing import Any

from spvtree.artifacts.io import read_records, save_tree
from spvtree.crypto.hashing import to_hex
from spvtree.merkle.tree import build_tree
from spvtree.schemas.errors import SpvTreeException
from spvtree_cli.exit_codes import EXIT_RUNTIME_ERROR, EXIT_SUCCESS


logger = logging.getLogger(__name__)


@dataclass
class BuildSummary:
    """Summary of a tree build for CLI output."""
    records_file: str = ""
    record_count: int = 0
    leaf_count: int = 0
    depth: int = 0
    root: str | None = None
    padding_policy: str = ""
    out: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if self.out is None:
            del d["out"]
        return d


def print_summary_human(summary: BuildSummary) -> None:
    print(f"records: {summary.record_count}")
    print(f"leaves: {summary.leaf_count} (padding: {summary.padding_policy})")
    print(f"depth: {summary.depth}")
    print(f"root: {summary.root if summary.root is not None else '(empty tree)'}")
    if summary.out:
        print(f"saved: {summary.out}")


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Returns:
        Exit code
    """
    config = args.cli_config
    encoding = args.encoding or config.tree.records_encoding
    policy = args.pad or config.tree.padding_policy
    output_json = args.json or config.output.format == "json"

    try:
        records = read_records(args.records_file, encoding=encoding)
        tree = build_tree(records, policy)
        if args.out:
            save_tree(tree, args.out, policy)
    except SpvTreeException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = BuildSummary(
        records_file=args.records_file,
        record_count=len(records),
        leaf_count=tree.leaf_count,
        depth=tree.depth,
        root=to_hex(tree.root_digest) if tree.root_digest is not None else None,
        padding_policy=policy,
        out=args.out,
    )

    if output_json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    logger.info(f"Built tree with {tree.leaf_count} leaves")
    return EXIT_SUCCESS
