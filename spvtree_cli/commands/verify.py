"""
CLI Verify Command

Verify an inclusion proof file against a trusted root.

Usage:
    spvtree verify proof.json [--root 0x...] [--leaf-count N] [--json]

Without --root the proof's own root is used, which only shows that the
proof is internally consistent.
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from typing import Any

from spvtree.artifacts.io import load_proof
from spvtree.crypto.hashing import from_hex, to_hex
from spvtree.merkle.proofs import verify_proof
from spvtree.schemas.errors import SpvTreeException
from spvtree_cli.exit_codes import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
)


logger = logging.getLogger(__name__)


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str = ""
    index: int = 0
    root: str = ""
    trusted_root_supplied: bool = False
    valid: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        Exit code (0 valid, 2 rejected, 1 structural or input error)
    """
    output_json = args.json or args.cli_config.output.format == "json"

    try:
        proof = load_proof(args.proof_file)
    except SpvTreeException as e:
        print(f"Error loading proof: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.root:
        try:
            root = from_hex(args.root)
        except ValueError as e:
            print(f"Error: invalid --root: {e}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR
    else:
        root = proof.root_digest

    leaf_count = args.leaf_count if args.leaf_count is not None else proof.leaf_count

    try:
        valid = verify_proof(
            proof.index,
            proof.leaf_bytes,
            proof.sibling_digests,
            root,
            leaf_count=leaf_count,
        )
    except SpvTreeException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = VerifySummary(
        proof_path=args.proof_file,
        index=proof.index,
        root=to_hex(root),
        trusted_root_supplied=bool(args.root),
        valid=valid,
    )

    if output_json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(f"proof: {summary.proof_path}")
        print(f"index: {summary.index}")
        print(f"root: {summary.root}")
        if not summary.trusted_root_supplied:
            print("note: no --root given, checked against the proof's own root")
        print(f"valid: {str(summary.valid).lower()}")

    if valid:
        logger.info("Proof verified")
        return EXIT_SUCCESS
    logger.warning("Proof rejected")
    return EXIT_VERIFICATION_FAILED
