"""
CLI Prove Command

Generate an inclusion proof for one leaf of a saved tree.

Usage:
    spvtree prove tree.json INDEX [--out proof.json] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace

from spvtree.artifacts.io import load_tree, save_proof
from spvtree.merkle.proofs import MerkleProver
from spvtree.schemas.canonical import canonicalize_value
from spvtree.schemas.errors import SpvTreeException
from spvtree_cli.exit_codes import EXIT_RUNTIME_ERROR, EXIT_SUCCESS


logger = logging.getLogger(__name__)


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Returns:
        Exit code (1 for an empty tree or an out-of-range index)
    """
    output_json = args.json or args.cli_config.output.format == "json"

    try:
        tree = load_tree(args.tree_file)
        proof = MerkleProver.prove(tree, args.index)
        if args.out:
            save_proof(proof, args.out)
    except SpvTreeException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if output_json:
        print(json.dumps(canonicalize_value(proof), indent=2, sort_keys=True))
    else:
        print(f"index: {proof.index}")
        print(f"leaf: {proof.leaf}")
        print(f"root: {proof.root}")
        print(f"siblings ({len(proof.siblings)}, leaf-to-root):")
        for sibling in proof.siblings:
            print(f"  {sibling}")
        if args.out:
            print(f"saved: {args.out}")

    logger.info(f"Generated proof for leaf {proof.index}")
    return EXIT_SUCCESS
