"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m spvtree_cli build <records_file> [--out PATH] [--encoding utf-8|hex] [--pad POLICY] [--json]
    python -m spvtree_cli prove <tree_file> <index> [--out PATH] [--json]
    python -m spvtree_cli verify <proof_file> [--root HEX] [--leaf-count N] [--json]
    python -m spvtree_cli config --init|--show [--path PATH]

Environment Variables:
    SPVTREE_PADDING_POLICY      duplicate_once (default) or next_power_of_two
    SPVTREE_RECORDS_ENCODING    utf-8 (default) or hex
    SPVTREE_LOG_LEVEL           Log level (default: INFO)
    SPVTREE_LOG_FILE            Also log to this file
    SPVTREE_OUTPUT_FORMAT       human (default) or json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from spvtree_cli import __version__
from spvtree_cli.commands import build, prove, verify
from spvtree_cli.config import load_config, get_default_config_template
from spvtree_cli.exit_codes import EXIT_RUNTIME_ERROR, EXIT_SUCCESS


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="spvtree",
        description="Build Merkle trees over records and create or check SPV inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./spvtree.yaml, ./spvtree.json or ~/.config/spvtree/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build a tree from a records file",
        description="Build a Merkle tree from one record per line and print its root.",
    )
    build_parser.add_argument(
        "records_file",
        type=str,
        help="File with one record per line",
    )
    build_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Save the built tree to this JSON file",
    )
    build_parser.add_argument(
        "--encoding",
        type=str,
        choices=["utf-8", "hex"],
        default=None,
        help="How each line is read (default: from config, utf-8)",
    )
    build_parser.add_argument(
        "--pad",
        type=str,
        choices=["duplicate_once", "next_power_of_two"],
        default=None,
        help="Padding policy (default: from config, duplicate_once)",
    )
    build_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    build_parser.set_defaults(func=build.build_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate an inclusion proof for one leaf",
        description="Load a saved tree and generate the SPV proof for a leaf index.",
    )
    prove_parser.add_argument(
        "tree_file",
        type=str,
        help="Tree JSON file written by 'build --out'",
    )
    prove_parser.add_argument(
        "index",
        type=int,
        help="0-based leaf index in the padded leaf sequence",
    )
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Save the proof to this JSON file",
    )
    prove_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output the proof as JSON",
    )
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an inclusion proof",
        description="Recompute the root from a proof file and compare it to a trusted root.",
    )
    verify_parser.add_argument(
        "proof_file",
        type=str,
        help="Proof JSON file written by 'prove --out'",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Trusted root digest as 0x-hex (default: the root stored in the proof)",
    )
    verify_parser.add_argument(
        "--leaf-count",
        type=int,
        default=None,
        help="Known leaf count, enables the upper index bound check",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="spvtree.yaml",
        help="Path for config file (default: spvtree.yaml)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (SPVTREE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: spvtree config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.logging.level
    try:
        setup_logging(level=log_level, log_file=config.logging.file)
    except OSError as e:
        print(f"Error opening log file: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
