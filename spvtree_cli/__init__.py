"""
spvtree CLI

Command-line interface for building Merkle trees and checking inclusion proofs.

Usage:
    python -m spvtree_cli build records.txt --out tree.json
    python -m spvtree_cli prove tree.json 2 --out proof.json
    python -m spvtree_cli verify proof.json --root 0x...
    python -m spvtree_cli config --init
"""

__version__ = "0.1.0"
