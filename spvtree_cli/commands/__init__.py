"""
CLI command modules.
"""

from spvtree_cli.commands import build, prove, verify

__all__ = ["build", "prove", "verify"]
