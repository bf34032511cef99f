"""
Digest function and hex helpers for tree commitments.

This module provides:
- SHA-256 hashing for raw bytes (the tree's digest function H)
- Parent hashing over two child digests
- Hex encoding/decoding with 0x prefix for display and storage

Determinism Notes:
- Raw bytes are hashed exactly as given, with no prefix or domain tag
- Every digest is 32 bytes regardless of input length
"""
from __future__ import annotations

import hashlib


DIGEST_SIZE: int = 32


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash (empty input is valid)

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def hash_bytes(data: bytes) -> bytes:
    """Alias for sha256(); used for leaf digests."""
    return sha256(data)


def hash_concat(left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two digests.

    This is the internal node rule: parent = sha256(left + right).
    Order matters; hash_concat(a, b) != hash_concat(b, a) for a != b.

    Args:
        left: Left child digest
        right: Right child digest

    Returns:
        32-byte SHA-256 digest of the concatenation
    """
    return sha256(left + right)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "DIGEST_SIZE",
    "sha256",
    "hash_bytes",
    "hash_concat",
    "to_hex",
    "from_hex",
]
