"""
Digest function used by every tree component.
"""
from .hashing import (
    DIGEST_SIZE,
    sha256,
    hash_bytes,
    hash_concat,
    to_hex,
    from_hex,
)

__all__ = [
    "DIGEST_SIZE",
    "sha256",
    "hash_bytes",
    "hash_concat",
    "to_hex",
    "from_hex",
]
