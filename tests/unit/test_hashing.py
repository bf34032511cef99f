"""
Hashing Unit Tests
Tests for spvtree/crypto/hashing.py

Tests:
- sha256 matches hashlib and is fixed-size for any input
- hash_concat ordering
- to_hex/from_hex behaviour and error cases
"""
import hashlib
import pytest

from spvtree.crypto.hashing import (
    DIGEST_SIZE,
    sha256,
    hash_bytes,
    hash_concat,
    to_hex,
    from_hex,
)


class TestSha256:
    """Tests for sha256() function."""

    def test_sha256_known_value(self):
        """sha256 of "hello" matches the published digest."""
        result = sha256(b"hello")

        assert result.hex() == "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
        assert len(result) == DIGEST_SIZE

    def test_sha256_empty_bytes(self):
        """Empty input is valid and yields a full digest."""
        assert sha256(b"") == hashlib.sha256(b"").digest()
        assert len(sha256(b"")) == 32

    def test_sha256_fixed_size_for_long_input(self):
        assert len(sha256(b"x" * 100_000)) == 32

    def test_sha256_deterministic(self):
        data = b"test data for hashing"

        assert sha256(data) == sha256(data)

    def test_hash_bytes_equals_sha256(self):
        assert hash_bytes(b"leaf") == sha256(b"leaf")


class TestHashConcat:
    """Tests for hash_concat() function."""

    def test_equals_sha256_of_concatenation(self):
        left = sha256(b"left")
        right = sha256(b"right")

        assert hash_concat(left, right) == sha256(left + right)

    def test_order_matters(self):
        a = sha256(b"a")
        b = sha256(b"b")

        assert hash_concat(a, b) != hash_concat(b, a)


class TestHex:
    """Tests for to_hex() and from_hex()."""

    def test_to_hex_has_prefix(self):
        assert to_hex(bytes.fromhex("deadbeef")) == "0xdeadbeef"

    def test_to_hex_empty(self):
        assert to_hex(b"") == "0x"

    def test_from_hex_decodes(self):
        assert from_hex("0xdeadbeef") == bytes.fromhex("deadbeef")

    def test_from_hex_requires_prefix(self):
        with pytest.raises(ValueError, match="0x"):
            from_hex("deadbeef")

    def test_from_hex_rejects_odd_length(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_from_hex_rejects_invalid_characters(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xzz")
