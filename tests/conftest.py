"""
Pytest configuration and shared fixtures for spvtree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used trees and records as fixtures
3. Isolates tests from SPVTREE_* environment variables and config files
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from spvtree.config.runtime import set_default_config  # noqa: E402
from spvtree.merkle.tree import build_tree  # noqa: E402


_ENV_VARS = [
    "SPVTREE_PADDING_POLICY",
    "SPVTREE_RECORDS_ENCODING",
    "SPVTREE_LOG_LEVEL",
    "SPVTREE_LOG_FILE",
    "SPVTREE_OUTPUT_FORMAT",
]


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove SPVTREE_* overrides and reset the cached default config."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def abcd_records():
    """Records of concrete scenario A."""
    return [b"a", b"b", b"c", b"d"]


@pytest.fixture
def abcd_tree(abcd_records):
    return build_tree(abcd_records)


@pytest.fixture
def abc_tree():
    """Three records, padded to four."""
    return build_tree([b"a", b"b", b"c"])


@pytest.fixture
def eight_records():
    return [f"record-{i}".encode() for i in range(8)]


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run in an empty directory with an empty home, so no config file is found."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path
