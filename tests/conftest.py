"""
Pytest configuration and shared fixtures for mutable_merkle tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_hashers = importlib.import_module("fixtures.hashers")

ReadableTestHasher = _hashers.ReadableTestHasher

from mutable_merkle.config import reset_default_config
from mutable_merkle.crypto.hashing import Sha256Hasher
from mutable_merkle.merkle.merkle_tree import MerkleTree


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def readable_hasher():
    """Provide the readable "1x9" test hasher."""
    return ReadableTestHasher()


@pytest.fixture
def tree(readable_hasher):
    """Provide an empty tree using the readable test hasher."""
    return MerkleTree(readable_hasher)


@pytest.fixture
def sha256_hasher():
    """Provide a SHA-256 hasher."""
    return Sha256Hasher()


@pytest.fixture
def sha256_tree(sha256_hasher):
    """Provide an empty tree using SHA-256."""
    return MerkleTree(sha256_hasher)


@pytest.fixture(autouse=True)
def _fresh_default_config():
    """Keep the cached default config from leaking between tests."""
    reset_default_config()
    yield
    reset_default_config()


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
