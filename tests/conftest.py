"""
Pytest configuration and shared fixtures for fixedmerkle tests.
"""

import os
import tempfile
import zlib
from pathlib import Path
from typing import Generator

import pytest

from fixedmerkle.merkle.hashing import HashEngine


def create_test_config_content(
    temp_dir: Path,
    tree_height: int = 5,
    hash_algorithm: str = "sha256",
) -> str:
    """
    Generate test configuration YAML content.
    
    Args:
        temp_dir: Temporary directory for the log file.
        tree_height: Tree height to configure.
        hash_algorithm: Hash algorithm to configure.
        
    Returns:
        YAML configuration content as string.
    """
    return f"""
merkle:
  tree_height: {tree_height}
  hash_algorithm: {hash_algorithm}

logging:
  level: DEBUG
  file: {temp_dir}/fixedmerkle.log
  json_format: true
"""


def crc32_hash(data: bytes) -> bytes:
    """Non-cryptographic 4-byte hash for swapping into a HashEngine."""
    return zlib.crc32(data).to_bytes(4, "big")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.
    
    Yields:
        Path to temporary directory that is cleaned up after test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config_path(temp_dir: Path) -> Path:
    """
    Create a sample configuration file for testing.
    
    Args:
        temp_dir: Temporary directory fixture.
        
    Returns:
        Path to sample config file.
    """
    config_path = temp_dir / "config.yaml"
    config_path.write_text(create_test_config_content(temp_dir))
    return config_path


@pytest.fixture
def make_config_yaml(temp_dir: Path):
    """
    Factory fixture that creates test config content.
    
    Usage:
        def test_something(temp_dir, make_config_yaml):
            config_path = temp_dir / "config.yaml"
            config_path.write_text(make_config_yaml(tree_height=3))
    """
    def _make_config(tree_height: int = 5, hash_algorithm: str = "sha256"):
        return create_test_config_content(
            temp_dir=temp_dir,
            tree_height=tree_height,
            hash_algorithm=hash_algorithm,
        )
    return _make_config


@pytest.fixture
def crc32_engine() -> HashEngine:
    """Hash engine backed by CRC32 instead of a cryptographic hash."""
    return HashEngine(crc32_hash, "crc32")


# Hypothesis settings for property-based tests
from hypothesis import settings, Verbosity

settings.register_profile("fixedmerkle", max_examples=100, verbosity=Verbosity.normal, deadline=None)
settings.register_profile("fixedmerkle-ci", max_examples=1000, verbosity=Verbosity.verbose, deadline=None)
settings.register_profile("fixedmerkle-dev", max_examples=10, verbosity=Verbosity.verbose, deadline=None)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "fixedmerkle"))
