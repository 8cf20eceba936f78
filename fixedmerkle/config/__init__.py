"""
Configuration management for fixedmerkle.

Handles loading and validation of configuration files.
"""

from fixedmerkle.config.settings import (
    FixedMerkleConfig,
    LoggingConfig,
    MerkleConfig,
    get_default_config,
    get_default_config_path,
    load_config,
)

__all__ = [
    "FixedMerkleConfig",
    "LoggingConfig",
    "MerkleConfig",
    "get_default_config",
    "get_default_config_path",
    "load_config",
]
