"""
Configuration management for fixedmerkle.

Loads YAML configuration from file with sensible defaults and validation.
Supports environment variable substitution using ${ENV_VAR} syntax.
"""

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from fixedmerkle.exceptions import InvalidConfigurationError
from fixedmerkle.logging_config import get_logger
from fixedmerkle.merkle.hashing import DEFAULT_HASH_ALGORITHM, SUPPORTED_HASH_ALGORITHMS
from fixedmerkle.merkle.tree import DEFAULT_TREE_HEIGHT, MAX_TREE_HEIGHT

logger = get_logger(__name__)


def _expand_env_vars(value: Any) -> Any:
    """
    Recursively expand environment variables in configuration values.
    
    Supports ${ENV_VAR} syntax with optional default values: ${ENV_VAR:default}
    
    Args:
        value: Configuration value (string, dict, list, or other)
    
    Returns:
        Value with environment variables expanded
    
    Examples:
        "${FIXEDMERKLE_TREE_HEIGHT}" -> value of FIXEDMERKLE_TREE_HEIGHT env var
        "${FIXEDMERKLE_HASH:sha256}" -> value of FIXEDMERKLE_HASH or "sha256" if not set
    """
    if isinstance(value, str):
        # Pattern matches ${VAR} or ${VAR:default}
        pattern = r'\$\{([^}:]+)(?::([^}]*))?\}'
        
        def replace_env_var(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)
        
        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    else:
        return value


def _coerce_int(value: Any, name: str) -> int:
    # Environment expansion always yields strings
    if isinstance(value, bool):
        raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}")


def _coerce_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "yes", "1", "on"):
        return True
    if isinstance(value, str) and value.strip().lower() in ("false", "no", "0", "off"):
        return False
    raise InvalidConfigurationError(f"{name} must be a boolean, got {value!r}")


@dataclass
class MerkleConfig:
    """Merkle tree configuration."""
    
    tree_height: int = DEFAULT_TREE_HEIGHT  # Capacity is 2^tree_height leaves
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM  # See SUPPORTED_HASH_ALGORITHMS


@dataclass
class LoggingConfig:
    """Logging configuration."""
    
    level: str = "INFO"
    file: str = ""  # Empty logs to stderr
    json_format: bool = True


@dataclass
class FixedMerkleConfig:
    """Main fixedmerkle configuration."""
    
    merkle: MerkleConfig = field(default_factory=MerkleConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_default_config_path() -> str:
    """Get the default configuration file path."""
    return os.path.expanduser("~/.fixedmerkle/config.yaml")


def get_default_config() -> FixedMerkleConfig:
    """
    Get default configuration with sensible defaults.
    
    Returns:
        FixedMerkleConfig: Default configuration object
    """
    return FixedMerkleConfig(
        merkle=MerkleConfig(
            tree_height=DEFAULT_TREE_HEIGHT,
            hash_algorithm=DEFAULT_HASH_ALGORITHM,
        ),
        logging=LoggingConfig(
            level="INFO",
            file="",
            json_format=True,
        ),
    )


def load_config(config_path: Optional[str] = None) -> FixedMerkleConfig:
    """
    Load configuration from YAML file with validation.
    
    If config file is not found, returns default configuration.
    If config file is malformed or invalid, raises InvalidConfigurationError.
    
    Args:
        config_path: Path to configuration file. If None, uses default path.
    
    Returns:
        FixedMerkleConfig: Loaded and validated configuration
    
    Raises:
        InvalidConfigurationError: If configuration is invalid or malformed
    """
    if config_path is None:
        config_path = get_default_config_path()
    
    config_path = os.path.expanduser(str(config_path))
    
    if not os.path.exists(config_path):
        logger.info(f"Configuration file not found at {config_path}, using defaults")
        return get_default_config()
    
    try:
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f)
        logger.debug(f"Loaded configuration from {config_path}")
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration file '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Failed to parse YAML configuration file '{config_path}': {e}"
        )
    except OSError as e:
        logger.error(f"Failed to read configuration file '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Failed to read configuration file '{config_path}': {e}"
        )
    
    if config_data is None:
        logger.info(f"Configuration file {config_path} is empty, using defaults")
        return get_default_config()
    
    if not isinstance(config_data, dict):
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': top level must be a mapping"
        )
    
    config_data = _expand_env_vars(config_data)
    logger.debug("Expanded environment variables in configuration")
    
    try:
        config = _build_config_from_dict(config_data)
        _validate_config(config)
    except InvalidConfigurationError as e:
        logger.error(f"Invalid configuration in '{config_path}': {e}")
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': {e}"
        )
    
    logger.info(f"Successfully loaded and validated configuration from {config_path}")
    return config


def _build_config_from_dict(config_data: Dict[str, Any]) -> FixedMerkleConfig:
    """
    Build FixedMerkleConfig from dictionary loaded from YAML.
    
    Merges user configuration with defaults.
    
    Args:
        config_data: Dictionary loaded from YAML file
    
    Returns:
        FixedMerkleConfig: Configuration object
    
    Raises:
        InvalidConfigurationError: If a section or value has the wrong type
    """
    defaults = get_default_config()
    
    merkle_data = config_data.get('merkle') or {}
    logging_data = config_data.get('logging') or {}
    for section_name, section in (('merkle', merkle_data), ('logging', logging_data)):
        if not isinstance(section, dict):
            raise InvalidConfigurationError(f"'{section_name}' section must be a mapping")
    
    merkle = MerkleConfig(
        tree_height=_coerce_int(
            merkle_data.get('tree_height', defaults.merkle.tree_height), "tree_height"
        ),
        hash_algorithm=str(merkle_data.get('hash_algorithm', defaults.merkle.hash_algorithm)),
    )
    
    logging = LoggingConfig(
        level=str(logging_data.get('level', defaults.logging.level)),
        file=str(logging_data.get('file', defaults.logging.file) or ""),
        json_format=_coerce_bool(
            logging_data.get('json_format', defaults.logging.json_format), "json_format"
        ),
    )
    
    return FixedMerkleConfig(merkle=merkle, logging=logging)


def _validate_config(config: FixedMerkleConfig) -> None:
    """
    Validate configuration values.
    
    Args:
        config: Configuration to validate
    
    Raises:
        InvalidConfigurationError: If configuration is invalid
    """
    if not 1 <= config.merkle.tree_height <= MAX_TREE_HEIGHT:
        raise InvalidConfigurationError(
            f"tree_height must be between 1 and {MAX_TREE_HEIGHT}, "
            f"got {config.merkle.tree_height}"
        )
    
    if config.merkle.hash_algorithm not in SUPPORTED_HASH_ALGORITHMS:
        raise InvalidConfigurationError(
            f"hash_algorithm must be one of {sorted(SUPPORTED_HASH_ALGORITHMS)}, "
            f"got '{config.merkle.hash_algorithm}'"
        )
    
    valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if config.logging.level.upper() not in valid_log_levels:
        raise InvalidConfigurationError(
            f"logging level must be one of {valid_log_levels}, "
            f"got '{config.logging.level}'"
        )
