"""
Logging configuration for fixedmerkle.

Provides centralized structured logging setup with JSON output for production
and human-readable output for development. Supports correlation IDs so that
log lines from one caller's sequence of tree operations can be grouped.
"""

import logging
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import structlog
from structlog.types import EventDict, Processor


correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def add_correlation_id(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """structlog processor that tags events with the active correlation ID."""
    correlation_id = correlation_id_var.get()
    if correlation_id:
        event_dict.setdefault("correlation_id", correlation_id)
    return event_dict


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """
    Tag subsequent log events in this context with a correlation ID.
    
    Args:
        correlation_id: ID to use; a random UUID4 string when omitted
    
    Returns:
        The active correlation ID
    """
    correlation_id = correlation_id or str(uuid.uuid4())
    correlation_id_var.set(correlation_id)
    return correlation_id


def clear_correlation_id() -> None:
    correlation_id_var.set(None)


def get_correlation_id() -> Optional[str]:
    return correlation_id_var.get()


@contextmanager
def correlation_scope(correlation_id: Optional[str] = None) -> Iterator[str]:
    """
    Group the log events of a block of tree operations under one ID.
    
    The previous correlation ID, if any, is restored on exit.
    
    Example:
        >>> with correlation_scope("batch-42"):
        ...     for record in records:
        ...         tree.append(record)
    """
    token = correlation_id_var.set(correlation_id or str(uuid.uuid4()))
    try:
        yield correlation_id_var.get()
    finally:
        correlation_id_var.reset(token)


def _build_handler(log_file: Optional[Path]) -> logging.Handler:
    if log_file is None:
        return logging.StreamHandler(sys.stderr)
    
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(log_file)


def _build_processors(json_format: bool) -> List[Processor]:
    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if json_format
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_correlation_id,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    json_format: bool = True,
) -> None:
    """
    Configure structured logging for fixedmerkle.
    
    Replaces any handlers on the root logger with a single handler that
    writes structlog-rendered lines to log_file, or to stderr.
    
    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL); unknown
            names fall back to INFO.
        log_file: Optional path to log file. Parent directories are created.
        json_format: If True, use JSON format. If False, use human-readable format.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    
    handler = _build_handler(log_file)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    
    structlog.configure(
        processors=_build_processors(json_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance for a specific module.
    
    Args:
        name: Logger name (typically __name__ of the module).
        
    Returns:
        Structured logger instance.
    """
    if name == "fixedmerkle" or name.startswith("fixedmerkle."):
        return structlog.get_logger(name)
    return structlog.get_logger(f"fixedmerkle.{name}")


# Convenience functions for common logging patterns

def log_merkle_root_computation(
    logger: structlog.stdlib.BoundLogger,
    tree_size: int,
    capacity: int,
    merkle_root: str,
    duration_ms: float,
    **kwargs: Any,
) -> None:
    """
    Log a Merkle root recomputation after an append.
    
    Args:
        logger: Logger instance
        tree_size: Number of filled leaves after the append
        capacity: Total number of leaf slots
        merkle_root: Computed Merkle root (hex encoded)
        duration_ms: Computation duration in milliseconds
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "merkle_root_computation",
        "tree_size": tree_size,
        "capacity": capacity,
        "merkle_root": merkle_root,
        "duration_ms": duration_ms,
    }
    
    log_data.update(kwargs)
    
    logger.debug("merkle_root_computation", **log_data)


def log_proof_verification(
    logger: structlog.stdlib.BoundLogger,
    verified: bool,
    leaf_index: Optional[int] = None,
    reason: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """
    Log the outcome of a Merkle inclusion proof verification.
    
    Args:
        logger: Logger instance
        verified: Whether the proof verified against the root
        leaf_index: Leaf index carried by the proof, if known
        reason: Reason for failure if not verified
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "merkle_proof_verification",
        "verified": verified,
    }
    
    if leaf_index is not None:
        log_data["leaf_index"] = leaf_index
    
    if reason is not None:
        log_data["reason"] = reason
    
    log_data.update(kwargs)
    
    logger.debug("merkle_proof_verification", **log_data)


def setup_logging_from_config(config: Any) -> None:
    """
    Configure structured logging from a loaded configuration.
    
    Args:
        config: FixedMerkleConfig (or any object with a logging section
            carrying level, file and json_format)
    """
    logging_config = config.logging
    setup_logging(
        level=logging_config.level,
        log_file=Path(logging_config.file) if logging_config.file else None,
        json_format=logging_config.json_format,
    )
