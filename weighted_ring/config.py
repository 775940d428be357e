"""
Configuration and logging setup

Values are read from environment variables so that a process embedding the
ring can tune it without code changes.
"""

import logging
import os
from typing import Any, Dict, Optional

from .errors import InvalidConfigurationError

DEFAULT_CUBES_PER_WEIGHT = 128
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def validate_cube_count(value: Any) -> int:
    """Coerce a cube count to int, rejecting anything that is not a positive integer"""
    if isinstance(value, bool):
        raise InvalidConfigurationError(f"cube count must be an integer, got {value!r}")
    try:
        count = int(value)
    except (TypeError, ValueError):
        raise InvalidConfigurationError(f"cube count must be an integer, got {value!r}") from None
    if isinstance(value, float) and count != value:
        raise InvalidConfigurationError(f"cube count must be an integer, got {value!r}")
    if count <= 0:
        raise InvalidConfigurationError(f"cube count must be more than 0 (suggest more than 32), got {count}")
    return count


def get_config() -> Dict[str, Any]:
    """
    Read ring configuration from the environment

    HASH_RING_CUBES_PER_WEIGHT: virtual positions per unit of node weight
    HASH_RING_LOG_LEVEL: level used by setup_logging

    Raises:
        InvalidConfigurationError: if a value cannot be used
    """
    cubes = validate_cube_count(os.getenv("HASH_RING_CUBES_PER_WEIGHT", str(DEFAULT_CUBES_PER_WEIGHT)))

    log_level = os.getenv("HASH_RING_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    if log_level not in _LOG_LEVELS:
        raise InvalidConfigurationError(f"unknown log level {log_level!r}")

    return {
        "cubes_per_weight": cubes,
        "log_level": log_level,
    }


def setup_logging(level: Optional[str] = None, log_format: Optional[str] = None):
    """
    Configure root logging for scripts that embed the ring

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log message format (optional)
    """
    if level is None:
        level = DEFAULT_LOG_LEVEL
    if not isinstance(level, str) or level.upper() not in _LOG_LEVELS:
        raise InvalidConfigurationError(f"unknown log level {level!r}")
    if log_format is None:
        log_format = DEFAULT_LOG_FORMAT

    logging.basicConfig(level=getattr(logging, level.upper()), format=log_format)
