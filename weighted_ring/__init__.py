"""
Weighted consistent hash ring
"""

from .config import DEFAULT_CUBES_PER_WEIGHT, get_config, setup_logging
from .errors import EmptyRingError, HashRingError, InvalidConfigurationError, RingNotEmptyError
from .hash_ring import HashRing, hash_key

__all__ = [
    "DEFAULT_CUBES_PER_WEIGHT",
    "EmptyRingError",
    "HashRing",
    "HashRingError",
    "InvalidConfigurationError",
    "RingNotEmptyError",
    "get_config",
    "hash_key",
    "setup_logging",
]

__version__ = "0.1.0"
