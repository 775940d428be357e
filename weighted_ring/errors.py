"""
Exceptions raised by the weighted hash ring
"""


class HashRingError(Exception):
    """Base class for hash ring errors"""


class EmptyRingError(HashRingError):
    """Raised when a single-node lookup is made against a ring with no nodes"""

    def __init__(self, message: str = "empty hash ring"):
        super().__init__(message)


class InvalidConfigurationError(HashRingError, ValueError):
    """Raised for a non-positive cube count or an unusable config value"""


class RingNotEmptyError(HashRingError):
    """Raised when the cube count is changed after nodes have been added"""
