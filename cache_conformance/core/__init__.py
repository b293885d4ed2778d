"""Core module - Configuration, logging, exceptions, and shared constants.

Exports:
    - Settings, get_settings: Pydantic Settings configuration
    - configure_logging, get_logger: Structured logging (structlog)
    - Operation, Timing, RESERVED_KEY_CHARACTERS: Contract constants
    - Exception classes: CacheError, InvalidKeyError, ConformanceFailure, etc.
"""

from cache_conformance.core.config import Settings, get_settings
from cache_conformance.core.constants import (
    BATCH_OPERATIONS,
    KEY_OPERATIONS,
    RESERVED_KEY_CHARACTERS,
    Operation,
    Timing,
)
from cache_conformance.core.exceptions import (
    CacheError,
    ConformanceError,
    ConformanceFailure,
    InvalidArgumentError,
    InvalidIterableError,
    InvalidKeyError,
    InvalidTTLError,
)
from cache_conformance.core.logging import configure_logging, get_logger


__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    # Constants
    "BATCH_OPERATIONS",
    "KEY_OPERATIONS",
    "RESERVED_KEY_CHARACTERS",
    "Operation",
    "Timing",
    # Exceptions
    "CacheError",
    "ConformanceError",
    "ConformanceFailure",
    "InvalidArgumentError",
    "InvalidIterableError",
    "InvalidKeyError",
    "InvalidTTLError",
    # Logging
    "configure_logging",
    "get_logger",
]
