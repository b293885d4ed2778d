"""Shared constants for the cache conformance suite.

Provides centralized constants for:
- Key validation (reserved characters)
- Expiration timing defaults
- Canonical keys and values used by contract scenarios
"""

from enum import Enum


# =============================================================================
# Key Validation
# =============================================================================

# Characters a conforming cache must reject anywhere in a key
RESERVED_KEY_CHARACTERS: str = "{}()/\\@:"


# =============================================================================
# Expiration Timing
# =============================================================================

class Timing:
    """Default timing values in seconds.

    These can be overridden via Settings.
    """
    OBSERVATION_DELAY: float = 2.0
    SHORT_TTL: int = 1
    LONG_TTL: int = 5


# =============================================================================
# Contract Operations
# =============================================================================

class Operation(str, Enum):
    """Operations exposed by the simple cache contract."""
    GET = "get"
    SET = "set"
    DELETE = "delete"
    CLEAR = "clear"
    HAS = "has"
    GET_MULTIPLE = "get_multiple"
    SET_MULTIPLE = "set_multiple"
    DELETE_MULTIPLE = "delete_multiple"


# Operations that accept a key, in the order validation cases are generated
KEY_OPERATIONS: tuple[Operation, ...] = (
    Operation.GET,
    Operation.SET,
    Operation.DELETE,
    Operation.GET_MULTIPLE,
    Operation.SET_MULTIPLE,
    Operation.DELETE_MULTIPLE,
    Operation.HAS,
)

BATCH_OPERATIONS: frozenset[Operation] = frozenset({
    Operation.GET_MULTIPLE,
    Operation.SET_MULTIPLE,
    Operation.DELETE_MULTIPLE,
})


# =============================================================================
# Scenario Fixtures
# =============================================================================

SAMPLE_KEY: str = "foo"
SAMPLE_VALUE: str = "bar"
MISSING_KEY: str = "not-found"
MISS_DEFAULT: str = "chickpeas"
BATCH_DEFAULT: str = "tea"

BATCH_KEYS: tuple[str, ...] = ("key1", "key2", "key3")
BATCH_VALUES: dict[str, str] = {
    "key1": "value1",
    "key2": "value2",
    "key3": "value3",
}
