"""Argument validation for simple cache implementations.

These helpers encode the validation boundary of the contract. Backends
call them at the top of each operation so that invalid input raises
before any state is touched.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

from cache_conformance.core.constants import RESERVED_KEY_CHARACTERS
from cache_conformance.core.exceptions import (
    InvalidIterableError,
    InvalidKeyError,
    InvalidTTLError,
)


def validate_key(key: Any) -> str:
    """Validate a single cache key.

    Args:
        key: Candidate key

    Returns:
        The key, unchanged

    Raises:
        InvalidKeyError: If key is not a str, is empty, or contains a
            reserved character

    Example:
        >>> validate_key("user.42")
        'user.42'
    """
    if not isinstance(key, str):
        raise InvalidKeyError(
            f"Cache key must be a string, got {type(key).__name__}",
            value=key,
        )
    if not key:
        raise InvalidKeyError("Cache key cannot be empty", value=key)

    reserved = sorted({char for char in key if char in RESERVED_KEY_CHARACTERS})
    if reserved:
        raise InvalidKeyError(
            f"Cache key {key!r} contains reserved characters: {''.join(reserved)}",
            value=key,
        )
    return key


def _ensure_iterable(collection: Any, argument: str) -> Iterable[Any]:
    # str/bytes iterate as characters, never as a collection of keys
    if isinstance(collection, (str, bytes)) or not isinstance(collection, Iterable):
        raise InvalidIterableError(
            f"{argument} must be an iterable, got {type(collection).__name__}",
            value=collection,
            argument=argument,
        )
    return collection


def validate_keys(keys: Any) -> list[str]:
    """Validate and materialize a collection of keys.

    Consumes ``keys`` exactly once, so one-shot generators are supported.

    Raises:
        InvalidIterableError: If keys is not iterable
        InvalidKeyError: If any key is invalid
    """
    return [validate_key(key) for key in _ensure_iterable(keys, "keys")]


def validate_items(values: Any) -> list[tuple[str, Any]]:
    """Validate and materialize key/value pairs for a batch write.

    Accepts a mapping or an iterable of ``(key, value)`` pairs.

    Raises:
        InvalidIterableError: If values is neither
        InvalidKeyError: If any key is invalid
    """
    if isinstance(values, Mapping):
        pairs = values.items()
    else:
        pairs = _ensure_iterable(values, "values")

    items: list[tuple[str, Any]] = []
    for pair in pairs:
        try:
            key, value = pair
        except (TypeError, ValueError) as exc:
            raise InvalidIterableError(
                f"values must yield (key, value) pairs, got {pair!r}",
                value=values,
                argument="values",
            ) from exc
        items.append((validate_key(key), value))
    return items


def normalize_ttl(ttl: Any, now: datetime | None = None) -> float | None:
    """Convert a TTL to seconds.

    Args:
        ttl: None, int seconds, or a timedelta
        now: Reference time used to resolve a timedelta

    Returns:
        Seconds until expiry (zero or negative means already expired),
        or None for no expiry

    Raises:
        InvalidTTLError: For any other TTL shape, including bool
    """
    if ttl is None:
        return None
    # bool is an int subclass but never a meaningful TTL
    if isinstance(ttl, bool):
        raise InvalidTTLError("TTL cannot be a bool", value=ttl)
    if isinstance(ttl, int):
        return float(ttl)
    if isinstance(ttl, timedelta):
        reference = now or datetime.now(timezone.utc)
        return ((reference + ttl) - reference).total_seconds()
    raise InvalidTTLError(
        f"TTL must be None, int or timedelta, got {type(ttl).__name__}",
        value=ttl,
    )
