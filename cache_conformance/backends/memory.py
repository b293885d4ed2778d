"""InMemoryCache - Reference implementation of the simple cache contract.

A process-local cache used to exercise the suite itself and to show
backend authors what a conforming implementation looks like.

- Values are deep-copied on write and on read (snapshot semantics)
- Expiry is measured on an injectable clock
- Every argument is validated before the store is touched, so batch
  operations are all-or-nothing
- Uses threading.Lock so one instance can be shared between threads
"""

import copy
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from cache_conformance.clock import Clock, SystemClock
from cache_conformance.core.logging import get_logger
from cache_conformance.validation import (
    normalize_ttl,
    validate_items,
    validate_key,
    validate_keys,
)


logger = get_logger(__name__)


@dataclass
class CacheEntry:
    """Stored value with its expiry deadline.

    Attributes:
        value: Private copy of the caller's value
        expires_at: Monotonic deadline, or None to never expire
    """

    value: Any
    expires_at: float | None = None

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class InMemoryCache:
    """Thread-safe in-memory cache with per-entry TTL.

    Example:
        >>> cache = InMemoryCache()
        >>> cache.set("greeting", {"text": "hello"}, ttl=60)
        True
        >>> cache.get("greeting")
        {'text': 'hello'}
        >>> cache.get("missing", "fallback")
        'fallback'
    """

    def __init__(self, clock: Clock | None = None) -> None:
        """Initialize an empty cache.

        Args:
            clock: Time source for expiry (defaults to SystemClock)
        """
        self._clock = clock or SystemClock()
        self._store: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _deadline(self, ttl: Any) -> tuple[bool, float | None]:
        """Return (storable, deadline) for a TTL.

        A zero or negative TTL is already expired and is not storable.
        """
        seconds = normalize_ttl(ttl, now=self._clock.now())
        if seconds is None:
            return True, None
        if seconds <= 0:
            return False, None
        return True, self._clock.monotonic() + seconds

    def _live_entry(self, key: str) -> CacheEntry | None:
        # Caller holds the lock
        entry = self._store.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock.monotonic()):
            del self._store[key]
            return None
        return entry

    def _write(self, items: list[tuple[str, Any]], ttl: Any) -> bool:
        storable, deadline = self._deadline(ttl)
        snapshots = [(key, copy.deepcopy(value)) for key, value in items]

        with self._lock:
            for key, value in snapshots:
                if storable:
                    self._store[key] = CacheEntry(value=value, expires_at=deadline)
                else:
                    self._store.pop(key, None)
        return True

    # -------------------------------------------------------------------------
    # Single-item operations
    # -------------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        validate_key(key)
        with self._lock:
            entry = self._live_entry(key)
            if entry is None:
                return default
            return copy.deepcopy(entry.value)

    def set(self, key: str, value: Any, ttl: Any = None) -> bool:
        """Store a snapshot of value.

        Args:
            key: Cache key
            value: Any deep-copyable value
            ttl: None, int seconds, or timedelta

        Returns:
            True once stored

        Raises:
            InvalidKeyError: If key is invalid
            InvalidTTLError: If ttl is invalid
        """
        return self._write([(validate_key(key), value)], ttl)

    def delete(self, key: str) -> bool:
        validate_key(key)
        with self._lock:
            self._store.pop(key, None)
        return True

    def clear(self) -> bool:
        with self._lock:
            count = len(self._store)
            self._store.clear()
        logger.debug("in_memory_cache_cleared", entries=count)
        return True

    def has(self, key: str) -> bool:
        validate_key(key)
        with self._lock:
            return self._live_entry(key) is not None

    # -------------------------------------------------------------------------
    # Batch operations
    # -------------------------------------------------------------------------

    def get_multiple(self, keys: Iterable[str], default: Any = None) -> dict[str, Any]:
        """Return values for keys in request order.

        Raises:
            InvalidIterableError: If keys is not iterable
            InvalidKeyError: If any key is invalid
        """
        requested = validate_keys(keys)
        with self._lock:
            result = {}
            for key in requested:
                entry = self._live_entry(key)
                result[key] = default if entry is None else copy.deepcopy(entry.value)
            return result

    def set_multiple(
        self,
        values: Mapping[str, Any] | Iterable[tuple[str, Any]],
        ttl: Any = None,
    ) -> bool:
        return self._write(validate_items(values), ttl)

    def delete_multiple(self, keys: Iterable[str]) -> bool:
        doomed = validate_keys(keys)
        with self._lock:
            for key in doomed:
                self._store.pop(key, None)
        return True

    def __len__(self) -> int:
        with self._lock:
            now = self._clock.monotonic()
            return sum(1 for entry in self._store.values() if not entry.is_expired(now))

    def __repr__(self) -> str:
        with self._lock:
            entries = len(self._store)
        return f"InMemoryCache(entries={entries}, clock={self._clock!r})"
