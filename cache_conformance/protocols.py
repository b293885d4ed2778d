"""Protocol definitions for the simple cache contract.

Any object exposing these eight operations can be run through the
conformance suite. Uses @runtime_checkable for isinstance checks, so
implementations need not inherit from anything.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from datetime import timedelta
from typing import Any, Protocol, TypeAlias, runtime_checkable


TTL: TypeAlias = "int | timedelta | None"


@runtime_checkable
class SimpleCacheProtocol(Protocol):
    """Protocol for key-value caches under test.

    Keys are non-empty strings without reserved characters. Invalid
    arguments raise the contract errors from
    ``cache_conformance.core.exceptions`` before any state is mutated.

    Example:
        >>> from cache_conformance.backends import InMemoryCache
        >>> isinstance(InMemoryCache(), SimpleCacheProtocol)
        True
    """

    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value for key, or default on a miss."""
        ...

    def set(self, key: str, value: Any, ttl: TTL = None) -> Any:
        """Store a snapshot of value under key, optionally expiring."""
        ...

    def delete(self, key: str) -> Any:
        """Remove key. Removing an absent key is not an error."""
        ...

    def clear(self) -> Any:
        """Remove every key."""
        ...

    def has(self, key: str) -> bool:
        """Return True if key holds an unexpired value."""
        ...

    def get_multiple(
        self,
        keys: Iterable[str],
        default: Any = None,
    ) -> Mapping[str, Any]:
        """Return a mapping of key to value or default, in request order."""
        ...

    def set_multiple(
        self,
        values: Mapping[str, Any] | Iterable[tuple[str, Any]],
        ttl: TTL = None,
    ) -> Any:
        """Store every key/value pair with the same TTL."""
        ...

    def delete_multiple(self, keys: Iterable[str]) -> Any:
        """Remove every named key."""
        ...


CacheFactory: TypeAlias = Callable[[], SimpleCacheProtocol]
