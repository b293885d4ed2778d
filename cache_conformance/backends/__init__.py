"""Reference cache backends."""

from cache_conformance.backends.memory import CacheEntry, InMemoryCache


__all__ = [
    "CacheEntry",
    "InMemoryCache",
]
