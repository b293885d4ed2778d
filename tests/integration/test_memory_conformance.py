"""Full contract battery against the in-memory reference backend.

The fake-clock classes run in milliseconds. The system-clock class waits
in real time for every expiration case and is marked slow.
"""

from cache_conformance.backends import InMemoryCache
from cache_conformance.clock import Clock, FakeClock, SystemClock
from cache_conformance.testing import SimpleCacheContract


class TestInMemoryCache(SimpleCacheContract):
    """Contract battery on a deterministic clock."""

    observation_delay = 2.0

    def create_clock(self) -> Clock:
        return FakeClock()

    def create_cache(self, clock: Clock) -> InMemoryCache:
        return InMemoryCache(clock=clock)


class TestInMemoryCacheAtomicBatches(TestInMemoryCache):
    """Same battery, plus all-or-nothing batch writes."""

    atomic_batches = True


class TestInMemoryCacheRealTime(SimpleCacheContract):
    """Contract battery on the wall clock with the default delay."""

    observation_delay = 2.0

    def create_clock(self) -> Clock:
        return SystemClock()

    def create_cache(self, clock: Clock) -> InMemoryCache:
        return InMemoryCache(clock=clock)
