"""Expiration oracle.

Decides whether an item written "now" with a given TTL is expired once a
fixed observation delay has elapsed. The suite performs the actual wait,
so the rule mirrors real elapsed time: an item whose lifetime is not
longer than the delay is gone when it is read back.
"""

from datetime import timedelta
from typing import Any

from cache_conformance.clock import Clock, SystemClock
from cache_conformance.core.constants import Timing


class ExpirationOracle:
    """Predict expiry for the three accepted TTL shapes.

    - ``None`` never expires
    - ``int`` seconds expire iff ``ttl <= observation_delay``
    - ``timedelta`` is resolved against the clock's current time and
      expires iff the resolved seconds are ``<= observation_delay``

    Example:
        >>> oracle = ExpirationOracle(observation_delay=2)
        >>> oracle.expires(1), oracle.expires(5), oracle.expires(None)
        (True, False, False)
    """

    def __init__(
        self,
        observation_delay: float = Timing.OBSERVATION_DELAY,
        clock: Clock | None = None,
    ) -> None:
        self._observation_delay = observation_delay
        self._clock = clock or SystemClock()

    @property
    def observation_delay(self) -> float:
        return self._observation_delay

    def resolve_seconds(self, ttl: Any) -> float | None:
        """Resolve a TTL to seconds, or None when it never expires.

        Raises:
            TypeError: If ttl is not None, an int, or a timedelta
        """
        if ttl is None:
            return None
        if isinstance(ttl, int) and not isinstance(ttl, bool):
            return float(ttl)
        if isinstance(ttl, timedelta):
            now = self._clock.now()
            return ((now + ttl) - now).total_seconds()
        raise TypeError(f"Unsupported TTL shape: {type(ttl).__name__}")

    def expires(self, ttl: Any, observation_delay: float | None = None) -> bool:
        """Return True if an item written with ttl is a miss after the delay.

        Args:
            ttl: None, int seconds, or timedelta
            observation_delay: Override for the configured delay

        Returns:
            Whether the item is expired at observation time
        """
        delay = self._observation_delay if observation_delay is None else observation_delay
        seconds = self.resolve_seconds(ttl)
        if seconds is None:
            return False
        return delay >= seconds
