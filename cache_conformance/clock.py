"""Time sources shared by the expiration oracle and caches under test.

SystemClock waits in real time. FakeClock advances instantly, which keeps
expiration cases deterministic when the cache under test is built with
the same clock instance.
"""

from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Protocol for time sources."""

    def monotonic(self) -> float:
        """Seconds on a clock that never goes backwards."""
        ...

    def now(self) -> datetime:
        """Current wall-clock time (UTC)."""
        ...

    def sleep(self, seconds: float) -> None:
        """Block for seconds."""
        ...


class SystemClock:
    """Real time source backed by the time module."""

    def monotonic(self) -> float:
        return time.monotonic()

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)

    def __repr__(self) -> str:
        return "SystemClock()"


class FakeClock:
    """Deterministic time source for tests.

    ``sleep`` returns immediately and moves both the monotonic and the
    wall-clock reading forward by the requested amount.

    Example:
        >>> clock = FakeClock()
        >>> start = clock.monotonic()
        >>> clock.sleep(2)
        >>> clock.monotonic() - start
        2.0
    """

    def __init__(
        self,
        start: datetime | None = None,
        monotonic_start: float = 0.0,
    ) -> None:
        self._now = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
        self._monotonic = float(monotonic_start)

    def monotonic(self) -> float:
        return self._monotonic

    def now(self) -> datetime:
        return self._now

    def sleep(self, seconds: float) -> None:
        self.advance(seconds)

    def advance(self, seconds: float) -> None:
        """Move time forward.

        Raises:
            ValueError: If seconds is negative
        """
        if seconds < 0:
            raise ValueError("FakeClock cannot move backwards")
        self._monotonic += seconds
        self._now += timedelta(seconds=seconds)

    def __repr__(self) -> str:
        return f"FakeClock(now={self._now.isoformat()!r})"


def build_clock(kind: str) -> Clock:
    """Create a clock by name ("system" or "fake").

    Raises:
        ValueError: If kind is unknown
    """
    if kind == "system":
        return SystemClock()
    if kind == "fake":
        return FakeClock()
    raise ValueError(f"Unknown clock kind '{kind}'. Must be 'system' or 'fake'")
