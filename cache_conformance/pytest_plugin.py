"""pytest plugin registered through the ``pytest11`` entry point.

Registers the ``slow`` marker carried by real-time expiration cases and
configures structured logging once per session.
"""

import pytest

from cache_conformance.core.logging import configure_logging


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "slow: waits in real time for cache entries to expire",
    )
    configure_logging()
