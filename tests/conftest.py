"""Test configuration and shared fixtures."""

import pytest

from cache_conformance.backends import InMemoryCache
from cache_conformance.clock import FakeClock
from cache_conformance.core.config import Settings, get_settings


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with safe defaults."""
    return Settings(
        environment="test",
        log_level="DEBUG",
        observation_delay_seconds=2.0,
        clock="fake",
        large_value_bytes=1024,
    )


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Drop cached settings so environment patches take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ============================================================================
# Cache Fixtures
# ============================================================================

@pytest.fixture
def fake_clock() -> FakeClock:
    """Create a deterministic clock."""
    return FakeClock()


@pytest.fixture
def memory_cache(fake_clock: FakeClock) -> InMemoryCache:
    """Create an empty in-memory cache on the fake clock."""
    return InMemoryCache(clock=fake_clock)
