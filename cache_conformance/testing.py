"""pytest base class for running the contract against a backend.

Subclass SimpleCacheContract in a ``Test...`` class and implement
``create_cache``. Each case family becomes one parametrized test, with
one test item per contract case::

    class TestRedisCache(SimpleCacheContract):
        def create_cache(self, clock):
            client = redis.Redis()
            client.flushdb()
            return RedisSimpleCache(client)

Expiration cases wait in real time and carry the ``slow`` marker unless
the class supplies a FakeClock that its caches share::

    class TestInMemoryCache(SimpleCacheContract):
        def create_clock(self):
            return FakeClock()

        def create_cache(self, clock):
            return InMemoryCache(clock=clock)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import pytest

from cache_conformance.cases import CaseFamily, ContractCase, build_contract_cases
from cache_conformance.clock import Clock, FakeClock, build_clock
from cache_conformance.core.config import Settings, get_settings
from cache_conformance.protocols import SimpleCacheProtocol
from cache_conformance.runner import ConformanceRunner


F = TypeVar("F", bound=Callable[..., Any])

CASE_FIXTURE = "contract_case"


def covers(family: CaseFamily) -> Callable[[F], F]:
    """Tag a test method with the case family it runs."""
    def decorator(func: F) -> F:
        func.contract_family = family  # type: ignore[attr-defined]
        return func
    return decorator


class SimpleCacheContract:
    """Contract test battery for simple cache implementations.

    Class attributes:
        observation_delay: Seconds between TTL write and read-back
            (None uses CACHE_CONFORMANCE_OBSERVATION_DELAY_SECONDS)
        atomic_batches: Also require all-or-nothing batch writes
            (None uses CACHE_CONFORMANCE_ATOMIC_BATCHES)
    """

    observation_delay: float | None = None
    atomic_batches: bool | None = None

    def create_cache(self, clock: Clock) -> SimpleCacheProtocol:
        """Return a new, empty cache. Called once per contract case."""
        raise NotImplementedError(
            f"{type(self).__name__} must implement create_cache(clock)"
        )

    def create_clock(self) -> Clock:
        """Return the time source for one test."""
        return build_clock(get_settings().clock)

    def conformance_settings(self) -> Settings:
        """Environment settings with this class's overrides applied."""
        overrides: dict[str, Any] = {}
        if self.observation_delay is not None:
            overrides["observation_delay_seconds"] = self.observation_delay
        if self.atomic_batches is not None:
            overrides["atomic_batches"] = self.atomic_batches
        return get_settings().model_copy(update=overrides)

    def pytest_generate_tests(self, metafunc: pytest.Metafunc) -> None:
        family = getattr(metafunc.function, "contract_family", None)
        if family is None or CASE_FIXTURE not in metafunc.fixturenames:
            return

        settings = self.conformance_settings()
        waits_in_real_time = not isinstance(self.create_clock(), FakeClock)
        cases = build_contract_cases(
            observation_delay=settings.observation_delay_seconds,
            atomic_batches=settings.atomic_batches,
            large_value_bytes=settings.large_value_bytes,
        )
        params = [
            pytest.param(
                case,
                id=case.case_id,
                marks=[pytest.mark.slow] if case.is_slow and waits_in_real_time else [],
            )
            for case in cases
            if case.family is family
        ]
        metafunc.parametrize(CASE_FIXTURE, params)

    @pytest.fixture
    def conformance_clock(self) -> Clock:
        return self.create_clock()

    @pytest.fixture
    def conformance_runner(self, conformance_clock: Clock) -> ConformanceRunner:
        return ConformanceRunner(
            lambda: self.create_cache(conformance_clock),
            clock=conformance_clock,
            settings=self.conformance_settings(),
        )

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    @covers(CaseFamily.INVALID_KEY)
    def test_invalid_keys(
        self, conformance_runner: ConformanceRunner, contract_case: ContractCase
    ) -> None:
        conformance_runner.run_case(contract_case)

    @covers(CaseFamily.INVALID_TTL)
    def test_invalid_ttls(
        self, conformance_runner: ConformanceRunner, contract_case: ContractCase
    ) -> None:
        conformance_runner.run_case(contract_case)

    @covers(CaseFamily.INVALID_ITERABLE)
    def test_invalid_iterables(
        self, conformance_runner: ConformanceRunner, contract_case: ContractCase
    ) -> None:
        conformance_runner.run_case(contract_case)

    # -------------------------------------------------------------------------
    # Single items
    # -------------------------------------------------------------------------

    @covers(CaseFamily.ROUND_TRIP)
    def test_set_get(
        self, conformance_runner: ConformanceRunner, contract_case: ContractCase
    ) -> None:
        conformance_runner.run_case(contract_case)

    @covers(CaseFamily.SNAPSHOT)
    def test_set_get_snapshot(
        self, conformance_runner: ConformanceRunner, contract_case: ContractCase
    ) -> None:
        conformance_runner.run_case(contract_case)

    @covers(CaseFamily.MISS)
    def test_get_not_found(
        self, conformance_runner: ConformanceRunner, contract_case: ContractCase
    ) -> None:
        conformance_runner.run_case(contract_case)

    @covers(CaseFamily.EXPIRATION)
    def test_expiration(
        self, conformance_runner: ConformanceRunner, contract_case: ContractCase
    ) -> None:
        conformance_runner.run_case(contract_case)

    @covers(CaseFamily.DELETE)
    def test_delete(
        self, conformance_runner: ConformanceRunner, contract_case: ContractCase
    ) -> None:
        conformance_runner.run_case(contract_case)

    @covers(CaseFamily.CLEAR)
    def test_clear(
        self, conformance_runner: ConformanceRunner, contract_case: ContractCase
    ) -> None:
        conformance_runner.run_case(contract_case)

    @covers(CaseFamily.PRESENCE)
    def test_has(
        self, conformance_runner: ConformanceRunner, contract_case: ContractCase
    ) -> None:
        conformance_runner.run_case(contract_case)

    # -------------------------------------------------------------------------
    # Batches
    # -------------------------------------------------------------------------

    @covers(CaseFamily.BATCH)
    def test_set_get_multiple(
        self, conformance_runner: ConformanceRunner, contract_case: ContractCase
    ) -> None:
        conformance_runner.run_case(contract_case)

    @covers(CaseFamily.DELETE_MULTIPLE)
    def test_delete_multiple(
        self, conformance_runner: ConformanceRunner, contract_case: ContractCase
    ) -> None:
        conformance_runner.run_case(contract_case)

    @covers(CaseFamily.BATCH_ATOMICITY)
    def test_batch_atomicity(
        self, conformance_runner: ConformanceRunner, contract_case: ContractCase
    ) -> None:
        conformance_runner.run_case(contract_case)
