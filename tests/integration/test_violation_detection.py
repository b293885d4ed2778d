"""The battery must catch each class of contract violation.

Every fake breaks one rule; running the whole battery against it must
fail exactly in the families that rule covers, and nowhere else.
"""

import pytest

from cache_conformance.backends import InMemoryCache
from cache_conformance.cases import CaseFamily, cases_for
from cache_conformance.clock import FakeClock
from cache_conformance.core.config import Settings
from cache_conformance.core.exceptions import ConformanceError
from cache_conformance.runner import ConformanceRunner
from tests.fakes.fake_caches import (
    DictCache,
    DrainingCache,
    EagerExpiryCache,
    ImmortalCache,
    ListOnlyBatchCache,
    LiveReferenceCache,
    NonAtomicCache,
    SortedBatchCache,
    StubbornClearCache,
)


@pytest.fixture
def atomic_settings() -> Settings:
    return Settings(
        environment="test",
        clock="fake",
        observation_delay_seconds=2.0,
        atomic_batches=True,
        large_value_bytes=1024,
    )


def _run(cache_class, settings: Settings):
    clock = FakeClock()
    if cache_class is DictCache:
        factory = DictCache
    else:
        factory = lambda: cache_class(clock=clock)  # noqa: E731
    return ConformanceRunner(factory, clock=clock, settings=settings).run()


def _failed_ids(report) -> set[str]:
    return {result.case_id for result in report.failures}


def _failed_families(report) -> set[CaseFamily]:
    return {result.family for result in report.failures}


class TestViolationDetection:
    """Each broken cache fails only where it should."""

    def test_reference_passes(self, atomic_settings: Settings) -> None:
        report = _run(InMemoryCache, atomic_settings)
        report.raise_for_failures()

    def test_no_validation(self, atomic_settings: Settings) -> None:
        report = _run(DictCache, atomic_settings)

        assert {
            CaseFamily.INVALID_KEY,
            CaseFamily.INVALID_TTL,
            CaseFamily.INVALID_ITERABLE,
            CaseFamily.SNAPSHOT,
        } <= _failed_families(report)
        with pytest.raises(ConformanceError):
            report.raise_for_failures()

    def test_ignored_ttl(self, atomic_settings: Settings) -> None:
        report = _run(ImmortalCache, atomic_settings)

        assert _failed_families(report) == {CaseFamily.EXPIRATION}
        assert "expiration-get-0-1" in _failed_ids(report)
        assert "expiration-get-1-5" not in _failed_ids(report)

    def test_eager_expiry(self, atomic_settings: Settings) -> None:
        report = _run(EagerExpiryCache, atomic_settings)

        assert _failed_families(report) == {CaseFamily.EXPIRATION}
        assert "expiration-has-3-timedelta_5s" in _failed_ids(report)
        assert "expiration-has-2-timedelta_1s" not in _failed_ids(report)

    def test_live_references(self, atomic_settings: Settings) -> None:
        report = _run(LiveReferenceCache, atomic_settings)

        assert _failed_ids(report) == {
            "snapshot-write-dict",
            "snapshot-read-dict",
            "snapshot-write-list",
            "snapshot-read-list",
        }

    def test_batch_order(self, atomic_settings: Settings) -> None:
        report = _run(SortedBatchCache, atomic_settings)

        assert _failed_ids(report) == {
            "batch-reversed_order-list",
            "batch-reversed_order-generator",
        }

    def test_one_shot_generator(self, atomic_settings: Settings) -> None:
        report = _run(ListOnlyBatchCache, atomic_settings)

        failed = _failed_ids(report)
        assert "batch-insertion_order-generator" in failed
        assert "batch-insertion_order-list" not in failed
        assert "invalid_iterable-get_multiple" in failed

    def test_clear_ignored(self, atomic_settings: Settings) -> None:
        report = _run(StubbornClearCache, atomic_settings)

        assert _failed_ids(report) == {"clear-single-key", "clear-many-keys"}

    def test_partial_batch_writes(self, atomic_settings: Settings) -> None:
        report = _run(NonAtomicCache, atomic_settings)

        assert _failed_ids(report) == {"batch_atomicity-set_multiple"}

    def test_partial_batch_writes_allowed_by_default(self, test_settings: Settings) -> None:
        report = _run(NonAtomicCache, test_settings)
        assert report.ok

    def test_argument_consumer_passes(self, atomic_settings: Settings) -> None:
        """Test that a cache emptying its arguments still conforms."""
        report = _run(DrainingCache, atomic_settings)
        report.raise_for_failures()

    def test_cases_survive_argument_consumer(self, atomic_settings: Settings) -> None:
        """Test that memoized cases are unchanged after a consuming run."""
        clock = FakeClock()
        runner = ConformanceRunner(
            lambda: DrainingCache(clock=clock), clock=clock, settings=atomic_settings
        )
        cases = cases_for(CaseFamily.DELETE_MULTIPLE) + cases_for(CaseFamily.BATCH)

        first = runner.run(cases)
        second = runner.run(cases)

        assert first.ok and second.ok
        assert cases_for(CaseFamily.DELETE_MULTIPLE)[0].setup[-1].arguments == (
            ["key1", "key3"],
        )
        round_trip = {case.case_id: case for case in cases_for(CaseFamily.ROUND_TRIP)}
        runner.run(round_trip.values())
        assert round_trip["round_trip-14-{'foo': 'bar'}"].expected == {"foo": "bar"}
