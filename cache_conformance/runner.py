"""Conformance runner.

Drives a cache implementation through contract cases. Every case gets a
fresh instance from the injected factory, so no case can observe state
left behind by another. A failing case is recorded and the run moves on;
nothing is retried.
"""

from __future__ import annotations

import copy
import time
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from cache_conformance.cases import Call, CaseFamily, ContractCase, build_contract_cases
from cache_conformance.clock import Clock, build_clock
from cache_conformance.core.config import Settings, get_settings
from cache_conformance.core.constants import Operation
from cache_conformance.core.exceptions import ConformanceError, ConformanceFailure
from cache_conformance.core.logging import get_logger
from cache_conformance.corpora import describe
from cache_conformance.protocols import CacheFactory, SimpleCacheProtocol


logger = get_logger(__name__)


# =============================================================================
# Report Models
# =============================================================================

class CaseResult(BaseModel):
    """Outcome of one contract case."""

    model_config = ConfigDict(frozen=True)

    case_id: str = Field(..., min_length=1)
    family: CaseFamily
    passed: bool
    message: str | None = Field(default=None, description="First mismatch, if any")
    duration_seconds: float = Field(default=0.0, ge=0.0)


class ConformanceReport(BaseModel):
    """Outcome of a conformance run."""

    results: list[CaseResult] = Field(default_factory=list)

    @property
    def passed(self) -> int:
        return sum(1 for result in self.results if result.passed)

    @property
    def failed(self) -> int:
        return len(self.results) - self.passed

    @property
    def failures(self) -> list[CaseResult]:
        return [result for result in self.results if not result.passed]

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def raise_for_failures(self) -> None:
        """Raise ConformanceError if any case failed.

        Raises:
            ConformanceError: Listing every failing case
        """
        if self.ok:
            return
        lines = [f"{self.failed} of {len(self.results)} conformance cases failed:"]
        lines.extend(f"  - {result.message}" for result in self.failures)
        raise ConformanceError("\n".join(lines), failures=self.failures)


# =============================================================================
# Outcome Comparison
# =============================================================================

def _same(expected: Any, actual: Any) -> bool:
    if expected is None:
        return actual is None
    # type check keeps True from passing for 1 and tuples for lists
    return type(actual) is type(expected) and actual == expected


def outcome_matches(operation: Operation, expected: Any, actual: Any) -> bool:
    """Compare an actual result with the expected one.

    get_multiple may return any Mapping, but its keys must follow the
    requested order and each value must match exactly.
    """
    if operation is Operation.GET_MULTIPLE and isinstance(expected, dict):
        if not isinstance(actual, Mapping):
            return False
        if list(actual) != list(expected):
            return False
        return all(_same(value, actual[key]) for key, value in expected.items())
    return _same(expected, actual)


def _show(value: Any) -> str:
    if isinstance(value, Mapping):
        return "{" + ", ".join(f"{k!r}: {describe(v)}" for k, v in value.items()) + "}"
    return describe(value)


# =============================================================================
# Runner
# =============================================================================

class ConformanceRunner:
    """Run contract cases against a cache implementation.

    Example:
        >>> from cache_conformance.backends import InMemoryCache
        >>> from cache_conformance.clock import FakeClock
        >>> clock = FakeClock()
        >>> runner = ConformanceRunner(lambda: InMemoryCache(clock=clock), clock=clock)
        >>> runner.run().ok
        True
    """

    def __init__(
        self,
        factory: CacheFactory,
        clock: Clock | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            factory: Returns a new, empty cache on every call
            clock: Time source used to wait in expiration cases. Pass the
                same clock the factory hands to its caches when using a
                FakeClock.
            settings: Suite settings (defaults to environment settings)
        """
        self._factory = factory
        self._settings = settings or get_settings()
        self._clock = clock or build_clock(self._settings.clock)

    @property
    def clock(self) -> Clock:
        return self._clock

    def cases(self) -> tuple[ContractCase, ...]:
        """Return the cases selected by the current settings."""
        return build_contract_cases(
            observation_delay=self._settings.observation_delay_seconds,
            atomic_batches=self._settings.atomic_batches,
            large_value_bytes=self._settings.large_value_bytes,
        )

    def run(self, cases: Iterable[ContractCase] | None = None) -> ConformanceReport:
        """Run cases sequentially and collect their outcomes.

        Args:
            cases: Cases to run (defaults to ``self.cases()``)

        Returns:
            Report with one result per case, in execution order
        """
        selected = list(self.cases() if cases is None else cases)
        logger.info("conformance_run_started", cases=len(selected), clock=repr(self._clock))

        results = []
        for case in selected:
            started = time.perf_counter()
            try:
                self.run_case(case)
            except ConformanceFailure as failure:
                results.append(
                    CaseResult(
                        case_id=case.case_id,
                        family=case.family,
                        passed=False,
                        message=str(failure),
                        duration_seconds=time.perf_counter() - started,
                    )
                )
                continue
            results.append(
                CaseResult(
                    case_id=case.case_id,
                    family=case.family,
                    passed=True,
                    duration_seconds=time.perf_counter() - started,
                )
            )

        report = ConformanceReport(results=results)
        logger.info("conformance_run_finished", passed=report.passed, failed=report.failed)
        return report

    def run_case(self, case: ContractCase) -> None:
        """Run one case against a fresh cache instance.

        Raises:
            ConformanceFailure: On the first mismatch
        """
        log = logger.bind(case_id=case.case_id, family=case.family.value)
        log.debug("conformance_case_started")

        cache = self._new_cache(case)
        try:
            if case.family is CaseFamily.SNAPSHOT:
                self._run_snapshot(cache, case)
            else:
                self._run_calls(cache, case)
        except ConformanceFailure as failure:
            log.warning("conformance_case_failed", reason=str(failure))
            raise
        log.debug("conformance_case_passed")

    # -------------------------------------------------------------------------
    # Scenarios
    # -------------------------------------------------------------------------

    def _run_calls(self, cache: SimpleCacheProtocol, case: ContractCase) -> None:
        for call in case.setup:
            self._checked(cache, call, case)

        if case.wait_seconds:
            self._clock.sleep(case.wait_seconds)

        if case.expected_error is not None:
            self._expect_error(cache, case)
        else:
            actual = self._checked(cache, case.call, case)
            self._expect_outcome(case, case.call, case.expected, actual)

        for call, expected in case.postconditions:
            actual = self._checked(cache, call, case)
            self._expect_outcome(case, call, expected, actual)

    def _run_snapshot(self, cache: SimpleCacheProtocol, case: ContractCase) -> None:
        key = case.call.arguments[0]
        payload = copy.deepcopy(case.expected)
        # the cache must receive payload itself, not a bound copy
        self._checked(
            cache, Call(Operation.SET, (key, payload)), case, arguments=(key, payload)
        )

        if case.mutate_read:
            read = self._checked(cache, case.call, case)
            self._expect_outcome(case, case.call, case.expected, read)
            case.mutation(read)
        else:
            case.mutation(payload)

        actual = self._checked(cache, case.call, case)
        self._expect_outcome(case, case.call, case.expected, actual)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _new_cache(self, case: ContractCase) -> SimpleCacheProtocol:
        try:
            cache = self._factory()
        except Exception as exc:
            raise ConformanceFailure(
                f"cache factory raised {type(exc).__name__}: {exc}",
                case.case_id,
            ) from exc
        if not isinstance(cache, SimpleCacheProtocol):
            raise ConformanceFailure(
                f"factory returned {type(cache).__name__}, which does not "
                "implement SimpleCacheProtocol",
                case.case_id,
            )
        return cache

    @staticmethod
    def _invoke(
        cache: SimpleCacheProtocol,
        call: Call,
        arguments: tuple[Any, ...] | None = None,
    ) -> Any:
        method = getattr(cache, call.operation.value)
        return method(*(call.bind() if arguments is None else arguments))

    def _checked(
        self,
        cache: SimpleCacheProtocol,
        call: Call,
        case: ContractCase,
        arguments: tuple[Any, ...] | None = None,
    ) -> Any:
        try:
            return self._invoke(cache, call, arguments)
        except Exception as exc:
            raise ConformanceFailure(
                f"{call} raised {type(exc).__name__}: {exc}",
                case.case_id,
                actual=exc,
            ) from exc

    def _expect_error(self, cache: SimpleCacheProtocol, case: ContractCase) -> None:
        expected = case.expected_error
        try:
            result = self._invoke(cache, case.call)
        except expected:
            return
        except Exception as exc:
            raise ConformanceFailure(
                f"{case.call} raised {type(exc).__name__}, expected {expected.__name__}",
                case.case_id,
                expected=expected,
                actual=exc,
            ) from exc
        raise ConformanceFailure(
            f"{case.call} returned {_show(result)}, expected {expected.__name__}",
            case.case_id,
            expected=expected,
            actual=result,
        )

    @staticmethod
    def _expect_outcome(case: ContractCase, call: Call, expected: Any, actual: Any) -> None:
        if outcome_matches(call.operation, expected, actual):
            return
        detail = ""
        if case.expired is not None:
            detail = f" (item {'should' if case.expired else 'should not'} have expired)"
        raise ConformanceFailure(
            f"{call} returned {_show(actual)}, expected {_show(expected)}{detail}",
            case.case_id,
            expected=expected,
            actual=actual,
        )
