"""Contract cases.

Each ContractCase pairs an operation sequence with its expected outcome.
Cases are built once per (observation delay, options) combination,
memoized, and never mutated afterwards.

Case anatomy:
    setup          calls made first, outcome ignored
    wait_seconds   clock sleep after setup (expiration cases only)
    call           the checked call
    expected       value the checked call must return, or
    expected_error contract error the checked call must raise
    postconditions (call, expected) pairs verified afterwards
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Any

from cache_conformance.core.constants import (
    BATCH_DEFAULT,
    BATCH_KEYS,
    BATCH_OPERATIONS,
    BATCH_VALUES,
    KEY_OPERATIONS,
    MISS_DEFAULT,
    MISSING_KEY,
    SAMPLE_KEY,
    SAMPLE_VALUE,
    Operation,
    Timing,
)
from cache_conformance.core.exceptions import (
    CacheError,
    InvalidIterableError,
    InvalidKeyError,
    InvalidTTLError,
)
from cache_conformance.corpora import (
    DEFAULT_LARGE_VALUE_BYTES,
    describe,
    invalid_keys,
    valid_ttls,
    valid_values,
)
from cache_conformance.oracle import ExpirationOracle


class CaseFamily(str, Enum):
    """Groups of related contract cases."""
    INVALID_KEY = "invalid_key"
    INVALID_TTL = "invalid_ttl"
    INVALID_ITERABLE = "invalid_iterable"
    ROUND_TRIP = "round_trip"
    SNAPSHOT = "snapshot"
    MISS = "miss"
    EXPIRATION = "expiration"
    DELETE = "delete"
    CLEAR = "clear"
    BATCH = "batch"
    DELETE_MULTIPLE = "delete_multiple"
    PRESENCE = "presence"
    BATCH_ATOMICITY = "batch_atomicity"


@dataclass(frozen=True)
class Call:
    """One operation invocation.

    Attributes:
        operation: Contract operation to invoke
        arguments: Positional arguments
        lazy: Pass the first argument as a one-shot generator
    """

    operation: Operation
    arguments: tuple[Any, ...] = ()
    lazy: bool = False

    def bind(self) -> tuple[Any, ...]:
        """Return fresh arguments for one invocation.

        Arguments are deep copies, so a cache that consumes or mutates its
        input cannot alter the memoized case. Generators are single-pass,
        so a new one is produced every time.
        """
        arguments = copy.deepcopy(self.arguments)
        if not self.lazy:
            return arguments
        head, *rest = arguments
        return ((item for item in head), *rest)

    def __str__(self) -> str:
        shown = ", ".join(describe(arg) for arg in self.arguments)
        suffix = " (generator)" if self.lazy else ""
        return f"{self.operation.value}({shown}){suffix}"


@dataclass(frozen=True)
class ContractCase:
    """A single (operation, inputs, expected outcome) conformance case."""

    case_id: str
    family: CaseFamily
    call: Call
    setup: tuple[Call, ...] = ()
    expected: Any = None
    expected_error: type[CacheError] | None = None
    postconditions: tuple[tuple[Call, Any], ...] = ()
    wait_seconds: float = 0.0
    expired: bool | None = None
    mutation: Callable[[Any], None] | None = None
    # Snapshot cases: False mutates the object passed to set,
    # True mutates the object returned by get
    mutate_read: bool = False

    @property
    def operation(self) -> Operation:
        return self.call.operation

    @property
    def is_slow(self) -> bool:
        return self.wait_seconds > 0


# =============================================================================
# Validation Families
# =============================================================================

def _key_call(operation: Operation, key: Any) -> Call:
    if operation is Operation.SET:
        return Call(operation, (key, SAMPLE_VALUE))
    if operation is Operation.SET_MULTIPLE:
        return Call(operation, ({key: SAMPLE_VALUE},))
    if operation in BATCH_OPERATIONS:
        return Call(operation, ([key],))
    return Call(operation, (key,))


def invalid_key_cases() -> list[ContractCase]:
    """Every key-accepting operation paired with every invalid key."""
    cases = []
    for operation in KEY_OPERATIONS:
        for index, key in enumerate(invalid_keys()):
            cases.append(
                ContractCase(
                    case_id=f"invalid_key-{operation.value}-{index}-{describe(key)}",
                    family=CaseFamily.INVALID_KEY,
                    call=_key_call(operation, key),
                    expected_error=InvalidKeyError,
                )
            )
    return cases


def invalid_ttl_cases() -> list[ContractCase]:
    """A string TTL must be rejected and must not create an entry."""
    invalid_ttl = ""
    no_entry = ((Call(Operation.GET, (SAMPLE_KEY,)), None),)
    return [
        ContractCase(
            case_id="invalid_ttl-set",
            family=CaseFamily.INVALID_TTL,
            call=Call(Operation.SET, (SAMPLE_KEY, SAMPLE_VALUE, invalid_ttl)),
            expected_error=InvalidTTLError,
            postconditions=no_entry,
        ),
        ContractCase(
            case_id="invalid_ttl-set_multiple",
            family=CaseFamily.INVALID_TTL,
            call=Call(Operation.SET_MULTIPLE, ({SAMPLE_KEY: SAMPLE_VALUE}, invalid_ttl)),
            expected_error=InvalidTTLError,
            postconditions=no_entry,
        ),
    ]


def invalid_iterable_cases() -> list[ContractCase]:
    """Batch operations given None instead of a collection."""
    return [
        ContractCase(
            case_id=f"invalid_iterable-{operation.value}",
            family=CaseFamily.INVALID_ITERABLE,
            call=Call(operation, (None,)),
            expected_error=InvalidIterableError,
        )
        for operation in (
            Operation.GET_MULTIPLE,
            Operation.SET_MULTIPLE,
            Operation.DELETE_MULTIPLE,
        )
    ]


# =============================================================================
# Storage Families
# =============================================================================

def round_trip_cases(large_value_bytes: int = DEFAULT_LARGE_VALUE_BYTES) -> list[ContractCase]:
    """Every valid value must come back equal and of the same type."""
    return [
        ContractCase(
            case_id=f"round_trip-{index:02d}-{describe(value)}",
            family=CaseFamily.ROUND_TRIP,
            setup=(Call(Operation.SET, (SAMPLE_KEY, value)),),
            call=Call(Operation.GET, (SAMPLE_KEY,)),
            expected=value,
        )
        for index, value in enumerate(valid_values(large_value_bytes))
    ]


def _rename_foo(value: dict[str, Any]) -> None:
    value["foo"] = "baz"


def _append_item(value: list[Any]) -> None:
    value.append("qux")


def snapshot_cases() -> list[ContractCase]:
    """Stored values are decoupled from caller and reader objects.

    The runner writes a private copy of ``expected`` under the checked
    key, applies ``mutation`` to the written or the read object, then
    reads again.
    """
    subjects = (
        ("dict", {"foo": "bar"}, _rename_foo),
        ("list", ["foo", "bar"], _append_item),
    )
    cases = []
    for name, value, mutation in subjects:
        for mutate_read in (False, True):
            side = "read" if mutate_read else "write"
            cases.append(
                ContractCase(
                    case_id=f"snapshot-{side}-{name}",
                    family=CaseFamily.SNAPSHOT,
                    call=Call(Operation.GET, (SAMPLE_KEY,)),
                    expected=copy.deepcopy(value),
                    mutation=mutation,
                    mutate_read=mutate_read,
                )
            )
    return cases


def miss_cases() -> list[ContractCase]:
    return [
        ContractCase(
            case_id="miss-default-none",
            family=CaseFamily.MISS,
            call=Call(Operation.GET, (MISSING_KEY,)),
            expected=None,
        ),
        ContractCase(
            case_id="miss-default-given",
            family=CaseFamily.MISS,
            call=Call(Operation.GET, (MISSING_KEY, MISS_DEFAULT)),
            expected=MISS_DEFAULT,
        ),
    ]


def expiration_cases(
    observation_delay: float = Timing.OBSERVATION_DELAY,
    oracle: ExpirationOracle | None = None,
) -> list[ContractCase]:
    """Writes with every valid TTL, read back after the observation delay.

    Each TTL is checked through get, has and get_multiple.
    """
    oracle = oracle or ExpirationOracle(observation_delay)
    cases = []
    for index, ttl in enumerate(valid_ttls()):
        expired = oracle.expires(ttl, observation_delay)
        label = f"{index}-{describe(ttl)}"
        single_write = (Call(Operation.SET, (SAMPLE_KEY, SAMPLE_VALUE, ttl)),)
        batch_write = (Call(Operation.SET_MULTIPLE, (dict(BATCH_VALUES), ttl)),)

        cases.append(
            ContractCase(
                case_id=f"expiration-get-{label}",
                family=CaseFamily.EXPIRATION,
                setup=single_write,
                call=Call(Operation.GET, (SAMPLE_KEY,)),
                expected=None if expired else SAMPLE_VALUE,
                wait_seconds=observation_delay,
                expired=expired,
            )
        )
        cases.append(
            ContractCase(
                case_id=f"expiration-has-{label}",
                family=CaseFamily.EXPIRATION,
                setup=single_write,
                call=Call(Operation.HAS, (SAMPLE_KEY,)),
                expected=not expired,
                wait_seconds=observation_delay,
                expired=expired,
            )
        )
        cases.append(
            ContractCase(
                case_id=f"expiration-get_multiple-{label}",
                family=CaseFamily.EXPIRATION,
                setup=batch_write,
                call=Call(Operation.GET_MULTIPLE, (list(BATCH_KEYS),)),
                expected=(
                    dict.fromkeys(BATCH_KEYS) if expired else dict(BATCH_VALUES)
                ),
                wait_seconds=observation_delay,
                expired=expired,
            )
        )
    return cases


def delete_cases() -> list[ContractCase]:
    other_key, other_value = "baz", "qux"
    return [
        ContractCase(
            case_id="delete-removes-key",
            family=CaseFamily.DELETE,
            setup=(
                Call(Operation.SET, (SAMPLE_KEY, SAMPLE_VALUE)),
                Call(Operation.DELETE, (SAMPLE_KEY,)),
            ),
            call=Call(Operation.GET, (SAMPLE_KEY,)),
            expected=None,
        ),
        ContractCase(
            case_id="delete-leaves-other-keys",
            family=CaseFamily.DELETE,
            setup=(
                Call(Operation.SET, (SAMPLE_KEY, SAMPLE_VALUE)),
                Call(Operation.SET, (other_key, other_value)),
                Call(Operation.DELETE, (SAMPLE_KEY,)),
            ),
            call=Call(Operation.GET, (other_key,)),
            expected=other_value,
        ),
        ContractCase(
            case_id="delete-absent-key-is-noop",
            family=CaseFamily.DELETE,
            setup=(
                Call(Operation.SET, (SAMPLE_KEY, SAMPLE_VALUE)),
                Call(Operation.DELETE, (MISSING_KEY,)),
                Call(Operation.DELETE, (MISSING_KEY,)),
            ),
            call=Call(Operation.GET, (SAMPLE_KEY,)),
            expected=SAMPLE_VALUE,
            postconditions=((Call(Operation.HAS, (MISSING_KEY,)), False),),
        ),
    ]


def clear_cases() -> list[ContractCase]:
    all_keys = [SAMPLE_KEY, *BATCH_KEYS]
    return [
        ContractCase(
            case_id="clear-single-key",
            family=CaseFamily.CLEAR,
            setup=(
                Call(Operation.SET, (SAMPLE_KEY, SAMPLE_VALUE)),
                Call(Operation.CLEAR),
            ),
            call=Call(Operation.GET, (SAMPLE_KEY,)),
            expected=None,
        ),
        ContractCase(
            case_id="clear-many-keys",
            family=CaseFamily.CLEAR,
            setup=(
                Call(Operation.SET, (SAMPLE_KEY, SAMPLE_VALUE)),
                Call(Operation.SET_MULTIPLE, (dict(BATCH_VALUES),)),
                Call(Operation.CLEAR),
            ),
            call=Call(Operation.GET_MULTIPLE, (all_keys,)),
            expected=dict.fromkeys(all_keys),
        ),
    ]


def batch_cases() -> list[ContractCase]:
    """get_multiple returns values in request order, for lists and generators."""
    orders = (
        ("insertion_order", list(BATCH_KEYS)),
        ("reversed_order", list(reversed(BATCH_KEYS))),
    )
    cases = []
    for order_name, keys in orders:
        for lazy in (False, True):
            source = "generator" if lazy else "list"
            cases.append(
                ContractCase(
                    case_id=f"batch-{order_name}-{source}",
                    family=CaseFamily.BATCH,
                    setup=(Call(Operation.SET_MULTIPLE, (dict(BATCH_VALUES),)),),
                    call=Call(Operation.GET_MULTIPLE, (keys,), lazy=lazy),
                    expected={key: BATCH_VALUES[key] for key in keys},
                )
            )
    return cases


def delete_multiple_cases() -> list[ContractCase]:
    """delete_multiple removes only the named keys."""
    deleted = [BATCH_KEYS[0], BATCH_KEYS[2]]
    expected = {
        key: BATCH_DEFAULT if key in deleted else BATCH_VALUES[key]
        for key in BATCH_KEYS
    }
    return [
        ContractCase(
            case_id=f"delete_multiple-{'generator' if lazy else 'list'}",
            family=CaseFamily.DELETE_MULTIPLE,
            setup=(
                Call(Operation.SET_MULTIPLE, (dict(BATCH_VALUES),)),
                Call(Operation.DELETE_MULTIPLE, (deleted,), lazy=lazy),
            ),
            call=Call(Operation.GET_MULTIPLE, (list(BATCH_KEYS), BATCH_DEFAULT)),
            expected=expected,
        )
        for lazy in (False, True)
    ]


def presence_cases() -> list[ContractCase]:
    return [
        ContractCase(
            case_id="presence-stored",
            family=CaseFamily.PRESENCE,
            setup=(Call(Operation.SET, (SAMPLE_KEY, SAMPLE_VALUE)),),
            call=Call(Operation.HAS, (SAMPLE_KEY,)),
            expected=True,
        ),
        ContractCase(
            case_id="presence-absent",
            family=CaseFamily.PRESENCE,
            call=Call(Operation.HAS, (MISSING_KEY,)),
            expected=False,
        ),
    ]


def batch_atomicity_cases() -> list[ContractCase]:
    """A batch containing one invalid key changes nothing.

    Only generated when a backend opts into all-or-nothing batches.
    """
    first, _, last = BATCH_KEYS
    poisoned_values = {first: "value1", "{}": "value2", last: "value3"}
    return [
        ContractCase(
            case_id="batch_atomicity-set_multiple",
            family=CaseFamily.BATCH_ATOMICITY,
            call=Call(Operation.SET_MULTIPLE, (poisoned_values,)),
            expected_error=InvalidKeyError,
            postconditions=(
                (Call(Operation.GET_MULTIPLE, ([first, last],)), {first: None, last: None}),
            ),
        ),
        ContractCase(
            case_id="batch_atomicity-delete_multiple",
            family=CaseFamily.BATCH_ATOMICITY,
            setup=(Call(Operation.SET_MULTIPLE, (dict(BATCH_VALUES),)),),
            call=Call(Operation.DELETE_MULTIPLE, ([first, "{}", last],)),
            expected_error=InvalidKeyError,
            postconditions=(
                (Call(Operation.GET_MULTIPLE, (list(BATCH_KEYS),)), dict(BATCH_VALUES)),
            ),
        ),
    ]


# =============================================================================
# Assembly
# =============================================================================

@lru_cache(maxsize=None)
def build_contract_cases(
    observation_delay: float = Timing.OBSERVATION_DELAY,
    atomic_batches: bool = False,
    large_value_bytes: int = DEFAULT_LARGE_VALUE_BYTES,
) -> tuple[ContractCase, ...]:
    """Build the full, ordered case list.

    Args:
        observation_delay: Seconds between a TTL write and its read-back
        atomic_batches: Include all-or-nothing batch cases
        large_value_bytes: Length of the large string value

    Returns:
        Immutable tuple of cases, identical across calls with equal arguments
    """
    cases: list[ContractCase] = [
        *invalid_key_cases(),
        *invalid_ttl_cases(),
        *invalid_iterable_cases(),
        *round_trip_cases(large_value_bytes),
        *snapshot_cases(),
        *miss_cases(),
        *expiration_cases(observation_delay),
        *delete_cases(),
        *clear_cases(),
        *batch_cases(),
        *delete_multiple_cases(),
        *presence_cases(),
    ]
    if atomic_batches:
        cases.extend(batch_atomicity_cases())
    return tuple(cases)


def cases_for(family: CaseFamily, **options: Any) -> tuple[ContractCase, ...]:
    """Return the cases of one family.

    Args:
        family: Family to select
        **options: Forwarded to build_contract_cases

    Example:
        >>> [case.case_id for case in cases_for(CaseFamily.MISS)]
        ['miss-default-none', 'miss-default-given']
    """
    options.setdefault("atomic_batches", family is CaseFamily.BATCH_ATOMICITY)
    return tuple(
        case for case in build_contract_cases(**options) if case.family is family
    )
