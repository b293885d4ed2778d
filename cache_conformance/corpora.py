"""Input corpora for contract cases.

Fixed, ordered sets of representative valid values, valid TTLs and
invalid keys. Every call builds a fresh list so a caller mutating a
returned object never affects later calls.
"""

import sys
from datetime import timedelta
from typing import Any

from cache_conformance.core.constants import Timing


INT64_MIN: int = -(2**63)
INT64_MAX: int = 2**63 - 1

DEFAULT_LARGE_VALUE_BYTES: int = 1024 * 1024


class SerializedError(Exception):
    """Picklable exception with value equality.

    Stands in for "any structured object" in the value corpus. Two
    instances are equal when they share type and arguments, so a stored
    copy compares equal to the original.
    """

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


def valid_values(large_value_bytes: int = DEFAULT_LARGE_VALUE_BYTES) -> list[Any]:
    """Return one representative of every storable value kind.

    Args:
        large_value_bytes: Length of the large string entry

    Returns:
        Ordered list of values
    """
    return [
        "",
        "foo",
        "a" * large_value_bytes,
        bytes(range(256)),
        0,
        INT64_MIN,
        INT64_MAX,
        0.0,
        sys.float_info.min,
        sys.float_info.max,
        True,
        False,
        None,
        ["foo", "bar", "baz"],
        {"foo": "bar"},
        [{"foo": "bar"}, {"foo": "baz"}],
        SerializedError("Serialized exception"),
    ]


def valid_ttls() -> list[int | timedelta | None]:
    """Return every accepted TTL shape, expiring and non-expiring."""
    return [
        Timing.SHORT_TTL,
        Timing.LONG_TTL,
        timedelta(seconds=Timing.SHORT_TTL),
        timedelta(seconds=Timing.LONG_TTL),
        0,
        -1,
        None,
    ]


def invalid_keys() -> list[Any]:
    """Return keys every conforming cache must reject."""
    return [
        "",
        "{}",
        "()",
        "/\\",
        "@",
        ":",
        0,
        True,
        False,
        None,
    ]


def describe(value: Any, limit: int = 24) -> str:
    """Short, id-safe description of a corpus entry for case identifiers.

    Example:
        >>> describe("a" * 1000)
        'str_len_1000'
        >>> describe(None)
        'None'
    """
    if isinstance(value, str):
        if len(value) > limit:
            return f"str_len_{len(value)}"
        return repr(value)
    if isinstance(value, bytes):
        return f"bytes_len_{len(value)}"
    if isinstance(value, timedelta):
        return f"timedelta_{int(value.total_seconds())}s"
    if isinstance(value, float) and value != 0.0:
        return f"float_{value:.3g}"
    if isinstance(value, BaseException):
        return type(value).__name__
    text = repr(value)
    if len(text) > limit:
        return f"{type(value).__name__}_len_{len(text)}"
    return text
