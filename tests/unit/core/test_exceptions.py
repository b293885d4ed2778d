"""Unit tests for contract and suite exceptions."""

import pytest

from cache_conformance.core.exceptions import (
    CacheError,
    ConformanceError,
    ConformanceFailure,
    InvalidArgumentError,
    InvalidIterableError,
    InvalidKeyError,
    InvalidTTLError,
)


class TestContractErrors:
    """Tests for the errors raised by cache implementations."""

    @pytest.mark.parametrize(
        "error_class",
        [InvalidKeyError, InvalidTTLError, InvalidIterableError],
    )
    def test_inherits_invalid_argument(self, error_class: type) -> None:
        """Test that every argument error can be caught as InvalidArgumentError."""
        assert issubclass(error_class, InvalidArgumentError)
        assert issubclass(error_class, CacheError)

    def test_cache_error_is_exception(self) -> None:
        assert issubclass(CacheError, Exception)

    def test_invalid_key_stores_value(self) -> None:
        """Test that InvalidKeyError records the argument and rejected key."""
        error = InvalidKeyError("Cache key cannot be empty", value="")

        assert error.argument == "key"
        assert error.value == ""
        assert str(error) == "Cache key cannot be empty"

    def test_invalid_ttl_stores_value(self) -> None:
        error = InvalidTTLError("bad ttl", value="soon")

        assert error.argument == "ttl"
        assert error.value == "soon"

    def test_invalid_iterable_argument_name(self) -> None:
        """Test that InvalidIterableError names the offending collection."""
        assert InvalidIterableError("x").argument == "keys"
        assert InvalidIterableError("x", argument="values").argument == "values"


class TestConformanceFailure:
    """Tests for ConformanceFailure."""

    def test_is_assertion_error(self) -> None:
        """Test that pytest reports failures, not errors."""
        assert issubclass(ConformanceFailure, AssertionError)

    def test_message_includes_case_id(self) -> None:
        failure = ConformanceFailure(
            "get('foo') returned None, expected 'bar'",
            case_id="round_trip-01-'foo'",
            expected="bar",
            actual=None,
        )

        assert str(failure).startswith("[round_trip-01-'foo']")
        assert failure.case_id == "round_trip-01-'foo'"
        assert failure.expected == "bar"
        assert failure.actual is None


class TestConformanceError:
    """Tests for ConformanceError."""

    def test_failures_default_empty(self) -> None:
        assert ConformanceError("summary").failures == []

    def test_failures_stored(self) -> None:
        error = ConformanceError("summary", failures=["a", "b"])
        assert error.failures == ["a", "b"]
