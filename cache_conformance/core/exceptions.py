"""Exceptions for the simple cache contract and the conformance suite.

Two families live here:

- Contract errors (``CacheError`` and subclasses) are raised by the cache
  implementation under test. Conforming backends import and raise these.
- Suite errors (``ConformanceFailure``, ``ConformanceError``) are raised by
  the suite itself when an implementation does not behave as contracted.

All exceptions are namespaced to avoid shadowing Python builtins.
"""

from typing import Any


class CacheError(Exception):
    """Base exception for all contract errors raised by a cache.

    Catch this to handle any error a conforming cache may raise.
    """


class InvalidArgumentError(CacheError):
    """Raised when an argument passed to a cache operation is invalid.

    Distinct from Python's built-in ValueError/TypeError so callers can
    tell contract violations by the caller apart from backend bugs.
    """

    def __init__(
        self,
        message: str,
        argument: str,
        value: Any | None = None,
    ) -> None:
        """Initialize invalid argument error.

        Args:
            message: Error description
            argument: Name of the offending argument
            value: The rejected value
        """
        self.argument = argument
        self.value = value
        super().__init__(message)


class InvalidKeyError(InvalidArgumentError):
    """Raised for an empty, wrong-typed, or reserved-character key."""

    def __init__(self, message: str, value: Any | None = None) -> None:
        super().__init__(message, argument="key", value=value)


class InvalidTTLError(InvalidArgumentError):
    """Raised when a TTL is not None, an int, or a timedelta."""

    def __init__(self, message: str, value: Any | None = None) -> None:
        super().__init__(message, argument="ttl", value=value)


class InvalidIterableError(InvalidArgumentError):
    """Raised when a batch operation is given a non-iterable collection."""

    def __init__(
        self,
        message: str,
        value: Any | None = None,
        argument: str = "keys",
    ) -> None:
        super().__init__(message, argument=argument, value=value)


class ConformanceFailure(AssertionError):
    """Raised when an implementation deviates from the contract in one case.

    Subclasses AssertionError so pytest reports it as a test failure
    rather than an error.
    """

    def __init__(
        self,
        message: str,
        case_id: str,
        expected: Any | None = None,
        actual: Any | None = None,
    ) -> None:
        """Initialize conformance failure.

        Args:
            message: Description of the mismatch
            case_id: Identifier of the failing contract case
            expected: Expected outcome
            actual: Observed outcome
        """
        self.case_id = case_id
        self.expected = expected
        self.actual = actual
        super().__init__(f"[{case_id}] {message}")


class ConformanceError(Exception):
    """Raised when a conformance run finished with failing cases."""

    def __init__(self, message: str, failures: list[Any] | None = None) -> None:
        """Initialize conformance error.

        Args:
            message: Summary of the run
            failures: Failed case results
        """
        self.failures = failures or []
        super().__init__(message)
