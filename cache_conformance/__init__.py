"""Contract-conformance test suite for simple key-value caches.

Validates that a cache implementation exposing get/set/delete/clear/has
and their batch counterparts (modelled on PSR-16 simple caches) behaves
as contracted, including key validation, TTL expiry, snapshot semantics
and batch ordering.

Exports:
    - SimpleCacheContract: pytest base class for backend test suites
    - ConformanceRunner, ConformanceReport: programmatic runner
    - build_contract_cases, ContractCase, CaseFamily: the case corpus
    - ExpirationOracle: expiry prediction for TTL shapes
    - SimpleCacheProtocol, CacheFactory: the contract under test
    - Contract errors raised by conforming backends
"""

from cache_conformance.cases import (
    Call,
    CaseFamily,
    ContractCase,
    build_contract_cases,
    cases_for,
)
from cache_conformance.clock import Clock, FakeClock, SystemClock
from cache_conformance.core.exceptions import (
    CacheError,
    ConformanceError,
    ConformanceFailure,
    InvalidArgumentError,
    InvalidIterableError,
    InvalidKeyError,
    InvalidTTLError,
)
from cache_conformance.oracle import ExpirationOracle
from cache_conformance.protocols import CacheFactory, SimpleCacheProtocol
from cache_conformance.runner import CaseResult, ConformanceReport, ConformanceRunner
from cache_conformance.testing import SimpleCacheContract


__version__ = "0.1.0"

__all__ = [
    "CacheError",
    "CacheFactory",
    "Call",
    "CaseFamily",
    "CaseResult",
    "Clock",
    "ConformanceError",
    "ConformanceFailure",
    "ConformanceReport",
    "ConformanceRunner",
    "ContractCase",
    "ExpirationOracle",
    "FakeClock",
    "InvalidArgumentError",
    "InvalidIterableError",
    "InvalidKeyError",
    "InvalidTTLError",
    "SimpleCacheContract",
    "SimpleCacheProtocol",
    "SystemClock",
    "build_contract_cases",
    "cases_for",
]
