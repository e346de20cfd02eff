"""Discovery module - specifier resolution into test suites."""

from .suite import TestSuite, iter_test_cases
from .resolver import ResolutionBackend, SpecifierResolver, UnittestResolver

__all__ = [
    "TestSuite",
    "iter_test_cases",
    "ResolutionBackend",
    "SpecifierResolver",
    "UnittestResolver",
]
