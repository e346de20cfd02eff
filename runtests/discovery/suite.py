"""Test collection model.

A TestSuite is a named, ordered, flat list of unittest test cases.
"""

import unittest
from dataclasses import dataclass, field
from typing import Iterable, Union


def iter_test_cases(tests: Union[unittest.TestSuite, unittest.TestCase]) -> Iterable[unittest.TestCase]:
    """Yield the test cases in a (possibly nested) unittest suite, in order."""
    if isinstance(tests, unittest.TestSuite):
        for test in tests:
            yield from iter_test_cases(test)
    else:
        yield tests


@dataclass
class TestSuite:
    """An ordered collection of test components.

    Attributes:
        name: Display name, usually the specifier it came from.
        location: Where the tests live (directory or file). May differ from name.
        components: Executable test cases, in run order.
    """
    __test__ = False

    name: str = ""
    location: str = ""
    components: list[unittest.TestCase] = field(default_factory=list)

    @classmethod
    def from_unittest(
        cls,
        tests: Union[unittest.TestSuite, unittest.TestCase],
        name: str,
        location: str,
    ) -> "TestSuite":
        return cls(name=name, location=location, components=list(iter_test_cases(tests)))

    def add(self, other: "TestSuite") -> None:
        """Append another suite's components after this suite's own."""
        self.components.extend(other.components)

    @property
    def count(self) -> int:
        return len(self.components)

    def to_unittest(self) -> unittest.TestSuite:
        """Wrap the components in a single runnable unittest suite."""
        return unittest.TestSuite(self.components)
