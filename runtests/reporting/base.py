"""Test run events and the sink interface that observes them."""

import unittest
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum


class TestStatus(str, Enum):
    """Outcome of a single test case."""
    __test__ = False

    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"
    SKIPPED = "skipped"

    @property
    def is_success(self) -> bool:
        return self in (TestStatus.PASSED, TestStatus.SKIPPED)


@dataclass(frozen=True)
class TestInfo:
    """Identity of a test case.

    Attributes:
        test_id: Fully qualified id, e.g. 'pkg.test_mod.TestX.test_y'.
        suite: Sub-collection the test belongs to (module plus class).
        name: Short test name within the suite.
    """
    __test__ = False

    test_id: str
    suite: str
    name: str

    @classmethod
    def from_test(cls, test) -> "TestInfo":
        if isinstance(test, unittest.FunctionTestCase):
            func = test._testFunc
            return cls(
                test_id=test.id(),
                suite=func.__module__,
                name=func.__name__,
            )
        if isinstance(test, unittest.TestCase):
            test_cls = type(test)
            return cls(
                test_id=test.id(),
                suite=f"{test_cls.__module__}.{test_cls.__qualname__}",
                name=test._testMethodName,
            )
        # class or module fixture failures arrive as placeholder objects
        description = str(test)
        return cls(test_id=description, suite=description, name=description)


@dataclass(frozen=True)
class TestOutcome:
    """Result of running one test case."""
    __test__ = False

    test: TestInfo
    status: TestStatus
    duration: float = 0.0
    message: str = ""
    details: str = ""

    @property
    def passed(self) -> bool:
        return self.status.is_success


@dataclass
class RunSummary:
    """All outcomes of a finished run."""
    outcomes: list[TestOutcome] = field(default_factory=list)
    duration: float = 0.0

    def count(self, status: TestStatus) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

    @property
    def total_count(self) -> int:
        return len(self.outcomes)

    @property
    def passed_count(self) -> int:
        return self.count(TestStatus.PASSED)

    @property
    def failed_count(self) -> int:
        return self.count(TestStatus.FAILED)

    @property
    def error_count(self) -> int:
        return self.count(TestStatus.ERROR)

    @property
    def skipped_count(self) -> int:
        return self.count(TestStatus.SKIPPED)

    @property
    def was_successful(self) -> bool:
        return all(o.passed for o in self.outcomes)

    def by_suite(self) -> dict[str, list[TestOutcome]]:
        """Group outcomes by sub-collection, keeping first-seen order."""
        groups: dict[str, list[TestOutcome]] = {}
        for outcome in self.outcomes:
            groups.setdefault(outcome.test.suite, []).append(outcome)
        return groups


class LogSink(ABC):
    """Observer of test execution events."""

    @abstractmethod
    def on_start(self, test: TestInfo) -> None:
        """Called before a test case runs."""

    @abstractmethod
    def on_result(self, outcome: TestOutcome) -> None:
        """Called once a test case has an outcome."""

    @abstractmethod
    def on_finish(self, summary: RunSummary) -> None:
        """Called once after the whole run."""
