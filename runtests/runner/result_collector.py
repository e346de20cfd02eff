"""unittest result adapter.

Translates unittest's result callbacks into TestInfo/TestOutcome events
for a LogSink, and keeps every outcome for the final summary.
"""

import time
import unittest

from ..reporting.base import LogSink, TestInfo, TestOutcome, TestStatus


class ResultCollector(unittest.TestResult):
    """Collects outcomes and forwards them to an observer as they happen."""

    def __init__(self, observer: LogSink):
        super().__init__()
        self.observer = observer
        self.outcomes: list[TestOutcome] = []
        self._start_times: dict[int, float] = {}

    def startTest(self, test):
        super().startTest(test)
        self._start_times[id(test)] = time.perf_counter()
        self.observer.on_start(TestInfo.from_test(test))

    def stopTest(self, test):
        super().stopTest(test)
        self._start_times.pop(id(test), None)

    def addSuccess(self, test):
        super().addSuccess(test)
        self._record(test, TestStatus.PASSED)

    def addFailure(self, test, err):
        super().addFailure(test, err)
        self._record(test, TestStatus.FAILED, str(err[1]), self._exc_info_to_string(err, test))

    def addError(self, test, err):
        super().addError(test, err)
        self._record(
            test,
            TestStatus.ERROR,
            f"{err[0].__name__}: {err[1]}",
            self._exc_info_to_string(err, test),
        )

    def addSkip(self, test, reason):
        super().addSkip(test, reason)
        self._record(test, TestStatus.SKIPPED, reason)

    def addExpectedFailure(self, test, err):
        super().addExpectedFailure(test, err)
        self._record(test, TestStatus.PASSED, "expected failure")

    def addUnexpectedSuccess(self, test):
        super().addUnexpectedSuccess(test)
        self._record(test, TestStatus.FAILED, "unexpected success")

    def addSubTest(self, test, subtest, err):
        super().addSubTest(test, subtest, err)
        if err is None:
            return

        parent = TestInfo.from_test(test)
        info = TestInfo(
            test_id=subtest.id(),
            suite=parent.suite,
            name=f"{parent.name} {subtest._subDescription()}",
        )
        if issubclass(err[0], test.failureException):
            status, message = TestStatus.FAILED, str(err[1])
        else:
            status, message = TestStatus.ERROR, f"{err[0].__name__}: {err[1]}"
        self._record(test, status, message, self._exc_info_to_string(err, test), info=info)

    def _record(self, test, status, message="", details="", info=None):
        started = self._start_times.get(id(test))
        duration = time.perf_counter() - started if started is not None else 0.0
        outcome = TestOutcome(
            test=info or TestInfo.from_test(test),
            status=status,
            duration=duration,
            message=message,
            details=details,
        )
        self.outcomes.append(outcome)
        self.observer.on_result(outcome)
