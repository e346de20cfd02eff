"""Test executor - runs a resolved suite once against an observer."""

import logging
import time

from ..discovery.suite import TestSuite
from ..reporting.base import LogSink, RunSummary
from .result_collector import ResultCollector

logger = logging.getLogger(__name__)


class TestExecutor:
    """Runs every component of a TestSuite as a single unittest run.

    The components share one unittest.TestSuite, so class and module
    fixtures run once per class and module as usual.
    """
    __test__ = False

    def run(self, suite: TestSuite, observer: LogSink) -> bool:
        """Run the suite.

        Args:
            suite: Resolved suite to run.
            observer: Receives a start and a result event per test case,
                then one finish event.

        Returns:
            True if every test case succeeded.
        """
        result = ResultCollector(observer)
        start_time = time.perf_counter()

        result.startTestRun()
        try:
            suite.to_unittest().run(result)
        finally:
            result.stopTestRun()

        summary = RunSummary(
            outcomes=list(result.outcomes),
            duration=time.perf_counter() - start_time,
        )
        observer.on_finish(summary)

        passed = result.wasSuccessful() and summary.was_successful
        logger.debug(
            "Ran %d tests: %d passed, %d failed, %d errors",
            summary.total_count,
            summary.passed_count,
            summary.failed_count,
            summary.error_count,
        )
        return passed
