"""Text renderers for the console and log files."""

import sys
from typing import Optional, TextIO

from .base import LogSink, RunSummary, TestInfo, TestOutcome, TestStatus

PROGRESS_MARKS = {
    TestStatus.PASSED: ".",
    TestStatus.FAILED: "F",
    TestStatus.ERROR: "E",
    TestStatus.SKIPPED: "s",
}


class TestRunDisplay(LogSink):
    """Summary display: one progress mark per test, details at the end."""
    __test__ = False

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout

    def write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def on_start(self, test: TestInfo) -> None:
        pass

    def on_result(self, outcome: TestOutcome) -> None:
        self.write(PROGRESS_MARKS[outcome.status])

    def on_finish(self, summary: RunSummary) -> None:
        self.write("\n")
        self._print_problems(summary)
        self._print_totals(summary)

    def _print_problems(self, summary: RunSummary) -> None:
        for outcome in summary.outcomes:
            if outcome.passed:
                continue
            label = "FAILURE" if outcome.status == TestStatus.FAILED else "ERROR"
            self.write(f"\n===== Test Case {label} =====\n")
            self.write(f"Location: {outcome.test.test_id}\n")
            if outcome.details:
                self.write(outcome.details.rstrip("\n") + "\n")

    def _print_totals(self, summary: RunSummary) -> None:
        self.write(f"\nRan {summary.total_count} tests in {summary.duration:.3f}s\n")
        if summary.was_successful:
            line = "PASSED"
            if summary.skipped_count:
                line += f" (skipped={summary.skipped_count})"
        else:
            line = f"FAILED (failures={summary.failed_count}, errors={summary.error_count})"
        self.write(line + "\n")


class VerboseTestRunDisplay(TestRunDisplay):
    """Verbose display: one line per test with its status and time."""

    def on_result(self, outcome: TestOutcome) -> None:
        line = f"{outcome.test.test_id} ... {outcome.status.value} in {outcome.duration:.4f} seconds"
        if outcome.status == TestStatus.SKIPPED and outcome.message:
            line += f" ({outcome.message})"
        self.write(line + "\n")

    def on_finish(self, summary: RunSummary) -> None:
        self._print_problems(summary)
        self._print_totals(summary)
