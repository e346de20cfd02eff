"""Fan-out sink forwarding every event to a set of member sinks."""

from typing import Iterable, Optional

from .base import LogSink, RunSummary, TestInfo, TestOutcome


class CompositeLogger(LogSink):
    """Forwards each event to every member, in registration order.

    An empty composite is a valid sink that observes nothing.
    """

    def __init__(self, sinks: Optional[Iterable[LogSink]] = None):
        self.sinks: list[LogSink] = list(sinks or [])

    def on_start(self, test: TestInfo) -> None:
        for sink in self.sinks:
            sink.on_start(test)

    def on_result(self, outcome: TestOutcome) -> None:
        for sink in self.sinks:
            sink.on_result(outcome)

    def on_finish(self, summary: RunSummary) -> None:
        for sink in self.sinks:
            sink.on_finish(summary)
