"""Builds the output sinks for a run.

Sinks are created in a fixed order: console, log file, XML report. The
log file is opened on an ExitStack supplied by the caller, so it is
closed when the caller's scope ends, whatever the outcome of the run.
"""

import logging
import os
import sys
from contextlib import ExitStack
from datetime import datetime
from typing import Optional, TextIO

from ..config import RunnerConfig, WorkingContext
from ..discovery.suite import TestSuite
from ..errors import FileOpenFailure
from ..options.schema import RunRequest
from ..options.validator import validate_run
from .base import LogSink
from .display import TestRunDisplay, VerboseTestRunDisplay
from .xml_logger import XMLTestRunLogger

logger = logging.getLogger(__name__)


class SinkFactory:
    """Creates the sinks a RunRequest asks for."""

    def __init__(
        self,
        config: Optional[RunnerConfig] = None,
        stream: Optional[TextIO] = None,
        context: Optional[WorkingContext] = None,
    ):
        """Initialize sink factory.

        Args:
            config: Runner configuration (timestamp format).
            stream: Console stream. Defaults to sys.stdout at build time.
            context: Directory relative output paths are written under.
                Defaults to the current directory at build time.
        """
        self.config = config or RunnerConfig()
        self.stream = stream
        self.context = context

    def build(self, request: RunRequest, suite: TestSuite, stack: ExitStack) -> list[LogSink]:
        """Validate the request and create its sinks.

        Args:
            request: Parsed run request.
            suite: Resolved suite, used for the log file preamble.
            stack: Owner of any opened file handles.

        Returns:
            Sinks in console, file, XML order.

        Raises:
            NoTestsFound: If the suite is empty.
            ConflictingOutputConfig: If no output destination remains.
            FileOpenFailure: If the log file cannot be opened.
        """
        validate_run(request, suite)

        sinks: list[LogSink] = []

        if not request.suppress:
            sinks.append(self._display(request.verbose, self.stream or sys.stdout))

        if request.logfile:
            handle = self._open_logfile(request.logfile, self._output_path(request.logfile), stack)
            self.write_preamble(handle, suite)
            sinks.append(self._display(request.verbose, handle))

        if request.xmlfile:
            sinks.append(XMLTestRunLogger(self._output_path(request.xmlfile)))

        logger.debug("Built sinks: %s", [type(s).__name__ for s in sinks])
        return sinks

    def write_preamble(self, handle: TextIO, suite: TestSuite) -> None:
        """Write the suite header that opens every log file."""
        handle.write(f"Test suite: {suite.name}\n")
        if suite.name != suite.location:
            handle.write(f"Test suite location: {suite.location}\n")
        handle.write(f"{datetime.now().strftime(self.config.timestamp_format)}\n\n")
        handle.flush()

    @staticmethod
    def _display(verbose: bool, stream: TextIO) -> LogSink:
        if verbose:
            return VerboseTestRunDisplay(stream)
        return TestRunDisplay(stream)

    def _output_path(self, path: str) -> str:
        # os.path.join keeps a trailing separator, which marks an XML directory
        context = self.context or WorkingContext.current()
        return os.path.join(context.directory, path)

    @staticmethod
    def _open_logfile(path: str, resolved: str, stack: ExitStack) -> TextIO:
        try:
            handle = open(resolved, "w", encoding="utf-8")
        except OSError as e:
            raise FileOpenFailure(path, e.strerror) from e
        return stack.enter_context(handle)
