"""Run orchestrator - ties parsing, resolution, reporting and execution.

Coordinates a full test run:
1. Parse options
2. Check that some output destination remains
3. Resolve specifiers into one suite
4. Check that the suite is not empty
5. Build sinks (log files are scoped to the run)
6. Run the suite once against a CompositeLogger
7. Return the aggregate result
"""

import logging
from contextlib import ExitStack
from typing import Optional, Protocol, Sequence, TextIO

from ..config import RunnerConfig, WorkingContext, load_config
from ..discovery.resolver import SpecifierResolver, UnittestResolver
from ..discovery.suite import TestSuite
from ..options.parser import parse_options
from ..options.schema import RawArg
from ..options.validator import validate_output, validate_suite
from ..reporting.base import LogSink
from ..reporting.composite import CompositeLogger
from ..reporting.factory import SinkFactory
from .executor import TestExecutor

logger = logging.getLogger(__name__)


class Executor(Protocol):
    def run(self, suite: TestSuite, observer: LogSink) -> bool:
        ...


class TestRunOrchestrator:
    """Single entry point for a test run."""
    __test__ = False

    def __init__(
        self,
        context: Optional[WorkingContext] = None,
        config: Optional[RunnerConfig] = None,
        resolver: Optional[SpecifierResolver] = None,
        executor: Optional[Executor] = None,
        stream: Optional[TextIO] = None,
    ):
        """Initialize run orchestrator.

        Args:
            context: Directory bare runs resolve against. Defaults to the
                current directory.
            config: Runner configuration. Loaded from the context when None.
            resolver: Specifier resolver. Defaults to unittest-based resolution.
            executor: Runs the resolved suite. Defaults to TestExecutor.
            stream: Console stream. Defaults to sys.stdout.
        """
        self.context = context or WorkingContext.current()
        self.config = config if config is not None else load_config(self.context)
        self.resolver = resolver or SpecifierResolver(UnittestResolver(self.context, self.config))
        self.executor = executor or TestExecutor()
        self.sink_factory = SinkFactory(self.config, stream, self.context)

    def execute(self, raw_args: Sequence[RawArg]) -> bool:
        """Run the tests named by raw_args.

        Returns:
            True if every test case passed.

        Raises:
            RunTestsError: For any fatal condition before the run starts.
        """
        request = parse_options(raw_args)
        validate_output(request)

        suite = self.resolver.resolve(request.names)
        validate_suite(suite)
        logger.debug("Resolved %s with %d tests", suite.name, suite.count)

        with ExitStack() as stack:
            sinks = self.sink_factory.build(request, suite, stack)
            monitor = CompositeLogger(sinks)
            passed = self.executor.run(suite, monitor)

        logger.debug("Run %s", "passed" if passed else "failed")
        return passed


def run_tests(*args: RawArg, **kwargs) -> bool:
    """Run tests programmatically.

    Positional arguments are the same tokens the command line accepts;
    keyword arguments go to TestRunOrchestrator.

    Examples:
        run_tests()
        run_tests("-verbose", "-logfile", "log.txt")
        run_tests("tests", "mypkg.test_mod:TestX.test_y")
        run_tests(["dir_a", "dir_b"], "-xmlfile", "reports/")
    """
    return TestRunOrchestrator(**kwargs).execute(list(args))
