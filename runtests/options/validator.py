"""Pre-run validation of a run request.

Checks that must pass before any output sink is opened.
"""

from ..discovery.suite import TestSuite
from ..errors import ConflictingOutputConfig, NoTestsFound
from .schema import RunRequest


def validate_output(request: RunRequest) -> None:
    """Ensure the request leaves at least one way to observe results.

    Raises:
        ConflictingOutputConfig: If the console is suppressed and neither
            a log file nor an XML file was given.
    """
    if request.suppress and not request.has_file_output:
        raise ConflictingOutputConfig()


def validate_suite(suite: TestSuite) -> None:
    """Ensure the resolved suite has something to run.

    Raises:
        NoTestsFound: If the suite has no test components.
    """
    if not suite.components:
        raise NoTestsFound()


def validate_run(request: RunRequest, suite: TestSuite) -> None:
    """Run every pre-run check, empty suites first."""
    validate_suite(suite)
    validate_output(request)
