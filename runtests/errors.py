"""Error taxonomy for test runs.

Every fatal condition is a subclass of RunTestsError tagged with an
ErrorKind. Unrecognized options are not fatal and are reported through
the warnings module instead.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Closed set of conditions a run can report."""
    INVALID_OPTION = "invalid_option"
    MISSING_OPTION_VALUE = "missing_option_value"
    UNRESOLVED_SPECIFIER = "unresolved_specifier"
    NO_TESTS_FOUND = "no_tests_found"
    CONFLICTING_OUTPUT_CONFIG = "conflicting_output_config"
    FILE_OPEN_FAILURE = "file_open_failure"
    INVALID_CONFIG = "invalid_config"


class RunTestsError(Exception):
    """Base exception for fatal run errors."""

    kind: ErrorKind


class MissingOptionValue(RunTestsError):
    """A value-taking option was the last token."""

    kind = ErrorKind.MISSING_OPTION_VALUE

    def __init__(self, option: str) -> None:
        self.option = option
        super().__init__(f"The option {option} must be followed by a filename.")


class UnresolvedSpecifier(RunTestsError):
    """A positional name did not match any test artifact."""

    kind = ErrorKind.UNRESOLVED_SPECIFIER

    def __init__(self, specifier: str, reason: Optional[str] = None) -> None:
        self.specifier = specifier
        self.reason = reason
        message = f"Could not find tests for '{specifier}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class NoTestsFound(RunTestsError):
    kind = ErrorKind.NO_TESTS_FOUND

    def __init__(self) -> None:
        super().__init__("No test cases found.")


class ConflictingOutputConfig(RunTestsError):
    kind = ErrorKind.CONFLICTING_OUTPUT_CONFIG

    def __init__(self) -> None:
        super().__init__(
            "You should specify at least one way to get your test results "
            "(-logfile or -xmlfile) when using -suppress."
        )


class FileOpenFailure(RunTestsError):
    """The log file could not be opened for writing."""

    kind = ErrorKind.FILE_OPEN_FAILURE

    def __init__(self, path: str, reason: Optional[str] = None) -> None:
        self.path = path
        self.reason = reason
        message = f'Could not open "{path}" for writing.'
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class InvalidConfig(RunTestsError):
    """The runner configuration file is malformed."""

    kind = ErrorKind.INVALID_CONFIG

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"Invalid config {path}: {message}")


class UnrecognizedOptionWarning(UserWarning):
    """Issued for a '-' token that is not a known option."""

    kind = ErrorKind.INVALID_OPTION

    def __init__(self, option: str) -> None:
        self.option = option
        super().__init__(f"Unrecognized option: {option}")
