"""runtests - run unittest suites named by directories, packages,
modules, classes, functions or single tests, with console, log file and
JUnit XML reporting.
"""

from .errors import (
    ConflictingOutputConfig,
    ErrorKind,
    FileOpenFailure,
    InvalidConfig,
    MissingOptionValue,
    NoTestsFound,
    RunTestsError,
    UnrecognizedOptionWarning,
    UnresolvedSpecifier,
)
from .runner.orchestrator import TestRunOrchestrator, run_tests

__version__ = "0.1.0"

__all__ = [
    "ConflictingOutputConfig",
    "ErrorKind",
    "FileOpenFailure",
    "InvalidConfig",
    "MissingOptionValue",
    "NoTestsFound",
    "RunTestsError",
    "UnrecognizedOptionWarning",
    "UnresolvedSpecifier",
    "TestRunOrchestrator",
    "run_tests",
]
