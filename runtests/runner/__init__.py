"""Runner module - test execution and run orchestration."""

from .executor import TestExecutor
from .orchestrator import TestRunOrchestrator, run_tests
from .result_collector import ResultCollector

__all__ = [
    "TestExecutor",
    "TestRunOrchestrator",
    "run_tests",
    "ResultCollector",
]
