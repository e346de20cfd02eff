"""Reporting module - output sinks for test run events."""

from .base import LogSink, RunSummary, TestInfo, TestOutcome, TestStatus
from .composite import CompositeLogger
from .display import TestRunDisplay, VerboseTestRunDisplay
from .factory import SinkFactory
from .xml_logger import XMLTestRunLogger, is_directory_target

__all__ = [
    "LogSink",
    "RunSummary",
    "TestInfo",
    "TestOutcome",
    "TestStatus",
    "CompositeLogger",
    "TestRunDisplay",
    "VerboseTestRunDisplay",
    "SinkFactory",
    "XMLTestRunLogger",
    "is_directory_target",
]
