"""Options module - argument parsing and run request validation."""

from .schema import (
    LOGFILE_OPTION,
    SUPPRESS_OPTION,
    VERBOSE_OPTION,
    XMLFILE_OPTION,
    RawArg,
    RunRequest,
)
from .parser import flatten_names, parse_options
from .validator import validate_output, validate_run, validate_suite

__all__ = [
    "LOGFILE_OPTION",
    "SUPPRESS_OPTION",
    "VERBOSE_OPTION",
    "XMLFILE_OPTION",
    "RawArg",
    "RunRequest",
    "flatten_names",
    "parse_options",
    "validate_output",
    "validate_run",
    "validate_suite",
]
