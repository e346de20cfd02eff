"""Option parser for test runs.

Turns a mixed list of flags, names and nested name lists into a
RunRequest.
"""

import warnings
from typing import Sequence

from ..errors import MissingOptionValue, UnrecognizedOptionWarning
from .schema import (
    LOGFILE_OPTION,
    SUPPRESS_OPTION,
    VERBOSE_OPTION,
    XMLFILE_OPTION,
    RawArg,
    RunRequest,
)


def _is_nested(arg: RawArg) -> bool:
    return not isinstance(arg, str)


def flatten_names(raw_args: Sequence[RawArg]) -> list[str]:
    """Flatten nested name lists, keeping every token in order.

    Nested entries are expanded in place; plain tokens pass through.
    """
    flat: list[str] = []
    for arg in raw_args:
        if _is_nested(arg):
            flat.extend(str(name) for name in arg)
        else:
            flat.append(arg)
    return flat


def parse_options(raw_args: Sequence[RawArg]) -> RunRequest:
    """Parse raw arguments into a RunRequest.

    Args:
        raw_args: Tokens in order. A nested list contributes its members
            as specifier names, never as options.

    Returns:
        The parsed RunRequest.

    Raises:
        MissingOptionValue: If -logfile or -xmlfile has no following value.
    """
    names: list[str] = []
    verbose = False
    suppress = False
    logfile = None
    xmlfile = None

    i = 0
    while i < len(raw_args):
        arg = raw_args[i]

        if _is_nested(arg):
            names.extend(flatten_names([arg]))
        elif arg.startswith("-"):
            if arg == VERBOSE_OPTION:
                verbose = True
            elif arg == SUPPRESS_OPTION:
                suppress = True
            elif arg == LOGFILE_OPTION:
                logfile = _option_value(raw_args, i)
                i += 1
            elif arg == XMLFILE_OPTION:
                xmlfile = _option_value(raw_args, i)
                i += 1
            else:
                warnings.warn(UnrecognizedOptionWarning(arg), stacklevel=2)
        else:
            names.append(arg)

        i += 1

    return RunRequest(
        names=tuple(names),
        verbose=verbose,
        suppress=suppress,
        logfile=logfile,
        xmlfile=xmlfile,
    )


def _option_value(raw_args: Sequence[RawArg], index: int) -> str:
    """Return the value following the option at index."""
    option = raw_args[index]
    if index + 1 >= len(raw_args) or _is_nested(raw_args[index + 1]):
        raise MissingOptionValue(option)
    return raw_args[index + 1]
