"""Run request data model.

Defines the structured request produced by the option parser.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Union

VERBOSE_OPTION = "-verbose"
SUPPRESS_OPTION = "-suppress"
LOGFILE_OPTION = "-logfile"
XMLFILE_OPTION = "-xmlfile"

# A raw argument is either a single token or a nested list of names.
RawArg = Union[str, Sequence[str]]


@dataclass(frozen=True)
class RunRequest:
    """Options and specifiers for a single test run."""
    names: tuple[str, ...] = ()
    verbose: bool = False
    suppress: bool = False
    logfile: Optional[str] = None
    xmlfile: Optional[str] = None

    @property
    def has_file_output(self) -> bool:
        """Whether results go to a log file or an XML report."""
        return bool(self.logfile) or bool(self.xmlfile)
