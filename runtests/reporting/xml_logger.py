"""JUnit-compatible XML report writer.

Writes either one combined report file, or, when the target is a
directory, one TEST-<suite>.xml file per suite (the layout CI servers
such as Jenkins pick up per suite).
"""

import os
import re
import socket
import xml.etree.ElementTree as ET
from datetime import datetime
from pathlib import Path
from typing import Union

from .base import LogSink, RunSummary, TestInfo, TestOutcome, TestStatus


def is_directory_target(path: Union[str, Path]) -> bool:
    """Whether an -xmlfile target names a directory rather than a file."""
    text = str(path)
    return os.path.isdir(text) or text.endswith(("/", os.sep))


# Anything outside the XML 1.0 character range
_INVALID_XML_CHARS = re.compile(r"[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")
_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")


def xml_safe(text: str) -> str:
    """Strip terminal colour codes and characters XML cannot carry."""
    return _INVALID_XML_CHARS.sub("", _ANSI_ESCAPE.sub("", text))


def _safe_file_name(suite_name: str) -> str:
    return re.sub(r"[^A-Za-z0-9_.-]", "_", suite_name) or "suite"


class XMLTestRunLogger(LogSink):
    """Collects outcomes and writes the XML report when the run finishes."""

    def __init__(self, target: Union[str, Path]):
        self.target = Path(target)
        self.per_suite = is_directory_target(target)
        self.timestamp = datetime.now()

    def on_start(self, test: TestInfo) -> None:
        pass

    def on_result(self, outcome: TestOutcome) -> None:
        pass

    def on_finish(self, summary: RunSummary) -> None:
        groups = summary.by_suite()
        if self.per_suite:
            self.target.mkdir(parents=True, exist_ok=True)
            for suite_name, outcomes in groups.items():
                element = self._suite_element(suite_name, outcomes)
                self._write(element, self.target / f"TEST-{_safe_file_name(suite_name)}.xml")
        else:
            root = ET.Element("testsuites")
            self._set_counts(root, summary.outcomes)
            root.set("time", f"{summary.duration:.3f}")
            for suite_name, outcomes in groups.items():
                root.append(self._suite_element(suite_name, outcomes))
            self.target.parent.mkdir(parents=True, exist_ok=True)
            self._write(root, self.target)

    def _suite_element(self, suite_name: str, outcomes: list[TestOutcome]) -> ET.Element:
        element = ET.Element("testsuite")
        element.set("name", xml_safe(suite_name))
        self._set_counts(element, outcomes)
        element.set("time", f"{sum(o.duration for o in outcomes):.3f}")
        element.set("timestamp", self.timestamp.isoformat(timespec="seconds"))
        element.set("hostname", socket.gethostname())

        for outcome in outcomes:
            element.append(self._case_element(outcome))
        return element

    def _case_element(self, outcome: TestOutcome) -> ET.Element:
        case = ET.Element("testcase")
        case.set("classname", xml_safe(outcome.test.suite))
        case.set("name", xml_safe(outcome.test.name))
        case.set("time", f"{outcome.duration:.3f}")

        if outcome.status == TestStatus.FAILED:
            child = ET.SubElement(case, "failure")
        elif outcome.status == TestStatus.ERROR:
            child = ET.SubElement(case, "error")
        elif outcome.status == TestStatus.SKIPPED:
            child = ET.SubElement(case, "skipped")
        else:
            return case

        child.set("message", xml_safe(outcome.message))
        if outcome.details:
            child.text = xml_safe(outcome.details)
        return case

    @staticmethod
    def _set_counts(element: ET.Element, outcomes: list[TestOutcome]) -> None:
        element.set("tests", str(len(outcomes)))
        element.set("failures", str(sum(1 for o in outcomes if o.status == TestStatus.FAILED)))
        element.set("errors", str(sum(1 for o in outcomes if o.status == TestStatus.ERROR)))
        element.set("skipped", str(sum(1 for o in outcomes if o.status == TestStatus.SKIPPED)))

    @staticmethod
    def _write(element: ET.Element, path: Path) -> None:
        tree = ET.ElementTree(element)
        ET.indent(tree)
        tree.write(path, encoding="utf-8", xml_declaration=True)
