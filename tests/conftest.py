from __future__ import annotations

import importlib
import sys
import textwrap
import unittest
from pathlib import Path

import pytest

from runtests.config import RunnerConfig, WorkingContext
from runtests.discovery.suite import TestSuite
from runtests.errors import UnresolvedSpecifier


PASSING_MODULE = """
import unittest


class {cls}(unittest.TestCase):
{methods}
"""


class Project:
    """A throwaway unittest project on disk."""

    def __init__(self, root: Path):
        self.root = root

    @property
    def context(self) -> WorkingContext:
        return WorkingContext.of(self.root)

    def write(self, relative: str, source: str = "") -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        importlib.invalidate_caches()
        return path

    def write_case(self, relative: str, cls: str, passing=(), failing=()) -> Path:
        methods = [f"    def {name}(self):\n        pass\n" for name in passing]
        methods += [f"    def {name}(self):\n        self.fail('boom')\n" for name in failing]
        body = "\n".join(methods) or "    pass\n"
        return self.write(relative, PASSING_MODULE.format(cls=cls, methods=body))


@pytest.fixture
def project(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "path", list(sys.path))
    monkeypatch.delenv("RUNTESTS_CONFIG", raising=False)
    yield Project(tmp_path)

    root = str(tmp_path)
    for name, module in list(sys.modules.items()):
        module_file = getattr(module, "__file__", None) or ""
        module_path = list(getattr(module, "__path__", []) or [])
        if module_file.startswith(root) or any(str(p).startswith(root) for p in module_path):
            del sys.modules[name]


def make_case(name: str, passes: bool = True) -> unittest.TestCase:
    """A standalone test case that passes or fails."""
    def test():
        if not passes:
            raise AssertionError(f"{name} failed")

    test.__name__ = name
    test.__module__ = "fake_tests"
    return unittest.FunctionTestCase(test)


class FakeBackend:
    """Resolution backend returning canned suites and recording calls."""

    def __init__(self, suites: dict[str, TestSuite] | None = None, default: TestSuite | None = None):
        self.suites = suites or {}
        self.default = default if default is not None else TestSuite(name="cwd", location="/work/cwd")
        self.calls: list[str | None] = []

    def resolve_default(self) -> TestSuite:
        self.calls.append(None)
        return TestSuite(self.default.name, self.default.location, list(self.default.components))

    def resolve_one(self, name: str) -> TestSuite:
        self.calls.append(name)
        if name not in self.suites:
            raise UnresolvedSpecifier(name)
        suite = self.suites[name]
        return TestSuite(suite.name, suite.location, list(suite.components))


@pytest.fixture
def config() -> RunnerConfig:
    return RunnerConfig()
