"""Specifier resolution.

SpecifierResolver merges one or many specifiers into a single TestSuite.
The lookup of each individual specifier is delegated to a resolution
backend; UnittestResolver is the default backend built on
unittest.TestLoader.

A specifier is resolved by trying, in order:
1. An existing directory (test discovery inside it)
2. An existing .py file
3. 'container:test' (one named test within a module or class)
4. A dotted import name (package, module, TestCase class, test method,
   or plain test function)
"""

import importlib
import importlib.util
import inspect
import logging
import os
import sys
import types
import unittest
from pathlib import Path
from typing import Optional, Protocol, Sequence

from ..config import RunnerConfig, WorkingContext
from ..errors import UnresolvedSpecifier
from .suite import TestSuite

logger = logging.getLogger(__name__)


class ResolutionBackend(Protocol):
    """Looks up test collections for individual specifiers."""

    def resolve_default(self) -> TestSuite:
        ...

    def resolve_one(self, name: str) -> TestSuite:
        ...


class SpecifierResolver:
    """Turns an ordered list of specifiers into one TestSuite."""

    def __init__(self, backend: ResolutionBackend):
        self.backend = backend

    def resolve(self, names: Sequence[str]) -> TestSuite:
        """Resolve specifiers into a single suite.

        No names resolves the working context; one name is returned as
        resolved; several are concatenated in order without deduplication.

        Raises:
            UnresolvedSpecifier: If any name cannot be resolved.
        """
        if len(names) == 0:
            return self.backend.resolve_default()
        if len(names) == 1:
            return self.backend.resolve_one(names[0])

        suite = TestSuite()
        locations: list[str] = []
        for name in names:
            part = self.backend.resolve_one(name)
            logger.debug("Resolved %s to %d test(s)", name, part.count)
            suite.add(part)
            if part.location and part.location not in locations:
                locations.append(part.location)

        suite.name = ", ".join(names)
        suite.location = "; ".join(locations)
        return suite


class UnittestResolver:
    """Resolution backend built on unittest.TestLoader."""

    def __init__(
        self,
        context: Optional[WorkingContext] = None,
        config: Optional[RunnerConfig] = None,
    ):
        self.context = context or WorkingContext.current()
        self.config = config or RunnerConfig()
        # Directories discovered as their own top level; their modules
        # are imported under bare names
        self._standalone_roots: list[Path] = []

    @property
    def top_level_dir(self) -> str:
        if self.config.top_level_dir:
            return str((self.context.directory / self.config.top_level_dir).resolve())
        return str(self.context.directory)

    def resolve_default(self) -> TestSuite:
        """Discover every test under the working context directory."""
        directory = str(self.context.directory)
        tests = self._discover(directory, directory, top_level_dir=self.top_level_dir)
        return TestSuite.from_unittest(
            tests, name=os.path.basename(directory) or directory, location=directory
        )

    def resolve_one(self, name: str) -> TestSuite:
        """Resolve a single specifier.

        Raises:
            UnresolvedSpecifier: If nothing matches the name.
        """
        if not name:
            raise UnresolvedSpecifier(name, "empty name")

        path = self._as_path(name)
        if path is not None and path.is_dir():
            logger.debug("Resolving %s as a directory", name)
            return self._from_directory(name, path)
        if path is not None and path.is_file() and path.suffix == ".py":
            logger.debug("Resolving %s as a file", name)
            return self._from_file(name, path)

        container, sep, test_name = name.rpartition(":")
        if sep and container and test_name:
            logger.debug("Resolving %s as a single test", name)
            return self._from_selector(name, container, test_name)

        logger.debug("Resolving %s as an import name", name)
        return self._from_import(name)

    def _loader(self) -> unittest.TestLoader:
        # TestLoader.discover keeps state between calls
        return unittest.TestLoader()

    def _discover(self, name: str, start: str, top_level_dir: Optional[str] = None) -> unittest.TestSuite:
        self._ensure_importable()
        try:
            return self._loader().discover(
                start, pattern=self.config.pattern, top_level_dir=top_level_dir
            )
        except ImportError as e:
            raise UnresolvedSpecifier(name, str(e)) from e

    def _ensure_importable(self) -> None:
        for directory in (self.top_level_dir, str(self.context.directory)):
            if directory not in sys.path:
                sys.path.insert(0, directory)

    def _as_path(self, name: str) -> Optional[Path]:
        path = Path(name)
        if not path.is_absolute():
            path = self.context.directory / path
        try:
            if path.exists():
                return path.resolve()
        except OSError:
            return None
        return None

    def _from_directory(self, name: str, path: Path) -> TestSuite:
        # Only packages can be discovered relative to an outer top level
        top_level_dir = self.top_level_dir
        is_package = (path / "__init__.py").is_file()
        if not is_package or not _is_relative_to(path, Path(top_level_dir)):
            top_level_dir = str(path)
            self._isolate(path)
        tests = self._discover(name, str(path), top_level_dir=top_level_dir)
        return TestSuite.from_unittest(tests, name=name, location=str(path))

    def _isolate(self, path: Path) -> None:
        """Prepare a standalone directory for discovery.

        Modules that an earlier standalone directory imported under a name
        this directory also uses are dropped from sys.modules, and the
        directory moves to the front of sys.path, so its own modules are
        the ones imported. Tests already loaded keep their classes.
        """
        self._ensure_importable()
        others = [root for root in self._standalone_roots if root != path]
        for module_name, module in list(sys.modules.items()):
            module_file = getattr(module, "__file__", None)
            if not module_file:
                continue
            origin = Path(module_file).resolve()
            if _is_relative_to(origin, path) or not any(_is_relative_to(origin, root) for root in others):
                continue
            top = module_name.partition(".")[0]
            if (path / f"{top}.py").is_file() or (path / top).is_dir():
                logger.debug("Dropping %s imported from %s", module_name, origin)
                del sys.modules[module_name]

        directory = str(path)
        if directory in sys.path:
            sys.path.remove(directory)
        sys.path.insert(0, directory)
        if path not in self._standalone_roots:
            self._standalone_roots.append(path)

    def _from_file(self, name: str, path: Path) -> TestSuite:
        module = self._import_file(name, path)
        tests = self._loader().loadTestsFromModule(module)
        return TestSuite.from_unittest(tests, name=name, location=str(path))

    def _import_file(self, name: str, path: Path) -> types.ModuleType:
        self._ensure_importable()
        module_name = _module_name_for(path, Path(self.top_level_dir))
        existing = sys.modules.get(module_name)
        existing_file = getattr(existing, "__file__", None)
        if existing_file and Path(existing_file).resolve() == path:
            return existing

        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise UnresolvedSpecifier(name, f"cannot import {path}")
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            del sys.modules[module_name]
            raise UnresolvedSpecifier(name, f"import of {path} failed ({e})") from e
        return module

    def _from_selector(self, name: str, container: str, test_name: str) -> TestSuite:
        path = self._as_path(container)
        if path is not None and path.is_file() and path.suffix == ".py":
            parent = self._import_file(name, path)
            location = str(path)
        else:
            parent = self._import_object(name, container)
            location = _source_location(parent)

        tests = self._tests_for(name, parent, test_name)
        return TestSuite.from_unittest(tests, name=name, location=location)

    def _from_import(self, name: str) -> TestSuite:
        obj = self._import_object(name, name)

        if isinstance(obj, types.ModuleType) and hasattr(obj, "__path__"):
            package_dir = str(Path(list(obj.__path__)[0]).resolve())
            tests = self._discover(name, package_dir, top_level_dir=_package_root(obj))
            return TestSuite.from_unittest(tests, name=name, location=package_dir)

        if isinstance(obj, types.ModuleType):
            tests = self._loader().loadTestsFromModule(obj)
        elif isinstance(obj, type) and issubclass(obj, unittest.TestCase):
            tests = self._loader().loadTestsFromTestCase(obj)
        else:
            parent_name, _, attr = name.rpartition(".")
            parent = self._import_object(name, parent_name) if parent_name else None
            tests = self._tests_for(name, parent, attr, obj=obj)

        return TestSuite.from_unittest(tests, name=name, location=_source_location(obj))

    def _tests_for(self, name: str, parent, test_name: str, obj=None):
        """Build tests for one named member of a module or TestCase class."""
        if obj is None:
            obj = parent
            for part in test_name.split("."):
                if not hasattr(obj, part):
                    raise UnresolvedSpecifier(name, f"no test named '{test_name}'")
                parent, obj = obj, getattr(obj, part)

        if isinstance(parent, type) and issubclass(parent, unittest.TestCase) and callable(obj):
            return parent(test_name.rpartition(".")[2])
        if isinstance(obj, type) and issubclass(obj, unittest.TestCase):
            return self._loader().loadTestsFromTestCase(obj)
        if isinstance(obj, (unittest.TestSuite, unittest.TestCase)):
            return obj
        if inspect.isfunction(obj):
            return unittest.FunctionTestCase(obj)

        raise UnresolvedSpecifier(name, f"'{test_name}' is not a test")

    def _import_object(self, name: str, dotted: str):
        """Import the longest importable module prefix, then walk attributes."""
        self._ensure_importable()
        parts = dotted.split(".")
        if not all(parts):
            raise UnresolvedSpecifier(name, "not a valid import name")

        module = None
        remaining = list(parts)
        while remaining:
            module_name = ".".join(remaining)
            try:
                module = importlib.import_module(module_name)
                break
            except ModuleNotFoundError as e:
                if e.name is None or not (module_name == e.name or module_name.startswith(e.name + ".")):
                    raise UnresolvedSpecifier(name, str(e)) from e
                remaining.pop()
            except Exception as e:
                raise UnresolvedSpecifier(name, f"import of {module_name} failed ({e})") from e

        if module is None:
            raise UnresolvedSpecifier(name, "no such directory, file, or module")

        obj = module
        for part in parts[len(remaining):]:
            try:
                obj = getattr(obj, part)
            except AttributeError as e:
                raise UnresolvedSpecifier(name, f"'{part}' not found") from e
        return obj


def _is_relative_to(path: Path, other: Path) -> bool:
    try:
        path.relative_to(other)
        return True
    except ValueError:
        return False


def _module_name_for(path: Path, top_level_dir: Path) -> str:
    """Dotted module name for a file, relative to the top level directory."""
    if _is_relative_to(path, top_level_dir):
        relative = path.relative_to(top_level_dir).with_suffix("")
        return ".".join(relative.parts)
    return path.stem


def _package_root(package: types.ModuleType) -> str:
    """Directory that must be on sys.path for a package to import."""
    root = Path(list(package.__path__)[0]).resolve()
    for _ in package.__name__.split("."):
        root = root.parent
    return str(root)


def _source_location(obj) -> str:
    try:
        source = inspect.getsourcefile(obj)
    except TypeError:
        source = None
    if source:
        return str(Path(source).resolve())
    module = inspect.getmodule(obj)
    return getattr(module, "__file__", None) or ""
