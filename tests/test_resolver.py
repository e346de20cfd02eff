"""Specifier resolution tests.

Covers the merge rules of SpecifierResolver with a fake backend, and
the unittest-based backend against throwaway projects on disk.
"""

import unittest

import pytest

from runtests.config import RunnerConfig
from runtests.discovery import SpecifierResolver, TestSuite, UnittestResolver
from runtests.errors import ErrorKind, UnresolvedSpecifier

from conftest import FakeBackend, make_case


@pytest.fixture
def backend():
    a = TestSuite("moduleA", "/src/moduleA.py", [make_case("A1"), make_case("A2")])
    b = TestSuite("moduleB", "/src/moduleB.py", [make_case("B1"), make_case("B2"), make_case("B3")])
    default = TestSuite("cwd", "/work/cwd", [make_case("D1")])
    return FakeBackend({"moduleA": a, "moduleB": b}, default=default)


def _ids(suite):
    return [test.id() for test in suite.components]


def test_no_names_resolves_default(backend):
    suite = SpecifierResolver(backend).resolve([])
    assert backend.calls == [None]
    assert suite.name == "cwd"
    assert _ids(suite) == ["D1"]


def test_single_name_is_returned_directly(backend):
    suite = SpecifierResolver(backend).resolve(["moduleB"])
    assert backend.calls == ["moduleB"]
    assert suite.name == "moduleB"
    assert suite.location == "/src/moduleB.py"
    assert _ids(suite) == ["B1", "B2", "B3"]


def test_many_names_concatenate_in_order(backend):
    suite = SpecifierResolver(backend).resolve(["moduleA", "moduleB"])
    assert _ids(suite) == ["A1", "A2", "B1", "B2", "B3"]
    assert suite.name == "moduleA, moduleB"
    assert suite.location == "/src/moduleA.py; /src/moduleB.py"


def test_repeated_names_are_not_deduplicated(backend):
    suite = SpecifierResolver(backend).resolve(["moduleB", "moduleA", "moduleB"])
    assert _ids(suite) == ["B1", "B2", "B3", "A1", "A2", "B1", "B2", "B3"]


def test_unknown_name_aborts_whole_resolution(backend):
    with pytest.raises(UnresolvedSpecifier) as exc_info:
        SpecifierResolver(backend).resolve(["moduleA", "nope", "moduleB"])
    assert exc_info.value.specifier == "nope"
    assert exc_info.value.kind == ErrorKind.UNRESOLVED_SPECIFIER
    assert backend.calls == ["moduleA", "nope"]


def test_default_discovers_working_directory(project):
    project.write_case("test_alpha.py", "AlphaTest", passing=["test_one", "test_two"])
    project.write_case("test_beta.py", "BetaTest", passing=["test_three"])
    project.write("helper.py", "VALUE = 1\n")

    suite = UnittestResolver(project.context).resolve_default()

    assert suite.location == str(project.context.directory)
    assert suite.name == project.context.directory.name
    assert _ids(suite) == [
        "test_alpha.AlphaTest.test_one",
        "test_alpha.AlphaTest.test_two",
        "test_beta.BetaTest.test_three",
    ]


def test_default_with_no_tests_is_empty(project):
    project.write("notes.txt", "nothing here")
    assert UnittestResolver(project.context).resolve_default().components == []


def test_configured_pattern(project):
    project.write_case("check_gamma.py", "GammaTest", passing=["test_g"])
    project.write_case("test_delta.py", "DeltaTest", passing=["test_d"])

    resolver = UnittestResolver(project.context, RunnerConfig(pattern="check_*.py"))
    assert _ids(resolver.resolve_default()) == ["check_gamma.GammaTest.test_g"]


def test_directory(project):
    project.write_case("suite_dir/test_epsilon.py", "EpsilonTest", passing=["test_e"])

    suite = UnittestResolver(project.context).resolve_one("suite_dir")

    assert suite.name == "suite_dir"
    assert suite.location == str(project.context.directory / "suite_dir")
    assert _ids(suite) == ["test_epsilon.EpsilonTest.test_e"]


def test_package_directory(project):
    project.write("pkg_zeta/__init__.py")
    project.write_case("pkg_zeta/test_inner.py", "InnerTest", passing=["test_i"])

    suite = UnittestResolver(project.context).resolve_one("pkg_zeta")

    assert _ids(suite) == ["pkg_zeta.test_inner.InnerTest.test_i"]


def test_dotted_package_name(project):
    project.write("outer_eta/__init__.py")
    project.write("outer_eta/inner/__init__.py")
    project.write_case("outer_eta/inner/test_leaf.py", "LeafTest", passing=["test_l"])

    suite = UnittestResolver(project.context).resolve_one("outer_eta.inner")

    assert suite.location == str(project.context.directory / "outer_eta" / "inner")
    assert _ids(suite) == ["outer_eta.inner.test_leaf.LeafTest.test_l"]


def test_module_name(project):
    path = project.write_case("test_theta.py", "ThetaTest", passing=["test_a", "test_b"])

    suite = UnittestResolver(project.context).resolve_one("test_theta")

    assert suite.name == "test_theta"
    assert suite.location == str(path.resolve())
    assert _ids(suite) == ["test_theta.ThetaTest.test_a", "test_theta.ThetaTest.test_b"]


def test_file_path(project):
    project.write_case("files/test_iota.py", "IotaTest", passing=["test_x"])

    suite = UnittestResolver(project.context).resolve_one("files/test_iota.py")

    assert suite.location == str((project.root / "files" / "test_iota.py").resolve())
    assert [t._testMethodName for t in suite.components] == ["test_x"]


def test_class_name(project):
    project.write_case("test_kappa.py", "KappaTest", passing=["test_a", "test_b"])
    project.write_case("test_kappa_other.py", "OtherTest", passing=["test_c"])

    suite = UnittestResolver(project.context).resolve_one("test_kappa.KappaTest")
    assert _ids(suite) == ["test_kappa.KappaTest.test_a", "test_kappa.KappaTest.test_b"]


def test_method_name(project):
    project.write_case("test_lambda.py", "LambdaTest", passing=["test_a", "test_b"])

    suite = UnittestResolver(project.context).resolve_one("test_lambda.LambdaTest.test_b")
    assert _ids(suite) == ["test_lambda.LambdaTest.test_b"]


def test_selector_on_class(project):
    project.write_case("test_mu.py", "MuTest", passing=["test_a", "test_b"])

    suite = UnittestResolver(project.context).resolve_one("test_mu.MuTest:test_a")

    assert suite.name == "test_mu.MuTest:test_a"
    assert _ids(suite) == ["test_mu.MuTest.test_a"]


def test_selector_on_module(project):
    project.write_case("test_nu.py", "NuTest", passing=["test_a", "test_b"])

    suite = UnittestResolver(project.context).resolve_one("test_nu:NuTest.test_b")
    assert _ids(suite) == ["test_nu.NuTest.test_b"]


def test_selector_on_file(project):
    project.write_case("test_xi.py", "XiTest", passing=["test_a", "test_b"])

    suite = UnittestResolver(project.context).resolve_one("test_xi.py:XiTest.test_a")
    assert [t._testMethodName for t in suite.components] == ["test_a"]


def test_plain_function(project):
    project.write("test_omicron.py", """
        def test_plain():
            assert 1 + 1 == 2
    """)

    resolver = UnittestResolver(project.context)
    by_name = resolver.resolve_one("test_omicron.test_plain")
    by_selector = resolver.resolve_one("test_omicron:test_plain")

    for suite in (by_name, by_selector):
        assert len(suite.components) == 1
        assert isinstance(suite.components[0], unittest.FunctionTestCase)


@pytest.mark.parametrize("name", [
    "no_such_module_pi",
    "test_rho.Missing",
    "test_rho:test_missing",
    "test_rho:VALUE",
    "bad..name",
    "",
])
def test_unresolved(project, name):
    path = project.write_case("test_rho.py", "RhoTest", passing=["test_a"])
    project.write("test_rho.py", path.read_text() + "\nVALUE = 3\n")

    with pytest.raises(UnresolvedSpecifier) as exc_info:
        UnittestResolver(project.context).resolve_one(name)
    assert exc_info.value.specifier == name


def test_broken_import_is_unresolved(project):
    project.write("test_sigma.py", "import definitely_not_installed_sigma\n")

    with pytest.raises(UnresolvedSpecifier) as exc_info:
        UnittestResolver(project.context).resolve_one("test_sigma")
    assert "definitely_not_installed_sigma" in str(exc_info.value)


def test_merge_of_real_specifiers(project):
    project.write_case("test_tau.py", "TauTest", passing=["test_1", "test_2"])
    project.write_case("test_upsilon.py", "UpsilonTest", passing=["test_1", "test_2", "test_3"])

    resolver = SpecifierResolver(UnittestResolver(project.context))
    suite = resolver.resolve(["test_tau", "test_upsilon"])

    assert [t.id().split(".", 1)[0] for t in suite.components] == ["test_tau"] * 2 + ["test_upsilon"] * 3


def test_directories_sharing_module_names(project):
    for name, value in (("proj_a", "a"), ("proj_b", "b")):
        project.write(f"{name}/tests/helpers.py", f"ORIGIN = {value!r}\n")
        project.write(f"{name}/tests/test_utils.py", f"""
            import unittest

            import helpers


            class UtilsTest(unittest.TestCase):
                def test_origin(self):
                    self.assertEqual(helpers.ORIGIN, {value!r})
        """)

    resolver = SpecifierResolver(UnittestResolver(project.context))
    suite = resolver.resolve(["proj_a/tests", "proj_b/tests"])

    assert _ids(suite) == ["test_utils.UtilsTest.test_origin"] * 2
    first, second = suite.components
    assert type(first) is not type(second)
    result = unittest.TestResult()
    suite.to_unittest().run(result)
    assert result.wasSuccessful(), result.failures + result.errors


def test_missing_dependency_with_a_prefix_name_is_reported(project):
    project.write("test_dep_user.py", "import test_dep\n")

    with pytest.raises(UnresolvedSpecifier) as exc_info:
        UnittestResolver(project.context).resolve_one("test_dep_user")
    assert "No module named 'test_dep'" in str(exc_info.value)
