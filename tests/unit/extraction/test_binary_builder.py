"""Unit tests for the binary descriptor builder."""

from pathlib import Path
from unittest.mock import patch

import pytest

from vsconfig.extraction import BinaryDescriptorBuilder, DependencySourcesError, format_macros
from vsconfig.graph import (
    CompilerConfig,
    LanguageSourceInput,
    LibraryDependency,
    PrebuiltLibrary,
    SourceDirectorySet,
    SourceKind,
    SourceLibrary,
)
from vsconfig.model import SourceGroup


class CountingLibrary(LibraryDependency):
    """Dependency that records how often its sources are requested."""

    calls = 0

    def source_files(self):
        CountingLibrary.calls += 1
        return [Path("gen/counting.cpp")]


class BrokenLibrary(LibraryDependency):
    def source_files(self):
        raise RuntimeError("source set not configured")


class TestFormatMacros:
    def test_name_value_and_plain(self):
        assert format_macros({"A": "1", "B": None, "C": ""}) == ["-DA=1", "-DB", "-DC="]


class TestBuildSourceSets:
    """Tests for source set construction."""

    def test_cpp_and_c_source_sets(self, make_binary):
        """Each source set carries only its own language's macros and args."""
        binary = make_binary(
            inputs=[
                LanguageSourceInput("cpp", SourceKind.CPP, SourceDirectorySet(src_dirs=["src"])),
                LanguageSourceInput("c", SourceKind.C, SourceDirectorySet(src_dirs=["csrc"])),
            ],
            cpp_compiler=CompilerConfig(args=["-std=c++17"], macros={"CPP_ONLY": "1"}),
            c_compiler=CompilerConfig(args=["-std=c11"], macros={"C_ONLY": "1"}),
        )
        result = BinaryDescriptorBuilder().build(binary)

        assert result is not None
        sets = result.descriptor.source_sets
        assert len(sets) == 2
        cpp_set, c_set = sets
        assert cpp_set.cpp is True
        assert cpp_set.args == ["-std=c++17"]
        assert cpp_set.macros == ["-DCPP_ONLY=1"]
        assert cpp_set.source == SourceGroup.of(["src"])
        assert c_set.cpp is False
        assert c_set.args == ["-std=c11"]
        assert c_set.macros == ["-DC_ONLY=1"]
        assert c_set.source == SourceGroup.of(["csrc"])

    def test_unrecognized_kinds_skipped(self, make_binary):
        binary = make_binary(
            inputs=[
                LanguageSourceInput("asm", SourceKind.ASM, SourceDirectorySet(src_dirs=["asm"])),
                LanguageSourceInput("rc", SourceKind.WINDOWS_RESOURCES, SourceDirectorySet(src_dirs=["rc"])),
                LanguageSourceInput("cpp", SourceKind.CPP, SourceDirectorySet(src_dirs=["src"])),
            ]
        )
        result = BinaryDescriptorBuilder().build(binary)
        assert result is not None
        assert len(result.descriptor.source_sets) == 1

    def test_patterns_copied_and_exports(self, make_binary):
        binary = make_binary(
            inputs=[
                LanguageSourceInput(
                    "cpp",
                    SourceKind.CPP,
                    SourceDirectorySet(src_dirs=["src"], includes=["**/*.cpp"], excludes=["**/test_*.cpp"]),
                    SourceDirectorySet(src_dirs=["include"], includes=["**/*.h"]),
                )
            ]
        )
        source_set = BinaryDescriptorBuilder().build(binary).descriptor.source_sets[0]
        assert source_set.source == SourceGroup.of(["src"], ["**/*.cpp"], ["**/test_*.cpp"])
        assert source_set.exported_headers == SourceGroup.of(["include"], ["**/*.h"])

    def test_missing_exported_headers_is_empty_group(self, make_binary):
        binary = make_binary(inputs=[LanguageSourceInput("c", SourceKind.C, SourceDirectorySet(src_dirs=["csrc"]))])
        source_set = BinaryDescriptorBuilder().build(binary).descriptor.source_sets[0]
        assert source_set.exported_headers == SourceGroup()

    def test_source_and_export_roots_normalized(self, make_binary):
        binary = make_binary(
            inputs=[
                LanguageSourceInput(
                    "cpp",
                    SourceKind.CPP,
                    SourceDirectorySet(src_dirs=["c:\\proj\\src"], includes=["c:\\keep"]),
                    SourceDirectorySet(src_dirs=["d:\\proj\\include"]),
                )
            ],
        )
        source_set = BinaryDescriptorBuilder(windows=True).build(binary).descriptor.source_sets[0]
        assert source_set.source.src_dirs == frozenset({"C:\\proj\\src"})
        assert source_set.source.includes == frozenset({"c:\\keep"})
        assert source_set.exported_headers.src_dirs == frozenset({"D:\\proj\\include"})

    def test_non_buildable_skipped(self, make_binary):
        assert BinaryDescriptorBuilder().build(make_binary(buildable=False)) is None

    def test_component_name(self, make_binary):
        assert BinaryDescriptorBuilder().build(make_binary("gamma")).descriptor.component_name == "gamma"


class TestLibraryDependencies:
    """Tests for library header and source aggregation."""

    def test_headers_and_sources(self, make_binary):
        binary = make_binary(
            libs=[
                PrebuiltLibrary([Path("/opt/foo/include")]),
                SourceLibrary([Path("libs/bar/include")], [Path("libs/bar/bar.cpp"), Path("libs/bar/baz.cpp")]),
            ]
        )
        result = BinaryDescriptorBuilder().build(binary)
        assert result.descriptor.lib_headers == [str(Path("/opt/foo/include")), str(Path("libs/bar/include"))]
        assert result.lib_sources == [str(Path("libs/bar/bar.cpp")), str(Path("libs/bar/baz.cpp"))]

    def test_capability_cached_per_type(self, make_binary):
        builder = BinaryDescriptorBuilder()
        builder.build(make_binary(libs=[PrebuiltLibrary([]), PrebuiltLibrary([]), SourceLibrary([], [])]))
        builder.build(make_binary("beta", libs=[PrebuiltLibrary([])]))
        assert builder._contributor_types == {PrebuiltLibrary: False, SourceLibrary: True}

    def test_capability_check_runs_once_per_type(self, make_binary):
        builder = BinaryDescriptorBuilder()
        CountingLibrary.calls = 0
        with patch.object(
            BinaryDescriptorBuilder,
            "_implements_source_files",
            wraps=BinaryDescriptorBuilder._implements_source_files,
        ) as check:
            for name in ["a", "b", "c"]:
                builder.build(make_binary(name, libs=[CountingLibrary([]), PrebuiltLibrary([])]))

        assert [type(call.args[0]) for call in check.call_args_list] == [CountingLibrary, PrebuiltLibrary]
        assert builder._contributor_types == {CountingLibrary: True, PrebuiltLibrary: False}
        assert CountingLibrary.calls == 3

    def test_failing_dependency_logged_and_skipped(self, make_binary, caplog):
        binary = make_binary(libs=[BrokenLibrary([Path("broken/include")])])
        with caplog.at_level("WARNING", logger="vsconfig.extraction.binary_builder"):
            result = BinaryDescriptorBuilder().build(binary)
        assert result.lib_sources == []
        assert result.descriptor.lib_headers == [str(Path("broken/include"))]
        assert "source set not configured" in caplog.text

    def test_failing_dependency_strict(self, make_binary):
        binary = make_binary(libs=[BrokenLibrary([])])
        with pytest.raises(DependencySourcesError) as exc_info:
            BinaryDescriptorBuilder(strict_dependencies=True).build(binary)
        assert exc_info.value.component_name == "alpha"
        assert isinstance(exc_info.value.__cause__, RuntimeError)
