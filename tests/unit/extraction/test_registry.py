"""Unit tests for the toolchain registry and index pass."""

from unittest.mock import MagicMock

import pytest

from vsconfig.extraction import BinaryDescriptorBuilder, ToolchainRegistry, index_toolchain
from vsconfig.graph import GccToolChain, LanguageSourceInput, PrebuiltLibrary, SourceDirectorySet, SourceKind, SourceLibrary
from vsconfig.model import CompilerInfo, SourceGroup, ToolchainFamily, ToolchainIdentity
from vsconfig.toolchains import DiscoveryError


@pytest.fixture
def discovery():
    mock = MagicMock()
    mock.discover.return_value = CompilerInfo(family=ToolchainFamily.GCC, c_path="/usr/bin/gcc", cpp_path="/usr/bin/g++")
    return mock


def _register(registry, binary):
    result = BinaryDescriptorBuilder().build(binary)
    return registry.register(binary, result)


class TestToolchainRegistry:
    """Tests for identity grouping and discovery-once semantics."""

    def test_same_identity_shares_record(self, discovery, make_binary):
        registry = ToolchainRegistry(discovery)
        a = _register(registry, make_binary("alpha"))
        b = _register(registry, make_binary("beta", tool_chain=GccToolChain("clang")))

        assert a is b
        assert len(registry) == 1
        assert [d.component_name for d in a.binaries] == ["alpha", "beta"]
        discovery.discover.assert_called_once()

    def test_registration_order_independent(self, discovery, make_binary):
        for order in (["alpha", "beta"], ["beta", "alpha"]):
            registry = ToolchainRegistry(discovery)
            for name in order:
                _register(registry, make_binary(name))
            assert len(registry) == 1
            assert sorted(d.component_name for d in registry.records[0].binaries) == ["alpha", "beta"]

    def test_distinct_identities(self, discovery, make_binary, linux_arm):
        registry = ToolchainRegistry(discovery)
        _register(registry, make_binary("alpha"))
        _register(registry, make_binary("alpha", build_type="debug"))
        _register(registry, make_binary("alpha", flavor="sim"))
        _register(registry, make_binary("alpha", target_platform=linux_arm))
        assert len(registry) == 4
        assert discovery.discover.call_count == 4

    def test_record_populated_from_platform(self, discovery, make_binary, linux_x64):
        registry = ToolchainRegistry(discovery)
        record = _register(registry, make_binary())
        assert record.name == "linuxx86-64"
        assert record.identity == ToolchainIdentity("x86-64", "linux", "release", "release")
        assert record.compiler.cpp_path == "/usr/bin/g++"
        discovery.discover.assert_called_once_with(linux_x64, GccToolChain("gcc"))

    def test_lib_files_accumulate_across_binaries(self, discovery, make_binary, tmp_path):
        registry = ToolchainRegistry(discovery)
        _register(registry, make_binary("alpha", libs=[PrebuiltLibrary([tmp_path / "a"])]))
        record = _register(registry, make_binary("beta", libs=[SourceLibrary([tmp_path / "b"], [tmp_path / "b.cpp"])]))
        assert set(record.all_lib_files) == {str(tmp_path / "a"), str(tmp_path / "b"), str(tmp_path / "b.cpp")}

    def test_discovery_error_propagates(self, make_binary, linux_x64):
        failing = MagicMock()
        failing.discover.side_effect = DiscoveryError(linux_x64)
        registry = ToolchainRegistry(failing)
        with pytest.raises(DiscoveryError):
            _register(registry, make_binary())
        assert len(registry) == 0


class TestIndexToolchain:
    """Tests for the name index and source/binary pair set."""

    def test_name_index(self, discovery, make_binary):
        registry = ToolchainRegistry(discovery)
        _register(registry, make_binary("alpha"))
        record = _register(registry, make_binary("beta"))
        index_toolchain(record)
        assert record.name_binary_map == {"alpha": 0, "beta": 1}

    def test_duplicate_component_last_index_wins(self, discovery, make_binary):
        registry = ToolchainRegistry(discovery)
        for name in ["alpha", "beta", "alpha"]:
            record = _register(registry, make_binary(name))
        index_toolchain(record)
        assert record.name_binary_map == {"alpha": 2, "beta": 1}

    def test_two_pairs_per_source_set(self, discovery, make_binary):
        registry = ToolchainRegistry(discovery)
        record = _register(registry, make_binary("alpha"))
        index_toolchain(record)
        assert len(record.source_binaries) == 2
        assert SourceGroup.of(["alpha/src"], ["**/*.cpp"]) in record.source_binaries
        assert SourceGroup.of(["alpha/include"]) in record.source_binaries

    def test_shared_sources_collapse(self, discovery, make_binary):
        """Identical source groups from different components become one pair."""
        shared = [
            LanguageSourceInput(
                "cpp",
                SourceKind.CPP,
                SourceDirectorySet(src_dirs=["shared/src"]),
                SourceDirectorySet(src_dirs=["shared/include"]),
            )
        ]
        registry = ToolchainRegistry(discovery)
        _register(registry, make_binary("alpha", inputs=shared))
        record = _register(registry, make_binary("beta", inputs=shared))
        index_toolchain(record)

        assert len(record.source_binaries) == 2
        assert {p.component_name for p in record.source_binaries} == {"alpha"}
