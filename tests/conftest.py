"""Pytest configuration and shared fixtures for vsconfig tests."""

from pathlib import Path

import pytest

from vsconfig.graph import (
    CompilerConfig,
    GccToolChain,
    LanguageSourceInput,
    NativeBinary,
    SourceDirectorySet,
    SourceKind,
    TargetPlatform,
)
from vsconfig.toolchains import GccPlatformDefinition, ToolConfiguration, ToolSearchPath, static_args

LINUX_X64 = TargetPlatform(name="linuxx86-64", architecture="x86-64", operating_system="linux")
WINDOWS_X64 = TargetPlatform(name="windowsx86-64", architecture="x86-64", operating_system="windows")
LINUX_ARM = TargetPlatform(name="linuxarm64", architecture="arm64", operating_system="linux")


@pytest.fixture
def linux_x64():
    return LINUX_X64


@pytest.fixture
def windows_x64():
    return WINDOWS_X64


@pytest.fixture
def linux_arm():
    return LINUX_ARM


@pytest.fixture
def make_binary():
    """Factory for NativeBinary instances with sensible defaults."""

    def _make(component_name="alpha", **overrides):
        defaults = {
            "component_name": component_name,
            "target_platform": LINUX_X64,
            "flavor": "release",
            "build_type": "release",
            "tool_chain": GccToolChain("gcc"),
            "inputs": [
                LanguageSourceInput(
                    name="cpp",
                    kind=SourceKind.CPP,
                    source=SourceDirectorySet(src_dirs=[f"{component_name}/src"], includes=["**/*.cpp"]),
                    exported_headers=SourceDirectorySet(src_dirs=[f"{component_name}/include"]),
                )
            ],
            "cpp_compiler": CompilerConfig(args=["-std=c++17"], macros={"NDEBUG": None}),
        }
        defaults.update(overrides)
        return NativeBinary(**defaults)

    return _make


@pytest.fixture
def gcc_bin_dir(tmp_path) -> Path:
    """A directory holding fake gcc/g++ executables."""
    bin_dir = tmp_path / "toolchain" / "bin"
    bin_dir.mkdir(parents=True)
    (bin_dir / "gcc").touch()
    (bin_dir / "g++").touch()
    return bin_dir


@pytest.fixture
def search_path(gcc_bin_dir) -> ToolSearchPath:
    return ToolSearchPath([gcc_bin_dir], extensions=[""])


@pytest.fixture
def linux_gcc_definition() -> GccPlatformDefinition:
    return GccPlatformDefinition(
        platform=LINUX_X64,
        c_compiler=ToolConfiguration("gcc", static_args(["-DLINUX=1", "-m64", "-fPIC"])),
        cpp_compiler=ToolConfiguration("g++", static_args(["-m64", " -D_GNU_SOURCE", "-std=c++17"])),
    )
