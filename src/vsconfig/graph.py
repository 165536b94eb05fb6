"""Build graph input types.

This module defines the read-only view of a native build that extraction
consumes. The build graph itself (target definitions, dependency resolution,
compiler invocation) lives elsewhere; these types only carry what the
extractor needs to read:

- TargetPlatform: architecture / operating system / platform name triple
- NativeBinary: one buildable (or non-buildable) binary target
- LanguageSourceInput: a source set attached to a binary, tagged by SourceKind
- CompilerConfig: per-language arguments and macros
- LibraryDependency: header search roots, optionally contributing sources
- VisualCppToolChain / GccToolChain: the tool chain a binary is built with

Optional capability:
    A library dependency may additionally contribute compiled source files.
    That capability is the SourceFileContributor protocol. Dependencies
    either implement source_files() or they do not.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union, runtime_checkable


class SourceKind(Enum):
    """Kind of a language source input."""

    C = "c"
    CPP = "cpp"
    ASM = "asm"
    OBJC = "objc"
    OBJCPP = "objcpp"
    WINDOWS_RESOURCES = "rc"

    @property
    def is_c_family(self) -> bool:
        """True for the kinds extraction understands (C and C++)."""
        return self in (SourceKind.C, SourceKind.CPP)


@dataclass(frozen=True)
class TargetPlatform:
    """Platform a binary is built for.

    Attributes:
        name: Platform name (e.g., "linuxx86-64", "windowsx86-64")
        architecture: Architecture name (e.g., "x86-64", "arm64")
        operating_system: Operating system name (e.g., "linux", "windows")
    """

    name: str
    architecture: str
    operating_system: str


@dataclass(frozen=True)
class SourceDirectorySet:
    """Root directories plus include/exclude patterns of a source input."""

    src_dirs: List[str] = field(default_factory=list)
    includes: List[str] = field(default_factory=list)
    excludes: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class LanguageSourceInput:
    """A language source set attached to a binary.

    Attributes:
        name: Source set name (e.g., "cpp", "c")
        kind: Language kind of the source set
        source: Own sources
        exported_headers: Exported header directories (None if the input exports none)
    """

    name: str
    kind: SourceKind
    source: SourceDirectorySet = field(default_factory=SourceDirectorySet)
    exported_headers: Optional[SourceDirectorySet] = None


@dataclass(frozen=True)
class CompilerConfig:
    """Per-language compiler configuration of a binary.

    A macro with a None value is a plain define without a value.
    """

    args: List[str] = field(default_factory=list)
    macros: Dict[str, Optional[str]] = field(default_factory=dict)


@runtime_checkable
class SourceFileContributor(Protocol):
    """Optional capability: a dependency that contributes compiled sources."""

    def source_files(self) -> List[Path]: ...


class LibraryDependency:
    """A library dependency exposing header search roots."""

    def __init__(self, include_roots: List[Path]):
        self.include_roots = list(include_roots)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(include_roots={self.include_roots!r})"


class PrebuiltLibrary(LibraryDependency):
    """Prebuilt (header + binary) library. Contributes no sources."""


class SourceLibrary(LibraryDependency):
    """Library built from source alongside the consuming binary."""

    def __init__(self, include_roots: List[Path], sources: List[Path]):
        super().__init__(include_roots)
        self.sources = list(sources)

    def source_files(self) -> List[Path]:
        return list(self.sources)


@dataclass(frozen=True)
class VisualCppToolChain:
    """Visual C++ tool chain reference with its installation directory."""

    name: str
    install_dir: Optional[Path] = None


@dataclass(frozen=True)
class GccToolChain:
    """GCC-like (gcc, clang) tool chain reference."""

    name: str


ToolChainRef = Union[VisualCppToolChain, GccToolChain]


@dataclass
class NativeBinary:
    """One native binary target of the build graph.

    Attributes:
        component_name: Name of the owning component
        target_platform: Platform the binary targets
        flavor: Build variant / flavor name
        build_type: Build type name (e.g., "debug", "release")
        tool_chain: Tool chain the binary is built with
        inputs: Language source inputs in declaration order
        c_compiler: C compiler configuration
        cpp_compiler: C++ compiler configuration
        libs: Library dependencies
        buildable: False if the build graph cannot build this binary
    """

    component_name: str
    target_platform: TargetPlatform
    flavor: str
    build_type: str
    tool_chain: ToolChainRef
    inputs: List[LanguageSourceInput] = field(default_factory=list)
    c_compiler: CompilerConfig = field(default_factory=CompilerConfig)
    cpp_compiler: CompilerConfig = field(default_factory=CompilerConfig)
    libs: List[LibraryDependency] = field(default_factory=list)
    buildable: bool = True

    def compiler_for(self, kind: SourceKind) -> CompilerConfig:
        """Get the compiler configuration used for a source kind."""
        return self.cpp_compiler if kind == SourceKind.CPP else self.c_compiler
