"""Toolchain models.

A ToolchainIdentity is the (architecture, operating system, flavor, build
type) key of one logical compiler configuration. A ToolchainRecord holds
everything aggregated for that key: resolved compiler paths, baseline
flags, the binaries built with it, their library files and the
de-duplicated source/binary pairs.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from ..graph import NativeBinary
from .source_group import BinaryDescriptor, SourceBinaryPairSet


class ToolchainFamily(Enum):
    """Compiler family a toolchain was discovered in."""

    VISUAL_CPP = "msvc"
    GCC = "gcc"


@dataclass(frozen=True)
class ToolchainIdentity:
    """Identity of a toolchain record. Equality uses exactly these four fields."""

    architecture: str
    operating_system: str
    flavor: str
    build_type: str

    @classmethod
    def from_binary(cls, binary: NativeBinary) -> "ToolchainIdentity":
        """Compute the identity a binary is registered under."""
        return cls(
            architecture=binary.target_platform.architecture,
            operating_system=binary.target_platform.operating_system,
            flavor=binary.flavor,
            build_type=binary.build_type,
        )

    def __str__(self) -> str:
        return f"{self.architecture}/{self.operating_system}/{self.flavor}/{self.build_type}"


@dataclass(frozen=True)
class CompilerInfo:
    """Result of toolchain discovery for one target platform.

    Attributes:
        family: Compiler family that matched the platform
        c_path: Resolved C compiler executable
        cpp_path: Resolved C++ compiler executable
        c_macros: Baseline C macros (e.g., "-D_WIN32")
        c_args: Baseline C arguments
        cpp_macros: Baseline C++ macros
        cpp_args: Baseline C++ arguments
    """

    family: ToolchainFamily
    c_path: str
    cpp_path: str
    c_macros: tuple[str, ...] = ()
    c_args: tuple[str, ...] = ()
    cpp_macros: tuple[str, ...] = ()
    cpp_args: tuple[str, ...] = ()


@dataclass
class ToolchainRecord:
    """All aggregated data for one toolchain identity.

    Compiler fields are set once from discovery when the record is created.
    Binaries and library files are appended by every binary sharing the
    identity. The name index and pair set are filled by the index pass.
    """

    identity: ToolchainIdentity
    name: str
    compiler: CompilerInfo
    binaries: List[BinaryDescriptor] = field(default_factory=list)
    all_lib_files: Dict[str, None] = field(default_factory=dict)
    name_binary_map: Dict[str, int] = field(default_factory=dict)
    source_binaries: SourceBinaryPairSet = field(default_factory=SourceBinaryPairSet)

    @property
    def msvc(self) -> bool:
        return self.compiler.family == ToolchainFamily.VISUAL_CPP

    def add_lib_files(self, files: List[str]) -> None:
        """Union files into the aggregated library file set."""
        for f in files:
            self.all_lib_files.setdefault(f, None)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        Keys follow the names the editor extension reads.
        """
        return {
            "name": self.name,
            "architecture": self.identity.architecture,
            "operatingSystem": self.identity.operating_system,
            "flavor": self.identity.flavor,
            "buildType": self.identity.build_type,
            "cppPath": self.compiler.cpp_path,
            "cPath": self.compiler.c_path,
            "msvc": self.msvc,
            "systemCppMacros": list(self.compiler.cpp_macros),
            "systemCppArgs": list(self.compiler.cpp_args),
            "systemCMacros": list(self.compiler.c_macros),
            "systemCArgs": list(self.compiler.c_args),
            "allLibFiles": sorted(self.all_lib_files),
            "binaries": [b.to_dict() for b in self.binaries],
            "sourceBinaries": self.source_binaries.to_list(),
            "nameBinaryMap": dict(sorted(self.name_binary_map.items(), key=lambda item: item[1])),
        }
