"""Toolchain discovery.

Matches a target platform against the known Visual C++ and GCC-like
platform definitions and resolves real compiler executables plus the
baseline macros and arguments each compiler is invoked with.

Resolution order:
    1. Visual C++ definitions for the platform. The first one whose
       installation is found by the install locator wins.
    2. GCC-like definitions for the platform. Executables are resolved on
       the tool search path, C and C++ independently. A definition where
       both resolve stops the search; otherwise the last match is kept.
    3. A Visual C++ definition whose installation was not found.

Unresolved executables fall back to the configured executable name. A
platform with no matching definition at all raises DiscoveryError.
"""

import logging
from typing import List, Optional, Sequence, Tuple, Union

from ..graph import TargetPlatform, ToolChainRef, VisualCppToolChain
from ..model import CompilerInfo, ToolchainFamily, ordered_unique
from .families import GccPlatformDefinition, VisualCppPlatformDefinition
from .install_locator import InstallLocator
from .search_path import ToolSearchPath

logger = logging.getLogger(__name__)

PlatformDefinition = Union[VisualCppPlatformDefinition, GccPlatformDefinition]


class DiscoveryError(Exception):
    """Raised when no compiler family definition matches a target platform."""

    def __init__(self, platform: TargetPlatform):
        self.platform = platform
        super().__init__(f"No matching toolchain for platform '{platform.name}' ({platform.architecture}, {platform.operating_system})")


def partition_flags(tokens: Sequence[str], macro_prefixes: Tuple[str, ...]) -> Tuple[List[str], List[str]]:
    """Split baseline compiler tokens into macros and arguments in one pass.

    A token whose stripped form starts with one of the macro prefixes is a
    macro (stored stripped). Every other token is an argument (stored as-is).
    Both results keep first-seen order without duplicates.

    Args:
        tokens: Tokens produced by a definition's argument action
        macro_prefixes: Macro definition prefixes (e.g., ("-D",) or ("/D", "-D"))

    Returns:
        Tuple of (macros, args)
    """
    macros: List[str] = []
    args: List[str] = []
    for token in tokens:
        trimmed = token.strip()
        if trimmed.startswith(macro_prefixes):
            macros.append(trimmed)
        else:
            args.append(token)
    return ordered_unique(macros), ordered_unique(args)


class ToolchainDiscovery:
    """Resolves compiler executables and baseline flags for target platforms."""

    def __init__(
        self,
        visual_cpp_platforms: Sequence[VisualCppPlatformDefinition],
        gcc_platforms: Sequence[GccPlatformDefinition],
        install_locator: Optional[InstallLocator] = None,
        search_path: Optional[ToolSearchPath] = None,
    ):
        """Initialize discovery.

        Args:
            visual_cpp_platforms: Known Visual C++ platform definitions
            gcc_platforms: Known GCC-like platform definitions
            install_locator: Visual C++ install locator (Visual C++ definitions never resolve without one)
            search_path: Search path for GCC-like executables (defaults to PATH)
        """
        self.visual_cpp_platforms = list(visual_cpp_platforms)
        self.gcc_platforms = list(gcc_platforms)
        self.install_locator = install_locator
        self.search_path = search_path if search_path is not None else ToolSearchPath()

    def discover(self, platform: TargetPlatform, tool_chain: ToolChainRef) -> CompilerInfo:
        """Discover the compiler configuration for a target platform.

        Args:
            platform: Target platform of the binary
            tool_chain: Tool chain the binary is built with

        Returns:
            Resolved compiler paths and baseline flags

        Raises:
            DiscoveryError: If no definition matches the platform
        """
        unresolved_msvc: Optional[VisualCppPlatformDefinition] = None
        for msvc_def in self.visual_cpp_platforms:
            if msvc_def.platform != platform:
                continue
            compiler = self._locate_visual_cpp(msvc_def, tool_chain)
            if compiler is not None:
                logger.debug("Resolved Visual C++ compiler for %s: %s", platform.name, compiler)
                return self._compiler_info(ToolchainFamily.VISUAL_CPP, msvc_def, compiler, compiler)
            if unresolved_msvc is None:
                unresolved_msvc = msvc_def

        gcc_match: Optional[Tuple[GccPlatformDefinition, str, str]] = None
        for gcc_def in self.gcc_platforms:
            if gcc_def.platform != platform:
                continue
            c_found = self.search_path.locate(gcc_def.c_compiler.executable)
            cpp_found = self.search_path.locate(gcc_def.cpp_compiler.executable)
            gcc_match = (
                gcc_def,
                str(c_found) if c_found is not None else gcc_def.c_compiler.executable,
                str(cpp_found) if cpp_found is not None else gcc_def.cpp_compiler.executable,
            )
            if c_found is not None and cpp_found is not None:
                break
            logger.debug(
                "GCC-like definition for %s only partially resolved (c=%s, c++=%s)",
                platform.name,
                c_found,
                cpp_found,
            )

        if gcc_match is not None:
            gcc_def, c_path, cpp_path = gcc_match
            return self._compiler_info(ToolchainFamily.GCC, gcc_def, c_path, cpp_path)

        if unresolved_msvc is not None:
            logger.warning("Visual C++ installation not found for %s, using configured executables", platform.name)
            return self._compiler_info(
                ToolchainFamily.VISUAL_CPP,
                unresolved_msvc,
                unresolved_msvc.c_compiler.executable,
                unresolved_msvc.cpp_compiler.executable,
            )

        raise DiscoveryError(platform)

    def _locate_visual_cpp(self, definition: VisualCppPlatformDefinition, tool_chain: ToolChainRef) -> Optional[str]:
        if not isinstance(tool_chain, VisualCppToolChain) or self.install_locator is None:
            return None
        result = self.install_locator.locate(tool_chain.install_dir)
        if not result.available:
            logger.debug("Install locator: %s", result.message)
            return None
        compiler = result.component.compiler_for(definition.platform)  # type: ignore[union-attr]
        return str(compiler) if compiler is not None else None

    @staticmethod
    def _compiler_info(family: ToolchainFamily, definition: PlatformDefinition, c_path: str, cpp_path: str) -> CompilerInfo:
        c_macros, c_args = partition_flags(definition.c_compiler.compute_args(), definition.macro_prefixes)
        cpp_macros, cpp_args = partition_flags(definition.cpp_compiler.compute_args(), definition.macro_prefixes)
        return CompilerInfo(
            family=family,
            c_path=c_path,
            cpp_path=cpp_path,
            c_macros=tuple(c_macros),
            c_args=tuple(c_args),
            cpp_macros=tuple(cpp_macros),
            cpp_args=tuple(cpp_args),
        )
