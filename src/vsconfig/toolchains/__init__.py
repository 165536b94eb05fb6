"""Compiler family definitions and toolchain discovery."""

from vsconfig.toolchains.discovery import DiscoveryError, ToolchainDiscovery, partition_flags
from vsconfig.toolchains.families import (
    GccPlatformDefinition,
    ToolConfiguration,
    VisualCppPlatformDefinition,
    static_args,
)
from vsconfig.toolchains.install_locator import (
    InstallLocator,
    SearchResult,
    StaticInstallLocator,
    VisualStudioInstall,
)
from vsconfig.toolchains.search_path import ToolSearchPath

__all__ = [
    "DiscoveryError",
    "GccPlatformDefinition",
    "InstallLocator",
    "SearchResult",
    "StaticInstallLocator",
    "ToolConfiguration",
    "ToolSearchPath",
    "ToolchainDiscovery",
    "VisualCppPlatformDefinition",
    "VisualStudioInstall",
    "partition_flags",
    "static_args",
]
