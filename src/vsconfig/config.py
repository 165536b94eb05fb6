"""Extraction configuration and per-run context.

ExtractionConfig holds the output options (file and pretty printing).
ExtractionContext carries everything one extraction run reads from the
build graph, plus how strictly library dependencies are treated. Both are
plain values: construct one, pass it to extract(), and discard it when the
run is done.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from .graph import NativeBinary
from .toolchains import (
    GccPlatformDefinition,
    InstallLocator,
    ToolchainDiscovery,
    ToolSearchPath,
    VisualCppPlatformDefinition,
)

DEFAULT_CONFIG_FILE_NAME = "vscodeconfig.json"
PRETTY_ENV_VAR = "VSCONFIG_PRETTY"


def get_default_config_file(project_dir: Path) -> Path:
    """Get the default output path for a project.

    Returns:
        <project_dir>/build/vscodeconfig.json
    """
    return project_dir / "build" / DEFAULT_CONFIG_FILE_NAME


def pretty_printing_from_env() -> bool:
    """Check whether VSCONFIG_PRETTY requests pretty printing."""
    return os.environ.get(PRETTY_ENV_VAR, "").strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class ExtractionConfig:
    """Options of one extraction run.

    Attributes:
        config_file: Where the rendered document is written
        pretty_printing: Indent the rendered document
    """

    config_file: Path
    pretty_printing: bool = False

    @classmethod
    def for_project(cls, project_dir: Path, pretty_printing: Optional[bool] = None) -> "ExtractionConfig":
        """Create a config writing to the project's default location.

        Args:
            project_dir: Project root directory
            pretty_printing: Explicit setting, or None to read VSCONFIG_PRETTY
        """
        if pretty_printing is None:
            pretty_printing = pretty_printing_from_env()
        return cls(
            config_file=get_default_config_file(project_dir),
            pretty_printing=pretty_printing,
        )


@dataclass(frozen=True)
class ExtractionContext:
    """Everything one extraction run reads from the build graph.

    Attributes:
        binaries: Native binary targets in build graph order
        visual_cpp_platforms: Known Visual C++ platform definitions
        gcc_platforms: Known GCC-like platform definitions
        install_locator: Visual C++ install locator (None if unavailable)
        search_path: Tool search path for GCC-like executables (None for PATH)
        strict_dependencies: Abort when a dependency fails to report its source files
    """

    binaries: List[NativeBinary] = field(default_factory=list)
    visual_cpp_platforms: Sequence[VisualCppPlatformDefinition] = field(default_factory=list)
    gcc_platforms: Sequence[GccPlatformDefinition] = field(default_factory=list)
    install_locator: Optional[InstallLocator] = None
    search_path: Optional[ToolSearchPath] = None
    strict_dependencies: bool = False

    def create_discovery(self) -> ToolchainDiscovery:
        """Create the toolchain discovery for this run."""
        return ToolchainDiscovery(
            visual_cpp_platforms=self.visual_cpp_platforms,
            gcc_platforms=self.gcc_platforms,
            install_locator=self.install_locator,
            search_path=self.search_path,
        )
