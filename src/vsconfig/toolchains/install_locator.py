"""Visual C++ install locator.

Maps an installation directory to an installed Visual C++ suite, from which
the compiler executable for a target platform is read. The build graph
provides the real locator; StaticInstallLocator serves installs declared up
front (e.g., loaded from a build model file).
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Generic, Optional, Protocol, TypeVar

from ..graph import TargetPlatform

T = TypeVar("T")


@dataclass(frozen=True)
class SearchResult(Generic[T]):
    """Result of a locator search.

    Attributes:
        component: The located component, or None if not available
        message: Why the search failed (empty when available)
    """

    component: Optional[T] = None
    message: str = ""

    @property
    def available(self) -> bool:
        return self.component is not None


@dataclass(frozen=True)
class VisualStudioInstall:
    """An installed Visual C++ suite.

    Attributes:
        install_dir: Installation root
        compilers: Compiler executable per target platform name
    """

    install_dir: Path
    compilers: Dict[str, Path] = field(default_factory=dict)

    def compiler_for(self, platform: TargetPlatform) -> Optional[Path]:
        """Get the compiler executable for a target platform."""
        return self.compilers.get(platform.name)


class InstallLocator(Protocol):
    """Locates a Visual C++ installation."""

    def locate(self, install_dir: Optional[Path]) -> SearchResult[VisualStudioInstall]: ...


class StaticInstallLocator:
    """Install locator over a fixed set of known installations.

    A None install directory selects the first registered installation.
    """

    def __init__(self, installs: Optional[list[VisualStudioInstall]] = None):
        self._installs: Dict[Path, VisualStudioInstall] = {}
        for install in installs or []:
            self.add(install)

    def add(self, install: VisualStudioInstall) -> None:
        self._installs[install.install_dir] = install

    def locate(self, install_dir: Optional[Path]) -> SearchResult[VisualStudioInstall]:
        if install_dir is None:
            for install in self._installs.values():
                return SearchResult(install)
            return SearchResult(message="No Visual Studio installation registered")

        install = self._installs.get(Path(install_dir))
        if install is None:
            return SearchResult(message=f"Visual Studio installation not found in {install_dir}")
        return SearchResult(install)
