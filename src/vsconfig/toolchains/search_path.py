"""Tool search path.

Resolves a compiler executable name (e.g., "gcc", "arm-none-eabi-g++")
against a list of directories, the same way a shell resolves a command
against PATH.

Search order:
    1. An absolute or relative path that points at an existing file is
       returned as-is
    2. Each search directory in order, trying the platform's executable
       extensions (".exe" first on Windows, then the bare name)
"""

import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence


def _default_extensions() -> List[str]:
    if sys.platform == "win32":
        return [".exe", ""]
    return [""]


class ToolSearchPath:
    """Locates executables in a list of search directories."""

    def __init__(self, search_dirs: Optional[Sequence[Path]] = None, extensions: Optional[Sequence[str]] = None):
        """Initialize the search path.

        Args:
            search_dirs: Directories to search. Defaults to the PATH environment variable.
            extensions: Executable extensions to try. Defaults to the host platform's.
        """
        if search_dirs is None:
            search_dirs = [Path(p) for p in os.environ.get("PATH", "").split(os.pathsep) if p]
        self.search_dirs = list(search_dirs)
        self.extensions = list(extensions) if extensions is not None else _default_extensions()

    def locate(self, executable: str) -> Optional[Path]:
        """Resolve an executable name to a path.

        Args:
            executable: Executable name or path

        Returns:
            Path to the executable, or None if not found
        """
        if not executable:
            return None

        candidate = Path(executable)
        if len(candidate.parts) > 1 or candidate.is_absolute():
            for ext in self.extensions:
                path = candidate.with_name(candidate.name + ext)
                if path.is_file():
                    return path
            return None

        for directory in self.search_dirs:
            for ext in self.extensions:
                path = directory / f"{executable}{ext}"
                if path.is_file():
                    return path

        return None
