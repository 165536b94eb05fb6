"""Path normalization for source roots.

Editors compare source roots as strings, so on Windows a root reported as
"c:\\src" and another reported as "C:\\src" would not match. Drive letters
are upper-cased on Windows. Everywhere else paths pass through unchanged.
"""

import sys
from typing import Optional


def is_windows() -> bool:
    return sys.platform == "win32"


def normalize_drive_letter(path: str, windows: Optional[bool] = None) -> str:
    """Upper-case the drive letter of a Windows path.

    Args:
        path: Path string
        windows: Override host detection (None uses the current platform)

    Returns:
        The path with an upper-case drive letter on Windows, otherwise unchanged
    """
    if windows is None:
        windows = is_windows()
    if windows and len(path) >= 2 and path[1] == ":":
        return path[0].upper() + path[1:]
    return path
