"""Compiler family platform definitions.

Two compiler families are supported:

- Visual C++: compiler paths come from the installed suite found by the
  install locator for the binary's tool chain
- GCC-like (gcc, clang, cross compilers): each definition names its C and
  C++ executables, which are resolved against the tool search path

Each definition is bound to one target platform and exposes, per language,
a ToolConfiguration whose argument action appends the baseline arguments
the build would pass to the compiler.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Sequence, Tuple

from ..graph import TargetPlatform

ArgAction = Callable[[List[str]], None]


def _no_args(args: List[str]) -> None:
    del args  # Unused


def static_args(values: Sequence[str]) -> ArgAction:
    """Build an argument action that appends a fixed list of arguments."""
    frozen = list(values)

    def action(args: List[str]) -> None:
        args.extend(frozen)

    return action


@dataclass(frozen=True)
class ToolConfiguration:
    """Configuration of one compiler tool in a platform definition.

    Attributes:
        executable: Configured executable name or path
        arg_action: Appends baseline arguments to the list it is given
    """

    executable: str = ""
    arg_action: ArgAction = field(default=_no_args, compare=False)

    def compute_args(self) -> List[str]:
        """Run the argument action into a fresh list."""
        args: List[str] = []
        self.arg_action(args)
        return args


@dataclass(frozen=True)
class VisualCppPlatformDefinition:
    """Visual C++ configuration for one target platform."""

    platform: TargetPlatform
    c_compiler: ToolConfiguration = field(default_factory=lambda: ToolConfiguration("cl.exe"))
    cpp_compiler: ToolConfiguration = field(default_factory=lambda: ToolConfiguration("cl.exe"))
    macro_prefixes: Tuple[str, ...] = ("/D", "-D")


@dataclass(frozen=True)
class GccPlatformDefinition:
    """GCC-like configuration for one target platform."""

    platform: TargetPlatform
    c_compiler: ToolConfiguration = field(default_factory=lambda: ToolConfiguration("gcc"))
    cpp_compiler: ToolConfiguration = field(default_factory=lambda: ToolConfiguration("g++"))
    macro_prefixes: Tuple[str, ...] = ("-D",)
