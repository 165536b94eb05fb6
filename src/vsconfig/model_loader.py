"""Build model loader.

Parses a JSON description of a native build into an ExtractionContext. This
is how the CLI receives the build graph; programmatic callers construct
the vsconfig.graph objects directly instead.

Model format (keys not marked optional are required):

    {
      "platforms": {
        "linuxx86-64": {"architecture": "x86-64", "operatingSystem": "linux"}
      },
      "toolChains": {
        "gcc": {
          "family": "gcc",                      # "gcc" or "msvc"
          "installDir": "C:/VS",                # optional, msvc only
          "platforms": [
            {
              "platform": "linuxx86-64",
              "cCompiler": {"executable": "gcc", "args": ["-DLINUX", "-m64"]},
              "cppCompiler": {"executable": "g++", "args": ["-std=c++17"]}
            }
          ]
        }
      },
      "visualStudioInstalls": [             # optional
        {"installDir": "C:/VS", "compilers": {"windowsx86-64": "C:/VS/bin/cl.exe"}}
      ],
      "searchPath": ["/usr/bin"],           # optional, defaults to PATH
      "binaries": [
        {
          "component": "alpha",
          "platform": "linuxx86-64",
          "toolChain": "gcc",
          "flavor": "default",                  # optional
          "buildType": "release",               # optional
          "buildable": true,                    # optional
          "sources": [
            {
              "name": "cpp", "kind": "cpp",
              "srcDirs": ["src/main/cpp"], "includes": ["**/*.cpp"], "excludes": [],
              "exportedHeaders": {"srcDirs": ["src/main/include"]}   # optional
            }
          ],
          "cCompiler": {"args": [], "macros": {"NAME": "VALUE"}},   # optional
          "cppCompiler": {"args": [], "macros": {}},                # optional
          "libs": [{"includeRoots": ["libs/foo/include"], "sourceFiles": ["libs/foo/foo.cpp"]}]
        }
      ]
    }

A library entry with "sourceFiles" becomes a SourceLibrary, otherwise a
PrebuiltLibrary. A source input whose "kind" is not a known SourceKind is
skipped. Any other value of the wrong type raises ModelLoadError naming
its location in the model (e.g. "binaries[0].libs[1]").
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .config import ExtractionContext
from .graph import (
    CompilerConfig,
    GccToolChain,
    LanguageSourceInput,
    LibraryDependency,
    NativeBinary,
    PrebuiltLibrary,
    SourceDirectorySet,
    SourceKind,
    SourceLibrary,
    TargetPlatform,
    ToolChainRef,
    VisualCppToolChain,
)
from .toolchains import (
    GccPlatformDefinition,
    StaticInstallLocator,
    ToolConfiguration,
    ToolSearchPath,
    VisualCppPlatformDefinition,
    VisualStudioInstall,
    static_args,
)

FAMILY_GCC = "gcc"
FAMILY_MSVC = "msvc"

logger = logging.getLogger(__name__)


class ModelLoadError(Exception):
    """Raised when a build model cannot be read or is malformed."""

    pass


def _require(data: Dict[str, Any], key: str, where: str) -> Any:
    try:
        return _object(data, where)[key]
    except KeyError:
        raise ModelLoadError(f"Missing required field '{key}' in {where}")


def _object(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ModelLoadError(f"Expected an object for {where}, got {type(value).__name__}")
    return value


def _list(value: Any, where: str) -> List[Any]:
    if not isinstance(value, list):
        raise ModelLoadError(f"Expected a list for {where}, got {type(value).__name__}")
    return value


def _string(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise ModelLoadError(f"Expected a string for {where}, got {type(value).__name__}")
    return value


def _strings(data: Dict[str, Any], key: str, where: str) -> List[str]:
    values = _list(data.get(key, []), f"{where}.{key}")
    return [_string(v, f"{where}.{key}[{i}]") for i, v in enumerate(values)]


def _parse_directory_set(data: Optional[Dict[str, Any]], where: str) -> SourceDirectorySet:
    data = _object(data if data is not None else {}, where)
    return SourceDirectorySet(
        src_dirs=_strings(data, "srcDirs", where),
        includes=_strings(data, "includes", where),
        excludes=_strings(data, "excludes", where),
    )


def _parse_source_input(data: Dict[str, Any], where: str) -> Optional[LanguageSourceInput]:
    kind_value = _require(data, "kind", where)
    try:
        kind = SourceKind(kind_value)
    except ValueError:
        logger.debug("Skipping source input with unknown kind %r in %s", kind_value, where)
        return None
    exported = data.get("exportedHeaders")
    return LanguageSourceInput(
        name=_string(data.get("name", kind.value), f"{where}.name"),
        kind=kind,
        source=_parse_directory_set(data, where),
        exported_headers=_parse_directory_set(exported, f"{where}.exportedHeaders") if exported is not None else None,
    )


def _parse_compiler(data: Optional[Dict[str, Any]], where: str) -> CompilerConfig:
    data = _object(data if data is not None else {}, where)
    macros = _object(data.get("macros", {}), f"{where}.macros")
    for name, value in macros.items():
        if value is not None:
            _string(value, f"{where}.macros.{name}")
    return CompilerConfig(args=_strings(data, "args", where), macros=dict(macros))


def _parse_lib(data: Dict[str, Any], where: str) -> LibraryDependency:
    data = _object(data, where)
    include_roots = [Path(p) for p in _strings(data, "includeRoots", where)]
    if "sourceFiles" in data:
        return SourceLibrary(include_roots, [Path(p) for p in _strings(data, "sourceFiles", where)])
    return PrebuiltLibrary(include_roots)


def _parse_tool(data: Optional[Dict[str, Any]], default_executable: str, where: str) -> ToolConfiguration:
    data = _object(data if data is not None else {}, where)
    return ToolConfiguration(
        executable=_string(data.get("executable", default_executable), f"{where}.executable"),
        arg_action=static_args(_strings(data, "args", where)),
    )


def _parse_tool_chains(
    data: Dict[str, Any], platforms: Dict[str, TargetPlatform]
) -> Tuple[Dict[str, ToolChainRef], List[VisualCppPlatformDefinition], List[GccPlatformDefinition]]:
    tool_chains: Dict[str, ToolChainRef] = {}
    msvc_defs: List[VisualCppPlatformDefinition] = []
    gcc_defs: List[GccPlatformDefinition] = []

    for name, tc_data in _object(data, "toolChains").items():
        where = f"toolChains.{name}"
        family = _require(tc_data, "family", where)
        if family == FAMILY_MSVC:
            install_dir = tc_data.get("installDir")
            tool_chains[name] = VisualCppToolChain(name, Path(_string(install_dir, f"{where}.installDir")) if install_dir else None)
        elif family == FAMILY_GCC:
            tool_chains[name] = GccToolChain(name)
        else:
            raise ModelLoadError(f"Unknown toolchain family '{family}' in {where}")

        for i, plat_data in enumerate(_list(tc_data.get("platforms", []), f"{where}.platforms")):
            plat_where = f"{where}.platforms[{i}]"
            platform = _lookup_platform(platforms, _require(plat_data, "platform", plat_where), plat_where)
            if family == FAMILY_MSVC:
                msvc_defs.append(
                    VisualCppPlatformDefinition(
                        platform=platform,
                        c_compiler=_parse_tool(plat_data.get("cCompiler"), "cl.exe", f"{plat_where}.cCompiler"),
                        cpp_compiler=_parse_tool(plat_data.get("cppCompiler"), "cl.exe", f"{plat_where}.cppCompiler"),
                    )
                )
            else:
                gcc_defs.append(
                    GccPlatformDefinition(
                        platform=platform,
                        c_compiler=_parse_tool(plat_data.get("cCompiler"), "gcc", f"{plat_where}.cCompiler"),
                        cpp_compiler=_parse_tool(plat_data.get("cppCompiler"), "g++", f"{plat_where}.cppCompiler"),
                    )
                )

    return tool_chains, msvc_defs, gcc_defs


def _lookup_platform(platforms: Dict[str, TargetPlatform], name: Any, where: str) -> TargetPlatform:
    platform = platforms.get(_string(name, f"{where}.platform"))
    if platform is None:
        raise ModelLoadError(f"Unknown platform '{name}' in {where}")
    return platform


def _parse_binary(data: Dict[str, Any], index: int, platforms: Dict[str, TargetPlatform], tool_chains: Dict[str, ToolChainRef]) -> NativeBinary:
    where = f"binaries[{index}]"
    platform = _lookup_platform(platforms, _require(data, "platform", where), where)
    tc_name = _string(_require(data, "toolChain", where), f"{where}.toolChain")
    tool_chain = tool_chains.get(tc_name)
    if tool_chain is None:
        raise ModelLoadError(f"Unknown toolchain '{tc_name}' in {where}")

    buildable = data.get("buildable", True)
    if not isinstance(buildable, bool):
        raise ModelLoadError(f"Expected true or false for {where}.buildable, got {type(buildable).__name__}")

    inputs = []
    for i, source_data in enumerate(_list(data.get("sources", []), f"{where}.sources")):
        source_input = _parse_source_input(source_data, f"{where}.sources[{i}]")
        if source_input is not None:
            inputs.append(source_input)

    return NativeBinary(
        component_name=_string(_require(data, "component", where), f"{where}.component"),
        target_platform=platform,
        flavor=_string(data.get("flavor", "default"), f"{where}.flavor"),
        build_type=_string(data.get("buildType", "debug"), f"{where}.buildType"),
        tool_chain=tool_chain,
        inputs=inputs,
        c_compiler=_parse_compiler(data.get("cCompiler"), f"{where}.cCompiler"),
        cpp_compiler=_parse_compiler(data.get("cppCompiler"), f"{where}.cppCompiler"),
        libs=[_parse_lib(lib, f"{where}.libs[{i}]") for i, lib in enumerate(_list(data.get("libs", []), f"{where}.libs"))],
        buildable=buildable,
    )


def context_from_dict(data: Dict[str, Any], strict_dependencies: bool = False) -> ExtractionContext:
    """Build an extraction context from a parsed build model.

    Args:
        data: Parsed build model
        strict_dependencies: Abort extraction when a dependency fails to report its source files

    Raises:
        ModelLoadError: If the model is malformed
    """
    data = _object(data, "build model")

    platforms: Dict[str, TargetPlatform] = {}
    for name, plat_data in _object(data.get("platforms", {}), "platforms").items():
        where = f"platforms.{name}"
        platforms[name] = TargetPlatform(
            name=name,
            architecture=_string(_require(plat_data, "architecture", where), f"{where}.architecture"),
            operating_system=_string(_require(plat_data, "operatingSystem", where), f"{where}.operatingSystem"),
        )

    tool_chains, msvc_defs, gcc_defs = _parse_tool_chains(data.get("toolChains", {}), platforms)

    installs = []
    for i, inst in enumerate(_list(data.get("visualStudioInstalls", []), "visualStudioInstalls")):
        where = f"visualStudioInstalls[{i}]"
        compilers = _object(_object(inst, where).get("compilers", {}), f"{where}.compilers")
        installs.append(
            VisualStudioInstall(
                install_dir=Path(_string(_require(inst, "installDir", where), f"{where}.installDir")),
                compilers={plat: Path(_string(p, f"{where}.compilers.{plat}")) for plat, p in compilers.items()},
            )
        )

    search_path = None
    if "searchPath" in data:
        search_path = ToolSearchPath([Path(p) for p in _strings(data, "searchPath", "build model")])

    binaries = [_parse_binary(b, i, platforms, tool_chains) for i, b in enumerate(_list(data.get("binaries", []), "binaries"))]

    return ExtractionContext(
        binaries=binaries,
        visual_cpp_platforms=msvc_defs,
        gcc_platforms=gcc_defs,
        install_locator=StaticInstallLocator(installs),
        search_path=search_path,
        strict_dependencies=strict_dependencies,
    )


def load_context(model_path: Path, strict_dependencies: bool = False) -> ExtractionContext:
    """Load an extraction context from a build model file.

    Raises:
        ModelLoadError: If the file cannot be read, is not JSON, or is malformed
    """
    try:
        with open(model_path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ModelLoadError(f"Cannot read build model {model_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ModelLoadError(f"Invalid JSON in build model {model_path}: {e}") from e
    return context_from_dict(data, strict_dependencies=strict_dependencies)
