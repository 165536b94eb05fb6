"""Binary descriptor builder.

Turns one native binary target into a BinaryDescriptor:

- Every C or C++ source input becomes a SourceSet. Its own sources and
  exported headers become SourceGroups with normalized root directories,
  and it carries the binary's compiler arguments and macros for that
  language only. Other source kinds (assembler, resources, ...) are skipped.
- Every library dependency contributes its header search roots. A
  dependency that implements SourceFileContributor also contributes the
  source files it compiles; those go to the toolchain-wide library file
  set, not to the descriptor.

Whether a dependency type implements SourceFileContributor is checked once
per concrete type and cached for the lifetime of the builder.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from ..graph import (
    LanguageSourceInput,
    LibraryDependency,
    NativeBinary,
    SourceDirectorySet,
    SourceFileContributor,
    SourceKind,
)
from ..model import BinaryDescriptor, SourceGroup, SourceSet, ordered_unique
from .paths import normalize_drive_letter

logger = logging.getLogger(__name__)


class DependencySourcesError(Exception):
    """Raised in strict mode when a dependency fails to report its source files."""

    def __init__(self, component_name: str, dependency: LibraryDependency, cause: BaseException):
        self.component_name = component_name
        self.dependency = dependency
        super().__init__(f"Failed to get source files of {type(dependency).__name__} for component '{component_name}': {cause}")


def format_macros(macros: Mapping[str, Optional[str]]) -> List[str]:
    """Format a name -> value macro map as compiler defines."""
    return [f"-D{name}" if value is None else f"-D{name}={value}" for name, value in macros.items()]


@dataclass
class BinaryBuildResult:
    """Descriptor of one binary plus the library sources it pulls in."""

    descriptor: BinaryDescriptor
    lib_sources: List[str] = field(default_factory=list)


class BinaryDescriptorBuilder:
    """Builds binary descriptors, caching dependency capabilities per type."""

    def __init__(self, strict_dependencies: bool = False, windows: Optional[bool] = None):
        """Initialize the builder.

        Args:
            strict_dependencies: Raise DependencySourcesError instead of logging a warning
                when a dependency fails while reporting its source files
            windows: Override host detection for drive letter normalization
        """
        self.strict_dependencies = strict_dependencies
        self._windows = windows
        self._contributor_types: Dict[type, bool] = {}

    def supports_source_files(self, dependency: LibraryDependency) -> bool:
        """Check (once per concrete type) whether a dependency contributes sources."""
        dep_type = type(dependency)
        supported = self._contributor_types.get(dep_type)
        if supported is None:
            supported = self._implements_source_files(dependency)
            self._contributor_types[dep_type] = supported
            logger.debug("Dependency type %s contributes sources: %s", dep_type.__name__, supported)
        return supported

    @staticmethod
    def _implements_source_files(dependency: LibraryDependency) -> bool:
        return isinstance(dependency, SourceFileContributor)

    def build(self, binary: NativeBinary) -> Optional[BinaryBuildResult]:
        """Build the descriptor of a binary.

        Returns:
            The build result, or None if the binary is not buildable
        """
        if not binary.buildable:
            logger.debug("Skipping non-buildable binary of component %s", binary.component_name)
            return None

        descriptor = BinaryDescriptor(component_name=binary.component_name)
        for source_input in binary.inputs:
            if not source_input.kind.is_c_family:
                logger.debug("Skipping %s source set '%s' of %s", source_input.kind.value, source_input.name, binary.component_name)
                continue
            descriptor.source_sets.append(self._build_source_set(binary, source_input))

        lib_sources: List[str] = []
        for dependency in binary.libs:
            for root in dependency.include_roots:
                descriptor.add_lib_header(str(root))
            lib_sources.extend(self._dependency_sources(binary, dependency))

        return BinaryBuildResult(descriptor=descriptor, lib_sources=ordered_unique(lib_sources))

    def _build_source_set(self, binary: NativeBinary, source_input: LanguageSourceInput) -> SourceSet:
        compiler = binary.compiler_for(source_input.kind)
        exported = source_input.exported_headers if source_input.exported_headers is not None else SourceDirectorySet()
        return SourceSet(
            cpp=source_input.kind == SourceKind.CPP,
            args=ordered_unique(compiler.args),
            macros=ordered_unique(format_macros(compiler.macros)),
            source=self._source_group(source_input.source),
            exported_headers=self._source_group(exported),
        )

    def _source_group(self, directory_set: SourceDirectorySet) -> SourceGroup:
        return SourceGroup.of(
            (normalize_drive_letter(str(d), self._windows) for d in directory_set.src_dirs),
            directory_set.includes,
            directory_set.excludes,
        )

    def _dependency_sources(self, binary: NativeBinary, dependency: LibraryDependency) -> List[str]:
        if not self.supports_source_files(dependency):
            return []
        try:
            files = dependency.source_files()  # type: ignore[attr-defined]
        except Exception as e:
            if self.strict_dependencies:
                raise DependencySourcesError(binary.component_name, dependency, e) from e
            logger.warning("Ignoring source files of %s for component %s: %s", type(dependency).__name__, binary.component_name, e)
            return []
        return [str(f) for f in files]
