"""Extraction of toolchain records from native binaries."""

from vsconfig.extraction.binary_builder import (
    BinaryBuildResult,
    BinaryDescriptorBuilder,
    DependencySourcesError,
    format_macros,
)
from vsconfig.extraction.extractor import extract
from vsconfig.extraction.index import index_toolchain
from vsconfig.extraction.paths import normalize_drive_letter
from vsconfig.extraction.registry import ToolchainRegistry

__all__ = [
    "BinaryBuildResult",
    "BinaryDescriptorBuilder",
    "DependencySourcesError",
    "ToolchainRegistry",
    "extract",
    "format_macros",
    "index_toolchain",
    "normalize_drive_letter",
]
