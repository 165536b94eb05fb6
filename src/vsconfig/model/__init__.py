"""Output model for extracted toolchain configuration."""

from vsconfig.model.source_group import (
    BinaryDescriptor,
    SourceBinaryPair,
    SourceBinaryPairSet,
    SourceGroup,
    SourceSet,
    ordered_unique,
)
from vsconfig.model.toolchain import (
    CompilerInfo,
    ToolchainFamily,
    ToolchainIdentity,
    ToolchainRecord,
)

__all__ = [
    "BinaryDescriptor",
    "CompilerInfo",
    "SourceBinaryPair",
    "SourceBinaryPairSet",
    "SourceGroup",
    "SourceSet",
    "ToolchainFamily",
    "ToolchainIdentity",
    "ToolchainRecord",
    "ordered_unique",
]
