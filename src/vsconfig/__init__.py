"""vsconfig - toolchain configuration for editor tooling.

Extracts toolchains, compiled binaries, source roots and library
dependencies from a native build model and writes them as a JSON document
that editor integrations read to configure IntelliSense-style features.

Example:
    >>> from vsconfig import ExtractionConfig, ExtractionContext, extract, write_config
    >>>
    >>> context = ExtractionContext(binaries=binaries, gcc_platforms=gcc_platforms)
    >>> records = extract(context)
    >>> write_config(records, ExtractionConfig(config_file=Path("build/vscodeconfig.json")))
"""

__version__ = "0.3.0"

from vsconfig.config import ExtractionConfig, ExtractionContext
from vsconfig.extraction import DependencySourcesError, extract
from vsconfig.serializer import ConfigWriteError, render, write_config
from vsconfig.toolchains import DiscoveryError

__all__ = [
    "ConfigWriteError",
    "DependencySourcesError",
    "DiscoveryError",
    "ExtractionConfig",
    "ExtractionContext",
    "__version__",
    "extract",
    "render",
    "write_config",
]
