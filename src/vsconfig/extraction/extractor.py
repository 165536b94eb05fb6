"""Extraction entry point.

One pass over the binaries of an ExtractionContext:

    1. Build each buildable binary's descriptor
    2. Register it with the toolchain for its identity (discovering new ones)
    3. Index every toolchain record once all binaries are registered

The result is the list of toolchain records in first-registration order,
ready for the serializer.
"""

import logging
from typing import List, Optional

from ..config import ExtractionContext
from ..model import ToolchainRecord
from .binary_builder import BinaryDescriptorBuilder
from .index import index_toolchain
from .registry import ToolchainRegistry

logger = logging.getLogger(__name__)


def extract(context: ExtractionContext, windows: Optional[bool] = None) -> List[ToolchainRecord]:
    """Extract toolchain records from the binaries of a context.

    Args:
        context: Binaries, toolchain definitions and dependency strictness of this run
        windows: Override host detection for drive letter normalization

    Returns:
        Toolchain records in first-registration order

    Raises:
        DiscoveryError: If a binary's target platform matches no known definition
        DependencySourcesError: If context.strict_dependencies is set and a dependency fails to report its sources
    """
    builder = BinaryDescriptorBuilder(strict_dependencies=context.strict_dependencies, windows=windows)
    registry = ToolchainRegistry(context.create_discovery())

    skipped = 0
    for binary in context.binaries:
        result = builder.build(binary)
        if result is None:
            skipped += 1
            continue
        registry.register(binary, result)

    records = registry.records
    for record in records:
        index_toolchain(record)

    logger.debug("Extracted %d toolchain(s) from %d binaries (%d skipped)", len(records), len(context.binaries), skipped)
    return records
