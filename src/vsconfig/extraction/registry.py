"""Toolchain registry.

Groups binaries into toolchain records keyed by ToolchainIdentity. The
first binary with a new identity creates its record and triggers discovery
for its target platform; every later binary with an equal identity reuses
that record. Discovery therefore runs exactly once per identity.

Records are kept in first-registration order.

Not thread-safe: one extraction run owns the registry. Parallel
registration would need the lookup/insert and each record's aggregation
serialized per identity.
"""

import logging
from typing import Dict, List

from ..graph import NativeBinary
from ..model import ToolchainIdentity, ToolchainRecord
from ..toolchains import ToolchainDiscovery
from .binary_builder import BinaryBuildResult

logger = logging.getLogger(__name__)


class ToolchainRegistry:
    """Owns all toolchain records of one extraction run."""

    def __init__(self, discovery: ToolchainDiscovery):
        self._discovery = discovery
        self._records: Dict[ToolchainIdentity, ToolchainRecord] = {}

    def get_or_create(self, binary: NativeBinary) -> ToolchainRecord:
        """Get the record for a binary's identity, creating and discovering it if new.

        Raises:
            DiscoveryError: If the record is new and no definition matches its platform
        """
        identity = ToolchainIdentity.from_binary(binary)
        record = self._records.get(identity)
        if record is not None:
            return record

        platform = binary.target_platform
        compiler = self._discovery.discover(platform, binary.tool_chain)
        record = ToolchainRecord(identity=identity, name=platform.name, compiler=compiler)
        self._records[identity] = record
        logger.debug("New toolchain %s (%s): c=%s c++=%s", record.name, identity, compiler.c_path, compiler.cpp_path)
        return record

    def register(self, binary: NativeBinary, result: BinaryBuildResult) -> ToolchainRecord:
        """Register a built binary with its toolchain record.

        The descriptor is appended and its library headers and sources are
        merged into the record's library file set, for new and existing
        records alike.
        """
        record = self.get_or_create(binary)
        record.binaries.append(result.descriptor)
        record.add_lib_files(result.descriptor.lib_headers)
        record.add_lib_files(result.lib_sources)
        return record

    @property
    def records(self) -> List[ToolchainRecord]:
        return list(self._records.values())

    def __len__(self) -> int:
        return len(self._records)
