"""Source/binary index pass.

Runs once per toolchain record after all binaries are registered:

- name_binary_map maps each component name to its position in the
  record's binaries list. A component name seen twice keeps the later index.
- source_binaries receives two pairs per source set (own sources and
  exported headers). Pairs are de-duplicated by source group and the
  first registered pair keeps its metadata.
"""

from ..model import SourceBinaryPair, ToolchainRecord


def index_toolchain(record: ToolchainRecord) -> None:
    """Fill the name index and source/binary pair set of a record."""
    for i, binary in enumerate(record.binaries):
        record.name_binary_map[binary.component_name] = i
        for source_set in binary.source_sets:
            record.source_binaries.add(SourceBinaryPair(source_set, source_set.source, binary.component_name))
            record.source_binaries.add(SourceBinaryPair(source_set, source_set.exported_headers, binary.component_name))
