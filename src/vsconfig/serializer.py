"""Toolchain document serializer.

Renders toolchain records as a JSON array of toolchain objects and writes
it to the configured file. Every collection in the document has a defined
order (see the to_dict() methods of the model), so rendering the same
records twice gives identical bytes.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .config import ExtractionConfig
from .model import ToolchainRecord

logger = logging.getLogger(__name__)


class ConfigWriteError(Exception):
    """Raised when the rendered document cannot be written."""

    def __init__(self, path: Path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write {path}: {cause}")


def to_document(records: Iterable[ToolchainRecord]) -> List[Dict[str, Any]]:
    """Convert toolchain records to the JSON-ready document structure."""
    return [record.to_dict() for record in records]


def render(records: Iterable[ToolchainRecord], pretty_printing: bool = False) -> str:
    """Render toolchain records to a JSON string.

    Args:
        records: Toolchain records in output order
        pretty_printing: Indent nested structures by two spaces

    Returns:
        The JSON document
    """
    document = to_document(records)
    if pretty_printing:
        return json.dumps(document, indent=2)
    return json.dumps(document, separators=(",", ":"))


def write_config(records: Iterable[ToolchainRecord], config: ExtractionConfig) -> Path:
    """Render toolchain records and write them to the configured file.

    Creates the destination directory if needed.

    Returns:
        The path written

    Raises:
        ConfigWriteError: If the directory or file cannot be written
    """
    path = config.config_file
    text = render(records, config.pretty_printing)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise ConfigWriteError(path, e) from e
    logger.debug("Wrote %d bytes to %s", len(text), path)
    return path
