"""Snapshot importers for Athens graphs."""

from pathlib import Path
from typing import Union

from ..exceptions import SourceReadError
from .base import BaseImporter
from .mock import MockImporter
from .datascript import DatascriptJSONImporter
from .datascript_edn import DatascriptEDNImporter


def importer_for_path(snapshot_path: Union[str, Path]) -> BaseImporter:
    """Pick an importer from the snapshot's file extension."""
    path = Path(snapshot_path)
    suffix = path.suffix.lower()
    if suffix == ".json":
        return DatascriptJSONImporter(path)
    if suffix == ".edn":
        return DatascriptEDNImporter(path)
    raise SourceReadError(f"Unsupported snapshot format '{suffix or path.name}': expected .json or .edn")


__all__ = [
    "BaseImporter",
    "MockImporter",
    "DatascriptJSONImporter",
    "DatascriptEDNImporter",
    "importer_for_path",
]
