"""
Datascript EDN importer.

Reads a Datascript database printed as EDN, e.g.
``#datascript/DB {:schema {...} :datoms [[1 :block/uid "a1b2c3" 536870913] ...]}``,
or a plain EDN vector of entity maps.
"""

import collections.abc
import logging
from pathlib import Path
from typing import List, Union

try:
    import edn_format  # type: ignore
    EDN_AVAILABLE = True
except ImportError:
    edn_format = None  # type: ignore
    EDN_AVAILABLE = False

from ..exceptions import SourceReadError
from ..models import Block
from .base import BaseImporter
from .datascript import blocks_from_snapshot


if EDN_AVAILABLE:
    class DatascriptTaggedValue(edn_format.TaggedElement):
        """Carries the value of a #datascript/... tagged literal."""

        tag = "datascript"

        def __init__(self, value):
            self.value = value

        def __str__(self):
            return f"#{self.tag} {edn_format.dumps(self.value)}"

    class DatascriptDB(DatascriptTaggedValue):
        tag = "datascript/DB"

    class DatascriptDatom(DatascriptTaggedValue):
        tag = "datascript/Datom"

    edn_format.add_tag("datascript/DB", DatascriptDB)
    edn_format.add_tag("datascript/Datom", DatascriptDatom)


def _untag(value):
    """Strip #datascript/... wrappers, recursing into datom lists."""
    if EDN_AVAILABLE and isinstance(value, DatascriptTaggedValue):
        return _untag(value.value)
    if isinstance(value, collections.abc.Sequence) and not isinstance(value, str):
        return [_untag(item) for item in value]
    return value


class DatascriptEDNImporter(BaseImporter):
    """
    Importer for Datascript snapshots serialized as EDN.
    """

    def __init__(self, snapshot_path: Union[str, Path]):
        """
        Initialize the EDN importer.

        Args:
            snapshot_path: Path to the EDN snapshot file.
        """
        self.snapshot_path = Path(snapshot_path)

        if not EDN_AVAILABLE:
            raise ImportError("The 'edn-format' package is required. Please install it with: pip install edn-format")

        logging.info(f"Initialized Datascript EDN importer for: {self.snapshot_path}")

    def get_all_blocks(self) -> List[Block]:
        try:
            with open(self.snapshot_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise SourceReadError(f"Snapshot file not found: {self.snapshot_path}")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(f"Cannot read snapshot {self.snapshot_path}: {e}")

        try:
            parsed_data = edn_format.loads(content)
        except Exception as e:
            # edn_format reports lexer and parser failures with several exception types
            raise SourceReadError(f"Invalid EDN in snapshot {self.snapshot_path}: {e}")

        if isinstance(parsed_data, DatascriptTaggedValue):
            parsed_data = parsed_data.value

        return blocks_from_snapshot(_untag_snapshot(parsed_data), self.snapshot_path.name)


def _untag_snapshot(data):
    """Unwrap tagged datoms inside a ':datoms' list; entity lists pass through."""
    if isinstance(data, collections.abc.Mapping):
        return {key: (_untag(value) if str(key).lstrip(":") == "datoms" else value)
                for key, value in data.items()}
    return data
