"""
Datascript snapshot importer.

Athens keeps its graph in a Datascript database. A snapshot is either a list
of datoms ``[entity attribute value tx]`` or a list of entity maps. This
module turns both shapes into Block records and reads the JSON rendition of
a snapshot.
"""

import collections.abc
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..exceptions import SourceReadError
from ..models import Block
from .base import BaseImporter


# Datascript attribute -> Block field
ATTRIBUTE_FIELDS = {
    "block/uid": "uid",
    "block/string": "string",
    "node/title": "title",
    "block/order": "order",
    "block/children": "children",
}


def attribute_name(attribute: Any) -> str:
    """Normalize ':block/uid', Keyword('block/uid') and 'block/uid' to 'block/uid'."""
    return str(attribute).lstrip(":")


def _is_sequence(value: Any) -> bool:
    return isinstance(value, collections.abc.Sequence) and not isinstance(value, (str, bytes))


def _is_collection(value: Any) -> bool:
    return _is_sequence(value) or isinstance(value, collections.abc.Set)


class GraphBuilder:
    """
    Accumulates entity attributes and produces Block records.

    Children may be given as entity ids, as nested entity maps, or as
    ``[:block/uid "..."]`` lookup refs; lookup refs are resolved in build().
    """

    def __init__(self, source_name: str):
        self.source_name = source_name
        self._entities: Dict[int, Dict[str, Any]] = {}
        self._next_temp_id = -1_000_000_000_000

    def _entity(self, eid: int) -> Dict[str, Any]:
        if eid not in self._entities:
            self._entities[eid] = {"children": []}
        return self._entities[eid]

    def _set(self, eid: int, field: str, value: Any) -> None:
        entity = self._entity(eid)
        if field == "children":
            entity["children"].append(value)
        elif field == "order":
            try:
                entity["order"] = int(value)
            except (TypeError, ValueError):
                raise SourceReadError(f"Invalid block order {value!r} for entity {eid} in {self.source_name}")
        else:
            text = str(value)
            try:
                text.encode("utf-8")
            except UnicodeEncodeError as e:
                raise SourceReadError(f"Invalid text in {field} of entity {eid} in {self.source_name}: {e.reason}")
            entity[field] = text

    def add_datom(self, datom: Any) -> None:
        """Add one ``[e a v]`` / ``[e a v tx]`` / ``[e a v tx added]`` datom."""
        if not _is_sequence(datom) or len(datom) < 3:
            raise SourceReadError(f"Malformed datom in {self.source_name}: {datom!r}")
        if len(datom) >= 5 and datom[4] is False:
            return

        attribute, value = attribute_name(datom[1]), datom[2]
        field = ATTRIBUTE_FIELDS.get(attribute)
        if field is None:
            return
        try:
            eid = int(datom[0])
        except (TypeError, ValueError):
            raise SourceReadError(f"Malformed entity id in {self.source_name}: {datom!r}")
        self._set(eid, field, value)

    def add_entity(self, entity: Any) -> int:
        """Add an entity map (and any nested child maps); returns its id."""
        if not isinstance(entity, collections.abc.Mapping):
            raise SourceReadError(f"Expected an entity map in {self.source_name}, got {type(entity).__name__}")

        attributes = {attribute_name(key): value for key, value in entity.items()}
        if "db/id" in attributes:
            try:
                eid = int(attributes["db/id"])
            except (TypeError, ValueError):
                raise SourceReadError(f"Malformed db/id in {self.source_name}: {attributes['db/id']!r}")
        else:
            eid = self._next_temp_id
            self._next_temp_id -= 1

        self._entity(eid)
        for attribute, value in attributes.items():
            field = ATTRIBUTE_FIELDS.get(attribute)
            if field is None or value is None:
                continue
            if field != "children":
                self._set(eid, field, value)
                continue
            children = value if _is_collection(value) and not self._is_lookup_ref(value) else [value]
            for child in children:
                if isinstance(child, collections.abc.Mapping):
                    child = self.add_entity(child)
                self._set(eid, "children", child)
        return eid

    @staticmethod
    def _is_lookup_ref(value: Any) -> bool:
        return _is_sequence(value) and len(value) == 2 and attribute_name(value[0]) == "block/uid"

    def _resolve_child(self, child: Any, uid_index: Dict[str, int]) -> Optional[int]:
        if self._is_lookup_ref(child):
            eid = uid_index.get(str(child[1]))
            if eid is None:
                logging.warning(f"Unresolved child lookup ref {child!r} in {self.source_name}")
            return eid
        try:
            return int(child)
        except (TypeError, ValueError):
            logging.warning(f"Ignoring malformed child reference {child!r} in {self.source_name}")
            return None

    def build(self) -> List[Block]:
        uid_index = {
            attrs["uid"]: eid for eid, attrs in self._entities.items() if "uid" in attrs
        }

        blocks = []
        for eid, attrs in self._entities.items():
            if len(attrs) == 1 and not attrs["children"]:
                # Entity carries no block attributes (user records, schema, ...)
                continue
            children = [self._resolve_child(child, uid_index) for child in attrs["children"]]
            blocks.append(Block(
                eid=eid,
                uid=attrs.get("uid"),
                string=attrs.get("string"),
                title=attrs.get("title"),
                order=attrs.get("order"),
                children=[child for child in children if child is not None],
            ))
        return blocks


def blocks_from_snapshot(data: Any, source_name: str) -> List[Block]:
    """
    Convert a decoded snapshot into Block records.

    Accepts a map holding a ``datoms`` list, or a list of entity maps.
    """
    builder = GraphBuilder(source_name)

    if isinstance(data, collections.abc.Mapping):
        attributes = {attribute_name(key): value for key, value in data.items()}
        datoms = attributes.get("datoms")
        if not _is_sequence(datoms):
            raise SourceReadError(f"{source_name} does not contain a 'datoms' list")
        for datom in datoms:
            builder.add_datom(datom)
    elif _is_sequence(data):
        for entity in data:
            builder.add_entity(entity)
    else:
        raise SourceReadError(
            f"{source_name} is not a recognized snapshot: expected a map or a list, got {type(data).__name__}"
        )

    blocks = builder.build()
    logging.info(f"Read {len(blocks)} blocks from {source_name}")
    return blocks


class DatascriptJSONImporter(BaseImporter):
    """
    Importer for Datascript snapshots serialized as JSON.
    """

    def __init__(self, snapshot_path: Union[str, Path]):
        """
        Initialize the JSON importer.

        Args:
            snapshot_path: Path to the JSON snapshot file.
        """
        self.snapshot_path = Path(snapshot_path)
        logging.info(f"Initialized Datascript JSON importer for: {self.snapshot_path}")

    def get_all_blocks(self) -> List[Block]:
        try:
            with open(self.snapshot_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            raise SourceReadError(f"Snapshot file not found: {self.snapshot_path}")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(f"Cannot read snapshot {self.snapshot_path}: {e}")
        except json.JSONDecodeError as e:
            raise SourceReadError(f"Invalid JSON in snapshot {self.snapshot_path}: {e}")

        return blocks_from_snapshot(data, self.snapshot_path.name)
