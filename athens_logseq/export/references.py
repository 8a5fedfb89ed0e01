"""
Block reference resolution.

Every ((uid)) token found in block text is given a stable UUID. The map is
computed once over the whole graph, before anything is written, and is
read-only afterwards.
"""

import hashlib
import logging
import re
import uuid
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional

from ..database import GraphStore
from ..models import RewriteEntry


HEX_IDENTIFIER = r"[\da-fA-F]+"
BLOCK_REF_PATTERN = re.compile(r"\(\((" + HEX_IDENTIFIER + r")\)\)")
# Anything shaped like a reference; used to count tokens left untouched
ANY_REF_PATTERN = re.compile(r"\(\(([^()\s]+)\)\)")


def derive_identifier(block_ref: str) -> str:
    """
    Derive the output UUID for a referenced uid.

    Same algorithm as java.util.UUID.nameUUIDFromBytes (MD5, version 3), so
    exports match graphs previously converted by the Clojure exporter.
    """
    digest = hashlib.md5(block_ref.encode("utf-8")).digest()
    return str(uuid.UUID(bytes=digest, version=3))


def find_block_refs(text: Optional[str]) -> List[str]:
    """Return the uids of all well-formed ((ref)) tokens in text, in order."""
    if not text:
        return []
    return BLOCK_REF_PATTERN.findall(text)


class RewriteMap:
    """
    Immutable association from referenced uids to output identifiers.
    """

    def __init__(self, identifiers: Mapping[str, str]):
        self._identifiers = MappingProxyType(dict(identifiers))

    def __len__(self) -> int:
        return len(self._identifiers)

    def __contains__(self, block_ref: object) -> bool:
        return block_ref in self._identifiers

    def __iter__(self) -> Iterator[str]:
        return iter(self._identifiers)

    def identifier_for(self, block_ref: Optional[str]) -> Optional[str]:
        """The identifier assigned to a uid, or None if nothing references it."""
        if block_ref is None:
            return None
        return self._identifiers.get(block_ref)

    def entries(self) -> List[RewriteEntry]:
        return [
            RewriteEntry(source_ref=ref, identifier=identifier)
            for ref, identifier in sorted(self._identifiers.items())
        ]

    def rewrite(self, text: Optional[str]) -> Optional[str]:
        """Replace every ((uid)) with ((identifier)); unknown tokens are kept."""
        if not text:
            return text

        def replace_match(match):
            identifier = self._identifiers.get(match.group(1))
            return f"(({identifier}))" if identifier else match.group(0)

        return BLOCK_REF_PATTERN.sub(replace_match, text)


class ReferenceResolver:
    """
    Scans the whole graph for block references and builds the RewriteMap.
    """

    def __init__(self, store: GraphStore):
        self.store = store
        self.missing_targets: List[str] = []

    def resolve(self) -> RewriteMap:
        identifiers: Dict[str, str] = {}
        malformed = 0

        for block in self.store.blocks_with_text():
            for block_ref in find_block_refs(block.string):
                if block_ref not in identifiers:
                    identifiers[block_ref] = derive_identifier(block_ref)
            malformed += sum(
                1 for token in ANY_REF_PATTERN.findall(block.string)
                if not re.fullmatch(HEX_IDENTIFIER, token)
            )

        # Targets that are not in the graph keep their identifier so the
        # rewritten text stays consistent; they simply never get an id:: line
        self.missing_targets = sorted(
            block_ref for block_ref in identifiers if not self.store.has_uid(block_ref)
        )

        logging.info(f"Assigned identifiers to {len(identifiers)} referenced blocks")
        if self.missing_targets:
            logging.warning(
                f"{len(self.missing_targets)} referenced blocks do not exist in the graph: "
                f"{', '.join(self.missing_targets)}"
            )
        if malformed:
            logging.debug(f"Left {malformed} malformed block references unchanged")

        return RewriteMap(identifiers)
