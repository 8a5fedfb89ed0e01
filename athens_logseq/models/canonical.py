"""
Canonical graph records for the exporter.

This module defines the in-memory shape every importer must produce: a flat
table of blocks keyed by their internal graph id, with children stored as id
lookups rather than nested objects.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


class Block(BaseModel):
    """
    A single node of the source outliner graph.

    Pages are blocks that carry a ``title``. Children are referenced by their
    ``eid`` so that the graph can hold cycles without nesting objects.
    """

    eid: int = Field(
        ...,
        description="Internal graph identifier (:db/id) of the block"
    )

    uid: Optional[str] = Field(
        default=None,
        description="Stable source identifier (:block/uid) used by ((uid)) references"
    )

    string: Optional[str] = Field(
        default=None,
        description="The text content of the block, if any"
    )

    title: Optional[str] = Field(
        default=None,
        description="The page title (:node/title); only set on page blocks"
    )

    order: Optional[int] = Field(
        default=None,
        description="Position of the block among its siblings (:block/order)"
    )

    children: List[int] = Field(
        default_factory=list,
        description="Graph identifiers of the child blocks, in insertion order"
    )

    @property
    def is_page(self) -> bool:
        return self.title is not None

    @property
    def has_text(self) -> bool:
        return bool(self.string)
