"""Data models for the Athens to Logseq exporter."""

from .canonical import Block
from .entities import (
    ExportReport,
    JournalDescriptor,
    PageFailure,
    PageTarget,
    PathCollision,
    RewriteEntry,
)

__all__ = [
    "Block",
    "ExportReport",
    "JournalDescriptor",
    "PageFailure",
    "PageTarget",
    "PathCollision",
    "RewriteEntry",
]
