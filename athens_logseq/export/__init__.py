"""Athens graph to Logseq Markdown export pipeline."""

from .journals import MONTHS, classify, journal_filename, journal_target
from .paths import escape_title, map_title, title_preamble
from .references import ReferenceResolver, RewriteMap, derive_identifier, find_block_refs
from .serializer import BlockSerializer, convert_task_markers, to_document
from .orchestrator import LogseqExporter, export

__all__ = [
    "MONTHS",
    "classify",
    "journal_filename",
    "journal_target",
    "escape_title",
    "map_title",
    "title_preamble",
    "ReferenceResolver",
    "RewriteMap",
    "derive_identifier",
    "find_block_refs",
    "BlockSerializer",
    "convert_task_markers",
    "to_document",
    "LogseqExporter",
    "export",
]
