"""
athens_logseq: export an Athens graph as a Logseq Markdown directory.

Pages become pages/*.md, date-titled pages become journals/*.md, and block
references are rewritten to stable UUIDs.
"""

__version__ = "0.1.0"

# Import main components
from .database import GraphStore
from .models import Block, ExportReport, JournalDescriptor, PageTarget, RewriteEntry
from .importers import BaseImporter, MockImporter, DatascriptJSONImporter, DatascriptEDNImporter
from .export import LogseqExporter
from .exceptions import ExportError, SourceReadError, OutputWriteError, PageLookupError

__all__ = [
    "GraphStore",
    "Block",
    "ExportReport",
    "JournalDescriptor",
    "PageTarget",
    "RewriteEntry",
    "BaseImporter",
    "MockImporter",
    "DatascriptJSONImporter",
    "DatascriptEDNImporter",
    "LogseqExporter",
    "ExportError",
    "SourceReadError",
    "OutputWriteError",
    "PageLookupError",
]
