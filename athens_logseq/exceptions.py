"""Exceptions raised while exporting an Athens graph."""

from pathlib import Path
from typing import Union


class ExportError(Exception):
    """Base exception for export errors."""
    pass


class SourceReadError(ExportError):
    """Raised when the source snapshot is missing or cannot be parsed."""
    pass


class OutputWriteError(ExportError):
    """Raised when an output directory or file cannot be written."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot write {self.path}: {reason}")


class PageLookupError(ExportError):
    """Raised when a page title has no root block in the graph."""

    def __init__(self, title: str):
        self.title = title
        super().__init__(f"No root block found for page title: {title!r}")
