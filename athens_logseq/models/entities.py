"""
Derived records produced while exporting.

These models describe what the exporter computes from the graph: rewritten
reference identifiers, journal dates, output targets and the run report.
"""

from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class RewriteEntry(BaseModel):
    """
    Maps one ((ref)) token to the identifier written to the output.
    """

    model_config = ConfigDict(frozen=True)

    source_ref: str = Field(
        ...,
        description="The block uid found inside a ((ref)) token"
    )

    identifier: str = Field(
        ...,
        description="The stable UUID that replaces the uid in the output"
    )


class JournalDescriptor(BaseModel):
    """
    A page whose title is a calendar date such as 'July 16, 2021'.
    """

    title: str = Field(..., description="The original page title")
    month: str = Field(..., description="Full English month name")
    day: int = Field(..., description="Day of the month")
    year: int = Field(..., description="Calendar year")


class PageTarget(BaseModel):
    """
    Where a page ends up on disk, and the preamble it needs.
    """

    title: str = Field(..., description="The original page title")
    path: Path = Field(..., description="Output Markdown file")
    preamble: Optional[str] = Field(
        default=None,
        description="A 'title:: ...' line when the filename cannot hold the title"
    )
    kind: str = Field(default="page", description="'journal' or 'page'")


class PathCollision(BaseModel):
    """
    Two or more titles that escape to the same output file.
    """

    path: Path
    titles: List[str] = Field(
        default_factory=list,
        description="Colliding titles in write order; the last one wins"
    )


class PageFailure(BaseModel):
    """
    A page that could not be exported.
    """

    title: str
    path: Optional[Path] = None
    error: str


class ExportReport(BaseModel):
    """
    Summary of a single export run.
    """

    output_root: Path
    journals_written: int = 0
    pages_written: int = 0
    references_rewritten: int = Field(
        default=0,
        description="Number of distinct ((ref)) tokens in the rewrite map"
    )
    missing_references: List[str] = Field(
        default_factory=list,
        description="Referenced uids that have no block in the graph"
    )
    collisions: List[PathCollision] = Field(default_factory=list)
    failures: List[PageFailure] = Field(default_factory=list)

    @property
    def files_written(self) -> int:
        return self.journals_written + self.pages_written

    @property
    def success(self) -> bool:
        return not self.failures
