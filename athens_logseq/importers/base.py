"""
Base importer interface for the exporter.

This module defines the abstract interface that all snapshot importers must implement.
"""

from abc import ABC, abstractmethod
from typing import List

from ..models import Block


class BaseImporter(ABC):
    """
    Abstract base class for all snapshot importers.

    Each importer reads one serialized graph format and converts it into a
    flat list of Block records. Reading happens once per export run.
    """

    @abstractmethod
    def get_all_blocks(self) -> List[Block]:
        """
        Retrieve every block (pages included) from the snapshot.

        Returns:
            List of Block objects, in source order

        Raises:
            SourceReadError: If the snapshot is missing or cannot be parsed
        """
        pass
