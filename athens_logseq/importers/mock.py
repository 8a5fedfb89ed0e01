"""
Mock importer for testing the exporter.

This module provides a small hardcoded Athens graph covering the cases the
export pipeline has to handle: a journal page, titles that need escaping,
block references (including a cycle and a dangling one), task markers and a
text-less container block.
"""

from typing import List

from ..models import Block
from .base import BaseImporter


class MockImporter(BaseImporter):
    """
    Mock importer that returns hardcoded test data.

    Used for testing the pipeline without requiring a real snapshot.
    """

    def __init__(self):
        """Initialize the mock importer with test data."""
        self._test_blocks = self._create_test_blocks()

    def get_all_blocks(self) -> List[Block]:
        """
        Return all hardcoded test blocks.

        Returns:
            List of test Block objects
        """
        return list(self._test_blocks)

    def _create_test_blocks(self) -> List[Block]:
        """
        Create hardcoded test blocks.

        Blocks 2 and 11 reference each other; block 21 references a uid
        that exists nowhere in the graph.
        """
        return [
            # Journal page
            Block(eid=1, uid="07-16-2021", title="July 16, 2021", children=[3, 2]),
            Block(eid=2, uid="0a1b2c3d4", order=0, children=[4],
                  string="Met with the team about ((5e6f7a8b9))"),
            Block(eid=3, uid="2b3c4d5e6", order=1, string="{{[[DONE]]}} Ship the release"),
            Block(eid=4, uid="1a2b3c4d5", order=0, string="Follow up {{[[TODO]]}} next week"),

            # Page whose title contains a slash
            Block(eid=10, uid="page-notes", title="Project/Notes", children=[11, 12]),
            Block(eid=11, uid="5e6f7a8b9", order=1, children=[13],
                  string="Decision: keep ((0a1b2c3d4)) in scope"),
            Block(eid=12, uid="6f7a8b9c0", order=0, string="Overview\nsecond line"),
            Block(eid=13, uid="7a8b9c0d1", order=0, children=[14]),
            Block(eid=14, uid="8b9c0d1e2", order=0, string="Nested under a container"),

            # Page whose title contains a colon
            Block(eid=20, uid="page-meeting", title="9:00 Meeting", children=[21]),
            Block(eid=21, uid="9c0d1e2f3", order=0, string="Agenda ((deadbeef0)) and ((not-hex))"),

            # Page whose title contains a dot, with no content
            Block(eid=30, uid="page-version", title="v1.2"),

            # Plain page
            Block(eid=40, uid="page-reading", title="Reading", children=[41]),
            Block(eid=41, uid="a0b1c2d3e", order=0, string="{{TODO}} read ((6f7a8b9c0))"),
        ]
