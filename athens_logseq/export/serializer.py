"""
Block tree to Logseq Markdown.

A block renders as a bullet holding its text, followed by its children
indented one level deeper. Blocks without text contribute no bullet of their
own; their children are emitted at the indentation they would have had.
"""

import logging
import re
from typing import List, Optional, Set

from ..database import GraphStore
from ..models import Block
from .references import RewriteMap


BULLET = "- "
TODO_MARKER_PATTERN = re.compile(r"\{\{TODO\}\}|\{\{\[\[TODO\]\]\}\}")
DONE_MARKER_PATTERN = re.compile(r"\{\{DONE\}\}|\{\{\[\[DONE\]\]\}\}")


def convert_task_markers(text: str) -> str:
    """
    Replace Athens {{TODO}} / {{[[TODO]]}} (and DONE) markers with bare keywords.

    The replacement happens in place. Logseq only treats the keyword as a task
    state at the start of a block, so markers that Athens allowed mid-sentence
    stay plain text after conversion and have to be moved by hand. Athens has
    no [ ] / [X] checkboxes or priorities, so there is nothing else to convert.
    """
    text = TODO_MARKER_PATTERN.sub("TODO", text)
    return DONE_MARKER_PATTERN.sub("DONE", text)


class BlockSerializer:
    """
    Renders block trees from the graph store as lists of Markdown lines.
    """

    def __init__(self, store: GraphStore, rewrite_map: RewriteMap, indent: str = "  "):
        self.store = store
        self.rewrite_map = rewrite_map
        self.indent = indent

    def own_lines(self, block: Block) -> List[str]:
        """
        The block's own bullet: rewritten text plus an id:: line when other
        blocks reference this one.
        """
        text = self.rewrite_map.rewrite(block.string) or ""
        identifier = self.rewrite_map.identifier_for(block.uid)
        if identifier:
            text = f"{text}\nid:: {identifier}" if text else f"id:: {identifier}"
        if not text:
            return []

        first, *rest = text.split("\n")
        return [BULLET + first] + [self.indent + line for line in rest]

    def render(self, block: Block, _seen: Optional[Set[int]] = None) -> List[str]:
        """
        Render a block and all its descendants.

        Each block is rendered at most once per call; a child id that shows up
        again (malformed data) is skipped.
        """
        seen = _seen if _seen is not None else set()
        seen.add(block.eid)

        lines = self.own_lines(block)
        for child in self.store.children_of(block):
            if child.eid in seen:
                logging.warning(f"Block {child.eid} appears more than once under block {block.eid}; skipping")
                continue
            lines.extend(self.indent + line for line in self.render(child, seen))
        return lines

    def render_page(self, root: Block) -> List[str]:
        """
        Render a page. A page root without text puts its children at the
        left margin, preceded by an unbulleted id:: line when it is referenced.
        """
        if root.has_text:
            return self.render(root)

        seen = {root.eid}
        lines: List[str] = []
        identifier = self.rewrite_map.identifier_for(root.uid)
        if identifier:
            lines.append(f"id:: {identifier}")
        for child in self.store.children_of(root):
            if child.eid in seen:
                logging.warning(f"Block {child.eid} appears more than once on page {root.title!r}; skipping")
                continue
            lines.extend(self.render(child, seen))
        return lines


def to_document(lines: List[str], preamble: Optional[str] = None, task_markers: bool = True) -> str:
    """
    Join rendered lines into the file body.

    The preamble is separated from the blocks by a blank line. Task markers
    are converted across the whole document at once.
    """
    document = "\n".join(lines)
    if preamble:
        document = f"{preamble}\n\n{document}"
    return convert_task_markers(document) if task_markers else document
