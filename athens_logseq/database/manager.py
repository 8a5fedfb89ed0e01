"""
Graph store for the exporter.

This module keeps the loaded Athens graph in an in-memory DuckDB database:
one table of blocks keyed by their graph id and one table of parent/child
links. Nothing outside this module holds direct references between blocks.
"""

import duckdb
import logging
from typing import Iterable, List, Optional

from ..models import Block


BLOCK_COLUMNS = "b.eid, b.uid, b.content, b.title, b.block_order"


class GraphStore:
    """
    Read-only query view over the source graph, backed by DuckDB.
    """

    def __init__(self, db_path: str = ":memory:"):
        """
        Initialize the graph store.

        Args:
            db_path: Path to the DuckDB database file (in memory by default)
        """
        self.db_path = db_path
        self.connection = None

    def connect(self):
        """Establish connection to the database."""
        self.connection = duckdb.connect(self.db_path)

    def disconnect(self):
        """Close the database connection."""
        if self.connection:
            self.connection.close()
            self.connection = None

    def __enter__(self):
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.disconnect()

    def _require_connection(self):
        if not self.connection:
            raise RuntimeError("Database connection not established")
        return self.connection

    def initialize_database(self):
        """
        Create the block and link tables if they don't exist.
        """
        connection = self._require_connection()

        connection.execute("""
            CREATE TABLE IF NOT EXISTS blocks (
                eid BIGINT PRIMARY KEY,
                uid VARCHAR,
                content VARCHAR,
                title VARCHAR,
                block_order BIGINT,
                seq BIGINT NOT NULL
            )
        """)

        # seq keeps the insertion order of each link so that siblings
        # sharing an order value still sort deterministically
        connection.execute("""
            CREATE TABLE IF NOT EXISTS block_children (
                parent_eid BIGINT NOT NULL,
                child_eid BIGINT NOT NULL,
                seq INTEGER NOT NULL
            )
        """)

        logging.debug("Graph store tables initialized")

    def load(self, blocks: Iterable[Block]) -> int:
        """
        Populate the store from importer output.

        Args:
            blocks: Blocks as produced by an importer

        Returns:
            Number of blocks loaded
        """
        connection = self._require_connection()

        block_rows = []
        link_rows = []
        for seq, block in enumerate(blocks):
            block_rows.append((block.eid, block.uid, block.string, block.title, block.order, seq))
            for position, child_eid in enumerate(block.children):
                link_rows.append((block.eid, child_eid, position))

        if block_rows:
            connection.executemany(
                "INSERT INTO blocks VALUES (?, ?, ?, ?, ?, ?)", block_rows
            )
        if link_rows:
            connection.executemany(
                "INSERT INTO block_children VALUES (?, ?, ?)", link_rows
            )

        logging.info(f"Loaded {len(block_rows)} blocks and {len(link_rows)} child links")
        return len(block_rows)

    def _child_ids(self, eid: int) -> List[int]:
        rows = self._require_connection().execute(
            "SELECT child_eid FROM block_children WHERE parent_eid = ? ORDER BY seq",
            [eid]
        ).fetchall()
        return [row[0] for row in rows]

    def _row_to_block(self, row) -> Block:
        eid, uid, content, title, order = row
        return Block(
            eid=eid,
            uid=uid,
            string=content,
            title=title,
            order=order,
            children=self._child_ids(eid)
        )

    def page_by_title(self, title: str) -> Optional[Block]:
        """
        Look up a page's root block by its exact title.
        """
        row = self._require_connection().execute(
            f"SELECT {BLOCK_COLUMNS} FROM blocks b WHERE b.title = ? ORDER BY b.seq LIMIT 1",
            [title]
        ).fetchone()
        return self._row_to_block(row) if row else None

    def block_by_eid(self, eid: int) -> Optional[Block]:
        row = self._require_connection().execute(
            f"SELECT {BLOCK_COLUMNS} FROM blocks b WHERE b.eid = ?",
            [eid]
        ).fetchone()
        return self._row_to_block(row) if row else None

    def block_by_uid(self, uid: str) -> Optional[Block]:
        row = self._require_connection().execute(
            f"SELECT {BLOCK_COLUMNS} FROM blocks b WHERE b.uid = ? ORDER BY b.seq LIMIT 1",
            [uid]
        ).fetchone()
        return self._row_to_block(row) if row else None

    def children_of(self, block: Block) -> List[Block]:
        """
        Get the children of a block, sorted by their sibling order.

        Children without an order value sort last; ties keep the order in
        which the links were loaded. Links to missing blocks are skipped.
        """
        rows = self._require_connection().execute(
            f"""
            SELECT c.child_eid, {BLOCK_COLUMNS}
            FROM block_children c
            LEFT JOIN blocks b ON b.eid = c.child_eid
            WHERE c.parent_eid = ?
            ORDER BY b.block_order ASC NULLS LAST, c.seq ASC
            """,
            [block.eid]
        ).fetchall()

        children = []
        for row in rows:
            if row[1] is None:
                logging.warning(f"Block {block.eid} links to missing child block {row[0]}; skipping")
                continue
            children.append(self._row_to_block(row[1:]))
        return children

    def list_titles(self) -> List[str]:
        """
        List every distinct page title, sorted.
        """
        rows = self._require_connection().execute(
            "SELECT DISTINCT title FROM blocks WHERE title IS NOT NULL ORDER BY title"
        ).fetchall()
        return [row[0] for row in rows]

    def blocks_with_text(self) -> List[Block]:
        """
        Get every block that carries non-empty text.
        """
        rows = self._require_connection().execute(
            f"SELECT {BLOCK_COLUMNS} FROM blocks b "
            "WHERE b.content IS NOT NULL AND b.content <> '' ORDER BY b.seq"
        ).fetchall()
        return [self._row_to_block(row) for row in rows]

    def has_uid(self, uid: str) -> bool:
        row = self._require_connection().execute(
            "SELECT 1 FROM blocks WHERE uid = ? LIMIT 1", [uid]
        ).fetchone()
        return row is not None

    def count_blocks(self) -> int:
        return self._require_connection().execute("SELECT COUNT(*) FROM blocks").fetchone()[0]
