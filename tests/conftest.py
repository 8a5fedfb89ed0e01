"""Shared pytest fixtures."""

import logging

import pytest

from athens_logseq.config import ConfigManager
from athens_logseq.database import GraphStore


@pytest.fixture
def make_store():
    """Build an in-memory GraphStore from a list of Blocks."""
    stores = []

    def _make(blocks):
        store = GraphStore()
        store.connect()
        store.initialize_database()
        store.load(blocks)
        stores.append(store)
        return store

    yield _make

    for store in stores:
        store.disconnect()


@pytest.fixture
def settings(tmp_path):
    """Default configuration, independent of any config.yaml in the cwd."""
    return ConfigManager(str(tmp_path / "missing-config.yaml"))


@pytest.fixture
def restore_logging():
    """Undo the root logger changes made by main.setup_logging()."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level

    yield

    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
