"""Graph storage for the exporter."""

from .manager import GraphStore

__all__ = ["GraphStore"]
