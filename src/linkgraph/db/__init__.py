"""
Graph Database Layer

Provides the link graph store (pages with ranks and directed links).
"""

from linkgraph.db.graph_store import GraphStore, SqlGraphStore, StoreError

__all__ = ["GraphStore", "SqlGraphStore", "StoreError"]
