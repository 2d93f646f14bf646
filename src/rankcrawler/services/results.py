"""
Result Service

Reads final ranks from the graph store.
"""

from linkgraph.db.graph_store import GraphStore


class ResultExporter:
    """Ranked views over the link graph."""

    def __init__(self, store: GraphStore):
        self.store = store

    def ranked_pages(self) -> list[tuple[str, float]]:
        """All pages as (url, rank), lowest rank first."""
        return self.store.all_nodes_ordered_by_rank(ascending=True)

    def ranked_urls(self) -> list[str]:
        """
        All page URLs ordered by ascending rank (lowest first).

        Ascending is the established behaviour of the /result endpoint even
        though "most important first" would be the reverse.
        """
        return [url for url, _ in self.ranked_pages()]
