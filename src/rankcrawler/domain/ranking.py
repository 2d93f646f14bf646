"""
Incremental Rank Approximation

Recomputes a single page's rank from the current ranks of its in-neighbors:

    rank(url) = (1 - d) + d * sum(rank(n) for n in in_neighbors(url))

This runs once per inbound edge insertion while the crawl is in progress.
It is NOT PageRank power iteration: there is no out-degree normalisation and
no convergence loop, so the resulting scores depend on the order in which
edges were discovered. Treat them as a one-pass approximation.
"""

import logging

from linkgraph.db.graph_store import GraphStore, StoreError

logger = logging.getLogger(__name__)

DEFAULT_DAMPING = 0.85


def approximate_rank(neighbor_ranks: list[float], damping: float = DEFAULT_DAMPING) -> float:
    """Apply the one-pass rank formula to a list of in-neighbor ranks."""
    return (1 - damping) + damping * sum(neighbor_ranks)


class RankUpdater:
    """Writes the approximate rank of a page back to the graph store."""

    def __init__(self, store: GraphStore, damping: float = DEFAULT_DAMPING):
        self.store = store
        self.damping = damping

    def update_rank(self, url: str) -> float | None:
        """
        Recompute and store the rank of url.

        Returns the new rank, or None if reading in-neighbors or writing the
        result failed (the stored rank is then left stale).
        """
        try:
            neighbors = self.store.in_neighbors(url)
        except StoreError as e:
            logger.warning(f"Rank update skipped for {url}: {e}")
            return None

        rank = approximate_rank([r for _, r in neighbors], self.damping)

        try:
            self.store.set_rank(url, rank)
        except StoreError as e:
            logger.warning(f"Failed to store rank for {url}: {e}")
            return None

        logger.debug(f"Rank for {url} is {rank:.4f} ({len(neighbors)} in-links)")
        return rank
