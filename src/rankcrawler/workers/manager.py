"""
Crawl Manager

Singleton instance holding the crawl coordinator for the HTTP layer.
"""

import logging

from linkgraph.db.graph_store import SqlGraphStore, StoreError
from rankcrawler.coordinator import CrawlCoordinator
from rankcrawler.core.config import settings
from rankcrawler.domain.ranking import RankUpdater
from rankcrawler.domain.scoring import PriorityScorer, rules_from_settings
from rankcrawler.models.crawl import CrawlStatus
from rankcrawler.models.queue import QueueItem
from rankcrawler.services.fetcher import HttpPageFetcher
from rankcrawler.services.results import ResultExporter

logger = logging.getLogger(__name__)


def build_coordinator(store: SqlGraphStore) -> CrawlCoordinator:
    """Wire a coordinator from CrawlerSettings."""
    return CrawlCoordinator(
        store=store,
        fetcher=HttpPageFetcher(
            user_agent=settings.CRAWL_USER_AGENT,
            outlinks_limit=settings.CRAWL_OUTLINKS_PER_PAGE,
        ),
        scorer=PriorityScorer(rules_from_settings(settings)),
        rank_updater=RankUpdater(store, damping=settings.CRAWL_DAMPING_FACTOR),
        concurrency=settings.CRAWL_CONCURRENCY,
        fetch_timeout=settings.CRAWL_TIMEOUT_SEC,
        session_timeout=settings.CRAWL_SESSION_TIMEOUT_SEC,
    )


class CrawlManager:
    """Singleton crawl manager"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._store = None
            cls._instance._coordinator = None
        return cls._instance

    @property
    def store(self) -> SqlGraphStore:
        # Created lazily so importing the app never touches the database
        if self._store is None:
            self._store = SqlGraphStore(settings.GRAPH_DB_PATH)
        return self._store

    @property
    def coordinator(self) -> CrawlCoordinator:
        if self._coordinator is None:
            self._coordinator = build_coordinator(self.store)
        return self._coordinator

    @property
    def exporter(self) -> ResultExporter:
        return ResultExporter(self.store)

    async def initialize(self):
        """Open the graph store (called during app startup)"""
        store = self.store
        logger.info(f"Graph store ready: {store.db_path}")

    def start(self, urls: list[str], max_depth: int) -> bool:
        """Start a crawl session. False if one is already running."""
        return self.coordinator.start(urls, max_depth)

    def stop(self) -> bool:
        """Request a soft stop. False if nothing is running."""
        return self.coordinator.stop()

    async def shutdown(self, graceful: bool = True):
        """Stop any running session, cancelling it after the grace period"""
        if self._coordinator is not None:
            await self._coordinator.shutdown(
                graceful=graceful, timeout=settings.CRAWL_SHUTDOWN_GRACE_SEC
            )

    @property
    def is_running(self) -> bool:
        """Check if a crawl session is running"""
        return self._coordinator is not None and self._coordinator.is_running()

    def get_status(self) -> CrawlStatus:
        """Get current crawl status"""
        status = self.coordinator.status()
        try:
            status["graph_node_count"] = self.store.node_count()
            status["graph_edge_count"] = self.store.edge_count()
        except StoreError as e:
            logger.warning(f"Graph counts unavailable: {e}")
        return CrawlStatus(**status)

    def peek_queue(self, limit: int = 20) -> list[QueueItem]:
        """Top entries of the current session's frontier"""
        session = self.coordinator.session
        if session is None:
            return []
        return [
            QueueItem(url=item.entry.url, depth=item.entry.depth, score=item.score)
            for item in session.frontier.peek(limit)
        ]

    def check_database(self) -> bool:
        """Check if the graph store answers queries"""
        return self.store.ping()


# Singleton instance
crawl_manager = CrawlManager()
