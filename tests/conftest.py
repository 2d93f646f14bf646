"""
Test configuration and fixtures for Rank Crawler tests
"""

import asyncio
import os

# Set ENVIRONMENT before importing any modules that use infrastructure_config
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from unittest.mock import MagicMock, AsyncMock
from fastapi.testclient import TestClient

from rankcrawler.errors import FetchError
from rankcrawler.services.fetcher import PageFetcher


class ScriptedFetcher(PageFetcher):
    """
    In-memory fetcher driven by a {url: [links]} mapping.

    Records every fetched URL and the peak number of concurrent fetches.
    """

    def __init__(self, graph=None, failures=(), delay=0.0):
        self.graph = graph or {}
        self.failures = set(failures)
        self.delay = delay
        self.fetched: list[str] = []
        self.active = 0
        self.max_active = 0
        self.opened = 0
        self.closed = 0

    async def open(self):
        self.opened += 1

    async def close(self):
        self.closed += 1

    async def fetch(self, url, timeout):
        self.fetched.append(url)
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            else:
                await asyncio.sleep(0)
            if url in self.failures:
                raise FetchError(url, "scripted failure")
            return list(self.graph.get(url, []))
        finally:
            self.active -= 1


@pytest.fixture
def temp_db_path(tmp_path):
    """Create a temporary database path for testing"""
    return str(tmp_path / "test_graph.db")


@pytest.fixture
def graph_store(temp_db_path):
    """Create a test SqlGraphStore instance"""
    from linkgraph.db.graph_store import SqlGraphStore

    return SqlGraphStore(temp_db_path)


@pytest.fixture
def make_fetcher():
    """Factory for ScriptedFetcher instances"""
    return ScriptedFetcher


@pytest.fixture
def test_client(graph_store):
    """
    FastAPI test client backed by a temporary graph store and a scripted fetcher.

    Entering the client runs the app lifespan so background crawl tasks live on
    one event loop for the whole test.
    """
    from rankcrawler.coordinator import CrawlCoordinator
    from rankcrawler.main import app
    from rankcrawler.workers.manager import crawl_manager

    fetcher = ScriptedFetcher(
        graph={
            "https://a.test/": ["https://b.test/", "https://c.test/"],
        }
    )
    original_store = crawl_manager._store
    original_coordinator = crawl_manager._coordinator
    crawl_manager._store = graph_store
    crawl_manager._coordinator = CrawlCoordinator(
        store=graph_store, fetcher=fetcher, concurrency=2
    )

    try:
        with TestClient(app) as client:
            client.fetcher = fetcher
            yield client
    finally:
        crawl_manager._store = original_store
        crawl_manager._coordinator = original_coordinator


@pytest.fixture
def mock_aiohttp_session():
    """Mock aiohttp ClientSession"""
    session = MagicMock()
    session.closed = False

    # Mock response
    response = AsyncMock()
    response.status = 200
    response.headers = {"Content-Type": "text/html"}
    response.url = "https://example.com/"
    response.content.read = AsyncMock(
        return_value=b'<html><body><a href="/page">Page</a></body></html>'
    )

    # Setup context manager
    session.get.return_value.__aenter__.return_value = response

    return session
