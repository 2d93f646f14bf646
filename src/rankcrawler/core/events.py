"""
Application Lifecycle Events

Manages FastAPI lifespan events for startup and shutdown.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
import logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager

    Handles startup and shutdown events:
    - Startup: Open the graph store (no crawl is started)
    - Shutdown: Stop a running crawl gracefully
    """
    logger.info("Starting Rank Crawler Service...")

    # Import here to avoid circular dependencies
    from rankcrawler.workers.manager import crawl_manager

    await crawl_manager.initialize()
    logger.info("Use POST /api/v1/crawl/start to begin crawling")

    yield  # Application runs here

    logger.info("Shutting down Rank Crawler Service...")
    await crawl_manager.shutdown(graceful=True)
    logger.info("Shutdown complete")
