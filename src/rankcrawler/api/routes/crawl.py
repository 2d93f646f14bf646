"""
Crawl Router

Session control and result endpoints.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from linkgraph.db.graph_store import StoreError
from rankcrawler.api.deps import get_crawl_manager
from rankcrawler.models.crawl import (
    CrawlStartRequest,
    CrawlStartResponse,
    CrawlStopResponse,
    CrawlStatus,
    PageRank,
)
from rankcrawler.models.queue import QueueItem
from rankcrawler.workers.manager import CrawlManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/crawl")


@router.post("/start", response_model=CrawlStartResponse, status_code=202)
async def start_crawl(
    request: CrawlStartRequest,
    manager: CrawlManager = Depends(get_crawl_manager),
):
    """
    Start crawling the given seed URLs

    Returns immediately; poll GET /crawl/status for progress. A request made
    while a session is running is ignored.
    """
    urls = [str(url) for url in request.urls]
    if not manager.start(urls, request.max_depth):
        return CrawlStartResponse(
            status="already_running",
            message="A crawl session is already in progress",
        )
    return CrawlStartResponse(
        status="accepted",
        message=f"Crawl started with max_depth={request.max_depth}",
        seed_count=len(urls),
    )


@router.post("/stop", response_model=CrawlStopResponse)
async def stop_crawl(manager: CrawlManager = Depends(get_crawl_manager)):
    """Stop enqueueing new URLs; in-flight fetches are allowed to finish"""
    if manager.stop():
        return CrawlStopResponse(status="stopping", message="Stop requested")
    return CrawlStopResponse(status="idle", message="No crawl in progress")


@router.get("/status", response_model=CrawlStatus)
async def get_crawl_status(manager: CrawlManager = Depends(get_crawl_manager)):
    """Check if the crawling process is in progress"""
    return manager.get_status()


@router.get("/result", response_model=list[str])
async def get_result(manager: CrawlManager = Depends(get_crawl_manager)):
    """Get all crawled URLs sorted by page rank (ascending)"""
    try:
        return manager.exporter.ranked_urls()
    except StoreError as e:
        logger.error(f"Failed to read results: {e}")
        raise HTTPException(status_code=503, detail=f"Graph store unavailable: {e}")


@router.get("/ranks", response_model=list[PageRank])
async def get_ranks(manager: CrawlManager = Depends(get_crawl_manager)):
    """Get all crawled URLs with their rank (ascending)"""
    try:
        pages = manager.exporter.ranked_pages()
    except StoreError as e:
        logger.error(f"Failed to read ranks: {e}")
        raise HTTPException(status_code=503, detail=f"Graph store unavailable: {e}")
    return [PageRank(url=url, rank=rank) for url, rank in pages]


@router.get("/queue", response_model=list[QueueItem])
async def view_queue(
    limit: int = 20, manager: CrawlManager = Depends(get_crawl_manager)
):
    """View the highest-priority entries waiting in the frontier"""
    return manager.peek_queue(limit)


@router.get("/check-database", response_model=bool)
async def check_database(manager: CrawlManager = Depends(get_crawl_manager)):
    """Check if the application can reach the graph store"""
    return manager.check_database()
