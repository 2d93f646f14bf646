"""
Models package initialization
"""

from rankcrawler.models.crawl import (
    CrawlStartRequest,
    CrawlStartResponse,
    CrawlStopResponse,
    CrawlStatus,
    PageRank,
)
from rankcrawler.models.queue import QueueItem
from rankcrawler.models.scoring import ScorePredictRequest, ScorePredictResponse

__all__ = [
    "CrawlStartRequest",
    "CrawlStartResponse",
    "CrawlStopResponse",
    "CrawlStatus",
    "PageRank",
    "QueueItem",
    "ScorePredictRequest",
    "ScorePredictResponse",
]
