"""
Crawl Session Models

Pydantic models for crawl session control endpoints.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, HttpUrl

from rankcrawler.core.config import settings


class CrawlStartRequest(BaseModel):
    """Request to start a crawl session"""

    urls: list[HttpUrl] = Field(
        ...,
        min_length=1,
        description="Seed URLs (depth 1)",
        examples=[["https://www.metmuseum.org", "https://www.nps.gov"]],
    )
    max_depth: int = Field(
        default_factory=lambda: settings.CRAWL_MAX_DEPTH,
        ge=1,
        le=100,
        description="Entries at this depth or deeper are discarded without fetching",
    )


class CrawlStartResponse(BaseModel):
    """Response after a start request"""

    status: Literal["accepted", "already_running"]
    message: str
    seed_count: int = Field(default=0, ge=0)


class CrawlStopResponse(BaseModel):
    """Response after a stop request"""

    status: Literal["stopping", "idle"]
    message: str


class CrawlStatus(BaseModel):
    """Current (or last) crawl session status"""

    state: Literal["idle", "running"] = Field(..., description="Session state")
    running: bool = Field(..., description="True while a session is in progress")
    concurrency: int = Field(..., ge=1, description="Maximum concurrent fetches")
    max_depth: int | None = Field(default=None, ge=1)
    started_at: datetime | None = Field(default=None)
    finished_at: datetime | None = Field(default=None)
    uptime_seconds: float | None = Field(default=None, ge=0)
    stop_requested: bool = Field(default=False)
    active_tasks: int = Field(default=0, ge=0)
    frontier_size: int = Field(default=0, ge=0)
    visited_count: int = Field(default=0, ge=0)
    fetched_count: int = Field(default=0, ge=0)
    failed_count: int = Field(default=0, ge=0)
    discarded_count: int = Field(
        default=0, ge=0, description="Entries dropped at the depth bound"
    )
    edges_recorded: int = Field(default=0, ge=0)
    graph_node_count: int | None = Field(
        default=None, ge=0, description="Pages in the graph store (None if unavailable)"
    )
    graph_edge_count: int | None = Field(
        default=None, ge=0, description="Links in the graph store (None if unavailable)"
    )


class PageRank(BaseModel):
    """A page and its approximate rank"""

    url: str
    rank: float
