"""
Queue Models

Pydantic models for frontier inspection.
"""

from pydantic import BaseModel, Field


class QueueItem(BaseModel):
    """Single entry waiting in the frontier"""

    url: str = Field(..., description="URL to be crawled")
    depth: int = Field(..., ge=1, description="Link distance from the seeds (seeds are 1)")
    score: int = Field(..., description="Priority score (higher = crawled sooner)")
