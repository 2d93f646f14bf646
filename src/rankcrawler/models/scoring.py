"""
Scoring Models
"""

from pydantic import BaseModel, HttpUrl


class ScorePredictRequest(BaseModel):
    """Request model for score prediction."""

    url: HttpUrl


class ScorePredictResponse(BaseModel):
    """Response model for score prediction."""

    url: str
    components: dict[str, int]
    predicted_score: int
