"""
Scoring API Router

Exposes the URL priority heuristic so callers can see why a URL would be
crawled before another.
"""

from fastapi import APIRouter

from rankcrawler.core.config import settings
from rankcrawler.domain.scoring import explain_score, rules_from_settings
from rankcrawler.models.scoring import ScorePredictRequest, ScorePredictResponse

router = APIRouter(prefix="/score")


@router.post("/predict", response_model=ScorePredictResponse)
async def predict_score(request: ScorePredictRequest):
    """
    Predict the crawler priority score for a URL.

    The score is the sum of:
    - Domain bonus (host is a preferred domain)
    - Path bonus (path contains a preferred segment)
    - Shallowness bonus (fewer path segments score higher)
    """
    url = str(request.url)
    breakdown = explain_score(url, rules_from_settings(settings))

    return ScorePredictResponse(
        url=url,
        components={
            "domain_bonus": breakdown.domain_bonus,
            "path_bonus": breakdown.path_bonus,
            "shallowness_bonus": breakdown.shallowness_bonus,
            "path_segments": breakdown.path_segments,
        },
        predicted_score=breakdown.total,
    )
