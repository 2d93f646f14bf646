"""
Crawler domain logic: link validation, URL scoring and rank approximation.
"""

from rankcrawler.domain.validator import is_crawlable
from rankcrawler.domain.scoring import PriorityScorer, ScoringRules, score_url
from rankcrawler.domain.ranking import RankUpdater, approximate_rank

__all__ = [
    "is_crawlable",
    "PriorityScorer",
    "ScoringRules",
    "score_url",
    "RankUpdater",
    "approximate_rank",
]
