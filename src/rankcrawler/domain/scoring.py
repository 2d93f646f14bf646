"""
URL Scoring Domain Logic

Implements the crawler's URL prioritization heuristic. The score depends
only on the URL string and the configured rule set:

1. Preferred Domain - +domain_weight if the host is (a subdomain of) a preferred domain
2. Preferred Path - +path_weight if the path contains a preferred segment
3. Shallowness - +(shallowness_base - number of path segments)

Higher scores are crawled sooner.
"""

from dataclasses import dataclass
from urllib.parse import urlsplit

from linkgraph.core.utils import get_host

DEFAULT_SHALLOWNESS_BASE = 10


@dataclass(frozen=True)
class ScoringRules:
    preferred_domains: tuple[str, ...] = ()
    preferred_path_segments: tuple[str, ...] = ()
    # W1: bonus for a preferred host
    domain_weight: int = 10
    # W2: bonus for a preferred path segment
    path_weight: int = 5
    # K: shallowness bonus is K minus the path segment count
    shallowness_base: int = DEFAULT_SHALLOWNESS_BASE


@dataclass(frozen=True)
class ScoreBreakdown:
    domain_bonus: int
    path_bonus: int
    shallowness_bonus: int
    path_segments: int

    @property
    def total(self) -> int:
        return self.domain_bonus + self.path_bonus + self.shallowness_bonus


def _host_matches(host: str, domain: str) -> bool:
    domain = domain.lower().lstrip(".")
    return host == domain or host.endswith("." + domain)


def count_path_segments(path: str) -> int:
    """Number of non-empty '/'-delimited components of a URL path."""
    return len([segment for segment in path.split("/") if segment])


def explain_score(url: str, rules: ScoringRules) -> ScoreBreakdown:
    """Compute each additive component of a URL's score."""
    host = get_host(url)
    try:
        path = urlsplit(url).path
    except ValueError:
        path = ""

    domain_bonus = 0
    if host and any(_host_matches(host, d) for d in rules.preferred_domains):
        domain_bonus = rules.domain_weight

    path_bonus = 0
    path_lower = path.lower()
    if any(segment.lower() in path_lower for segment in rules.preferred_path_segments):
        path_bonus = rules.path_weight

    segments = count_path_segments(path)
    return ScoreBreakdown(
        domain_bonus=domain_bonus,
        path_bonus=path_bonus,
        shallowness_bonus=rules.shallowness_base - segments,
        path_segments=segments,
    )


def score_url(url: str, rules: ScoringRules) -> int:
    """Calculate the crawl priority of a URL (higher = crawled sooner)."""
    return explain_score(url, rules).total


class PriorityScorer:
    """Callable scorer bound to one rule set."""

    def __init__(self, rules: ScoringRules | None = None):
        self.rules = rules or ScoringRules()

    def __call__(self, url: str) -> int:
        return score_url(url, self.rules)

    def score(self, url: str) -> int:
        return score_url(url, self.rules)


def rules_from_settings(settings) -> ScoringRules:
    """Build the scoring rule set from CrawlerSettings."""
    return ScoringRules(
        preferred_domains=tuple(settings.CRAWL_PREFERRED_DOMAINS),
        preferred_path_segments=tuple(settings.CRAWL_PREFERRED_PATHS),
        domain_weight=settings.CRAWL_DOMAIN_WEIGHT,
        path_weight=settings.CRAWL_PATH_WEIGHT,
        shallowness_base=settings.CRAWL_SHALLOWNESS_BASE,
    )
