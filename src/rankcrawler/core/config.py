"""
Crawler Service Configuration

Configuration specific to the Crawler service, including crawl parameters
and URL scoring rules.
"""

import os
from linkgraph.core.infrastructure_config import Environment, InfrastructureSettings


def _split(value: str) -> list[str]:
    return [s.strip() for s in value.split() if s.strip()]


class CrawlerSettings(InfrastructureSettings):
    """Crawler service configuration (inherits infrastructure settings)"""

    # Application
    APP_NAME: str = "Rank Crawler Service"
    APP_VERSION: str = "1.0.0"
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))
    DEBUG: bool = os.getenv("DEBUG", "false").lower() in ("1", "true", "yes")

    # Crawler Behavior
    CRAWL_USER_AGENT: str = os.getenv(
        "CRAWL_USER_AGENT", "RankCrawler/1.0 (+https://example.local/; async crawler)"
    )
    CRAWL_TIMEOUT_SEC: float = float(os.getenv("CRAWL_TIMEOUT_SEC", "10"))
    CRAWL_CONCURRENCY: int = int(
        os.getenv("CRAWL_CONCURRENCY", str(os.cpu_count() or 1))
    )
    CRAWL_MAX_DEPTH: int = int(os.getenv("CRAWL_MAX_DEPTH", "3"))
    CRAWL_OUTLINKS_PER_PAGE: int = int(os.getenv("CRAWL_OUTLINKS_PER_PAGE", "100"))
    # 0 disables the wall-clock session limit
    CRAWL_SESSION_TIMEOUT_SEC: float = float(
        os.getenv("CRAWL_SESSION_TIMEOUT_SEC", "0")
    )
    # How long app shutdown waits for in-flight fetches before cancelling
    CRAWL_SHUTDOWN_GRACE_SEC: float = float(
        os.getenv("CRAWL_SHUTDOWN_GRACE_SEC", "5")
    )

    # Rank approximation
    CRAWL_DAMPING_FACTOR: float = float(os.getenv("CRAWL_DAMPING_FACTOR", "0.85"))

    # URL scoring rules
    CRAWL_PREFERRED_DOMAINS: list[str] = _split(
        os.getenv("CRAWL_PREFERRED_DOMAINS", "metmuseum.org nps.gov mfa.org")
    )
    CRAWL_PREFERRED_PATHS: list[str] = _split(
        os.getenv("CRAWL_PREFERRED_PATHS", "/exhibitions/ /collections/")
    )
    CRAWL_DOMAIN_WEIGHT: int = int(os.getenv("CRAWL_DOMAIN_WEIGHT", "10"))
    CRAWL_PATH_WEIGHT: int = int(os.getenv("CRAWL_PATH_WEIGHT", "5"))
    CRAWL_SHALLOWNESS_BASE: int = int(os.getenv("CRAWL_SHALLOWNESS_BASE", "10"))


settings = CrawlerSettings()


def _validate_required(settings: CrawlerSettings) -> None:
    """Validate settings outside of tests."""
    if settings.ENVIRONMENT == Environment.TEST:
        return

    if settings.CRAWL_CONCURRENCY < 1:
        raise RuntimeError("CRAWL_CONCURRENCY must be at least 1")
    if not 0.0 <= settings.CRAWL_DAMPING_FACTOR <= 1.0:
        raise RuntimeError("CRAWL_DAMPING_FACTOR must be between 0 and 1")


_validate_required(settings)
