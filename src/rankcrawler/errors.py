"""
Crawler Errors

FetchError and StoreError are per-URL / per-operation failures. Neither is
ever fatal to a crawl session.
"""

from linkgraph.db.graph_store import StoreError


class CrawlerError(Exception):
    """Base class for crawler failures."""


class FetchError(CrawlerError):
    """Fetching or parsing a page failed (network, timeout, HTTP status, parse)."""

    def __init__(self, url: str, cause: BaseException | str | None = None):
        self.url = url
        self.cause = cause
        message = f"Failed to fetch {url}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


__all__ = ["CrawlerError", "FetchError", "StoreError"]
