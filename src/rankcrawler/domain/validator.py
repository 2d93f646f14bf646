"""
URL Validation

Decides whether a discovered link may enter the crawl. Pure function:
no side effects, safe to call concurrently.
"""

from typing import Container
from urllib.parse import urlsplit

ALLOWED_SCHEMES = ("http", "https")

# Pseudo-schemes that can hide inside otherwise absolute-looking hrefs
BLOCKED_FRAGMENTS = ("javascript:",)


def is_crawlable(url: str, visited: Container[str] = ()) -> bool:
    """
    Return True if url is a crawlable, not yet visited http(s) link.

    Rejects:
    - empty strings
    - schemes other than http/https (tel:, mailto:, ftp:, ...)
    - javascript: pseudo-schemes anywhere in the string
    - .onion hosts
    - URLs already present in visited
    """
    if not url:
        return False

    lowered = url.strip().lower()
    if lowered.startswith("tel:"):
        return False
    if any(fragment in lowered for fragment in BLOCKED_FRAGMENTS):
        return False

    try:
        parts = urlsplit(lowered)
        host = parts.hostname or ""
    except ValueError:
        return False

    if parts.scheme not in ALLOWED_SCHEMES:
        return False
    if not host:
        return False
    if host == "onion" or host.endswith(".onion"):
        return False

    return url not in visited
