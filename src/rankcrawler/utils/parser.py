"""
HTML Parser Utilities

Functions for extracting links from HTML.
"""

import warnings

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning

from linkgraph.core.utils import normalize_url

warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)


def _strip_nul(text: str) -> str:
    return text.replace("\x00", " ")


def extract_links(base_url: str, html: str, limit: int = 100) -> list[str]:
    """
    Extract absolute links from HTML.

    Args:
        base_url: Base URL for resolving relative links
        html: Raw HTML string
        limit: Maximum number of links to extract

    Returns:
        List of absolute URLs in document order
    """
    soup = BeautifulSoup(_strip_nul(html), "html.parser")

    # <base href> overrides the page URL for relative links
    base_tag = soup.find("base", href=True)
    if base_tag:
        base_url = normalize_url(base_url, base_tag.get("href")) or base_url

    urls = []
    for a in soup.find_all("a"):
        if len(urls) >= limit:
            break
        href = a.get("href")
        if isinstance(href, list):
            href = href[0] if href else None
        u = normalize_url(base_url, href)
        if u:
            urls.append(u)
    return urls
