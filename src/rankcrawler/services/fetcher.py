"""
Page Fetcher

Downloads a page and returns its outbound links, or raises FetchError.
"""

import asyncio
import logging

import aiohttp

from rankcrawler.errors import FetchError
from rankcrawler.utils.parser import extract_links

logger = logging.getLogger(__name__)

# Maximum response size (10 MB)
MAX_RESPONSE_SIZE = 10 * 1024 * 1024

HTML_CONTENT_TYPES = ("text/html", "application/xhtml")


class PageFetcher:
    """Contract for link fetchers used by the crawl coordinator."""

    async def open(self) -> None:
        """Acquire resources before a crawl session."""

    async def close(self) -> None:
        """Release resources after a crawl session."""

    async def fetch(self, url: str, timeout: float) -> list[str]:
        raise NotImplementedError


class HttpPageFetcher(PageFetcher):
    """aiohttp + BeautifulSoup implementation of PageFetcher."""

    def __init__(self, user_agent: str, outlinks_limit: int = 100):
        self.user_agent = user_agent
        self.outlinks_limit = outlinks_limit
        self.session: aiohttp.ClientSession | None = None

    async def open(self) -> None:
        if self.session is not None and not self.session.closed:
            return
        connector = aiohttp.TCPConnector(
            limit_per_host=5,
            ttl_dns_cache=300,
            enable_cleanup_closed=True,
        )
        self.session = aiohttp.ClientSession(
            headers={"User-Agent": self.user_agent}, connector=connector
        )

    async def close(self) -> None:
        if self.session is not None:
            await self.session.close()
            self.session = None

    async def fetch(self, url: str, timeout: float) -> list[str]:
        """
        Fetch url and extract its outbound links.

        Non-HTML responses yield no links. HTTP errors, network errors,
        timeouts and oversized bodies raise FetchError.
        """
        if self.session is None:
            await self.open()

        try:
            async with self.session.get(
                url,
                timeout=aiohttp.ClientTimeout(total=timeout),
                allow_redirects=True,
            ) as resp:
                if resp.status != 200:
                    raise FetchError(url, f"HTTP {resp.status}")

                ct = resp.headers.get("Content-Type", "").lower()
                if not any(t in ct for t in HTML_CONTENT_TYPES):
                    logger.debug(f"Skipping non-HTML content ({ct}): {url}")
                    return []

                content_length = resp.headers.get("Content-Length")
                if content_length:
                    try:
                        if int(content_length) > MAX_RESPONSE_SIZE:
                            raise FetchError(
                                url, f"Response too large: {content_length} bytes"
                            )
                    except ValueError:
                        pass

                body = await resp.content.read(MAX_RESPONSE_SIZE)
                final_url = str(resp.url) if resp.url else url

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FetchError(url, e) from e

        html = body.decode("utf-8", errors="replace")

        # Parse HTML (offload to executor)
        loop = asyncio.get_running_loop()
        try:
            links = await loop.run_in_executor(
                None, extract_links, final_url, html, self.outlinks_limit
            )
        except Exception as e:
            raise FetchError(url, f"parse error: {e}") from e

        logger.debug(f"Extracted {len(links)} links from {url}")
        return links
