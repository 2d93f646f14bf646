"""
Page Fetcher Tests

Tests for HttpPageFetcher with a mocked aiohttp session.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from rankcrawler.errors import CrawlerError, FetchError
from rankcrawler.services.fetcher import MAX_RESPONSE_SIZE, HttpPageFetcher


def _fetcher(session, limit=100):
    fetcher = HttpPageFetcher(user_agent="TestBot/1.0", outlinks_limit=limit)
    fetcher.session = session
    return fetcher


def _response(mock_aiohttp_session):
    return mock_aiohttp_session.get.return_value.__aenter__.return_value


@pytest.mark.asyncio
async def test_fetch_returns_links(mock_aiohttp_session):
    links = await _fetcher(mock_aiohttp_session).fetch("https://example.com/", 5)

    assert links == ["https://example.com/page"]
    args, kwargs = mock_aiohttp_session.get.call_args
    assert args[0] == "https://example.com/"
    assert kwargs["timeout"].total == 5
    assert kwargs["allow_redirects"] is True


@pytest.mark.asyncio
async def test_fetch_resolves_against_final_url(mock_aiohttp_session):
    response = _response(mock_aiohttp_session)
    response.url = "https://example.com/moved/here"
    response.content.read = AsyncMock(return_value=b'<a href="next">n</a>')

    links = await _fetcher(mock_aiohttp_session).fetch("https://example.com/old", 5)
    assert links == ["https://example.com/moved/next"]


@pytest.mark.asyncio
async def test_fetch_respects_outlink_limit(mock_aiohttp_session):
    body = "".join(f'<a href="/p{i}">{i}</a>' for i in range(5)).encode()
    _response(mock_aiohttp_session).content.read = AsyncMock(return_value=body)

    links = await _fetcher(mock_aiohttp_session, limit=2).fetch(
        "https://example.com/", 5
    )
    assert len(links) == 2


@pytest.mark.asyncio
async def test_fetch_http_error_raises(mock_aiohttp_session):
    _response(mock_aiohttp_session).status = 404

    with pytest.raises(FetchError, match="HTTP 404") as exc_info:
        await _fetcher(mock_aiohttp_session).fetch("https://example.com/missing", 5)

    assert exc_info.value.url == "https://example.com/missing"
    assert isinstance(exc_info.value, CrawlerError)


@pytest.mark.asyncio
async def test_fetch_non_html_returns_no_links(mock_aiohttp_session):
    response = _response(mock_aiohttp_session)
    response.headers = {"Content-Type": "application/pdf"}

    links = await _fetcher(mock_aiohttp_session).fetch("https://example.com/a.pdf", 5)

    assert links == []
    response.content.read.assert_not_called()


@pytest.mark.asyncio
async def test_fetch_too_large_raises(mock_aiohttp_session):
    _response(mock_aiohttp_session).headers = {
        "Content-Type": "text/html",
        "Content-Length": str(MAX_RESPONSE_SIZE + 1),
    }

    with pytest.raises(FetchError, match="too large"):
        await _fetcher(mock_aiohttp_session).fetch("https://example.com/", 5)


@pytest.mark.asyncio
async def test_fetch_client_error_wrapped():
    session = MagicMock()
    session.get.side_effect = aiohttp.ClientConnectionError("connection refused")

    with pytest.raises(FetchError, match="connection refused") as exc_info:
        await _fetcher(session).fetch("https://down.test/", 5)

    assert isinstance(exc_info.value.cause, aiohttp.ClientError)


@pytest.mark.asyncio
async def test_fetch_timeout_wrapped():
    session = MagicMock()
    session.get.side_effect = asyncio.TimeoutError()

    with pytest.raises(FetchError):
        await _fetcher(session).fetch("https://slow.test/", 0.1)


@pytest.mark.asyncio
async def test_open_and_close_session():
    fetcher = HttpPageFetcher(user_agent="TestBot/1.0")
    await fetcher.open()
    session = fetcher.session
    assert session is not None
    assert session.headers["User-Agent"] == "TestBot/1.0"

    await fetcher.close()
    assert fetcher.session is None
    assert session.closed is True


@pytest.mark.asyncio
async def test_close_without_open():
    fetcher = HttpPageFetcher(user_agent="TestBot/1.0")
    await fetcher.close()
    assert fetcher.session is None
