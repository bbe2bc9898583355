"""
Tests for ContentFetcher error mapping and FetchedPage.

aiohttp is patched so nothing leaves the process.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from rss_summarizer.exceptions import FetchError
from rss_summarizer.fetcher import ContentFetcher, FetchedPage
from rss_summarizer.url_validator import SSRFError


def _response_cm(status: int, body: str = "", content_type: str = "text/html"):
    """Build an async context manager standing in for session.get(...)."""
    resp = MagicMock()
    resp.status = status
    resp.url = "https://example.com/final"
    resp.headers = {"Content-Type": content_type}
    resp.text = AsyncMock(return_value=body)

    cm = MagicMock()
    cm.__aenter__ = AsyncMock(return_value=resp)
    cm.__aexit__ = AsyncMock(return_value=False)
    return cm


@pytest.fixture
def fetcher():
    return ContentFetcher(timeout=5, resolve_dns=False)


class TestFetchedPage:
    """Tests for content-type handling."""

    @pytest.mark.parametrize("content_type,expected", [
        ("text/html; charset=utf-8", True),
        ("application/xhtml+xml", True),
        ("TEXT/HTML", True),
        ("application/pdf", False),
        ("image/png", False),
        ("", False),
    ])
    def test_is_html(self, content_type, expected):
        page = FetchedPage(
            url="u", final_url="u", status=200, content_type=content_type, body=""
        )
        assert page.is_html is expected


class TestContentFetcher:
    """Tests for fetch()."""

    def test_returns_body_and_content_type(self, fetcher):
        with patch.object(
            aiohttp.ClientSession, "get",
            return_value=_response_cm(200, "<html>ok</html>", "text/html; charset=utf-8"),
        ):
            page = asyncio.run(fetcher.fetch("https://example.com/article"))

        assert page.body == "<html>ok</html>"
        assert page.status == 200
        assert page.final_url == "https://example.com/final"
        assert page.is_html

    def test_non_success_status_raises(self, fetcher):
        with patch.object(aiohttp.ClientSession, "get", return_value=_response_cm(404)):
            with pytest.raises(FetchError, match="404") as exc_info:
                asyncio.run(fetcher.fetch("https://example.com/missing"))

        assert exc_info.value.status == 404
        assert exc_info.value.url == "https://example.com/missing"

    @pytest.mark.parametrize("status", [300, 304])
    def test_non_2xx_final_status_raises(self, fetcher, status):
        with patch.object(aiohttp.ClientSession, "get", return_value=_response_cm(status)):
            with pytest.raises(FetchError, match=str(status)):
                asyncio.run(fetcher.fetch("https://example.com/moved"))

    def test_connection_error_raises_fetch_error(self, fetcher):
        with patch.object(
            aiohttp.ClientSession, "get",
            side_effect=aiohttp.ClientConnectionError("Cannot connect to host"),
        ):
            with pytest.raises(FetchError, match="Cannot connect"):
                asyncio.run(fetcher.fetch("https://unreachable.example/"))

    def test_timeout_raises_fetch_error(self, fetcher):
        with patch.object(aiohttp.ClientSession, "get", side_effect=asyncio.TimeoutError()):
            with pytest.raises(FetchError, match="Timeout"):
                asyncio.run(fetcher.fetch("https://slow.example/"))

    def test_blocked_url_never_fetched(self, fetcher):
        with patch.object(aiohttp.ClientSession, "get") as mock_get:
            with pytest.raises(SSRFError):
                asyncio.run(fetcher.fetch("http://127.0.0.1/admin"))

        mock_get.assert_not_called()

    def test_ssrf_error_is_a_fetch_error(self):
        assert issubclass(SSRFError, FetchError)
