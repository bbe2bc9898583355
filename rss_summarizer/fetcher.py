"""
Content Fetcher - Retrieve raw pages for extraction.

Handles:
- HTTP GET with browser-like headers and a bounded timeout
- SSRF protection via URL validation
- Mapping of transport errors, timeouts and non-2xx statuses to FetchError

Extraction is left to the caller (see extractors.py).
"""

import asyncio
import logging
from dataclasses import dataclass

import aiohttp

from .exceptions import FetchError
from .url_validator import validate_url

logger = logging.getLogger(__name__)


HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")


@dataclass
class FetchedPage:
    """Raw response body of a successful fetch."""
    url: str
    final_url: str
    status: int
    content_type: str
    body: str

    @property
    def is_html(self) -> bool:
        """True when the body is an HTML document worth extracting."""
        return any(ct in self.content_type.lower() for ct in HTML_CONTENT_TYPES)


class ContentFetcher:
    """Fetches raw pages and feeds over HTTP."""

    def __init__(
        self,
        timeout: float = 15,
        user_agent: str | None = None,
        resolve_dns: bool = True,
    ):
        self.timeout = timeout
        self.resolve_dns = resolve_dns
        self.user_agent = user_agent or (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/120.0.0.0 Safari/537.36"
        )
        self.headers = {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        }

    async def fetch(self, url: str, timeout: float | None = None) -> FetchedPage:
        """
        GET a URL and return its body.

        Args:
            url: The URL to fetch
            timeout: Per-call override of the total timeout in seconds

        Returns:
            FetchedPage with the decoded body and content type

        Raises:
            FetchError: On SSRF rejection, timeout, connection failure or non-2xx status
        """
        validate_url(url, resolve_dns=self.resolve_dns)

        total = timeout if timeout is not None else self.timeout
        logger.info(f"Fetching {url} (timeout {total}s)")

        try:
            async with aiohttp.ClientSession(headers=self.headers) as session:
                async with session.get(
                    url,
                    timeout=aiohttp.ClientTimeout(total=total),
                    allow_redirects=True,
                ) as resp:
                    if not 200 <= resp.status < 300:
                        raise FetchError(
                            f"Request failed with status code {resp.status}",
                            url=url,
                            status=resp.status,
                        )
                    body = await resp.text(errors="replace")
                    return FetchedPage(
                        url=url,
                        final_url=str(resp.url),
                        status=resp.status,
                        content_type=resp.headers.get("Content-Type", ""),
                        body=body,
                    )
        except asyncio.TimeoutError:
            raise FetchError(f"Timeout of {total}s exceeded", url=url)
        except aiohttp.ClientError as e:
            raise FetchError(str(e) or e.__class__.__name__, url=url)
