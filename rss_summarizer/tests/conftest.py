"""
Pytest fixtures for backend tests.

No test touches the network: pages come from FakeFetcher and completions
from MockProvider.
"""

import pytest
from fastapi.testclient import TestClient

from rss_summarizer.config import state
from rss_summarizer.exceptions import FetchError
from rss_summarizer.feeds import FeedReader
from rss_summarizer.fetcher import ContentFetcher, FetchedPage
from rss_summarizer.providers.base import LLMProvider, LLMResponse, ModelTier
from rss_summarizer.rate_limit import limiter
from rss_summarizer.server import app
from rss_summarizer.summarizer import SummarizationClient
from rss_summarizer.url_validator import validate_url


class MockProvider(LLMProvider):
    """Mock completion service that returns queued or canned responses."""

    TIER_MODELS = {
        ModelTier.FAST: "mock-fast",
        ModelTier.STANDARD: "mock-standard",
    }

    def __init__(self, default_text: str = "Mock summary."):
        self.calls: list[dict] = []
        self.responses: list = []
        self.default_text = default_text

    @property
    def name(self) -> str:
        return "mock"

    def queue_response(self, response):
        """Queue a text (or an exception to raise) for the next complete() call."""
        self.responses.append(response)

    async def complete(
        self,
        user_prompt: str,
        system_prompt: str | None = None,
        model: str | None = None,
        max_tokens: int = 200,
        temperature: float = 0.0,
    ) -> LLMResponse:
        self.calls.append({
            "user_prompt": user_prompt,
            "system_prompt": system_prompt,
            "model": model,
            "max_tokens": max_tokens,
        })
        response = self.responses.pop(0) if self.responses else self.default_text
        if isinstance(response, Exception):
            raise response
        return LLMResponse(text=response, model=model or "mock-standard")


class FakeFetcher(ContentFetcher):
    """
    ContentFetcher serving canned pages and recording every requested URL.

    URLs go through the same validation as a real fetch.
    """

    def __init__(self):
        super().__init__(resolve_dns=False)
        self.pages: dict[str, FetchedPage | Exception] = {}
        self.calls: list[str] = []

    def add_page(self, url: str, body: str, content_type: str = "text/html; charset=utf-8"):
        self.pages[url] = FetchedPage(
            url=url, final_url=url, status=200, content_type=content_type, body=body
        )

    def add_error(self, url: str, error: Exception):
        self.pages[url] = error

    async def fetch(self, url: str, timeout: float | None = None) -> FetchedPage:
        self.calls.append(url)
        validate_url(url, resolve_dns=False)
        page = self.pages.get(url)
        if page is None:
            raise FetchError("getaddrinfo ENOTFOUND", url=url)
        if isinstance(page, Exception):
            raise page
        return page


ARTICLE_HTML = """<!DOCTYPE html>
<html>
<head><title>Rust in the Linux kernel | Example News</title></head>
<body>
  <nav><a href="/">Home</a> <a href="/about">About</a></nav>
  <article>
    <h1>Rust in the Linux kernel</h1>
    <p>The Linux kernel maintainers merged a new set of Rust abstractions this week,
    extending the language's reach from sample drivers into real subsystems that ship
    on millions of machines around the world.</p>
    <p>Supporters argue that memory safety removes whole classes of bugs, while critics
    worry about the cost of maintaining bindings between two languages and the learning
    curve that new reviewers will face when reading mixed code.</p>
    <p>The next merge window is expected to bring the first networking driver written
    entirely in Rust, which would be a significant milestone for the project.</p>
  </article>
  <footer>Copyright Example News</footer>
</body>
</html>"""

COMMENTS_HTML = """<html><body><table>
<tr class="athing comtr"><td><div class="comment">
  <div class="commtext c00">This is a great step for memory safety.</div>
</div></td></tr>
<tr class="athing comtr"><td><div class="comment">
  <div class="commtext c00">I worry about the <i>maintenance</i> burden.<p>Two languages is hard.</p></div>
</div></td></tr>
</table></body></html>"""


@pytest.fixture
def mock_provider():
    return MockProvider()


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture
def summarizer(mock_provider):
    return SummarizationClient(provider=mock_provider)


def _swap_state(fetcher, provider, summarizer):
    original = (state.fetcher, state.feed_reader, state.provider, state.summarizer)
    state.fetcher = fetcher
    state.feed_reader = FeedReader(fetcher)
    state.provider = provider
    state.summarizer = summarizer
    return original


def _restore_state(original):
    state.fetcher, state.feed_reader, state.provider, state.summarizer = original


@pytest.fixture
def client(fake_fetcher, mock_provider, summarizer):
    """Test client with a fake fetcher and a mock completion service."""
    original = _swap_state(fake_fetcher, mock_provider, summarizer)
    limiter.reset()

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    _restore_state(original)


@pytest.fixture
def client_without_llm(fake_fetcher):
    """Test client with no completion API key configured."""
    original = _swap_state(fake_fetcher, None, None)
    limiter.reset()

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    _restore_state(original)


@pytest.fixture
def article_html():
    return ARTICLE_HTML


@pytest.fixture
def comments_html():
    return COMMENTS_HTML
