"""
Configuration and application state management.
"""

import os
from typing import TYPE_CHECKING

from dotenv import load_dotenv

if TYPE_CHECKING:
    from .feeds import FeedReader
    from .fetcher import ContentFetcher
    from .providers import LLMProvider
    from .summarizer import SummarizationClient

# Load environment variables
load_dotenv()


def _parse_float(value: str | None, default: float) -> float:
    """Parse a number from an environment variable."""
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


class Config:
    """Application configuration from environment."""
    # Completion service. Set one of these keys; OpenAI wins when both are set
    # unless LLM_PROVIDER says otherwise.
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    ANTHROPIC_API_KEY: str = os.getenv("ANTHROPIC_API_KEY", "")
    LLM_PROVIDER: str = os.getenv("LLM_PROVIDER", "")
    LLM_MODEL: str = os.getenv("LLM_MODEL", "")

    PORT: int = int(os.getenv("PORT", "3001"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Timeouts in seconds
    ARTICLE_FETCH_TIMEOUT: float = _parse_float(os.getenv("ARTICLE_FETCH_TIMEOUT"), 15)
    COMMENT_FETCH_TIMEOUT: float = _parse_float(os.getenv("COMMENT_FETCH_TIMEOUT"), 10)
    FEED_FETCH_TIMEOUT: float = _parse_float(os.getenv("FEED_FETCH_TIMEOUT"), 15)
    SUMMARIZE_TIMEOUT: float = _parse_float(os.getenv("SUMMARIZE_TIMEOUT"), 60)
    LLM_TIMEOUT: float = _parse_float(os.getenv("LLM_TIMEOUT"), 45)

    # Feeds
    DIGEST_FEED_URL: str = os.getenv(
        "DIGEST_FEED_URL", "https://www.to-rss.xyz/wikipedia/current_events/"
    )
    HN_FEED_URL: str = os.getenv("HN_FEED_URL", "https://news.ycombinator.com/rss")

    # Access control
    AUTH_API_KEY: str = os.getenv("AUTH_API_KEY", "")
    RATE_LIMIT_PER_MINUTE: int = int(os.getenv("RATE_LIMIT_PER_MINUTE", "60"))

    def feed_sources(self) -> dict[str, str]:
        """Named feeds served by /api/feeds/{source}."""
        return {
            "hn": self.HN_FEED_URL,
            "wikipedia": self.DIGEST_FEED_URL,
        }


config = Config()


class AppState:
    """Shared application state, built once in the lifespan hook."""
    provider: "LLMProvider | None" = None
    summarizer: "SummarizationClient | None" = None
    fetcher: "ContentFetcher | None" = None
    feed_reader: "FeedReader | None" = None


state = AppState()
