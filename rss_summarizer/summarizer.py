"""
Summarizer - Send prompt + content to the completion service.

Features:
- Deterministic prefix truncation at a fixed character ceiling
- Task-specific prompts (article, discussion thread, digest block)
- Per-task model tier selection
- Uniform SummarizationError for service failures and empty completions
"""

import logging

from .exceptions import SummarizationError
from .providers import LLMProvider
from .providers.base import ModelTier

logger = logging.getLogger(__name__)


ARTICLE_PROMPT = (
    "You are a helpful assistant. Summarize the key points of the following "
    "article concisely for a mobile app reader."
)

COMMENTS_PROMPT = """You are a helpful assistant that summarizes Hacker News comment threads.

Summarize the discussion below for a mobile app reader:
- Open with one sentence on the overall sentiment of the thread
- List the two to four main points or arguments raised, in short bullet points
- Mention notable disagreements or corrections to the article, if any
- Do not quote usernames"""

DIGEST_BLOCK_PROMPT = (
    "You are a helpful assistant. Summarize the following news event in one or "
    "two short sentences. State what happened, where and who was involved."
)

# Character ceilings applied before submission
ARTICLE_MAX_CHARS = 20000
COMMENTS_MAX_CHARS = 15000
DIGEST_BLOCK_MAX_CHARS = 4000

DEFAULT_MAX_TOKENS = 200


def truncate(content: str, limit: int) -> str:
    """
    Cut content to at most `limit` characters.

    Content at or below the ceiling is returned unchanged; longer content is
    cut to exactly the ceiling (a plain prefix, not a semantic boundary).
    """
    if limit < 0:
        raise ValueError("limit must be non-negative")
    if len(content) <= limit:
        return content
    return content[:limit]


class SummarizationClient:
    """Completion-service client for short summaries."""

    def __init__(
        self,
        provider: LLMProvider,
        max_content_chars: int = ARTICLE_MAX_CHARS,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        """
        Initialize the client.

        Args:
            provider: Completion-service provider, already holding its API key
            max_content_chars: Default character ceiling for submitted content
            max_tokens: Default completion token budget
        """
        self.provider = provider
        self.max_content_chars = max_content_chars
        self.max_tokens = max_tokens

    async def summarize(
        self,
        prompt: str,
        content: str,
        max_tokens: int | None = None,
        max_chars: int | None = None,
        tier: ModelTier = ModelTier.STANDARD,
    ) -> str:
        """
        Summarize content with a task prompt.

        Args:
            prompt: System/task prompt
            content: Text to summarize
            max_tokens: Completion token budget (defaults to the client's)
            max_chars: Character ceiling (defaults to the client's)
            tier: Model tier to use for this task

        Returns:
            The trimmed completion text

        Raises:
            SummarizationError: If the service errors or returns no text
        """
        limit = max_chars if max_chars is not None else self.max_content_chars
        trimmed = truncate(content, limit)
        if len(trimmed) < len(content):
            logger.info(f"Truncated content from {len(content)} to {limit} chars")

        model = self.provider.get_model_for_tier(tier)
        try:
            response = await self.provider.complete(
                user_prompt=trimmed,
                system_prompt=prompt,
                model=model,
                max_tokens=max_tokens or self.max_tokens,
            )
        except SummarizationError:
            raise
        except Exception as e:
            logger.error(f"Error calling {self.provider.name}: {e}")
            raise SummarizationError(f"Completion request failed: {e}") from e

        text = (response.text or "").strip()
        if not text:
            raise SummarizationError("Completion service returned an empty summary")

        logger.info(
            f"Generated summary with {response.model} "
            f"({response.input_tokens} in / {response.output_tokens} out tokens)"
        )
        return text

    async def summarize_article(self, text: str, title: str = "") -> str:
        """Summarize readable article text."""
        content = f"Article Title: {title or 'N/A'}\n\nContent:\n{text}"
        return await self.summarize(
            ARTICLE_PROMPT,
            content,
            max_chars=ARTICLE_MAX_CHARS,
            tier=ModelTier.STANDARD,
        )

    async def summarize_comments(self, comments_text: str) -> str:
        """Summarize a joined discussion thread."""
        return await self.summarize(
            COMMENTS_PROMPT,
            comments_text,
            max_chars=COMMENTS_MAX_CHARS,
            tier=ModelTier.FAST,
        )

    async def summarize_digest_block(self, block: str) -> str:
        """Summarize one digest block."""
        return await self.summarize(
            DIGEST_BLOCK_PROMPT,
            block,
            max_tokens=120,
            max_chars=DIGEST_BLOCK_MAX_CHARS,
            tier=ModelTier.FAST,
        )
