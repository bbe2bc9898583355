"""
Summarize service - fetch, extract and summarize an article and/or its
discussion thread.

The article source and the comment source run concurrently and each
produces its own SourceResult. A failure in one source is recorded on that
source only; the other still completes. Both sources share one combined
timeout, and cancelling the caller cancels every in-flight outbound call.
"""

import asyncio
import logging
from dataclasses import dataclass

from ..exceptions import ConfigurationError, SummarizerError, ValidationError
from ..extractors import extract_comments, extract_readable
from ..fetcher import ContentFetcher
from ..summarizer import SummarizationClient

logger = logging.getLogger(__name__)


COMMENT_SEPARATOR = "\n\n---\n\n"


@dataclass
class SourceResult:
    """Outcome of one content source: a summary or an error, never both."""
    summary: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.summary is not None

    @classmethod
    def success(cls, summary: str) -> "SourceResult":
        return cls(summary=summary)

    @classmethod
    def failure(cls, error: str) -> "SourceResult":
        return cls(error=error)


@dataclass
class SummarizeOutcome:
    """Per-source results of one summarize request. None means not requested."""
    article: SourceResult | None = None
    comments: SourceResult | None = None

    @property
    def succeeded(self) -> bool:
        """Partial success counts: one summary is enough."""
        return any(r is not None and r.ok for r in (self.article, self.comments))


class SummarizeService:
    """Orchestrates Fetcher -> Extractor -> SummarizationClient per source."""

    def __init__(
        self,
        fetcher: ContentFetcher,
        summarizer: SummarizationClient | None,
        article_timeout: float = 15,
        comment_timeout: float = 10,
        total_timeout: float = 60,
    ):
        self.fetcher = fetcher
        self.summarizer = summarizer
        self.article_timeout = article_timeout
        self.comment_timeout = comment_timeout
        self.total_timeout = total_timeout

    async def summarize(
        self,
        text: str | None = None,
        url: str | None = None,
        item_url: str | None = None,
    ) -> SummarizeOutcome:
        """
        Summarize whatever sources the request names.

        Literal text takes the place of the article and skips the fetch.

        Raises:
            ValidationError: If no text, url or item_url is given
            ConfigurationError: If no completion service is configured
        """
        text = text.strip() if text else None
        if not (text or url or item_url):
            raise ValidationError("Missing text, url and itemUrl")

        if self.summarizer is None:
            raise ConfigurationError("Completion service API key not configured")

        sources = {}
        if text:
            sources["article"] = self._summarize_text(text)
        elif url:
            sources["article"] = self._summarize_article(url)
        if item_url:
            sources["comments"] = self._summarize_comments(item_url)

        results = await self._run_sources(sources)
        return SummarizeOutcome(
            article=results.get("article"),
            comments=results.get("comments"),
        )

    async def _run_sources(self, sources: dict) -> dict[str, SourceResult]:
        """
        Run source coroutines concurrently under the combined timeout.

        Sources still running at the deadline are cancelled and reported as
        timed out. Errors outside the pipeline's taxonomy propagate.
        """
        tasks = {name: asyncio.ensure_future(coro) for name, coro in sources.items()}
        try:
            _done, pending = await asyncio.wait(tasks.values(), timeout=self.total_timeout)
        except asyncio.CancelledError:
            for task in tasks.values():
                task.cancel()
            await asyncio.gather(*tasks.values(), return_exceptions=True)
            raise

        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        results = {}
        for name, task in tasks.items():
            if task in pending:
                logger.warning(f"  {name} source timed out after {self.total_timeout}s")
                results[name] = SourceResult.failure(
                    f"Timed out after {self.total_timeout}s"
                )
            else:
                results[name] = task.result()
        return results

    async def _summarize_text(self, text: str) -> SourceResult:
        logger.info(f"  Summarizing {len(text)} chars of supplied text")
        try:
            summary = await self.summarizer.summarize_article(text)
        except SummarizerError as e:
            logger.error(f"  Error summarizing supplied text: {e}")
            return SourceResult.failure(str(e))
        return SourceResult.success(summary)

    async def _summarize_article(self, url: str) -> SourceResult:
        logger.info(f"  Attempting to fetch article content from: {url}")
        try:
            page = await self.fetcher.fetch(url, timeout=self.article_timeout)
            if not page.is_html:
                logger.warning(
                    f"  Skipping article summary for {url} - "
                    f"Content-Type is not HTML ({page.content_type})"
                )
                return SourceResult.failure(
                    f"Unsupported content type: {page.content_type or 'unknown'}"
                )

            article = extract_readable(page.body, page.final_url)
            if article is None:
                return SourceResult.failure("Could not extract readable content")

            logger.info(f"  Extracted article content ({len(article.text)} chars) from {url}")
            summary = await self.summarizer.summarize_article(article.text, article.title)
        except SummarizerError as e:
            logger.error(f"  Error fetching/summarizing article {url}: {e}")
            return SourceResult.failure(str(e))

        logger.info(f"  Generated article summary for {url}")
        return SourceResult.success(summary)

    async def _summarize_comments(self, item_url: str) -> SourceResult:
        logger.info(f"  Attempting to fetch comments from: {item_url}")
        try:
            page = await self.fetcher.fetch(item_url, timeout=self.comment_timeout)
            if not page.is_html:
                logger.warning(
                    f"  Skipping comment summary for {item_url} - "
                    f"Content-Type is not HTML ({page.content_type})"
                )
                return SourceResult.failure(
                    f"Unsupported content type: {page.content_type or 'unknown'}"
                )

            comments = extract_comments(page.body)
            logger.info(f"  Extracted {len(comments)} comments")
            if not comments:
                return SourceResult.failure("No comments found")

            summary = await self.summarizer.summarize_comments(COMMENT_SEPARATOR.join(comments))
        except SummarizerError as e:
            logger.error(f"  Error fetching/summarizing comments {item_url}: {e}")
            return SourceResult.failure(str(e))

        logger.info(f"  Generated comment summary for {item_url}")
        return SourceResult.success(summary)
