"""
Service layer for the fetch-and-summarize pipeline.

Services keep routes as thin HTTP adapters. Each service receives its
dependencies via constructor injection; the factories below build them from
the application state for every request.

Usage in routes:
    from ..services import SummarizeServiceDep

    @router.post("/summarize")
    async def summarize(request: SummarizeRequest, service: SummarizeServiceDep):
        return await service.summarize(url=request.url)
"""

from typing import Annotated

from fastapi import Depends, HTTPException

from ..config import config, state
from ..feeds import FeedReader
from ..fetcher import ContentFetcher

from .digest_service import DigestEvent, DigestService, split_blocks
from .summarize_service import SourceResult, SummarizeOutcome, SummarizeService

__all__ = [
    # Services
    "DigestService",
    "SummarizeService",
    # Results
    "DigestEvent",
    "SourceResult",
    "SummarizeOutcome",
    "split_blocks",
    # Dependency factories
    "get_fetcher",
    "get_feed_reader",
    "get_summarize_service",
    "get_digest_service",
    # Type aliases for dependency injection
    "FeedReaderDep",
    "SummarizeServiceDep",
    "DigestServiceDep",
]


def get_fetcher() -> ContentFetcher:
    """Dependency to get the shared fetcher."""
    if not state.fetcher:
        raise HTTPException(status_code=500, detail="Fetcher not initialized")
    return state.fetcher


def get_feed_reader() -> FeedReader:
    """Dependency to get the shared feed reader."""
    if not state.feed_reader:
        raise HTTPException(status_code=500, detail="Feed reader not initialized")
    return state.feed_reader


def get_summarize_service(
    fetcher: Annotated[ContentFetcher, Depends(get_fetcher)]
) -> SummarizeService:
    """Dependency to get SummarizeService instance."""
    return SummarizeService(
        fetcher=fetcher,
        summarizer=state.summarizer,
        article_timeout=config.ARTICLE_FETCH_TIMEOUT,
        comment_timeout=config.COMMENT_FETCH_TIMEOUT,
        total_timeout=config.SUMMARIZE_TIMEOUT,
    )


def get_digest_service(
    feed_reader: Annotated[FeedReader, Depends(get_feed_reader)]
) -> DigestService:
    """Dependency to get DigestService instance."""
    return DigestService(
        feed_reader=feed_reader,
        summarizer=state.summarizer,
        feed_url=config.DIGEST_FEED_URL,
    )


FeedReaderDep = Annotated[FeedReader, Depends(get_feed_reader)]
SummarizeServiceDep = Annotated[SummarizeService, Depends(get_summarize_service)]
DigestServiceDep = Annotated[DigestService, Depends(get_digest_service)]
