"""
Digest service - split a daily-events feed into per-topic summarized blocks.

Each feed entry's HTML is converted to text and split on blank lines; every
non-empty block becomes one event. Blocks are summarized one at a time in
entry order.

Link attribution is coarse: every link found anywhere in an entry is
attached to every block of that entry.
"""

import logging
import re
from dataclasses import dataclass, field

from ..exceptions import SummarizationError
from ..extractors import ExtractedLink, extract_links, html_to_text
from ..feeds import FeedItem, FeedReader
from ..summarizer import SummarizationClient

logger = logging.getLogger(__name__)


BLANK_LINE_RE = re.compile(r"\r?\n[ \t]*\r?\n")

SUMMARY_PLACEHOLDER = "Summary not available."


@dataclass
class DigestEvent:
    """One summarized block of a digest entry."""
    id: str
    date: str | None
    topic_title: str
    llm_summary: str | None
    original_text: str
    source_links: list[ExtractedLink] = field(default_factory=list)


def split_blocks(text: str) -> list[str]:
    """Split text into blank-line separated blocks, dropping empty ones, order kept."""
    if not text:
        return []
    blocks = (block.strip() for block in BLANK_LINE_RE.split(text))
    return [block for block in blocks if block]


def block_title(block: str) -> str:
    """First line of a block."""
    return block.split("\n", 1)[0].strip()


class DigestService:
    """Turns the configured digest feed into DigestEvents."""

    def __init__(
        self,
        feed_reader: FeedReader,
        summarizer: SummarizationClient | None,
        feed_url: str,
    ):
        self.feed_reader = feed_reader
        self.summarizer = summarizer
        self.feed_url = feed_url

    async def daily_events(self) -> list[DigestEvent]:
        """
        Fetch the digest feed and summarize each block.

        Raises:
            FetchError: If the feed cannot be fetched or parsed
        """
        feed = await self.feed_reader.fetch(self.feed_url)
        if self.summarizer is None:
            logger.warning("No completion service configured; digest events will have no summaries")

        events = []
        for item in feed.items:
            events.extend(await self.process_entry(item))

        logger.info(f"Processed {len(events)} digest events from {len(feed.items)} entries")
        return events

    async def process_entry(self, item: FeedItem) -> list[DigestEvent]:
        """Split one entry into events and summarize them sequentially."""
        links = extract_links(item.content)
        date = item.published.isoformat() if item.published else None

        events = []
        for index, block in enumerate(split_blocks(html_to_text(item.content))):
            events.append(DigestEvent(
                id=f"{item.id}_event_{index}",
                date=date,
                topic_title=block_title(block),
                llm_summary=await self._summarize_block(block),
                original_text=block,
                source_links=list(links),
            ))
        return events

    async def _summarize_block(self, block: str) -> str | None:
        if self.summarizer is None:
            return None
        try:
            return await self.summarizer.summarize_digest_block(block)
        except SummarizationError as e:
            logger.warning(f"Digest block summary failed: {e}")
            return SUMMARY_PLACEHOLDER
