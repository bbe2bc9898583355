"""
Feed Reader - Fetch and parse RSS/Atom feeds into FeedItems.

Handles:
- RSS 2.0 and Atom 1.0 formats (via feedparser)
- Stable per-fetch item identifiers with positional fallback
- Hacker News discussion-thread link discovery
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone

import feedparser

from .exceptions import FetchError
from .fetcher import ContentFetcher

logger = logging.getLogger(__name__)


HN_ITEM_LINK_RE = re.compile(r'<a href="(https?://news\.ycombinator\.com/item\?id=\d+)"')
HN_ITEM_URL_MARKER = "news.ycombinator.com/item?id="


@dataclass
class FeedLink:
    url: str
    rel: str = "alternate"


@dataclass
class FeedItem:
    """Represents a single item/entry from a feed."""
    id: str
    title: str
    links: list[FeedLink] = field(default_factory=list)
    description: str | None = None
    content: str = ""  # Full entry HTML (content, else summary)
    published: datetime | None = None
    comment_link: str | None = None


@dataclass
class Feed:
    """Represents a parsed feed."""
    url: str
    title: str
    items: list[FeedItem]


class FeedReader:
    """Fetches feeds through a ContentFetcher and parses them with feedparser."""

    def __init__(self, fetcher: ContentFetcher, timeout: float = 15):
        self.fetcher = fetcher
        self.timeout = timeout

    async def fetch(self, url: str) -> Feed:
        """
        Fetch and parse a feed URL.

        Raises:
            FetchError: If the feed cannot be retrieved or parsed
        """
        page = await self.fetcher.fetch(url, timeout=self.timeout)
        return parse_feed(page.body, url)


def parse_feed(content: str, url: str = "") -> Feed:
    """Parse feed content that has already been fetched."""
    parsed = feedparser.parse(content)

    if parsed.bozo and not parsed.entries:
        raise FetchError(f"Failed to parse feed: {parsed.bozo_exception}", url=url)

    items = []
    seen_ids: set[str] = set()
    for index, entry in enumerate(parsed.entries):
        item = _parse_entry(entry, index)
        if item.id in seen_ids:
            item.id = f"{item.id}#{index}"
        seen_ids.add(item.id)
        items.append(item)

    logger.info(f"Parsed {len(items)} items from {url or 'feed content'}")
    return Feed(url=url, title=parsed.feed.get("title", "Unknown Feed"), items=items)


def _parse_entry(entry, index: int) -> FeedItem:
    # Prefer full content over summary
    content_html = ""
    if entry.get("content"):
        content_html = entry.content[0].value
    elif entry.get("summary"):
        content_html = entry.summary

    description = entry.get("summary") or entry.get("description")

    links = [
        FeedLink(url=link["href"], rel=link.get("rel", "alternate"))
        for link in entry.get("links", [])
        if link.get("href")
    ]
    if not links and entry.get("link"):
        links = [FeedLink(url=entry.link)]

    item_id = entry.get("id") or entry.get("link") or f"item_{index}"

    return FeedItem(
        id=item_id,
        title=entry.get("title", "Untitled"),
        links=links,
        description=description,
        content=content_html,
        published=_parse_published(entry),
        comment_link=find_comment_link(entry),
    )


def _parse_published(entry) -> datetime | None:
    for key in ("published_parsed", "updated_parsed"):
        parsed_time = entry.get(key)
        if parsed_time:
            try:
                return datetime(*parsed_time[:6], tzinfo=timezone.utc)
            except (TypeError, ValueError):
                continue
    return None


def find_comment_link(entry) -> str | None:
    """
    Find the Hacker News discussion link of an entry.

    Looks at the description's anchor first, then the `comments` field, then
    the entry id.
    """
    description = entry.get("summary") or entry.get("description") or ""
    if match := HN_ITEM_LINK_RE.search(description):
        return match.group(1)

    comments = entry.get("comments")
    if isinstance(comments, str) and HN_ITEM_URL_MARKER in comments:
        return comments

    entry_id = entry.get("id")
    if isinstance(entry_id, str) and HN_ITEM_URL_MARKER in entry_id:
        return entry_id

    return None
