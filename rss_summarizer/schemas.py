"""
Pydantic models for API request/response validation.

Field names are camelCase on the wire (the mobile client's contract) and
snake_case in Python.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .feeds import FeedItem
from .services import DigestEvent, SummarizeOutcome


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ─────────────────────────────────────────────────────────────
# Summarize Schemas
# ─────────────────────────────────────────────────────────────

class SummarizeRequest(CamelModel):
    """Any combination of literal text, article URL and discussion URL."""
    text: str | None = None
    url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("url", "articleUrl"),
    )
    item_url: str | None = Field(default=None, alias="itemUrl")


class SummarizeErrorDetails(CamelModel):
    """Per-source error strings."""
    article_error: str | None = Field(default=None, alias="articleError")
    comment_error: str | None = Field(default=None, alias="commentError")


class SummarizeResponse(CamelModel):
    """At least one of article_summary, comment_summary, error is set."""
    article_summary: str | None = Field(default=None, alias="articleSummary")
    comment_summary: str | None = Field(default=None, alias="commentSummary")
    error: str | None = None
    details: SummarizeErrorDetails | None = None

    @classmethod
    def from_outcome(cls, outcome: SummarizeOutcome) -> "SummarizeResponse":
        if outcome.succeeded:
            return cls(
                article_summary=outcome.article.summary if outcome.article else None,
                comment_summary=outcome.comments.summary if outcome.comments else None,
            )

        return cls(
            error="Failed to generate summaries.",
            details=SummarizeErrorDetails(
                article_error=outcome.article.error if outcome.article else None,
                comment_error=outcome.comments.error if outcome.comments else None,
            ),
        )


class ErrorResponse(BaseModel):
    """Body of 400/500 responses from /api/summarize."""
    error: str


# ─────────────────────────────────────────────────────────────
# Digest Schemas
# ─────────────────────────────────────────────────────────────

class SourceLink(BaseModel):
    url: str
    text: str


class ProcessedWikipediaEvent(CamelModel):
    """One summarized block of the daily-events digest."""
    id: str
    date: str | None
    topic_title: str = Field(alias="topicTitle")
    llm_summary: str | None = Field(alias="llmSummary")
    original_text: str = Field(alias="originalText")
    source_links: list[SourceLink] = Field(default_factory=list, alias="sourceLinks")

    @classmethod
    def from_event(cls, event: DigestEvent) -> "ProcessedWikipediaEvent":
        return cls(
            id=event.id,
            date=event.date,
            topic_title=event.topic_title,
            llm_summary=event.llm_summary,
            original_text=event.original_text,
            source_links=[SourceLink(url=link.url, text=link.text) for link in event.source_links],
        )


class FeedErrorResponse(BaseModel):
    """Body of feed fetch failures."""
    message: str
    error: str


# ─────────────────────────────────────────────────────────────
# Feed Item Schemas
# ─────────────────────────────────────────────────────────────

class FeedLinkResponse(BaseModel):
    url: str
    rel: str


class FeedItemResponse(CamelModel):
    """Feed item for the list view."""
    id: str
    title: str
    links: list[FeedLinkResponse]
    description: str | None = None
    published: str | None = None
    comment_link: str | None = Field(default=None, alias="commentLink")

    @classmethod
    def from_item(cls, item: FeedItem) -> "FeedItemResponse":
        return cls(
            id=item.id,
            title=item.title,
            links=[FeedLinkResponse(url=link.url, rel=link.rel) for link in item.links],
            description=item.description,
            published=item.published.isoformat() if item.published else None,
            comment_link=item.comment_link,
        )
