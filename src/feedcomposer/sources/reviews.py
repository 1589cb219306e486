"""Reviews content source backed by the SQLite store."""

from __future__ import annotations

from typing import Any

from feedcomposer.config.defaults import DEFAULT_REVIEW_STATUS
from feedcomposer.database.models import ms_to_datetime
from feedcomposer.database.queries import count_review_feed, fetch_review_feed
from feedcomposer.sources.base import Chunk, ContentSource, FeedFilter
from feedcomposer.sources.items import (
    AuthorSummary,
    CompanySummary,
    ReviewCounts,
    ReviewItem,
    SourceKind,
)


def author_from_row(row: dict[str, Any]) -> AuthorSummary:
    """Build the author summary from the flattened ``author_*`` columns."""
    return AuthorSummary(
        id=row["author_id"],
        username=row["author_username"],
        avatar=row.get("author_avatar"),
        verified=bool(row.get("author_verified")),
        reputation=row.get("author_reputation") or 0,
    )


def company_from_row(row: dict[str, Any]) -> CompanySummary | None:
    """Build the company summary, or None for items without a company."""
    if row.get("company_id") is None:
        return None
    return CompanySummary(
        id=row["company_id"],
        name=row["company_name"],
        slug=row["company_slug"],
        logo=row.get("company_logo"),
    )


class ReviewSource(ContentSource):
    """
    Published reviews.

    Only reviews in the visible moderation status (APPROVED by default) are
    part of the feed.
    """

    def __init__(self, status: str = DEFAULT_REVIEW_STATUS) -> None:
        self.status = status

    @property
    def source_kind(self) -> SourceKind:
        return SourceKind.REVIEW

    def count(self, feed_filter: FeedFilter) -> int:
        return count_review_feed(category=feed_filter.category, status=self.status)

    def fetch_chunk(self, feed_filter: FeedFilter, cursor: int, chunk_size: int) -> Chunk:
        rows = fetch_review_feed(
            offset=cursor,
            limit=chunk_size,
            category=feed_filter.category,
            status=self.status,
        )
        items = tuple(self._row_to_item(row) for row in rows)
        return Chunk(items=items, cursor=cursor + len(items))

    @staticmethod
    def _row_to_item(row: dict[str, Any]) -> ReviewItem:
        return ReviewItem(
            id=row["id"],
            created_at=ms_to_datetime(row["created_at"]),
            title=row["title"],
            content=row["content"],
            overall_score=row["overall_score"],
            helpful_count=row["helpful_count"] or 0,
            down_vote_count=row["down_vote_count"] or 0,
            author=author_from_row(row),
            company=company_from_row(row),
            counts=ReviewCounts(
                helpful_votes=row["helpful_votes_count"],
                comments=row["comments_count"],
                reactions=row["reactions_count"],
            ),
        )
