"""Complaints content source backed by the SQLite store."""

from __future__ import annotations

from typing import Any

from feedcomposer.database.models import ms_to_datetime
from feedcomposer.database.queries import count_complaint_feed, fetch_complaint_feed
from feedcomposer.sources.base import Chunk, ContentSource, FeedFilter
from feedcomposer.sources.items import ComplaintCounts, ComplaintItem, SourceKind
from feedcomposer.sources.reviews import author_from_row, company_from_row


class ComplaintSource(ContentSource):
    """All complaints, whatever their resolution status."""

    @property
    def source_kind(self) -> SourceKind:
        return SourceKind.COMPLAINT

    def count(self, feed_filter: FeedFilter) -> int:
        return count_complaint_feed(category=feed_filter.category)

    def fetch_chunk(self, feed_filter: FeedFilter, cursor: int, chunk_size: int) -> Chunk:
        rows = fetch_complaint_feed(offset=cursor, limit=chunk_size, category=feed_filter.category)
        items = tuple(self._row_to_item(row) for row in rows)
        return Chunk(items=items, cursor=cursor + len(items))

    @staticmethod
    def _row_to_item(row: dict[str, Any]) -> ComplaintItem:
        return ComplaintItem(
            id=row["id"],
            created_at=ms_to_datetime(row["created_at"]),
            title=row["title"],
            content=row["content"],
            status=row["status"],
            helpful_count=row["helpful_count"] or 0,
            down_vote_count=row["down_vote_count"] or 0,
            author=author_from_row(row),
            company=company_from_row(row),
            counts=ComplaintCounts(
                comments=row["comments_count"],
                reactions=row["reactions_count"],
                votes=row["votes_count"],
            ),
        )
