"""Response models for a composed feed page."""

from typing import Any

from pydantic import Field

from feedcomposer.sources.items import ContentItem, FeedModel


class Pagination(FeedModel):
    """Global pagination envelope; ``total`` sums every source's count."""

    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, total_pages=-(-total // limit))


class MergedPage(FeedModel):
    """One page of the unified feed, built fresh for each request."""

    items: list[ContentItem] = Field(default_factory=list)
    pagination: Pagination

    def to_response(self) -> dict[str, Any]:
        """JSON-ready ``{"items": [...], "pagination": {...}}`` with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
