"""Content source adapters for feedcomposer."""

from feedcomposer.sources.base import Chunk, ContentSource, FeedFilter
from feedcomposer.sources.complaints import ComplaintSource
from feedcomposer.sources.items import (
    AuthorSummary,
    CompanySummary,
    ComplaintItem,
    ContentItem,
    ReviewItem,
    SourceKind,
)
from feedcomposer.sources.reviews import ReviewSource

__all__ = [
    "AuthorSummary",
    "Chunk",
    "CompanySummary",
    "ComplaintItem",
    "ComplaintSource",
    "ContentItem",
    "ContentSource",
    "FeedFilter",
    "ReviewItem",
    "ReviewSource",
    "SourceKind",
]
