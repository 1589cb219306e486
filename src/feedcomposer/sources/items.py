"""Feed content items: a tagged union over the platform's content sources."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class SourceKind(str, Enum):
    """Content collections that feed into the activity feed."""

    REVIEW = "review"
    COMPLAINT = "complaint"


class FeedModel(BaseModel):
    """Immutable model serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class AuthorSummary(FeedModel):
    """Public profile of an item's author."""

    id: str
    username: str
    avatar: str | None = None
    verified: bool = False
    reputation: int = 0


class CompanySummary(FeedModel):
    """The company an item is about."""

    id: str
    name: str
    slug: str
    logo: str | None = None


class ReviewCounts(FeedModel):
    helpful_votes: int = 0
    comments: int = 0
    reactions: int = 0


class ComplaintCounts(FeedModel):
    comments: int = 0
    reactions: int = 0
    votes: int = 0


class FeedItemBase(FeedModel):
    """Fields shared by every feed item. ``created_at`` is the merge key."""

    id: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def require_timezone(cls, v: datetime) -> datetime:
        """Merge keys must be comparable across sources, so naive times are rejected."""
        if v.tzinfo is None:
            raise ValueError("created_at must be timezone-aware")
        return v


class ReviewItem(FeedItemBase):
    """A published review in the feed."""

    source_kind: Literal[SourceKind.REVIEW] = SourceKind.REVIEW
    title: str
    content: str
    overall_score: float
    helpful_count: int = 0
    down_vote_count: int = 0
    author: AuthorSummary
    company: CompanySummary | None = None
    counts: ReviewCounts = Field(default_factory=ReviewCounts)


class ComplaintItem(FeedItemBase):
    """A complaint in the feed."""

    source_kind: Literal[SourceKind.COMPLAINT] = SourceKind.COMPLAINT
    title: str
    content: str
    status: Literal["OPEN", "IN_PROGRESS", "RESOLVED", "CLOSED"] = "OPEN"
    helpful_count: int = 0
    down_vote_count: int = 0
    author: AuthorSummary
    company: CompanySummary | None = None
    counts: ComplaintCounts = Field(default_factory=ComplaintCounts)


ContentItem = Annotated[ReviewItem | ComplaintItem, Field(discriminator="source_kind")]
