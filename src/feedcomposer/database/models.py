"""Pydantic models for database records."""

import json
import uuid
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator


def now_ms() -> int:
    """Current time as Unix epoch milliseconds."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def ms_to_datetime(value: int) -> datetime:
    """Convert Unix epoch milliseconds to an aware UTC datetime."""
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


def datetime_to_ms(value: datetime) -> int:
    """Convert a datetime to Unix epoch milliseconds (naive means UTC)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


def _new_id() -> str:
    return str(uuid.uuid4())


class User(BaseModel):
    """Model for a platform user."""

    id: str = Field(default_factory=_new_id)
    email: str
    username: str
    name: str | None = None
    avatar: str | None = None
    verified: bool = False
    reputation: int = 0
    created_at: int = Field(default_factory=now_ms)

    def to_db_dict(self) -> dict[str, Any]:
        """Convert to dictionary for database insertion."""
        data = self.model_dump()
        data["verified"] = 1 if self.verified else 0
        return data


class Company(BaseModel):
    """Model for a reviewed company."""

    id: str = Field(default_factory=_new_id)
    slug: str
    name: str
    category: str | None = None
    logo: str | None = None
    description: str | None = None


class Review(BaseModel):
    """Model for a company review."""

    id: str = Field(default_factory=_new_id)
    title: str
    content: str
    overall_score: float
    criteria_scores: dict[str, float] = Field(default_factory=dict)
    status: Literal["PENDING", "APPROVED", "REJECTED"] = "PENDING"
    helpful_count: int = 0
    down_vote_count: int = 0
    author_id: str
    company_id: str | None = None
    created_at: int = Field(default_factory=now_ms)
    updated_at: int | None = None

    @field_validator("criteria_scores", mode="before")
    @classmethod
    def parse_criteria(cls, v: Any) -> dict[str, float]:
        """Parse criteria scores from JSON string if needed."""
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return {}
        return v or {}

    @field_validator("overall_score")
    @classmethod
    def validate_score(cls, v: float) -> float:
        """Scores use the 1-5 star scale."""
        if not 1.0 <= v <= 5.0:
            raise ValueError(f"overall_score must be between 1 and 5, got {v}")
        return v

    def to_db_dict(self) -> dict[str, Any]:
        """Convert to dictionary for database insertion."""
        data = self.model_dump()
        data["criteria_scores"] = json.dumps(self.criteria_scores)
        return data

    @property
    def created_datetime(self) -> datetime:
        """Get created_at as an aware UTC datetime."""
        return ms_to_datetime(self.created_at)


class Complaint(BaseModel):
    """Model for a complaint filed against a company."""

    id: str = Field(default_factory=_new_id)
    title: str
    content: str
    status: Literal["OPEN", "IN_PROGRESS", "RESOLVED", "CLOSED"] = "OPEN"
    helpful_count: int = 0
    down_vote_count: int = 0
    author_id: str
    company_id: str | None = None
    created_at: int = Field(default_factory=now_ms)
    updated_at: int | None = None

    def to_db_dict(self) -> dict[str, Any]:
        """Convert to dictionary for database insertion."""
        return self.model_dump()

    @property
    def created_datetime(self) -> datetime:
        """Get created_at as an aware UTC datetime."""
        return ms_to_datetime(self.created_at)


class Comment(BaseModel):
    """Model for a comment on a review or complaint."""

    id: str = Field(default_factory=_new_id)
    content: str
    author_id: str
    review_id: str | None = None
    complaint_id: str | None = None
    parent_id: str | None = None
    created_at: int = Field(default_factory=now_ms)

    def to_db_dict(self) -> dict[str, Any]:
        """Convert to dictionary for database insertion."""
        return self.model_dump()


class Reaction(BaseModel):
    """Model for an emoji-style reaction."""

    id: int | None = None
    user_id: str
    review_id: str | None = None
    complaint_id: str | None = None
    reaction_type: str = "like"
    created_at: int = Field(default_factory=now_ms)

    def to_db_dict(self) -> dict[str, Any]:
        """Convert to dictionary for database insertion."""
        return self.model_dump(exclude={"id"})


class Vote(BaseModel):
    """Model for an up/down vote."""

    id: int | None = None
    user_id: str
    review_id: str | None = None
    complaint_id: str | None = None
    vote_type: Literal["UP", "DOWN"]
    created_at: int = Field(default_factory=now_ms)

    def to_db_dict(self) -> dict[str, Any]:
        """Convert to dictionary for database insertion."""
        return self.model_dump(exclude={"id"})
