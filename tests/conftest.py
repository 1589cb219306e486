"""Shared test fixtures for feedcomposer."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Generator
from unittest.mock import patch

import pytest

from feedcomposer.database.models import Company, Complaint, Review, User, datetime_to_ms
from feedcomposer.feed.merge import merge_key
from feedcomposer.sources.base import Chunk, ContentSource, FeedFilter
from feedcomposer.sources.items import (
    AuthorSummary,
    ComplaintItem,
    ContentItem,
    ReviewItem,
    SourceKind,
)

# Reference instant for in-memory items; offsets are in minutes
T0 = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)

AUTHOR = AuthorSummary(id="user-1", username="alice")


class StaticSource(ContentSource):
    """
    In-memory content source for feed tests.

    Records every count and fetch call, and can be told to fail on the
    count or on the Nth fetch.
    """

    def __init__(
        self,
        kind: SourceKind,
        items: list[ContentItem],
        fail_on_count: Exception | None = None,
        fail_on_fetch: int | None = None,
        fetch_error: Exception | None = None,
    ) -> None:
        self.kind = kind
        self.items = sorted(items, key=lambda item: merge_key(item, 0))
        self.fail_on_count = fail_on_count
        self.fail_on_fetch = fail_on_fetch
        self.fetch_error = fetch_error or RuntimeError("connection reset")
        self.count_calls: list[FeedFilter] = []
        self.fetch_calls: list[tuple[int, int]] = []

    @property
    def source_kind(self) -> SourceKind:
        return self.kind

    def count(self, feed_filter: FeedFilter) -> int:
        self.count_calls.append(feed_filter)
        if self.fail_on_count is not None:
            raise self.fail_on_count
        return len(self.items)

    def fetch_chunk(self, feed_filter: FeedFilter, cursor: int, chunk_size: int) -> Chunk:
        self.fetch_calls.append((cursor, chunk_size))
        if self.fail_on_fetch is not None and len(self.fetch_calls) >= self.fail_on_fetch:
            raise self.fetch_error
        items = tuple(self.items[cursor : cursor + chunk_size])
        return Chunk(items=items, cursor=cursor + len(items))

    @property
    def items_fetched(self) -> int:
        """Items handed out so far, counting the last chunk in full."""
        if not self.fetch_calls:
            return 0
        cursor, size = self.fetch_calls[-1]
        return min(len(self.items), cursor + size)


@pytest.fixture
def make_review() -> Callable[..., ReviewItem]:
    """Factory for in-memory review items, ``minutes`` after T0."""

    def _make(item_id: str, minutes: int = 0, **kwargs) -> ReviewItem:
        fields = {
            "title": f"Review {item_id}",
            "content": "Good service.",
            "overall_score": 4.0,
            "author": AUTHOR,
        }
        fields.update(kwargs)
        return ReviewItem(id=item_id, created_at=T0 + timedelta(minutes=minutes), **fields)

    return _make


@pytest.fixture
def make_complaint() -> Callable[..., ComplaintItem]:
    """Factory for in-memory complaint items, ``minutes`` after T0."""

    def _make(item_id: str, minutes: int = 0, **kwargs) -> ComplaintItem:
        fields = {
            "title": f"Complaint {item_id}",
            "content": "Withdrawal is stuck.",
            "author": AUTHOR,
        }
        fields.update(kwargs)
        return ComplaintItem(id=item_id, created_at=T0 + timedelta(minutes=minutes), **fields)

    return _make


@pytest.fixture
def static_source() -> type[StaticSource]:
    """The in-memory source class, for building sources inside a test."""
    return StaticSource


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test_feedcomposer.db"


@pytest.fixture
def temp_db(temp_db_path: Path) -> Generator[Path, None, None]:
    """Create a temporary test database with schema initialized."""
    from feedcomposer.database.schema import get_schema_sql

    conn = sqlite3.connect(temp_db_path)
    conn.executescript(get_schema_sql())
    conn.close()

    with patch("feedcomposer.database.connection.get_db_path", return_value=temp_db_path):
        yield temp_db_path


@pytest.fixture
def sample_user() -> User:
    """Create a sample user for testing."""
    return User(
        id="user-1",
        email="alice@example.com",
        username="alice",
        avatar="https://example.com/alice.png",
        verified=True,
        reputation=120,
        created_at=datetime_to_ms(T0 - timedelta(days=30)),
    )


@pytest.fixture
def sample_companies() -> list[Company]:
    """Two companies in different categories."""
    return [
        Company(id="co-ex", slug="quickex", name="QuickEx", category="EXCHANGES"),
        Company(id="co-wa", slug="safewallet", name="SafeWallet", category="WALLETS"),
    ]


@pytest.fixture
def sample_review(sample_user: User) -> Review:
    """Create an approved sample review for testing."""
    return Review(
        id="review-1",
        title="Fast withdrawals",
        content="Money arrived within the hour.",
        overall_score=4.5,
        criteria_scores={"fees": 4.0, "support": 5.0},
        status="APPROVED",
        author_id=sample_user.id,
        company_id="co-ex",
        created_at=datetime_to_ms(T0),
    )


@pytest.fixture
def sample_complaint(sample_user: User) -> Complaint:
    """Create a sample complaint for testing."""
    return Complaint(
        id="complaint-1",
        title="Account frozen",
        content="No reply for a week.",
        status="OPEN",
        author_id=sample_user.id,
        company_id="co-wa",
        created_at=datetime_to_ms(T0 - timedelta(hours=1)),
    )


@pytest.fixture
def populated_db(
    temp_db: Path,
    sample_user: User,
    sample_companies: list[Company],
    sample_review: Review,
    sample_complaint: Complaint,
) -> Path:
    """Temporary database holding one user, two companies, one review and one complaint."""
    from feedcomposer.database.connection import get_connection
    from feedcomposer.database.queries import (
        insert_complaints_batch,
        insert_reviews_batch,
        insert_users_batch,
    )

    insert_users_batch([sample_user])
    with get_connection() as conn:
        conn.executemany(
            "INSERT OR REPLACE INTO companies (id, slug, name, category, logo) VALUES (?, ?, ?, ?, ?)",
            [(c.id, c.slug, c.name, c.category, c.logo) for c in sample_companies],
        )
    insert_reviews_batch([sample_review])
    insert_complaints_batch([sample_complaint])
    return temp_db
