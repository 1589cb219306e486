"""Tests for page extraction over the merged feed."""

import threading
from unittest.mock import patch

import pytest

from feedcomposer.config.settings import FeedSettings, Settings
from feedcomposer.exceptions import (
    ConfigurationError,
    FeedCancelledError,
    InvalidArgumentError,
    SourceUnavailableError,
)
from feedcomposer.feed.composer import FeedComposer, build_default_composer
from feedcomposer.sources.base import FeedFilter
from feedcomposer.sources.complaints import ComplaintSource
from feedcomposer.sources.items import SourceKind
from feedcomposer.sources.reviews import ReviewSource


class TestFeedComposerValidation:
    """Tests for constructor and argument checks."""

    def test_requires_a_source(self) -> None:
        with pytest.raises(ConfigurationError):
            FeedComposer([])

    @pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (-1, 5), (True, 5), ("2", 5)])
    def test_rejects_out_of_contract_arguments(self, static_source, page, limit) -> None:
        source = static_source(SourceKind.REVIEW, [])
        composer = FeedComposer([source])

        with pytest.raises(InvalidArgumentError):
            composer.get_feed(page, limit)

        # Rejected before touching any source
        assert source.count_calls == []


class TestFeedComposer:
    """Tests for FeedComposer.get_feed."""

    @pytest.fixture
    def scenario(self, static_source, make_review, make_complaint):
        """Reviews {A@t3, B@t1} and Complaints {C@t2}."""
        reviews = static_source(SourceKind.REVIEW, [make_review("A", 3), make_review("B", 1)])
        complaints = static_source(SourceKind.COMPLAINT, [make_complaint("C", 2)])
        return FeedComposer([reviews, complaints], chunk_size=20)

    def test_first_page_of_scenario(self, scenario) -> None:
        result = scenario.get_feed(page=1, limit=2)

        assert [item.id for item in result.items] == ["A", "C"]
        assert result.pagination.model_dump() == {
            "page": 1,
            "limit": 2,
            "total": 3,
            "total_pages": 2,
        }

    def test_second_page_of_scenario(self, scenario) -> None:
        result = scenario.get_feed(page=2, limit=2)

        assert [item.id for item in result.items] == ["B"]
        assert result.pagination.page == 2
        assert result.pagination.total_pages == 2

    def test_empty_sources(self, static_source) -> None:
        reviews = static_source(SourceKind.REVIEW, [])
        complaints = static_source(SourceKind.COMPLAINT, [])
        composer = FeedComposer([reviews, complaints])

        result = composer.get_feed(page=1, limit=10)

        assert result.items == []
        assert result.pagination.total == 0
        assert result.pagination.total_pages == 0
        # Counting suffices; no chunk is fetched
        assert reviews.fetch_calls == []
        assert complaints.fetch_calls == []

    def test_short_last_page(self, static_source, make_review, make_complaint) -> None:
        reviews = static_source(SourceKind.REVIEW, [make_review(f"r{i}", -2 * i) for i in range(4)])
        complaints = static_source(
            SourceKind.COMPLAINT, [make_complaint(f"c{i}", -2 * i - 1) for i in range(3)]
        )
        composer = FeedComposer([reviews, complaints], chunk_size=2)

        result = composer.get_feed(page=2, limit=5)

        assert len(result.items) == 2
        assert result.pagination.total == 7
        assert result.pagination.total_pages == 2

    def test_page_past_the_end_is_empty(self, static_source, make_review) -> None:
        reviews = static_source(SourceKind.REVIEW, [make_review(f"r{i}", -i) for i in range(3)])
        composer = FeedComposer([reviews])

        result = composer.get_feed(page=5, limit=2)

        assert result.items == []
        assert result.pagination.total == 3
        assert result.pagination.total_pages == 2
        assert reviews.fetch_calls == []

    @pytest.mark.parametrize("limit", [1, 2, 3, 5, 7])
    def test_pages_cover_every_item_once(
        self, static_source, make_review, make_complaint, limit
    ) -> None:
        review_items = [make_review(f"r{i:02d}", -(i * 3) % 17) for i in range(11)]
        complaint_items = [make_complaint(f"c{i:02d}", -(i * 5) % 13) for i in range(8)]
        composer = FeedComposer(
            [
                static_source(SourceKind.REVIEW, review_items),
                static_source(SourceKind.COMPLAINT, complaint_items),
            ],
            chunk_size=3,
        )

        first = composer.get_feed(page=1, limit=limit)
        pages = [first] + [
            composer.get_feed(page=p, limit=limit)
            for p in range(2, first.pagination.total_pages + 1)
        ]
        seen = [item for page in pages for item in page.items]

        assert len(seen) == 19
        assert len({item.id for item in seen}) == 19
        times = [item.created_at for item in seen]
        assert times == sorted(times, reverse=True)
        assert [item.id for item in seen] == [
            item.id for item in composer.get_feed(page=1, limit=50).items
        ]

    def test_repeated_requests_are_identical(
        self, static_source, make_review, make_complaint
    ) -> None:
        composer = FeedComposer(
            [
                static_source(SourceKind.REVIEW, [make_review(f"r{i}", 0) for i in range(4)]),
                static_source(SourceKind.COMPLAINT, [make_complaint(f"c{i}", 0) for i in range(4)]),
            ],
            chunk_size=3,
        )

        runs = [composer.get_feed(page=2, limit=3).to_response() for _ in range(3)]

        assert runs[0] == runs[1] == runs[2]
        assert [item["id"] for item in runs[0]["items"]] == ["r3", "c0", "c1"]

    def test_reads_only_what_the_page_needs(self, static_source, make_review, make_complaint) -> None:
        reviews = static_source(SourceKind.REVIEW, [make_review(f"r{i}", -2 * i) for i in range(50)])
        complaints = static_source(
            SourceKind.COMPLAINT, [make_complaint(f"c{i}", -2 * i - 1) for i in range(50)]
        )
        composer = FeedComposer([reviews, complaints], chunk_size=5)

        composer.get_feed(page=1, limit=4)

        assert reviews.items_fetched <= 10
        assert complaints.items_fetched <= 10

    def test_count_failure_raises_source_unavailable(self, static_source, make_review) -> None:
        reviews = static_source(SourceKind.REVIEW, [make_review("r0")])
        complaints = static_source(
            SourceKind.COMPLAINT, [], fail_on_count=RuntimeError("table missing")
        )
        composer = FeedComposer([reviews, complaints])

        with pytest.raises(SourceUnavailableError) as exc_info:
            composer.get_feed(page=1, limit=10)

        assert exc_info.value.source == "complaint"
        assert "table missing" in str(exc_info.value)

    def test_count_failure_from_source_is_not_wrapped_twice(self, static_source) -> None:
        reviews = static_source(
            SourceKind.REVIEW, [], fail_on_count=SourceUnavailableError("review")
        )

        with pytest.raises(SourceUnavailableError) as exc_info:
            FeedComposer([reviews]).get_feed(page=1, limit=10)

        assert str(exc_info.value) == "Content source 'review' is unavailable"

    def test_overstated_count_gives_short_page(self, static_source, make_review) -> None:
        reviews = static_source(SourceKind.REVIEW, [make_review("r0")])
        reviews.count = lambda feed_filter: 10

        result = FeedComposer([reviews]).get_feed(page=1, limit=5)

        assert [item.id for item in result.items] == ["r0"]
        assert result.pagination.total == 10
        assert result.pagination.total_pages == 2

    def test_items_removed_while_paging(self, static_source, make_review, make_complaint) -> None:
        reviews = static_source(SourceKind.REVIEW, [make_review(f"r{i}", -2 * i) for i in range(6)])
        complaints = static_source(
            SourceKind.COMPLAINT, [make_complaint(f"c{i}", -2 * i - 1) for i in range(3)]
        )
        original_fetch = reviews.fetch_chunk

        def fetch_then_delete(feed_filter, cursor, chunk_size):
            chunk = original_fetch(feed_filter, cursor, chunk_size)
            del reviews.items[2:]
            return chunk

        reviews.fetch_chunk = fetch_then_delete
        composer = FeedComposer([reviews, complaints], chunk_size=2)

        result = composer.get_feed(page=1, limit=10)

        assert [item.id for item in result.items] == ["r0", "c0", "r1", "c1", "c2"]
        assert result.pagination.total == 9

    def test_fetch_failure_returns_no_partial_page(self, static_source, make_review) -> None:
        reviews = static_source(
            SourceKind.REVIEW, [make_review(f"r{i}", -i) for i in range(6)], fail_on_fetch=2
        )
        composer = FeedComposer([reviews], chunk_size=2)

        with pytest.raises(SourceUnavailableError):
            composer.get_feed(page=1, limit=5)

    def test_cancelled_before_start(self, static_source, make_review) -> None:
        reviews = static_source(SourceKind.REVIEW, [make_review("r0")])
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(FeedCancelledError):
            FeedComposer([reviews]).get_feed(page=1, limit=10, cancel_event=cancel)

        assert reviews.count_calls == []

    def test_cancelled_during_merge(self, static_source, make_review) -> None:
        cancel = threading.Event()
        reviews = static_source(SourceKind.REVIEW, [make_review(f"r{i}", -i) for i in range(6)])
        original_fetch = reviews.fetch_chunk

        def fetch_then_cancel(feed_filter, cursor, chunk_size):
            chunk = original_fetch(feed_filter, cursor, chunk_size)
            cancel.set()
            return chunk

        reviews.fetch_chunk = fetch_then_cancel
        composer = FeedComposer([reviews], chunk_size=2)

        with pytest.raises(FeedCancelledError):
            composer.get_feed(page=1, limit=5, cancel_event=cancel)

    def test_filter_reaches_sources(self, static_source) -> None:
        reviews = static_source(SourceKind.REVIEW, [])
        composer = FeedComposer([reviews])

        composer.get_feed(page=1, limit=5, feed_filter=FeedFilter(category="WALLETS"))

        assert reviews.count_calls == [FeedFilter(category="WALLETS")]


class TestBuildDefaultComposer:
    """Tests for build_default_composer."""

    def test_uses_configured_priority(self) -> None:
        settings = Settings(
            feed=FeedSettings(source_priority=["complaint", "review"], chunk_size=7)
        )

        composer = build_default_composer(settings)

        assert [type(s) for s in composer.sources] == [ComplaintSource, ReviewSource]
        assert composer.chunk_size == 7

    def test_review_status_passed_to_source(self) -> None:
        settings = Settings(feed=FeedSettings(review_status="pending"))

        composer = build_default_composer(settings)

        assert composer.sources[0].status == "PENDING"

    def test_defaults_from_cached_settings(self) -> None:
        with patch("feedcomposer.feed.composer.get_settings", return_value=Settings()):
            composer = build_default_composer()

        assert [s.source_kind for s in composer.sources] == [
            SourceKind.REVIEW,
            SourceKind.COMPLAINT,
        ]
