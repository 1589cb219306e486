"""Page extraction over the merged activity feed."""

from __future__ import annotations

import threading
from collections.abc import Sequence
from itertools import islice

from feedcomposer.config import get_settings
from feedcomposer.config.defaults import DEFAULT_CHUNK_SIZE
from feedcomposer.config.settings import Settings
from feedcomposer.exceptions import (
    ConfigurationError,
    FeedCancelledError,
    InvalidArgumentError,
    SourceUnavailableError,
)
from feedcomposer.feed.buffer import ChunkBuffer
from feedcomposer.feed.merge import MergeEngine
from feedcomposer.feed.models import MergedPage, Pagination
from feedcomposer.sources.base import ContentSource, FeedFilter
from feedcomposer.sources.complaints import ComplaintSource
from feedcomposer.sources.items import SourceKind
from feedcomposer.sources.reviews import ReviewSource
from feedcomposer.utils.logging import get_logger

logger = get_logger(__name__)


def _require_positive_int(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidArgumentError(f"{name} must be an integer >= 1, got {value!r}")


class FeedComposer:
    """
    Compose paginated pages of the unified feed over several content sources.

    The order of ``sources`` is their priority when items share a timestamp.
    Every call to ``get_feed`` builds its own buffers and merge engine, so a
    composer can serve concurrent requests.
    """

    def __init__(
        self,
        sources: Sequence[ContentSource],
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if not sources:
            raise ConfigurationError("A feed needs at least one content source")
        _require_positive_int("chunk_size", chunk_size)

        self.sources = tuple(sources)
        self.chunk_size = chunk_size

    def count(self, feed_filter: FeedFilter) -> list[int]:
        """Count matching items per source, in source order."""
        counts = []
        for source in self.sources:
            try:
                counts.append(source.count(feed_filter))
            except SourceUnavailableError:
                raise
            except Exception as e:
                logger.error(f"Counting {source.source_kind.value} items failed: {e}")
                raise SourceUnavailableError(source.source_kind.value, e) from e
        return counts

    def get_feed(
        self,
        page: int,
        limit: int,
        feed_filter: FeedFilter | None = None,
        cancel_event: threading.Event | None = None,
    ) -> MergedPage:
        """
        Return page ``page`` of the merged feed, ``limit`` items per page.

        Callers clamp their input; out-of-contract values are rejected, not
        corrected. The last page may be short, and a page past the end is
        empty with the usual pagination envelope.

        Raises:
            InvalidArgumentError: page or limit below 1.
            SourceUnavailableError: a source failed to count or fetch.
            FeedCancelledError: ``cancel_event`` was set before the page was complete.
        """
        _require_positive_int("page", page)
        _require_positive_int("limit", limit)
        if feed_filter is None:
            feed_filter = FeedFilter()

        if cancel_event is not None and cancel_event.is_set():
            raise FeedCancelledError("Feed request was cancelled")

        total = sum(self.count(feed_filter))
        pagination = Pagination.build(page, limit, total)
        offset = (page - 1) * limit

        if total == 0 or offset >= total:
            logger.debug(f"Feed page {page} (limit {limit}) is empty; total={total}")
            return MergedPage(items=[], pagination=pagination)

        engine = MergeEngine(
            [ChunkBuffer(source, feed_filter, self.chunk_size) for source in self.sources],
            cancel_event=cancel_event,
        )
        try:
            items = list(islice(engine, offset, offset + limit))
        finally:
            engine.close()

        logger.debug(
            f"Feed page {page} (limit {limit}, category={feed_filter.category}): "
            f"{len(items)} items of {total}, {engine.fetch_count} chunk fetches"
        )
        return MergedPage(items=items, pagination=pagination)


_SOURCE_FACTORIES = {
    SourceKind.REVIEW: lambda settings: ReviewSource(status=settings.feed.review_status),
    SourceKind.COMPLAINT: lambda settings: ComplaintSource(),
}


def build_default_composer(settings: Settings | None = None) -> FeedComposer:
    """Build a composer over the SQLite sources in configured priority order."""
    if settings is None:
        settings = get_settings()

    sources = [
        _SOURCE_FACTORIES[SourceKind(kind)](settings) for kind in settings.feed.source_priority
    ]
    return FeedComposer(sources, chunk_size=settings.feed.chunk_size)


def get_feed(
    page: int,
    limit: int,
    category: str | None = None,
    cancel_event: threading.Event | None = None,
) -> MergedPage:
    """Fetch one page of the platform feed, optionally restricted to a company category."""
    return build_default_composer().get_feed(
        page,
        limit,
        FeedFilter(category=category),
        cancel_event=cancel_event,
    )
