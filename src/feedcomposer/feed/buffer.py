"""Per-source lazy window over fetched-but-unconsumed feed items."""

from __future__ import annotations

from collections import deque

from feedcomposer.config.defaults import DEFAULT_CHUNK_SIZE
from feedcomposer.exceptions import InvalidArgumentError, SourceUnavailableError
from feedcomposer.sources.base import ContentSource, FeedFilter
from feedcomposer.sources.items import ContentItem, SourceKind
from feedcomposer.utils.logging import get_logger

logger = get_logger(__name__)


class ChunkBuffer:
    """
    One-at-a-time view of a content source, refilled in chunks.

    The merge consumes items singly while the source is read in batches of
    ``chunk_size``. An empty chunk marks the source exhausted for the rest of
    the buffer's life; it is never fetched again.
    """

    def __init__(
        self,
        source: ContentSource,
        feed_filter: FeedFilter,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if chunk_size < 1:
            raise InvalidArgumentError(f"chunk_size must be >= 1, got {chunk_size}")

        self.source = source
        self.feed_filter = feed_filter
        self.chunk_size = chunk_size
        self.fetch_count = 0
        self._items: deque[ContentItem] = deque()
        self._cursor = 0
        self._source_exhausted = False

    @property
    def source_kind(self) -> SourceKind:
        return self.source.source_kind

    @property
    def cursor(self) -> int:
        """Offset into the source of the next item to fetch."""
        return self._cursor

    @property
    def exhausted(self) -> bool:
        """True once the source is drained and nothing is left buffered."""
        return self._source_exhausted and not self._items

    def peek(self) -> ContentItem | None:
        """Return the next unconsumed item without removing it."""
        if not self._items and not self._source_exhausted:
            self._refill()
        return self._items[0] if self._items else None

    def pop(self) -> ContentItem:
        """Remove and return the item ``peek`` returns."""
        if self.peek() is None:
            raise IndexError(f"pop from exhausted {self.source_kind.value} buffer")
        return self._items.popleft()

    def close(self) -> None:
        """Drop buffered items and stop fetching."""
        self._items.clear()
        self._source_exhausted = True

    def _refill(self) -> None:
        try:
            chunk = self.source.fetch_chunk(self.feed_filter, self._cursor, self.chunk_size)
        except SourceUnavailableError:
            raise
        except Exception as e:
            logger.error(
                f"Fetching {self.source_kind.value} items at cursor {self._cursor} failed: {e}"
            )
            raise SourceUnavailableError(self.source_kind.value, e) from e

        self.fetch_count += 1

        if not chunk.items:
            logger.debug(f"{self.source_kind.value} source exhausted at cursor {self._cursor}")
            self._source_exhausted = True
            return

        self._items.extend(chunk.items)

        if chunk.cursor <= self._cursor:
            # Refetching from a cursor that did not move would repeat items
            logger.warning(
                f"{self.source_kind.value} source did not advance past cursor "
                f"{self._cursor}; treating it as exhausted"
            )
            self._source_exhausted = True
        else:
            self._cursor = chunk.cursor

        logger.debug(
            f"Fetched {len(chunk.items)} {self.source_kind.value} items, cursor now {self._cursor}"
        )

    def __repr__(self) -> str:
        return (
            f"ChunkBuffer({self.source_kind.value}, cursor={self._cursor}, "
            f"buffered={len(self._items)}, exhausted={self.exhausted})"
        )
