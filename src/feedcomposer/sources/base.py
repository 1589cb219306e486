"""Base class for feed content source adapters."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from feedcomposer.sources.items import ContentItem, SourceKind


@dataclass(frozen=True)
class FeedFilter:
    """Filter applied identically by a source's count and fetch."""

    category: str | None = None  # company category, e.g. "EXCHANGES"


@dataclass(frozen=True)
class Chunk:
    """A batch of items from one source plus the source offset after them."""

    items: tuple[ContentItem, ...]
    cursor: int

    def __len__(self) -> int:
        return len(self.items)


class ContentSource(ABC):
    """
    Abstract base class for one content collection in the feed.

    Implementations are read-only. ``fetch_chunk`` must return items ordered
    by ``created_at`` descending, ties by ``id`` ascending, and must apply the
    filter exactly as ``count`` does.
    """

    @property
    @abstractmethod
    def source_kind(self) -> SourceKind:
        """Return the kind of item this source produces."""
        pass

    @abstractmethod
    def count(self, feed_filter: FeedFilter) -> int:
        """Return the number of items matching the filter."""
        pass

    @abstractmethod
    def fetch_chunk(self, feed_filter: FeedFilter, cursor: int, chunk_size: int) -> Chunk:
        """
        Fetch up to ``chunk_size`` items starting at offset ``cursor``.

        Args:
            feed_filter: Filter to apply.
            cursor: Number of matching items already consumed.
            chunk_size: Maximum number of items to return.

        Returns:
            Chunk whose cursor is ``cursor + len(items)``. An empty chunk means
            the source is exhausted.
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.source_kind.value})"
