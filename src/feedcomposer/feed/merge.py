"""K-way merge of chunk buffers into one descending, time-ordered stream.

Items are ordered by ``created_at`` descending. Items with identical
timestamps are ordered by source priority (the position of their buffer in
the list given to the engine, lowest first) and then by ``id`` ascending, so
the stream is a total order and repeated requests over unchanged data yield
the same sequence.
"""

from __future__ import annotations

import heapq
import threading
from collections.abc import Iterator, Sequence
from datetime import datetime, timedelta, timezone

from feedcomposer.exceptions import FeedCancelledError
from feedcomposer.feed.buffer import ChunkBuffer
from feedcomposer.sources.items import ContentItem
from feedcomposer.utils.logging import get_logger

logger = get_logger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MICROSECOND = timedelta(microseconds=1)

MergeKey = tuple[int, int, str]


def merge_key(item: ContentItem, priority: int) -> MergeKey:
    """Sort key placing newer items first, then higher priority, then lower id."""
    micros = (item.created_at - _EPOCH) // _MICROSECOND
    return (-micros, priority, item.id)


class MergeEngine(Iterator[ContentItem]):
    """
    Single-pass iterator merging several chunk buffers.

    The heap holds at most one peeked item per buffer. After an item is
    yielded its buffer is not peeked again until the next item is requested,
    so no source is read further than the caller consumes.
    """

    def __init__(
        self,
        buffers: Sequence[ChunkBuffer],
        cancel_event: threading.Event | None = None,
    ) -> None:
        self._buffers = list(buffers)
        self._cancel_event = cancel_event
        self._heap: list[tuple[MergeKey, int]] = []
        self._primed = False
        self._pending: int | None = None
        self._closed = False
        self.yielded = 0

    def __iter__(self) -> MergeEngine:
        return self

    def __next__(self) -> ContentItem:
        if self._closed:
            raise StopIteration

        if self._cancel_event is not None and self._cancel_event.is_set():
            logger.info(f"Feed merge cancelled after {self.yielded} items")
            self.close()
            raise FeedCancelledError("Feed request was cancelled")

        if not self._primed:
            for index in range(len(self._buffers)):
                self._push(index)
            self._primed = True
        elif self._pending is not None:
            self._push(self._pending)
        self._pending = None

        if not self._heap:
            self._closed = True
            raise StopIteration

        _, index = heapq.heappop(self._heap)
        item = self._buffers[index].pop()
        self._pending = index
        self.yielded += 1
        return item

    def _push(self, index: int) -> None:
        item = self._buffers[index].peek()
        if item is not None:
            heapq.heappush(self._heap, (merge_key(item, index), index))

    def close(self) -> None:
        """Release every buffer; the engine yields nothing afterwards."""
        for buffer in self._buffers:
            buffer.close()
        self._heap.clear()
        self._pending = None
        self._closed = True

    @property
    def fetch_count(self) -> int:
        """Total chunk fetches issued across all buffers."""
        return sum(buffer.fetch_count for buffer in self._buffers)
