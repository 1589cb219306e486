"""Unified activity feed: chunk buffers, k-way merge and page extraction."""

from feedcomposer.feed.buffer import ChunkBuffer
from feedcomposer.feed.composer import FeedComposer, build_default_composer, get_feed
from feedcomposer.feed.merge import MergeEngine, merge_key
from feedcomposer.feed.models import MergedPage, Pagination

__all__ = [
    "ChunkBuffer",
    "FeedComposer",
    "MergeEngine",
    "MergedPage",
    "Pagination",
    "build_default_composer",
    "get_feed",
    "merge_key",
]
