"""Bookmark store layer."""

from bookmarks_export.storage.bookmark_store import (
    BookmarkCursor,
    BookmarkStore,
    JSONBookmarkStore,
    MemoryBookmarkStore,
)

__all__ = [
    "BookmarkCursor",
    "BookmarkStore",
    "JSONBookmarkStore",
    "MemoryBookmarkStore",
]
