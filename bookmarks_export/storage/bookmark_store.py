"""Bookmark store access for exports."""

import logging
from pathlib import Path
from typing import Iterable, Iterator, Protocol

from pydantic import ValidationError

from bookmarks_export.exceptions import StoreError
from bookmarks_export.models.event import Event
from bookmarks_export.models.snapshot import BookmarkSnapshot

logger = logging.getLogger(__name__)


class BookmarkCursor:
    """Closeable iteration over bookmarked events in store order.

    Any failure raised while fetching the next event is reported as
    StoreError. close() releases the source once; later calls do nothing.
    """

    def __init__(self, events: Iterable[Event]):
        self._events: Iterator[Event] = iter(events)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __iter__(self) -> "BookmarkCursor":
        return self

    def __next__(self) -> Event:
        if self._closed:
            raise StoreError("Bookmark cursor is closed")
        try:
            return next(self._events)
        except StopIteration:
            raise
        except StoreError:
            raise
        except Exception as e:
            raise StoreError(f"Failed to read bookmark: {e}") from e

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        close = getattr(self._events, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "BookmarkCursor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class BookmarkStore(Protocol):
    """Protocol for bookmark stores."""

    year: int

    def get_bookmarks(self) -> BookmarkCursor:
        """Open a cursor over all bookmarked events."""
        ...


class MemoryBookmarkStore:
    """Bookmark store backed by an in-memory event list."""

    def __init__(self, events: Iterable[Event], year: int):
        self._events = list(events)
        self.year = year

    def get_bookmarks(self) -> BookmarkCursor:
        return BookmarkCursor(self._events)


class JSONBookmarkStore:
    """Bookmark store reading a JSON snapshot file.

    The file is read on every get_bookmarks() call so each export sees the
    current bookmarks.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    @property
    def year(self) -> int:
        return self._load().year

    def get_bookmarks(self) -> BookmarkCursor:
        snapshot = self._load()
        logger.info(f"Loaded {len(snapshot.events)} bookmarks from {self.path}")
        return BookmarkCursor(snapshot.events)

    def _load(self) -> BookmarkSnapshot:
        if not self.path.exists():
            raise StoreError(f"Bookmark snapshot not found: {self.path}")
        try:
            return BookmarkSnapshot.load(self.path)
        except (OSError, ValidationError) as e:
            raise StoreError(f"Failed to read bookmark snapshot {self.path}: {e}") from e
