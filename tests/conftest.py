import io
import threading
from datetime import datetime, timezone

import pytest

from bookmarks_export import create_app
from bookmarks_export.config import ExportConfig
from bookmarks_export.export.producer import BookmarksExportProducer
from bookmarks_export.models.context import ExportContext
from bookmarks_export.models.event import Event
from bookmarks_export.output.ics_writer import ICalendarWriter
from bookmarks_export.storage.bookmark_store import BookmarkCursor, MemoryBookmarkStore

YEAR = 2025
GENERATED_AT = datetime(2025, 1, 20, 8, 30, 0, tzinfo=timezone.utc)


def make_event(event_id: int = 1, **overrides) -> Event:
    """Helper to create an Event with realistic defaults."""
    data = {
        "id": event_id,
        "start_time": datetime(2025, 2, 1, 10, 0, tzinfo=timezone.utc),
        "end_time": datetime(2025, 2, 1, 10, 50, tzinfo=timezone.utc),
        "title": f"Talk {event_id}",
        "abstract_text": "<p>An <b>introduction</b> to streaming exports.</p>",
        "description": None,
        "track": "Main Track",
        "url": f"https://fosdem.org/2025/schedule/event/talk_{event_id}/",
        "room_name": "Janson",
        "persons_summary": "Alice Doe, Bob Roe",
    }
    data.update(overrides)
    return Event(**data)


def make_context(now: datetime = GENERATED_AT, year: int = YEAR) -> ExportContext:
    """Helper to create an ExportContext with the default configuration."""
    return ExportContext.create(ExportConfig(), year, now=now)


class CapturingStream(io.BytesIO):
    """Byte stream keeping its content after close."""

    def __init__(self):
        super().__init__()
        self.data = b""
        self.close_calls = 0

    def close(self):
        self.close_calls += 1
        if not self.closed:
            self.data = self.getvalue()
        super().close()


class RecordingCursor(BookmarkCursor):
    """Cursor reporting close() calls to its store."""

    def __init__(self, events, store):
        super().__init__(events)
        self._store = store

    def close(self):
        self._store.close_calls += 1
        self._store.released.set()
        super().close()


class RecordingStore:
    """Bookmark store double recording cursor releases.

    events may be an iterable or a zero-argument callable returning one,
    for generators that must be created fresh per export.
    """

    def __init__(self, events, year: int = YEAR):
        self.year = year
        self._events = events
        self.open_calls = 0
        self.close_calls = 0
        self.released = threading.Event()

    def get_bookmarks(self) -> BookmarkCursor:
        self.open_calls += 1
        events = self._events() if callable(self._events) else self._events
        return RecordingCursor(events, self)


def run_export(store, now: datetime = GENERATED_AT, year: int = YEAR):
    """Run an export synchronously; returns (document text, producer, stream)."""
    stream = CapturingStream()
    producer = BookmarksExportProducer(
        store, ICalendarWriter(stream), make_context(now=now, year=year)
    )
    producer.run()
    return stream.data.decode("utf-8"), producer, stream


def record_lines(document: str) -> list[str]:
    """Unfold a document and split it into records."""
    return [line for line in document.replace("\r\n ", "").split("\r\n") if line]


@pytest.fixture
def events():
    return [make_event(1), make_event(2, persons_summary="Carol Poe"), make_event(3)]


@pytest.fixture
def store(events):
    return MemoryBookmarkStore(events, YEAR)


@pytest.fixture
def config(tmp_path):
    return ExportConfig(
        bookmarks_path=tmp_path / "bookmarks.json",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def app(config, store):
    """Create and configure a Flask app for testing."""
    app = create_app(config, store)
    app.config["TESTING"] = True
    return app
