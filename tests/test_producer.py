"""Tests for the streaming export producer."""

import threading
from datetime import timedelta

import pytest
from icalendar import Calendar as ICalendar

from bookmarks_export.exceptions import StoreError
from bookmarks_export.export.producer import BookmarksExportProducer, ExportState
from bookmarks_export.output.ics_writer import ICalendarWriter
from bookmarks_export.storage.bookmark_store import MemoryBookmarkStore
from conftest import (
    GENERATED_AT,
    YEAR,
    CapturingStream,
    RecordingStore,
    make_context,
    make_event,
    record_lines,
    run_export,
)


class BrokenPipeStream(CapturingStream):
    """Stream whose reader goes away after a number of writes."""

    def __init__(self, writes_before_failure: int):
        super().__init__()
        self.remaining = writes_before_failure

    def write(self, data):
        if self.remaining <= 0:
            raise BrokenPipeError(32, "Broken pipe")
        self.remaining -= 1
        return super().write(data)


class CloseFailingStream(CapturingStream):
    def close(self):
        super().close()
        raise OSError("close failed")


def test_export_document_structure(events):
    """Test the document preamble, events and trailer."""
    store = RecordingStore(events)
    document, producer, stream = run_export(store)

    lines = record_lines(document)
    assert lines[:3] == [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//be.digitalia.fosdem//NONSGML 1.0.0//EN",
    ]
    assert lines[-1] == "END:VCALENDAR"
    assert document.endswith("END:VCALENDAR\r\n")
    assert producer.state is ExportState.DONE
    assert producer.events_written == len(events)
    assert stream.close_calls == 1
    assert store.close_calls == 1


def test_vevent_counts_match_input(events):
    """Test BEGIN:VEVENT and END:VEVENT counts equal the number of events."""
    document, _, _ = run_export(MemoryBookmarkStore(events, YEAR))
    lines = record_lines(document)
    assert lines.count("BEGIN:VEVENT") == len(events)
    assert lines.count("END:VEVENT") == len(events)


def test_events_keep_store_order():
    """Test events are emitted in store order."""
    events = [make_event(i) for i in (5, 1, 3)]
    document, _, _ = run_export(MemoryBookmarkStore(events, YEAR))
    uids = [line for line in record_lines(document) if line.startswith("UID:")]
    assert uids == [f"UID:{i}@{YEAR}@be.digitalia.fosdem" for i in (5, 1, 3)]


def test_uids_unique_and_stable(events):
    """Test UIDs are unique in a document and identical across runs."""
    store = MemoryBookmarkStore(events, YEAR)
    first, _, _ = run_export(store)
    second, _, _ = run_export(store, now=GENERATED_AT + timedelta(hours=5))

    def uids(document):
        return [line for line in record_lines(document) if line.startswith("UID:")]

    assert len(set(uids(first))) == len(events)
    assert uids(first) == uids(second)


def test_dtstamp_shared_by_all_events(events):
    """Test every event carries the run's generation timestamp."""
    document, _, _ = run_export(MemoryBookmarkStore(events, YEAR))
    stamps = [line for line in record_lines(document) if line.startswith("DTSTAMP:")]
    assert stamps == ["DTSTAMP:20250120T083000Z"] * len(events)


def test_export_parses_as_icalendar():
    """Test the output is a valid iCalendar document."""
    raw = "<p>Plain abstract</p>"
    events = [make_event(1, abstract_text=None, description=raw), make_event(2)]
    document, _, _ = run_export(MemoryBookmarkStore(events, YEAR))

    cal = ICalendar.from_ical(document)
    vevents = [c for c in cal.walk() if c.name == "VEVENT"]
    assert len(vevents) == 2
    assert str(vevents[0]["SUMMARY"]) == "Talk 1"
    assert str(vevents[0]["DESCRIPTION"]) == "Plain abstract"
    assert str(vevents[0]["X-ALT-DESC"]) == raw
    assert len(vevents[1]["ATTENDEE"]) == 2


def test_empty_store():
    """Test an empty bookmark list still produces a complete calendar."""
    document, producer, _ = run_export(RecordingStore([]))
    assert record_lines(document) == [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//be.digitalia.fosdem//NONSGML 1.0.0//EN",
        "END:VCALENDAR",
    ]
    assert producer.state is ExportState.DONE


def test_store_failure_mid_iteration_aborts():
    """Test a failing store aborts the run and releases the cursor."""

    def failing_events():
        yield make_event(1)
        raise RuntimeError("database is locked")

    store = RecordingStore(failing_events)
    document, producer, stream = run_export(store)

    assert producer.state is ExportState.ABORTED
    assert producer.events_written == 1
    assert store.close_calls == 1
    assert stream.close_calls == 1
    lines = record_lines(document)
    assert lines.count("BEGIN:VEVENT") == lines.count("END:VEVENT") == 1


def test_store_failure_on_open_aborts():
    """Test a store that cannot be queried yields an empty, closed stream."""

    class UnavailableStore:
        year = YEAR

        def get_bookmarks(self):
            raise StoreError("store unavailable")

    document, producer, stream = run_export(UnavailableStore())
    assert producer.state is ExportState.ABORTED
    assert document == ""
    assert stream.close_calls == 1


def test_consumer_closed_aborts_without_error(events):
    """Test a broken pipe is a normal abort and releases everything."""
    store = RecordingStore(events)
    stream = BrokenPipeStream(writes_before_failure=5)
    producer = BookmarksExportProducer(store, ICalendarWriter(stream), make_context())

    assert producer.run() is ExportState.ABORTED
    assert store.close_calls == 1
    assert stream.close_calls == 1
    assert producer.events_written == 0


def test_close_failure_is_swallowed(events):
    """Test a failure closing the writer does not escape the run."""
    stream = CloseFailingStream()
    producer = BookmarksExportProducer(
        MemoryBookmarkStore(events, YEAR), ICalendarWriter(stream), make_context()
    )
    assert producer.run() is ExportState.DONE
    assert stream.close_calls == 1


def test_producer_runs_once(events):
    """Test a producer cannot be rerun."""
    producer = BookmarksExportProducer(
        MemoryBookmarkStore(events, YEAR), ICalendarWriter(CapturingStream()), make_context()
    )
    producer.run()
    with pytest.raises(RuntimeError):
        producer.run()


def test_start_runs_in_background(events):
    """Test start() runs the export on a separate thread."""
    store = RecordingStore(events)
    stream = CapturingStream()
    producer = BookmarksExportProducer(store, ICalendarWriter(stream), make_context())

    thread = producer.start()
    thread.join(timeout=10)

    assert not thread.is_alive()
    assert thread is not threading.current_thread()
    assert producer.state is ExportState.DONE
    assert b"END:VCALENDAR" in stream.data


def test_malformed_url_does_not_abort_export():
    """Test an event with a multi-line URL is exported with the rest."""
    events = [make_event(1, url="https://fosdem.org/a\nb"), make_event(2)]
    document, producer, _ = run_export(MemoryBookmarkStore(events, YEAR))

    assert producer.state is ExportState.DONE
    assert producer.events_written == 2
    assert record_lines(document).count("END:VEVENT") == 2
