"""Background producer streaming bookmarked events as a calendar document.

STATE MACHINE:

    OPENING ──► EMITTING ──► CLOSING ──► DONE

    Any state can transition to ABORTED (store failure, sink failure,
    consumer went away). ABORTED and DONE are terminal.

INVARIANTS:
- The bookmark cursor is released exactly once, whatever the exit path
- The record writer is closed exactly once before the run terminates
- END:VCALENDAR is attempted even after an abort; a failure there is ignored
- Nothing is retried and no export failure escapes run()
"""

import logging
import threading
from contextlib import closing
from enum import Enum

from bookmarks_export.exceptions import CalendarError, RecordWriteError
from bookmarks_export.models.context import ExportContext
from bookmarks_export.output.base import RecordWriter
from bookmarks_export.processing.event_mapper import map_event
from bookmarks_export.storage.bookmark_store import BookmarkStore

logger = logging.getLogger(__name__)


class ExportState(str, Enum):
    """Export run state."""

    OPENING = "OPENING"
    EMITTING = "EMITTING"
    CLOSING = "CLOSING"
    DONE = "DONE"
    ABORTED = "ABORTED"


TERMINAL_STATES = frozenset({ExportState.DONE, ExportState.ABORTED})


class BookmarksExportProducer:
    """Runs one export of all bookmarks into a record writer."""

    def __init__(
        self, store: BookmarkStore, writer: RecordWriter, context: ExportContext
    ):
        self._store = store
        self._writer = writer
        self._context = context
        self._state = ExportState.OPENING
        self._lock = threading.Lock()
        self._started = False
        self.events_written = 0

    @property
    def state(self) -> ExportState:
        return self._state

    @property
    def context(self) -> ExportContext:
        return self._context

    def start(self) -> threading.Thread:
        """Run the export on a new daemon thread."""
        thread = threading.Thread(
            target=self.run, name="bookmarks-export", daemon=True
        )
        thread.start()
        return thread

    def run(self) -> ExportState:
        """Run the export to completion or abort. Can only run once."""
        with self._lock:
            if self._started:
                raise RuntimeError(f"Export already ran (state: {self._state.value})")
            self._started = True

        try:
            with closing(self._store.get_bookmarks()) as cursor:
                try:
                    self._write_preamble()
                    self._transition(ExportState.EMITTING)
                    for event in cursor:
                        for key, value in map_event(event, self._context):
                            self._writer.write(key, value)
                        self.events_written += 1
                finally:
                    self._write_trailer()
        except RecordWriteError as e:
            self._abort()
            if e.consumer_closed:
                logger.info(
                    f"Consumer closed the export stream after {self.events_written} events"
                )
            else:
                logger.warning(f"Export aborted, sink failure: {e}")
        except CalendarError as e:
            self._abort()
            logger.warning(f"Export aborted: {e}")
        except Exception:
            self._abort()
            logger.exception("Unexpected error during bookmarks export")
        else:
            self._transition(ExportState.DONE)
            logger.info(f"Exported {self.events_written} bookmarked events")
        finally:
            self._close_writer()
        return self._state

    def _write_preamble(self) -> None:
        self._writer.write("BEGIN", "VCALENDAR")
        self._writer.write("VERSION", "2.0")
        self._writer.write("PRODID", self._context.product_id)

    def _write_trailer(self) -> None:
        if self._state is ExportState.EMITTING:
            self._transition(ExportState.CLOSING)
        try:
            self._writer.write("END", "VCALENDAR")
        except CalendarError as e:
            # Consumer already sees an incomplete stream
            logger.debug(f"Could not write calendar trailer: {e}")

    def _close_writer(self) -> None:
        try:
            self._writer.close()
        except CalendarError as e:
            logger.debug(f"Failed to close export stream: {e}")

    def _abort(self) -> None:
        self._transition(ExportState.ABORTED)

    def _transition(self, state: ExportState) -> None:
        if self._state in TERMINAL_STATES:
            return
        logger.debug(f"Export state {self._state.value} -> {state.value}")
        self._state = state
