"""Provider exposing the current bookmarks as an openable calendar document."""

import logging
import os
from typing import BinaryIO, Iterable

from bookmarks_export.config import ExportConfig
from bookmarks_export.constants import (
    COLUMNS,
    DEFAULT_FILE_NAME,
    DISPLAY_NAME,
    MIME_TYPE,
    SIZE,
)
from bookmarks_export.exceptions import (
    StoreError,
    UnsupportedEnvironmentError,
    UnsupportedOperationError,
)
from bookmarks_export.export.producer import BookmarksExportProducer
from bookmarks_export.models.context import ExportContext
from bookmarks_export.output.ics_writer import ICalendarWriter
from bookmarks_export.storage.bookmark_store import BookmarkStore

logger = logging.getLogger(__name__)

READ_MODES = ("r", "rb")


class BookmarksExportProvider:
    """Generates the bookmarks calendar on demand.

    Opening the document starts a background export writing into a pipe and
    returns the read end at once. The consumer reads the document as it is
    produced; a full pipe blocks the producer until the consumer catches up.

    Usage:
        provider = BookmarksExportProvider(store, year=2025)
        with provider.open_file() as stream:
            data = stream.read()
    """

    def __init__(
        self,
        store: BookmarkStore,
        config: ExportConfig | None = None,
        year: int | None = None,
    ):
        """Initialize provider.

        Args:
            store: Source of bookmarked events
            config: Export configuration (defaults to ExportConfig())
            year: Edition year; defaults to config.edition_year, then store.year
        """
        self._store = store
        self._config = config or ExportConfig()
        self._year = year

    def resolve_year(self) -> int | None:
        """Current edition year, or None if the store cannot be read."""
        if self._year is not None:
            return self._year
        if self._config.edition_year is not None:
            return self._config.edition_year
        try:
            return self._store.year
        except StoreError as e:
            logger.warning(f"Could not resolve edition year: {e}")
            return None

    def display_name(self, year: int | None) -> str:
        """Export file name for an edition year."""
        if year is None:
            return DEFAULT_FILE_NAME
        return self._config.display_name(year)

    def get_type(self) -> str:
        """MIME type of the exported document."""
        return MIME_TYPE

    def query(self, projection: Iterable[str] | None = None) -> dict[str, object]:
        """
        Answer a metadata query with a single row.

        Args:
            projection: Requested columns (defaults to display name and size)

        Returns:
            Supported requested columns mapped to their values, in request order.
            Unsupported columns are left out.
        """
        if projection is None:
            projection = COLUMNS

        row: dict[str, object] = {}
        for column in projection:
            if column == DISPLAY_NAME:
                row[DISPLAY_NAME] = self.display_name(self.resolve_year())
            elif column == SIZE:
                # Unknown size, content will be generated on the fly
                row[SIZE] = self._config.placeholder_size
        return row

    def open_file(self, mode: str = "r") -> BinaryIO:
        """Start an export and return the stream to read it from."""
        stream, _ = self.open_export(mode)
        return stream

    def open_export(self, mode: str = "r") -> tuple[BinaryIO, str]:
        """
        Start an export and return the stream with its display name.

        The edition year is resolved once, so the display name matches the
        UIDs and profile URLs in the document. If the store cannot be read,
        the returned stream is empty and already closed on the writing side.

        Raises:
            UnsupportedOperationError: If mode is not a read mode
            UnsupportedEnvironmentError: If no pipe can be created
        """
        if mode not in READ_MODES:
            raise UnsupportedOperationError(
                f"Bookmarks export can only be opened for reading, not '{mode}'"
            )
        if not hasattr(os, "pipe"):
            raise UnsupportedEnvironmentError(
                "Bookmarks export is not supported on this platform"
            )

        year = self.resolve_year()
        try:
            read_fd, write_fd = os.pipe()
        except OSError as e:
            raise UnsupportedEnvironmentError("Could not open pipe") from e

        reader = os.fdopen(read_fd, "rb")
        if year is None:
            os.close(write_fd)
            logger.warning("Bookmarks export aborted: bookmark store unavailable")
            return reader, self.display_name(None)

        context = ExportContext.create(self._config, year)
        writer = ICalendarWriter(os.fdopen(write_fd, "wb"))
        producer = BookmarksExportProducer(self._store, writer, context)
        producer.start()
        logger.info(f"Started bookmarks export for edition {year}")
        return reader, self.display_name(year)

    def insert(self, values: dict) -> None:
        raise UnsupportedOperationError("Bookmarks export does not support insert")

    def update(self, values: dict) -> int:
        raise UnsupportedOperationError("Bookmarks export does not support update")

    def delete(self) -> int:
        raise UnsupportedOperationError("Bookmarks export does not support delete")
