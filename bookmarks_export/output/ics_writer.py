"""Streaming iCalendar record writer."""

import logging
from typing import BinaryIO

from icalendar.parser import Contentline

from bookmarks_export.exceptions import InvalidRecordError, RecordWriteError

logger = logging.getLogger(__name__)

LINE_SEPARATOR = b"\r\n"


class ICalendarWriter:
    """Writes calendar records to a byte stream one content line at a time.

    Content lines are folded at 75 octets, each continuation line starting
    with a single space. Folding is the only transformation applied:
    values are written as given, without escaping.
    """

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, key: str, value: str) -> None:
        """Write one record.

        Raises:
            InvalidRecordError: If the record contains a raw line break
            RecordWriteError: If the underlying stream fails
        """
        if self._closed:
            raise RecordWriteError(f"Cannot write {key} record: writer is closed")

        line = f"{key}:{value}"
        if "\r" in line or "\n" in line:
            raise InvalidRecordError(f"{key} record contains a raw line break")

        data = Contentline(line).to_ical() + LINE_SEPARATOR
        try:
            self._stream.write(data)
        except OSError as e:
            raise RecordWriteError(f"Failed to write {key} record: {e}") from e

    def close(self) -> None:
        """Flush and close the stream. Later calls do nothing.

        Raises:
            RecordWriteError: If flushing or closing the stream fails
        """
        if self._closed:
            return
        self._closed = True
        try:
            self._stream.close()
        except OSError as e:
            raise RecordWriteError(f"Failed to close calendar stream: {e}") from e
        logger.debug("Calendar stream closed")

    def __enter__(self) -> "ICalendarWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
