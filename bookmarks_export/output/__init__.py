"""Output layer for calendar records."""

from bookmarks_export.output.base import RecordWriter
from bookmarks_export.output.ics_writer import ICalendarWriter

__all__ = [
    "ICalendarWriter",
    "RecordWriter",
]
