"""Exception hierarchy for bookmarks export operations."""


class CalendarError(Exception):
    """Base exception for bookmarks export operations."""

    pass


class StoreError(CalendarError):
    """Bookmark store could not be queried or iterated."""

    pass


class RecordWriteError(CalendarError):
    """Writing to the output stream failed."""

    @property
    def consumer_closed(self) -> bool:
        """True if the failure came from the reading side going away."""
        return isinstance(self.__cause__, BrokenPipeError)


class InvalidRecordError(CalendarError):
    """Record cannot be written as a single logical line."""

    pass


class UnsupportedOperationError(CalendarError):
    """Operation not supported by the export provider (e.g. insert, update)."""

    pass


class UnsupportedEnvironmentError(CalendarError, FileNotFoundError):
    """Export cannot be opened on this platform."""

    pass
