"""Event to calendar record processing."""

from bookmarks_export.processing.event_mapper import Record, map_event

__all__ = [
    "Record",
    "map_event",
]
