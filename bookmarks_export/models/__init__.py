"""Pydantic models for bookmarks export."""

from bookmarks_export.models.context import ExportContext
from bookmarks_export.models.event import Event, Track
from bookmarks_export.models.snapshot import BookmarkSnapshot

__all__ = [
    "BookmarkSnapshot",
    "Event",
    "ExportContext",
    "Track",
]
