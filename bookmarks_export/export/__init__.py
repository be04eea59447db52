"""Streaming export of bookmarks."""

from bookmarks_export.export.producer import BookmarksExportProducer, ExportState

__all__ = [
    "BookmarksExportProducer",
    "ExportState",
]
