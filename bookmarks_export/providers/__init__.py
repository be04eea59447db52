"""Document providers."""

from bookmarks_export.providers.bookmarks_provider import BookmarksExportProvider

__all__ = ["BookmarksExportProvider"]
