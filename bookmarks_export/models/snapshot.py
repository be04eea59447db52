"""Serialized bookmark snapshot."""

from pathlib import Path

from pydantic import BaseModel

from bookmarks_export.models.event import Event


class BookmarkSnapshot(BaseModel):
    """Bookmarked events of one conference edition, in store order."""

    year: int
    events: list[Event] = []

    def save(self, path: Path) -> None:
        """Save to JSON, omitting unset optional fields."""
        path.write_text(self.model_dump_json(indent=2, exclude_none=True), encoding="utf-8")

    @classmethod
    def load(cls, path: Path) -> "BookmarkSnapshot":
        """Load from JSON."""
        return cls.model_validate_json(path.read_text(encoding="utf-8"))
