"""Event model with Pydantic v2 validation."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, field_validator


class Track(BaseModel):
    """Conference track an event belongs to."""

    name: str
    type: Optional[str] = None


class Event(BaseModel):
    """Bookmarked event as read from the event store."""

    id: int
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    title: str
    abstract_text: Optional[str] = None
    description: Optional[str] = None
    track: Track
    url: Optional[str] = None
    room_name: str = ""
    persons_summary: str = ""

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def convert_epoch_millis(cls, v):
        """Convert store-native epoch milliseconds to a UTC datetime."""
        if isinstance(v, int) and not isinstance(v, bool):
            return datetime.fromtimestamp(v / 1000, tz=timezone.utc)
        return v

    @field_validator("track", mode="before")
    @classmethod
    def convert_track_name(cls, v):
        """Accept a bare track name."""
        if isinstance(v, str):
            return {"name": v}
        return v

    @field_validator("persons_summary", mode="before")
    @classmethod
    def convert_missing_persons(cls, v):
        """Treat a missing persons summary as no persons."""
        return "" if v is None else v
