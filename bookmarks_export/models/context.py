"""Per-run export context."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, computed_field

from bookmarks_export.config import ExportConfig
from bookmarks_export.utils import format_utc, to_slug


class ExportContext(BaseModel):
    """Values computed once per export run and shared by every event.

    The generation timestamp becomes every event's DTSTAMP; the edition year
    scopes UIDs and person profile URLs.
    """

    model_config = ConfigDict(frozen=True)

    generated_at: datetime
    year: int
    application_id: str
    version_name: str
    person_url_template: str

    @classmethod
    def create(
        cls, config: ExportConfig, year: int, now: datetime | None = None
    ) -> "ExportContext":
        """Build the context for a new run."""
        return cls(
            generated_at=now or datetime.now(timezone.utc),
            year=year,
            application_id=config.application_id,
            version_name=config.version_name,
            person_url_template=config.person_url_template,
        )

    @computed_field
    @property
    def dtstamp(self) -> str:
        """Generation timestamp in iCalendar UTC form."""
        return format_utc(self.generated_at)

    @computed_field
    @property
    def product_id(self) -> str:
        """PRODID value for the calendar document."""
        return f"-//{self.application_id}//NONSGML {self.version_name}//EN"

    def event_uid(self, event_id: int) -> str:
        """UID unique across editions and stable across exports."""
        return f"{event_id}@{self.year}@{self.application_id}"

    def person_url(self, name: str) -> str:
        """Generated profile URL for a named person."""
        return self.person_url_template.format(year=self.year, slug=to_slug(name))
