"""Mapping of bookmarked events to VEVENT records."""

from typing import Iterator

from bookmarks_export.models.context import ExportContext
from bookmarks_export.models.event import Event
from bookmarks_export.utils import (
    encode_line_breaks,
    format_utc,
    split_names,
    strip_html,
)

Record = tuple[str, str]

ATTENDEE_KEY = 'ATTENDEE;ROLE=REQ-PARTICIPANT;CUTYPE=INDIVIDUAL;CN="{name}"'


def map_event(event: Event, context: ExportContext) -> list[Record]:
    """
    Convert one event into the ordered records of a VEVENT component.

    Optional properties (DTSTART, DTEND, DESCRIPTION/X-ALT-DESC, URL) are
    omitted when the event has no value for them. An event without start or
    end time still yields a complete component.

    Args:
        event: Bookmarked event
        context: Values shared by the whole export run

    Returns:
        (key, value) records, BEGIN:VEVENT first and END:VEVENT last
    """
    return list(_iter_records(event, context))


def _iter_records(event: Event, context: ExportContext) -> Iterator[Record]:
    yield "BEGIN", "VEVENT"
    yield "UID", context.event_uid(event.id)
    yield "DTSTAMP", context.dtstamp
    if event.start_time is not None:
        yield "DTSTART", format_utc(event.start_time)
    if event.end_time is not None:
        yield "DTEND", format_utc(event.end_time)
    yield "SUMMARY", encode_line_breaks(event.title)

    description = select_description(event)
    if description:
        yield "DESCRIPTION", encode_line_breaks(strip_html(description))
        yield "X-ALT-DESC", encode_line_breaks(description)

    yield "CLASS", "PUBLIC"
    yield "CATEGORIES", encode_line_breaks(event.track.name)
    if event.url:
        yield "URL", encode_line_breaks(event.url)
    yield "LOCATION", encode_line_breaks(event.room_name)

    for name in split_names(event.persons_summary):
        key = ATTENDEE_KEY.format(name=encode_line_breaks(name))
        yield key, context.person_url(name)

    yield "END", "VEVENT"


def select_description(event: Event) -> str | None:
    """Abstract text if present, otherwise the long description."""
    if event.abstract_text:
        return event.abstract_text
    return event.description or None
