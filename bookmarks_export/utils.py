"""Text and date helpers for calendar export."""

import re
import unicodedata
from datetime import datetime, timezone

from bs4 import BeautifulSoup

from bookmarks_export.constants import PERSONS_DELIMITER

UTC_FORMAT = "{0.year:04d}{0.month:02d}{0.day:02d}T{0.hour:02d}{0.minute:02d}{0.second:02d}Z"

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")


def format_utc(value: datetime) -> str:
    """
    Format a timestamp as an iCalendar UTC date-time (YYYYMMDDTHHMMSSZ).

    Naive datetimes are taken as UTC. Only numeric fields are used, so the
    result does not depend on the current locale.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return UTC_FORMAT.format(value)


def split_names(text: str | None, delimiter: str = PERSONS_DELIMITER) -> list[str]:
    """
    Split a persons summary into display names.

    Args:
        text: Names joined by delimiter, e.g. "Alice Doe, Bob Roe"
        delimiter: Separator between names

    Returns:
        Trimmed, non-empty names in their original order
    """
    if not text:
        return []
    names = []
    for token in text.split(delimiter):
        token = token.strip()
        if token:
            names.append(token)
    return names


def strip_html(html: str) -> str:
    """Render marked-up text as plain text."""
    return BeautifulSoup(html, "html.parser").get_text().strip()


def to_slug(name: str) -> str:
    """
    Convert a person's name to a URL-safe slug.

    Examples:
        "Alice Doe" -> "alice_doe"
        "Jérôme Strauß" -> "jerome_strauss"
    """
    if not name:
        return ""
    text = name.lower().replace("ß", "ss")
    text = unicodedata.normalize("NFD", text)
    text = "".join(c for c in text if not unicodedata.combining(c))
    return _NON_SLUG_RE.sub("_", text).strip("_")


def encode_line_breaks(text: str) -> str:
    """Replace line breaks with the two-character \\n sequence."""
    return _LINE_BREAK_RE.sub(r"\\n", text)
