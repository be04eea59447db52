"""Shared constants for bookmarks export."""

# Openable document columns
DISPLAY_NAME = "_display_name"
SIZE = "_size"
COLUMNS = (DISPLAY_NAME, SIZE)

MIME_TYPE = "text/calendar"

# Unknown size, content is generated on the fly
PLACEHOLDER_SIZE = 1024

PERSONS_DELIMITER = ", "

DEFAULT_APPLICATION_ID = "be.digitalia.fosdem"
DEFAULT_VERSION_NAME = "1.0.0"
DEFAULT_PERSON_URL_TEMPLATE = "https://fosdem.org/{year}/schedule/speaker/{slug}/"
DEFAULT_FILE_NAME_TEMPLATE = "bookmarks_{year}.ics"
# Used when the edition year cannot be resolved
DEFAULT_FILE_NAME = "bookmarks.ics"
