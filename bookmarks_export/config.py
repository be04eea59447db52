"""Configuration for bookmarks export."""

import os
from pathlib import Path
from typing import Literal

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

from bookmarks_export.constants import (
    DEFAULT_APPLICATION_ID,
    DEFAULT_FILE_NAME_TEMPLATE,
    DEFAULT_PERSON_URL_TEMPLATE,
    DEFAULT_VERSION_NAME,
    PLACEHOLDER_SIZE,
)


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ExportConfig(BaseModel):
    """Export configuration with Pydantic validation."""

    # Product identity (UID namespace and PRODID)
    application_id: str = Field(default=DEFAULT_APPLICATION_ID)
    version_name: str = Field(default=DEFAULT_VERSION_NAME)

    # Edition year; falls back to the bookmark store's year when unset
    edition_year: int | None = Field(default=None, ge=1)

    # Bookmark snapshot used by the HTTP app
    bookmarks_path: Path = Field(default=Path("data/bookmarks.json"))

    # Output naming
    person_url_template: str = Field(default=DEFAULT_PERSON_URL_TEMPLATE)
    file_name_template: str = Field(default=DEFAULT_FILE_NAME_TEMPLATE)
    placeholder_size: int = Field(default=PLACEHOLDER_SIZE, ge=0)

    # Logging
    log_dir: Path = Field(default=Path("logs"))
    log_filename: str = Field(default="bookmarks_export.log")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="WARNING")

    @classmethod
    def from_env(cls) -> "ExportConfig":
        """Load configuration from environment variables and a .env file in the working directory."""
        load_dotenv(find_dotenv(usecwd=True))

        config_dict = {}

        # Product identity
        if "APPLICATION_ID" in os.environ:
            config_dict["application_id"] = os.environ["APPLICATION_ID"]
        if "VERSION_NAME" in os.environ:
            config_dict["version_name"] = os.environ["VERSION_NAME"]

        if "EDITION_YEAR" in os.environ:
            try:
                config_dict["edition_year"] = int(os.environ["EDITION_YEAR"])
            except ValueError:
                pass  # Keep default if invalid

        if "BOOKMARKS_PATH" in os.environ:
            config_dict["bookmarks_path"] = Path(os.environ["BOOKMARKS_PATH"])

        # Output naming
        if "PERSON_URL_TEMPLATE" in os.environ:
            config_dict["person_url_template"] = os.environ["PERSON_URL_TEMPLATE"]
        if "FILE_NAME_TEMPLATE" in os.environ:
            config_dict["file_name_template"] = os.environ["FILE_NAME_TEMPLATE"]

        # Logging
        if "LOG_DIR" in os.environ:
            config_dict["log_dir"] = Path(os.environ["LOG_DIR"])
        if "LOG_FILENAME" in os.environ:
            config_dict["log_filename"] = os.environ["LOG_FILENAME"]
        if os.environ.get("LOG_LEVEL", "").upper() in LOG_LEVELS:
            config_dict["log_level"] = os.environ["LOG_LEVEL"].upper()

        return cls(**config_dict)

    def display_name(self, year: int) -> str:
        """Human-readable, edition-qualified export file name."""
        return self.file_name_template.format(year=year)
