"""Logging setup for bookmarks export."""

import logging
import sys

from bookmarks_export.config import ExportConfig

# Exports run on their own "bookmarks-export" threads; the thread name tells
# concurrent runs apart from request handling.
LOG_FORMAT = "%(asctime)s [%(threadName)s] %(name)s %(levelname)s: %(message)s"


def setup_logging(config: ExportConfig | None = None) -> None:
    """Log everything to the configured file, and config.log_level and up to stderr."""
    if config is None:
        config = ExportConfig.from_env()

    config.log_dir.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = logging.FileHandler(config.log_dir / config.log_filename)
    file_handler.setFormatter(formatter)
    file_handler.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(config.log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)
