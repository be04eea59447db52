"""WSGI entry point: gunicorn wsgi:app, or flask --app wsgi run."""

from bookmarks_export import create_app
from bookmarks_export.config import ExportConfig
from bookmarks_export.logging_config import setup_logging

config = ExportConfig.from_env()
setup_logging(config=config)
app = create_app(config)
