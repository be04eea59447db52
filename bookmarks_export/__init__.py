from functools import partial

from flask import Flask, Response, jsonify, request

from .config import ExportConfig
from .exceptions import UnsupportedEnvironmentError, UnsupportedOperationError
from .providers.bookmarks_provider import BookmarksExportProvider
from .storage.bookmark_store import BookmarkStore, JSONBookmarkStore

CHUNK_SIZE = 8192


def create_app(
    config: ExportConfig | None = None, store: BookmarkStore | None = None
) -> Flask:
    """Create the Flask app serving the bookmarks export.

    Args:
        config: Export configuration (loaded from the environment if omitted)
        store: Bookmark store (a JSONBookmarkStore on config.bookmarks_path if omitted)
    """
    if config is None:
        config = ExportConfig.from_env()
    if store is None:
        store = JSONBookmarkStore(config.bookmarks_path)

    app = Flask(__name__)
    provider = BookmarksExportProvider(store, config)
    app.extensions["bookmarks_export"] = provider

    @app.errorhandler(UnsupportedOperationError)
    def unsupported_operation(error):
        return (str(error), 405)

    @app.errorhandler(UnsupportedEnvironmentError)
    def unsupported_environment(error):
        return (str(error), 404)

    @app.route("/bookmarks.ics", methods=["GET"])
    def get_bookmarks():
        """Stream the bookmarks calendar as it is generated."""
        stream, display_name = provider.open_export("r")
        response = Response(
            iter(partial(stream.read1, CHUNK_SIZE), b""),
            content_type=f"{provider.get_type()}; charset=utf-8",
            headers={
                "Content-Disposition": f"attachment; filename={display_name}"
            },
        )
        # Closing early stops the producer on its next write
        response.call_on_close(stream.close)
        return response

    @app.route("/bookmarks.ics", methods=["POST"])
    def insert_bookmarks():
        provider.insert(request.get_json(silent=True) or {})

    @app.route("/bookmarks.ics", methods=["PUT"])
    def update_bookmarks():
        provider.update(request.get_json(silent=True) or {})

    @app.route("/bookmarks.ics", methods=["DELETE"])
    def delete_bookmarks():
        provider.delete()

    @app.route("/bookmarks/metadata", methods=["GET"])
    def get_metadata():
        """Display name and placeholder size of the export."""
        projection = request.args.getlist("projection") or None
        row = provider.query(projection)
        return jsonify({"columns": list(row), "values": list(row.values())})

    return app
