"""
Module app.server
-----------------

Embedded HTTP server exposing the finalized snapshot.

- GET /api/hardware: the snapshot as JSON
- GET /api/health:   liveness probe
- everything else:   static files of the web UI, if installed

The snapshot is frozen, so request threads read it without locking.
"""

import logging
import threading
from datetime import datetime
from pathlib import Path

from flask import Flask, Response, abort, jsonify, send_from_directory
from werkzeug.serving import BaseWSGIServer, make_server

from hwscan import __version__
from hwscan.core.configuration import HardwareSnapshotModel

logger = logging.getLogger("app.server")


def find_web_dir(candidates: list[str]) -> Path | None:
    """First existing directory among the candidates."""
    for candidate in candidates:
        path = Path(candidate)
        if path.is_dir():
            return path.resolve()
    return None


def create_app(snapshot: HardwareSnapshotModel, web_dir: str | Path | None = None) -> Flask:
    """
    Create the Flask application serving `snapshot`.

    Args:
        snapshot (HardwareSnapshotModel): Finalized, read-only snapshot.
        web_dir (str | Path | None): Directory with the static web UI.
    """
    app = Flask(__name__, static_folder=None)
    payload = snapshot.to_json()

    @app.route("/api/hardware", methods=["GET"])
    def hardware():
        response = Response(payload, mimetype="application/json")
        response.headers["Access-Control-Allow-Origin"] = "*"
        return response

    @app.route("/api/health")
    def health():
        return jsonify(
            {
                "status": "ok",
                "timestamp": datetime.now().astimezone().isoformat(timespec="seconds"),
                "service": "hwscan",
                "version": __version__,
            }
        )

    @app.route("/", defaults={"path": "index.html"})
    @app.route("/<path:path>")
    def static_files(path: str):
        if web_dir is None:
            abort(404)
        return send_from_directory(web_dir, path)

    return app


class HardwareServer:
    """
    Background HTTP server for a snapshot.

    Attributes:
        host (str): Listen address.
        port (int): Listen port.
        app (Flask): WSGI application.
    """

    def __init__(self, snapshot: HardwareSnapshotModel, host: str = "0.0.0.0", port: int = 8080, web_dir: str | Path | None = None):
        self.host = host
        self.port = port
        self.app = create_app(snapshot, web_dir)
        self._server: BaseWSGIServer | None = None
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        """
        Bind the socket and serve from a daemon thread.

        Raises:
            OSError: If the address cannot be bound.
        """
        self._server = make_server(self.host, self.port, self.app, threaded=True)
        self.port = self._server.server_port
        self._thread = threading.Thread(target=self._server.serve_forever, name="hwscan-http", daemon=True)
        self._thread.start()
        logger.info(f"Web server listening on {self.host}:{self.port}")

    def shutdown(self) -> None:
        if self._server is None:
            return
        self._server.shutdown()
        self._server.server_close()
        if self._thread is not None:
            self._thread.join(timeout=5)
        self._server = None
        self._thread = None
        logger.info("Web server stopped")
