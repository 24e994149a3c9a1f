"""Flask application serving a live arena.

Routes:
    GET /             catalog of the arena's current state
    GET /timestamp    {"timestamp": <ms since epoch>} of the last registration
    GET /<PlotType>   plot data, keyed by model / observation / variable
                      query parameters

Every miss, including unknown routes, is a 404 with an empty body. All
responses allow any origin.

Launch from a script or notebook:
    arena = new_arena(live=True)
    arena.register_model(explainer).register_observations(df)
    run_arena(arena)
"""

from __future__ import annotations

import logging

from flask import Flask, Response, jsonify, request
from flask_cors import CORS

from modelarena.config import get_config
from modelarena.errors import ArenaError
from modelarena.server.dispatcher import QueryDispatcher
from modelarena.store import Arena, LiveArena

LOG = logging.getLogger(__name__)


def create_app(arena: Arena) -> Flask:
    """Create the Flask application for a live arena.

    Raises:
        ArenaError: If the arena is not live. Static arenas are published
            with modelarena.snapshot.export_snapshot instead.
    """
    if not isinstance(arena, LiveArena):
        raise ArenaError(
            "Only live arenas can be served; export static arenas with export_snapshot()"
        )

    app = Flask(__name__)
    CORS(app)
    app.json.sort_keys = False  # type: ignore[attr-defined]
    dispatcher = QueryDispatcher(arena)
    app.extensions["modelarena.dispatcher"] = dispatcher

    @app.get("/")
    def catalog() -> Response:
        return jsonify(dispatcher.catalog())

    @app.get("/timestamp")
    def timestamp() -> Response:
        return jsonify(dispatcher.timestamp())

    @app.get("/<plot_type>")
    def plot(plot_type: str) -> Response | tuple[str, int]:
        result = dispatcher.dispatch(plot_type, request.args)
        if not result.found:
            return "", 404
        return jsonify(result.payload)

    @app.errorhandler(404)
    def not_found(error: Exception) -> tuple[str, int]:
        return "", 404

    return app


def run_arena(arena: Arena, host: str | None = None, port: int | None = None) -> None:
    """Serve a live arena until interrupted.

    Args:
        arena: LiveArena to serve
        host: Bind address. Defaults to config (ARENA_HOST).
        port: Port. Defaults to config (ARENA_PORT).
    """
    cfg = get_config()
    app = create_app(arena)
    host = host or cfg.host
    port = port or cfg.port
    LOG.info("Serving arena at http://%s:%d/", host, port)
    app.run(host=host, port=port, threaded=True, debug=False)
