"""Flask application factory for the charterskg backend API."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from charterskg.backend.config import Config
from charterskg.backend.models.sparql import ErrorResponse
from charterskg.backend.services.cache_service import MemoryCache
from charterskg.errors import ExecutionError, InvalidRequest

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Register consistent JSON error handlers."""

    @app.errorhandler(ExecutionError)
    def execution_error(exc: ExecutionError):
        if isinstance(exc, InvalidRequest):
            logger.debug("Rejected request: %s", exc.message)
        return jsonify(ErrorResponse.from_error(exc).to_json()), exc.status_code

    @app.errorhandler(404)
    def not_found(exc):
        return jsonify({"error": "Resource not found"}), 404

    @app.errorhandler(HTTPException)
    def http_error(exc: HTTPException):
        return jsonify({"error": exc.description}), exc.code

    @app.errorhandler(Exception)
    def unhandled(exc):
        app.logger.exception("Unhandled exception")
        return jsonify({"error": "Something broke!"}), 500


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure the Flask application.

    Parameters
    ----------
    config_class:
        Configuration class (default :class:`Config`).

    Returns
    -------
    Flask
        Configured Flask application.

    Raises
    ------
    ValueError
        If a required upstream URL is not configured.
    """
    missing = config_class.missing()
    if missing:
        raise ValueError(
            f"Missing required configuration: {', '.join(missing)}",
        )

    app = Flask(__name__)
    app.config.from_object(config_class)
    # Keep upstream key order in proxied JSON
    app.json.sort_keys = False

    # ── CORS ──────────────────────────────────────────────────────────
    CORS(app, resources={
        r"/api/*": {
            "origins": config_class.CORS_ORIGINS,
            "methods": ["GET", "POST", "OPTIONS"],
            "allow_headers": ["Content-Type"],
            "supports_credentials": config_class.CORS_SUPPORTS_CREDENTIALS,
        },
    })

    # ── Query cache (one per application) ─────────────────────────────
    app.config["QUERY_CACHE"] = MemoryCache(
        ttl=config_class.CACHE_TTL,
        check_period=config_class.CACHE_CHECK_PERIOD,
    )

    # ── Blueprints ────────────────────────────────────────────────────
    from charterskg.backend.routes.properties import properties_bp
    from charterskg.backend.routes.search import search_bp
    from charterskg.backend.routes.sparql import sparql_bp

    app.register_blueprint(search_bp, url_prefix="/api/search")
    app.register_blueprint(sparql_bp, url_prefix="/api/sparql")
    app.register_blueprint(
        properties_bp, url_prefix="/api/searchProperties",
    )

    # ── Error handlers ────────────────────────────────────────────────
    register_error_handlers(app)

    # ── Request log ───────────────────────────────────────────────────
    @app.after_request
    def log_request(response):
        logger.info(
            "%s %s %s", request.method, request.path, response.status_code,
        )
        return response

    # ── Health check ──────────────────────────────────────────────────
    @app.route("/api/ping")
    def ping():
        now = datetime.now(timezone.utc)
        return jsonify({
            "message": "Backend connection successful!",
            "time": now.isoformat(timespec="milliseconds").replace(
                "+00:00", "Z",
            ),
        })

    @app.route("/api/test")
    def hello():
        return jsonify({"message": "Hello from the backend!"})

    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=Config.PORT, debug=Config.DEBUG)
