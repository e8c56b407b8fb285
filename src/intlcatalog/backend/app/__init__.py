"""Application factory for the intlcatalog backend services."""

import os

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import BadRequest

from intlcatalog.backend.config.schema import ConfigurationError
from intlcatalog.backend.errors import CatalogError
from intlcatalog.backend.version import get_project_version

from .http import problem_from_catalog_error, problem_response
from .routes import register_routes
from .routes.locales import get_locale_metadata

ALLOWED_ORIGINS_ENV = "INTLCATALOG_ALLOWED_ORIGINS"


def _parse_allowed_origins(raw: str | None) -> set[str]:
    """Convert an environment variable into a normalised set of origins."""

    if not raw:
        return set()

    return {origin.strip() for origin in raw.split(",") if origin.strip()}


def create_app() -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__)

    allowed_origins = _parse_allowed_origins(os.getenv(ALLOWED_ORIGINS_ENV))
    CORS(
        app,
        resources={r"/api/*": {"origins": sorted(allowed_origins)}},
        supports_credentials=False,
        methods=["GET", "OPTIONS", "POST"],
        allow_headers=["Content-Type", "Accept-Language"],
    )

    register_routes(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Simple health check endpoint for infrastructure monitoring."""

        metadata = get_locale_metadata()
        payload = {
            "status": "ok",
            "version": get_project_version(),
            "default_locale": metadata["default_locale"],
            "locales": metadata["loaders"],
        }
        return jsonify(payload)

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        """Return consistent JSON responses for malformed payloads."""

        message = error.description or "Invalid request"
        return problem_response("bad_request", status=400, message=message).to_response()

    @app.errorhandler(CatalogError)
    def handle_catalog_error(error: CatalogError):
        return problem_from_catalog_error(error).to_response()

    @app.errorhandler(ConfigurationError)
    def handle_configuration_error(error: ConfigurationError):
        """Surface broken settings as server errors rather than HTML pages."""

        return problem_response(
            "configuration_error", status=500, message=str(error)
        ).to_response()

    return app
