"""Flask application entry point.

    flask --app agentdesk.main:create_app run

The signing key (JWT_SECRET_KEY) must be present in the environment or
.env file. Without it Settings() raises and the process does not start.
"""

import logging

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from . import __version__
from .api import register_blueprints
from .auth.api import auth_bp
from .config import Settings
from .exceptions import AgentDeskError
from .extensions import Services, init_app
from .utils import isodatetime

logger = logging.getLogger(__name__)


# Error handlers
def _error_response(error_type: str, message: str, details: dict | None = None):
    body = {
        "success": False,
        "error": {
            "type": error_type,
            "message": message,
        }
    }
    if details:
        body["error"]["details"] = details
    return body


def handle_agentdesk_error(error: AgentDeskError):
    """Render any AgentDeskError with its own status code."""
    if error.status_code >= 500:
        logger.error(f"{error.__class__.__name__}: {error.message} {error.details}")
        return jsonify(_error_response("InternalError", "An internal error occurred")), 500

    details = error.details if error.expose_details else None
    return jsonify(_error_response(error.error_type, error.message, details)), error.status_code


def handle_http_error(error: HTTPException):
    """Render werkzeug HTTP errors (unknown route, wrong method) as JSON."""
    return jsonify(_error_response(error.name.replace(" ", ""), error.description)), error.code


def handle_internal_error(error: Exception):
    """Log unexpected errors in full and return a generic 500."""
    logger.exception(f"Unhandled error: {error}")
    return jsonify(_error_response("InternalError", "An internal error occurred")), 500


def health():
    """Liveness probe."""
    return jsonify({
        "success": True,
        "status": "ok",
        "timestamp": isodatetime.now(),
        "version": __version__,
    })


def create_app(settings: Settings | None = None) -> Flask:
    """Build the application.

    Args:
        settings: Startup configuration. Read from the environment when omitted.

    Raises:
        pydantic.ValidationError: If required settings (the JWT signing key) are missing
    """
    if settings is None:
        settings = Settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    app = Flask(__name__)
    CORS(app, origins=settings.cors_origins, supports_credentials=True)

    services = Services.from_settings(settings)
    init_app(app, services)

    try:
        services.database.init_schema()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

    app.register_error_handler(AgentDeskError, handle_agentdesk_error)
    app.register_error_handler(HTTPException, handle_http_error)
    app.register_error_handler(Exception, handle_internal_error)

    app.add_url_rule("/health", "health", health, methods=["GET"])
    app.register_blueprint(auth_bp)
    register_blueprints(app)

    return app


if __name__ == "__main__":
    create_app().run(debug=True)
