"""
Flask application factory for the Cold Mailer HTTP service.
"""

from typing import Optional
import logging

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .auth import EXTENSION_KEY as AUTH_KEY, AuthGate
from .routes import ORCHESTRATOR_KEY, email_bp
from cold_mailer.core.exceptions import ColdMailerError
from cold_mailer.generators.orchestrator import EmailRequestOrchestrator
from cold_mailer.utils.config import Config


logger = logging.getLogger("cold_mailer.web")


def create_app(
    config: Optional[Config] = None,
    orchestrator: Optional[EmailRequestOrchestrator] = None,
) -> Flask:
    """
    Build the Flask app.

    Args:
        config: Application configuration (loaded from defaults if omitted)
        orchestrator: Pre-built orchestrator; built from config if omitted

    Returns:
        Configured Flask application
    """
    config = config or Config()
    app = Flask(__name__)

    CORS(
        app,
        origins=config.get("server.cors_origins", []),
        supports_credentials=True,
    )

    app.extensions[AUTH_KEY] = AuthGate(
        secret=config.get_jwt_secret(),
        algorithm=config.get("auth.jwt_algorithm", "HS256"),
        cookie_name=config.get("auth.cookie_name", "token"),
    )
    # Built once here and shared read-only by every request thread.
    app.extensions[ORCHESTRATOR_KEY] = orchestrator or EmailRequestOrchestrator.from_config(config)

    app.register_blueprint(email_bp, url_prefix="/email")
    app.register_blueprint(email_bp, url_prefix="/api/email", name="api_email")

    @app.route("/")
    def index():
        return "Hello, World!"

    @app.errorhandler(ColdMailerError)
    def handle_cold_mailer_error(e: ColdMailerError):
        if e.is_client_error:
            logger.info(f"Rejected request ({e.status_code}): {e.message}")
        else:
            logger.error(f"Error generating email: {e.detail or e.message}")
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(Exception)
    def handle_uncaught(e: Exception):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled exception", exc_info=e)
        return jsonify({
            "success": False,
            "message": "Failed to generate email",
            "error": str(e) or e.__class__.__name__,
        }), 500

    return app
