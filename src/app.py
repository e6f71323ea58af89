"""Okecho tank table tool - Flask application."""

import os
from typing import Any

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from flask_cors import CORS
from flask_wtf.csrf import CSRFProtect

# Load environment variables from .env file
load_dotenv()

from config import config
from security import SecurityConfig
from logging_config import APP_NAME, setup_logging
from middleware.request_logger import init_request_logging

# Module-level logger (initialized in create_app)
logger = None


def create_app(config_name: str | None = None, overrides: dict[str, Any] | None = None) -> Flask:
    """Application factory."""
    global logger

    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    if overrides:
        app.config.update(overrides)

    # Initialize logging first (before other extensions)
    logger, conversion_logger = setup_logging(
        app_name=APP_NAME,
        log_level=app.config.get("LOG_LEVEL"),
        log_dir=app.config.get("LOG_DIR"),
        json_format=app.config.get("LOG_JSON_FORMAT", True),
        max_bytes=app.config.get("LOG_MAX_BYTES", 10 * 1024 * 1024),
        backup_count=app.config.get("LOG_BACKUP_COUNT", 5),
    )

    # Store loggers on app for access in routes
    app.logger_instance = logger
    app.conversion_logger = conversion_logger

    init_request_logging(app)

    # Initialize security extensions
    CSRFProtect(app)
    CORS(app,
         origins=app.config["CORS_ORIGINS"],
         methods=SecurityConfig.CORS_METHODS,
         allow_headers=SecurityConfig.CORS_HEADERS,
         supports_credentials=True)

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses."""
        for header, value in SecurityConfig.SECURITY_HEADERS.items():
            response.headers[header] = value
        response.headers["Content-Security-Policy"] = SecurityConfig.CSP_POLICY
        return response

    @app.errorhandler(400)
    def bad_request(error):
        """Handle bad requests, including CSRF failures."""
        if error.description and "csrf" in error.description.lower():
            logger.warning(f"CSRF error: {error.description}", extra={
                "extra": {"path": request.path, "method": request.method}
            })
            return jsonify({"error": f"CSRF token error: {error.description}"}), 400
        return jsonify({"error": "Bad request"}), 400

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({"error": "Resource not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(413)
    def request_too_large(error):
        return jsonify({"error": "Request entity too large"}), 413

    @app.errorhandler(429)
    def ratelimit_handler(e):
        """Handle rate limit errors."""
        logger.warning("Rate limit exceeded", extra={
            "extra": {"path": request.path, "ip": request.remote_addr}
        })
        return jsonify({"error": "Rate limit exceeded. Please try again later."}), 429

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors with logging."""
        logger.error("Internal server error", exc_info=True, extra={
            "extra": {"path": request.path, "method": request.method}
        })
        return jsonify({"error": "Internal server error"}), 500

    from routes.api import api_bp, get_calibration_store, init_api

    app.register_blueprint(api_bp, url_prefix="/api")
    init_api(app)

    if app.config.get("PRELOAD_CALIBRATION"):
        with app.app_context():
            get_calibration_store()

    # Health check endpoint (for container orchestration)
    @app.route("/health")
    def health_check():
        """Report whether the calibration tables are loaded."""
        version = app.config.get("APP_VERSION", "1.0.0")
        try:
            store = get_calibration_store()
        except (OSError, ValueError) as e:
            logger.error(f"Health check failed: {e}")
            return jsonify({
                "status": "unhealthy",
                "tanks": 0,
                "version": version,
                "error": str(e),
            }), 503
        return jsonify({
            "status": "healthy",
            "tanks": len(store.tank_ids),
            "version": version,
        }), 200

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(debug=True, host="0.0.0.0", port=5001)
