"""Application factory and app-wide configuration."""

from typing import Optional

from flask import Flask
from flask_cors import CORS

from pensionflow.app.api.routes import api_bp
from pensionflow.config import AppConfig
from pensionflow.logging_config import setup_logging


def create_app(config: Optional[AppConfig] = None) -> Flask:
    """Build the Flask app instance."""
    config = config or AppConfig.from_env()
    setup_logging(config.log_level)

    app = Flask(__name__)
    app.config["PENSIONFLOW"] = config

    CORS(
        app,
        resources={r"/api/*": {"origins": config.cors_origins}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    app.logger.info("%s %s ready", config.app_name, config.version)
    return app
