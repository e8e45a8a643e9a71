"""Application factory and app-wide configuration."""

from typing import Type

from flask import Flask
from flask_cors import CORS

from wealth_odyssey.app.api.routes import api_bp
from wealth_odyssey.config import Config


def create_app(config_object: Type[Config] = Config) -> Flask:
    """Build the Flask app instance."""
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config["LOG_LEVEL"])

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
