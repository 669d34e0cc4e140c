"""Application factory and app-wide configuration."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from flask import Flask
from flask_cors import CORS

from nz_invest.app.api.routes import api_bp
from nz_invest.config import Settings

LOG_FORMAT = "%(asctime)s - [%(levelname)s] - %(name)s - %(message)s"


def create_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    """Build the Flask app instance.

    Settings come from the environment; `config` overrides them.
    """
    app = Flask(__name__)
    app.config.from_mapping(Settings.from_env().as_flask_config())
    if config:
        app.config.from_mapping(config)

    _configure_logging(app.config["LOG_LEVEL"])

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    return app


def _configure_logging(level_name: str) -> None:
    level = logging.getLevelName(str(level_name).upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown log level {level_name!r}")
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("nz_invest").setLevel(level)
