"""Flask application factory and HTTP routes."""

from __future__ import annotations

import logging

from flask import Flask, Response, jsonify
from werkzeug.middleware.proxy_fix import ProxyFix

from ..config import AppConfig
from ..measurements.manager import MeasurementManager

LOGGER = logging.getLogger(__name__)


def create_web_app(config: AppConfig, measurement_manager: MeasurementManager) -> Flask:
    app = Flask(__name__)
    app.json.sort_keys = False

    if config.web.reverse_proxy_headers:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)  # type: ignore

    @app.after_request
    def add_cors_headers(response: Response) -> Response:
        response.headers["Access-Control-Allow-Origin"] = config.web.cors_origin
        response.headers["Access-Control-Allow-Methods"] = "POST, OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        return response

    @app.post("/speedtest")
    def api_speedtest():
        try:
            report = measurement_manager.run_speedtest()
        except Exception as exc:
            LOGGER.exception("Speed test error: %s", exc)
            return jsonify({"message": "Internal server error", "error": str(exc)}), 500
        return jsonify(report.to_dict()), 200

    return app
