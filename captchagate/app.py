"""Flask application exposing the CAPTCHA gate."""

from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException, MethodNotAllowed

from .config import GateConfig, configure_logging
from .errors import UNEXPECTED_MESSAGE
from .handler import RequestHandler
from .models import HandlerResponse, IncomingRequest


ROUTE_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

logger = logging.getLogger(__name__)


def incoming_from_flask() -> IncomingRequest:
    body = request.get_json(silent=True)
    return IncomingRequest(
        method=request.method,
        origin=request.headers.get("Origin"),
        forwarded_for=request.headers.get("X-Forwarded-For"),
        remote_addr=request.remote_addr,
        body=body if isinstance(body, dict) else {},
    )


def to_flask_response(result: HandlerResponse) -> Response:
    if result.payload is None:
        response = Response("", status=result.status)
    else:
        response = jsonify(result.payload)
        response.status_code = result.status
    for name, value in result.headers.items():
        response.headers[name] = value
    return response


def create_app(config: Optional[GateConfig] = None) -> Flask:
    config = config or GateConfig.from_env()
    configure_logging(config.log_level)

    app = Flask(__name__)
    handler = RequestHandler.from_config(config)

    @app.route("/")
    @app.route("/api")
    @app.route("/api/")
    def home():
        return jsonify({
            "service": "captchagate - reCAPTCHA verification + booking data",
            "status": "running",
            "endpoints": [
                "POST /api/verify-captcha - Verify a reCAPTCHA token",
            ],
        })

    @app.route("/verify-captcha", methods=ROUTE_METHODS)
    @app.route("/api/verify-captcha", methods=ROUTE_METHODS)
    def verify_captcha():
        return to_flask_response(handler.handle(incoming_from_flask()))

    @app.errorhandler(MethodNotAllowed)
    def method_not_allowed(exc):
        return to_flask_response(handler.handle(incoming_from_flask()))

    @app.errorhandler(Exception)
    def unhandled(exc):
        if isinstance(exc, HTTPException):
            return exc
        logger.exception("Unhandled error: %s", exc)
        response = jsonify({"success": False, "message": UNEXPECTED_MESSAGE})
        response.status_code = 500
        return response

    return app
