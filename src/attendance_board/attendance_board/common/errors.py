from __future__ import annotations

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError
from .logger import get_logger

log = get_logger("errors")


def register_error_handlers(app: Flask) -> None:
    """Map exceptions to ``{"error": <code>}`` JSON responses."""

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return jsonify({"error": e.code}), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        code = (e.name or "http_error").lower().replace(" ", "_")
        return jsonify({"error": code}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        log.exception("unhandled error: %s", e)
        return jsonify({"error": "internal_error"}), 500
