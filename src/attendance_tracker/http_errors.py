from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .core.exceptions import DomainError

logger = logging.getLogger(__name__)

GENERIC_MESSAGES = {
    500: "Internal server error",
    503: "Service temporarily unavailable, please retry",
}


def _error(name: str, message: str, status: int):
    return jsonify({"ok": False, "error": name, "message": message}), status


def register(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = e.status_code
        if e.public:
            logger.info("%s: %s", type(e).__name__, e)
            return _error(type(e).__name__, str(e), status)

        # Infrastructure detail stays in the server log.
        logger.error("%s: %s", type(e).__name__, e, exc_info=e.__cause__ or e)
        return _error(type(e).__name__, GENERIC_MESSAGES.get(status, "Request failed"), status)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return _error(type(e).__name__, e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error")
        return _error("InternalError", GENERIC_MESSAGES[500], 500)
