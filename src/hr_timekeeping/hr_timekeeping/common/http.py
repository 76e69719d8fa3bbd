"""JSON envelope and error mapping shared by every controller.

Every endpoint answers ``{"isSuccess", "message", "metadata"}``; clients are
expected to inspect ``isSuccess`` rather than the HTTP status alone.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, 400),
    (InvalidTransitionError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
]


def envelope(message: str | list[str], metadata: Any = None, *, status: int = 200, success: bool = True):
    messages = [message] if isinstance(message, str) else list(message)
    return jsonify({"isSuccess": success, "message": messages, "metadata": metadata}), status


def failure(message: str, status: int):
    return envelope(message, None, status=status, success=False)


def status_for(error: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


def json_body() -> dict:
    data: Optional[Any] = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return failure(str(e), status_for(e))

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return failure(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unexpected error on %s %s", request.method, request.path)
        return failure("Internal server error", 500)
