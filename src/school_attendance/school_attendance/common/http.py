from __future__ import annotations

import logging
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from flask import Flask, jsonify, request

from .datetime_utils import format_iso_date
from ..core.exceptions import (
    AuthorizationError,
    ConflictError,
    DomainError,
    InvalidMembershipError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, 400),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (InvalidMembershipError, 422),
]


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return format_iso_date(value)
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def to_json(obj: Any) -> Any:
    """Turn domain dataclasses (or lists of them) into JSON-ready values."""
    if isinstance(obj, (list, tuple)):
        return [to_json(o) for o in obj]
    if is_dataclass(obj) and not isinstance(obj, type):
        return _jsonable(asdict(obj))
    return _jsonable(obj)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def status_for(error: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        body = {"success": False, "error": error.kind, "message": str(error)}
        body.update(_jsonable(error.details()))
        return jsonify(body), status_for(error)

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        # Let Flask render its own HTTP errors (404 routes, 405 methods, ...).
        code = getattr(error, "code", None)
        if isinstance(code, int) and code < 500:
            return jsonify({"success": False, "error": type(error).__name__, "message": str(error)}), code

        logger.exception("unhandled error on %s %s", request.method, request.path)
        message = str(error) if app.config.get("DEBUG") else "Internal server error"
        return jsonify({"success": False, "error": "InternalError", "message": message}), 500
