from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, session

from ..core.exceptions import (
    DomainError,
    LocationUnavailable,
    OutcomeUnknownError,
    PartialBatchFailure,
    RemoteError,
    ShiftConfigurationError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "code": "unauthorized", "message": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> str:
    return str(session["user_id"])


def error_response(exc: DomainError):
    """Translate a domain error into a JSON response and status code.

    Order matters: ``OutcomeUnknownError`` is a ``RemoteError``.
    """
    if isinstance(exc, PartialBatchFailure):
        body = exc.result.to_dict()
        body.update({"success": False, "code": exc.code, "message": str(exc)})
        return jsonify(body), 207
    if isinstance(exc, ValidationError):
        status = 400
    elif isinstance(exc, LocationUnavailable):
        status = 422
    elif isinstance(exc, ShiftConfigurationError):
        status = 409
    elif isinstance(exc, OutcomeUnknownError):
        status = 503
    elif isinstance(exc, RemoteError):
        status = 502
    else:
        status = 500
    if status >= 500:
        logger.warning("request failed (%s): %s", getattr(exc, "code", type(exc).__name__), exc)
    return jsonify({"success": False, "code": getattr(exc, "code", "domain_error"), "message": str(exc)}), status
