from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, session

from ..core.context import RequestContext
from ..core.enums import Role
from ..core.exceptions import (
    AccountLocked,
    AuthenticationError,
    AuthorizationError,
    DeviceUnauthorized,
    DomainError,
    PersistenceFailure,
    StorageFailure,
    TooSoon,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first: AccountLocked is also an AuthenticationError.
_STATUS_BY_ERROR = (
    (AccountLocked, 423),
    (AuthenticationError, 401),
    (DeviceUnauthorized, 401),
    (AuthorizationError, 403),
    (TooSoon, 429),
    (StorageFailure, 503),
    (PersistenceFailure, 503),
    (ValidationError, 400),
)


def error_response(exc: DomainError):
    status = next((code for cls, code in _STATUS_BY_ERROR if isinstance(exc, cls)), 400)
    body = {"success": False, "error": exc.code, "message": str(exc)}
    if isinstance(exc, TooSoon):
        body["retry_after_seconds"] = exc.retry_after_seconds
    if isinstance(exc, AccountLocked):
        body["remaining_minutes"] = exc.remaining_minutes
    return jsonify(body), status


def internal_error_response():
    return jsonify({"success": False, "error": "internal_error", "message": "Internal server error"}), 500


def current_context() -> RequestContext:
    """Build the request context from the session set by the external auth layer."""
    try:
        role = Role(session.get("role", Role.EMPLOYEE.value))
    except ValueError:
        role = Role.EMPLOYEE
    return RequestContext(
        actor_id=session.get("user_id"),
        role=role,
        company_id=session.get("company_id"),
    )


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "error": "unauthenticated", "message": "Login required"}), 401
        try:
            return view(current_context(), *args, **kwargs)
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return internal_error_response()

    return wrapper
