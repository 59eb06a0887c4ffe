"""API error types and JSON error responses.

Provides :class:`ApiError` (an exception that renders itself as a
JSON error body) with one subclass per failure category, plus a Flask
error-handler registration function that also translates storage
failures raised through :mod:`pypgkit`.

Usage::

    raise ValidationError("Scheduled date cannot be in the past")
"""

from __future__ import annotations

import logging
from typing import Any

from flask import Flask, jsonify
from psycopg import errors as pg_errors
from pypgkit import RepositoryError
from werkzeug.exceptions import HTTPException

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Error-type URNs
# ---------------------------------------------------------------------------
_P = "urn:wasteflow:error:"

VALIDATION = _P + "validation"
UNAUTHORIZED = _P + "unauthorized"
NOT_FOUND = _P + "notFound"
CONFLICT = _P + "conflict"
RATE_LIMITED = _P + "rateLimited"
STORAGE = _P + "storage"
SERVER_INTERNAL = _P + "serverInternal"


# ---------------------------------------------------------------------------
# Error exceptions
# ---------------------------------------------------------------------------


class ApiError(Exception):
    """An error that doubles as a JSON response.

    Raise anywhere in request handling.  The registered Flask error
    handler catches it and calls :meth:`to_response`.

    Parameters
    ----------
    message:
        Human-readable explanation of the problem.
    status:
        HTTP status code.
    headers:
        Extra HTTP headers to include on the response
        (e.g. ``Retry-After``).

    """

    error_type: str = SERVER_INTERNAL
    default_status: int = 500

    def __init__(
        self,
        message: str,
        status: int | None = None,
        *,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.message = message
        self.status = status if status is not None else self.default_status
        self.extra_headers = headers or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the JSON error body."""
        return {
            "success": False,
            "type": self.error_type,
            "message": self.message,
            "status": self.status,
        }

    def to_response(self):
        """Build a Flask :class:`~flask.Response`."""
        resp = jsonify(self.to_dict())
        resp.status_code = self.status
        resp.headers["Cache-Control"] = "no-store"
        for key, value in self.extra_headers.items():
            resp.headers[key] = value
        return resp


class ValidationError(ApiError):
    error_type = VALIDATION
    default_status = 400


class AuthenticationError(ApiError):
    error_type = UNAUTHORIZED
    default_status = 401


class NotFoundError(ApiError):
    error_type = NOT_FOUND
    default_status = 404


class ConflictError(ApiError):
    error_type = CONFLICT
    default_status = 409


class RateLimitedError(ApiError):
    error_type = RATE_LIMITED
    default_status = 429


class StorageError(ApiError):
    error_type = STORAGE
    default_status = 500


class StorageConstraintError(StorageError):
    """A record broke one of the store's schema rules.

    ``violations`` holds one message per offending field.
    """

    default_status = 400

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__("Invalid input data: " + ". ".join(violations))


# ---------------------------------------------------------------------------
# Storage failure translation
# ---------------------------------------------------------------------------


def error_from_repository(exc: RepositoryError) -> ApiError:
    """Map a :class:`pypgkit.RepositoryError` to an :class:`ApiError`.

    pypgkit wraps driver exceptions, so the psycopg error class is
    found on ``__cause__``.
    """
    cause = exc.__cause__
    if isinstance(cause, pg_errors.InvalidTextRepresentation):
        return NotFoundError("Resource not found")
    if isinstance(cause, pg_errors.UniqueViolation):
        return ConflictError("Duplicate field value entered")
    if isinstance(cause, (pg_errors.CheckViolation, pg_errors.NotNullViolation)):
        detail = getattr(getattr(cause, "diag", None), "message_primary", None)
        message = f"Invalid input data: {detail}" if detail else "Invalid input data"
        return StorageError(message, 400)
    return StorageError("Server Error", 500)


# ---------------------------------------------------------------------------
# Flask error handler registration
# ---------------------------------------------------------------------------


def register_error_handlers(app: Flask) -> None:
    """Attach handlers that produce JSON error bodies for all errors."""

    @app.errorhandler(ApiError)
    def _handle_api_error(exc: ApiError):
        if exc.status >= 500:
            log.error("%s: %s", type(exc).__name__, exc.message)
        return exc.to_response()

    @app.errorhandler(RepositoryError)
    def _handle_repository_error(exc: RepositoryError):
        error = error_from_repository(exc)
        if error.status >= 500:
            log.error("Storage failure: %s", exc, exc_info=exc)
        else:
            log.info("Storage rejected request: %s", error.message)
        return error.to_response()

    @app.errorhandler(HTTPException)
    def _handle_http_exception(exc: HTTPException):
        error = ApiError(
            exc.description or "An error occurred",
            exc.code or 500,
        )
        error.error_type = "about:blank"
        return error.to_response()

    @app.errorhandler(Exception)
    def _handle_unhandled(exc: Exception):
        # HTTPException subclasses are already caught above; this
        # handler covers everything else (genuine 500s).
        log.exception("Unhandled exception during request")
        return ApiError("Server Error", 500).to_response()
