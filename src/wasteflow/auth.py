"""Distributor authentication helpers.

Password hashing (werkzeug), signed bearer tokens (itsdangerous), an
in-memory login throttle and the ``require_distributor_auth``
decorator for routes that need a logged-in distributor.
"""

from __future__ import annotations

import functools
import logging
import threading
import time
from typing import TYPE_CHECKING, Any
from uuid import UUID

from flask import g, request
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from werkzeug.security import check_password_hash, generate_password_hash

from wasteflow.app.errors import AuthenticationError, RateLimitedError

if TYPE_CHECKING:
    from collections.abc import Callable

    from wasteflow.config.settings import AuthSettings
    from wasteflow.models.distributor import Distributor

log = logging.getLogger(__name__)

_TOKEN_SALT = "wasteflow-distributor"


# ---------------------------------------------------------------------------
# Passwords
# ---------------------------------------------------------------------------


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return check_password_hash(password_hash, password)


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


def create_token(distributor: Distributor, secret: str) -> str:
    """Create a signed bearer token identifying *distributor*."""
    serializer = URLSafeTimedSerializer(secret, salt=_TOKEN_SALT)
    return serializer.dumps(
        {
            "distributor_id": str(distributor.id),
            "email": distributor.email,
        }
    )


def decode_token(token: str, secret: str, max_age: int) -> dict[str, Any] | None:
    """Decode and validate a bearer token.

    Returns the payload dict or ``None`` if invalid/expired.
    """
    serializer = URLSafeTimedSerializer(secret, salt=_TOKEN_SALT)
    try:
        return serializer.loads(token, max_age=max_age)  # type: ignore[return-value]
    except (BadSignature, SignatureExpired):
        return None


# ---------------------------------------------------------------------------
# Login throttling
# ---------------------------------------------------------------------------


class LoginRateLimiter:
    """In-memory limiter for failed distributor logins.

    Failures are counted per key (``ip:email``); reaching
    ``max_attempts`` inside ``window_seconds`` locks the key out for
    ``lockout_seconds``.
    """

    def __init__(
        self,
        max_attempts: int = 5,
        window_seconds: int = 300,
        lockout_seconds: int = 900,
    ) -> None:
        self._max_attempts = max_attempts
        self._window = window_seconds
        self._lockout = lockout_seconds
        self._attempts: dict[str, list[float]] = {}
        self._lockouts: dict[str, float] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: AuthSettings) -> LoginRateLimiter:
        return cls(
            max_attempts=settings.login_max_attempts,
            window_seconds=settings.login_window_seconds,
            lockout_seconds=settings.login_lockout_seconds,
        )

    def check(self, key: str) -> None:
        """Raise :class:`RateLimitedError` while *key* is locked out."""
        now = time.monotonic()
        with self._lock:
            lockout_until = self._lockouts.get(key, 0)
            if now < lockout_until:
                remaining = max(int(lockout_until - now), 1)
                raise RateLimitedError(
                    f"Too many failed login attempts. Try again in {remaining} seconds.",
                    headers={"Retry-After": str(remaining)},
                )

    def record_failure(self, key: str) -> None:
        now = time.monotonic()
        with self._lock:
            cutoff = now - self._window
            attempts = [t for t in self._attempts.get(key, []) if t > cutoff]
            attempts.append(now)
            self._attempts[key] = attempts
            if len(attempts) >= self._max_attempts:
                self._lockouts[key] = now + self._lockout
                log.warning("Login lockout triggered for key: %s", key)

    def record_success(self, key: str) -> None:
        with self._lock:
            self._attempts.pop(key, None)
            self._lockouts.pop(key, None)


# ---------------------------------------------------------------------------
# Route decorator
# ---------------------------------------------------------------------------


def require_distributor_auth(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Enforce bearer-token auth and store the caller on ``g.distributor``."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        from wasteflow.app.context import get_container  # noqa: PLC0415

        container = get_container()
        settings = container.settings.auth

        auth_header = request.headers.get("Authorization", "")
        if not auth_header.startswith("Bearer "):
            raise AuthenticationError(
                "Missing or invalid Authorization header",
                headers={"WWW-Authenticate": "Bearer"},
            )

        payload = decode_token(
            auth_header[7:],
            settings.token_secret,
            settings.token_expiry_seconds,
        )
        if payload is None:
            raise AuthenticationError(
                "Invalid or expired token",
                headers={"WWW-Authenticate": "Bearer"},
            )

        distributor = container.distributors.find_by_id(UUID(payload["distributor_id"]))
        if distributor is None:
            raise AuthenticationError("Distributor not found")

        g.distributor = distributor
        return fn(*args, **kwargs)

    return wrapper
