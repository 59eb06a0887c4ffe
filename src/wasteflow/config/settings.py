"""Typed, frozen dataclasses for every configuration section.

This module is the **single source of truth** for default values.
JSON Schema defaults exist only for documentation; these builders
are what the application actually reads.

Access pattern::

    from wasteflow.config import get_config

    db = get_config().settings.database
    print(db.host, db.port)
"""

from __future__ import annotations

from dataclasses import dataclass

_SEVEN_DAYS = 7 * 24 * 3600

# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ServerSettings:
    """HTTP server configuration (bind address, workers, timeouts)."""

    bind: str
    port: int
    workers: int
    worker_class: str
    timeout: int
    graceful_timeout: int
    keepalive: int
    max_requests: int
    max_requests_jitter: int


def _build_server(data: dict | None) -> ServerSettings:
    d = data or {}
    return ServerSettings(
        bind=d.get("bind", "0.0.0.0"),  # noqa: S104
        port=d.get("port", 5000),
        workers=d.get("workers", 4),
        worker_class=d.get("worker_class", "sync"),
        timeout=d.get("timeout", 30),
        graceful_timeout=d.get("graceful_timeout", 30),
        keepalive=d.get("keepalive", 2),
        max_requests=d.get("max_requests", 0),
        max_requests_jitter=d.get("max_requests_jitter", 0),
    )


# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ApiSettings:
    """URL prefix shared by every resource blueprint."""

    base_path: str


def _build_api(data: dict | None) -> ApiSettings:
    d = data or {}
    return ApiSettings(
        base_path=d.get("base_path", "/api"),
    )


# ---------------------------------------------------------------------------
# Security
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SecuritySettings:
    """Request size limit and response hardening headers."""

    max_request_body_bytes: int
    hsts_max_age_seconds: int


def _build_security(data: dict | None) -> SecuritySettings:
    d = data or {}
    return SecuritySettings(
        max_request_body_bytes=d.get("max_request_body_bytes", 1048576),
        hsts_max_age_seconds=d.get("hsts_max_age_seconds", 0),
    )


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LoggingSettings:
    """Application logging configuration (level, format)."""

    level: str
    format: str


def _build_logging(data: dict | None) -> LoggingSettings:
    d = data or {}
    return LoggingSettings(
        level=d.get("level", "INFO"),
        format=d.get("format", "json"),
    )


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DatabaseSettings:
    """PostgreSQL connection and pool settings."""

    host: str
    port: int
    database: str
    user: str
    password: str
    sslmode: str
    min_connections: int
    max_connections: int
    connection_timeout: float
    auto_setup: bool


def _build_database(data: dict | None) -> DatabaseSettings:
    d = data or {}
    return DatabaseSettings(
        host=d.get("host", "localhost"),
        port=d.get("port", 5432),
        database=d["database"],
        user=d["user"],
        password=d.get("password", ""),
        sslmode=d.get("sslmode", "prefer"),
        min_connections=d.get("min_connections", 2),
        max_connections=d.get("max_connections", 10),
        connection_timeout=d.get("connection_timeout", 30.0),
        auto_setup=d.get("auto_setup", False),
    )


# ---------------------------------------------------------------------------
# Distributor auth
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AuthSettings:
    """Distributor token signing, password policy and login throttling."""

    token_secret: str
    token_expiry_seconds: int
    min_password_length: int
    login_max_attempts: int
    login_window_seconds: int
    login_lockout_seconds: int


def _build_auth(data: dict | None) -> AuthSettings:
    d = data or {}
    return AuthSettings(
        token_secret=d["token_secret"],
        token_expiry_seconds=d.get("token_expiry_seconds", _SEVEN_DAYS),
        min_password_length=d.get("min_password_length", 6),
        login_max_attempts=d.get("login_max_attempts", 5),
        login_window_seconds=d.get("login_window_seconds", 300),
        login_lockout_seconds=d.get("login_lockout_seconds", 900),
    )


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OrderSettings:
    """Order workflow switches."""

    allow_past_dates: bool


def _build_orders(data: dict | None) -> OrderSettings:
    d = data or {}
    return OrderSettings(
        allow_past_dates=d.get("allow_past_dates", False),
    )


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WasteflowSettings:
    server: ServerSettings
    api: ApiSettings
    security: SecuritySettings
    logging: LoggingSettings
    database: DatabaseSettings
    auth: AuthSettings
    orders: OrderSettings


def build_settings(data: dict) -> WasteflowSettings:
    """Build the full typed settings tree from raw config data.

    Called once during :class:`WasteflowConfig` initialization after
    schema validation and environment-variable resolution.
    """
    return WasteflowSettings(
        server=_build_server(data.get("server")),
        api=_build_api(data.get("api")),
        security=_build_security(data.get("security")),
        logging=_build_logging(data.get("logging")),
        database=_build_database(data.get("database")),
        auth=_build_auth(data.get("auth")),
        orders=_build_orders(data.get("orders")),
    )
