"""Flask application factory for WasteFlow.

Usage::

    from wasteflow.app import create_app
    from wasteflow.config import get_config
    from wasteflow.db import init_database

    db  = init_database(get_config().settings.database)
    app = create_app(config=get_config(), database=db)
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from flask import Flask, jsonify

if TYPE_CHECKING:
    from flask.typing import ResponseReturnValue
    from pypgkit import Database

    from wasteflow.config.wasteflow_config import WasteflowConfig

log = logging.getLogger(__name__)


def create_app(
    config: WasteflowConfig | None = None,
    database: Database | None = None,
) -> Flask:
    """Create and configure the WasteFlow Flask application.

    Parameters
    ----------
    config:
        Loaded :class:`WasteflowConfig`.  Falls back to
        :func:`get_config` when ``None``.
    database:
        Initialised :class:`Database` singleton.  When provided, the
        dependency container is wired up and the resource blueprints
        are registered.  When ``None`` only the infrastructure
        endpoints exist (useful for ``--validate-only`` or testing).

    Returns
    -------
    Flask
        Fully configured WSGI application.

    """
    if config is None:
        from wasteflow.config import get_config  # noqa: PLC0415

        config = get_config()

    settings = config.settings

    app = Flask("wasteflow")
    app.config["WASTEFLOW_SETTINGS"] = settings
    app.config["WASTEFLOW_CONFIG"] = config
    app.config["MAX_CONTENT_LENGTH"] = settings.security.max_request_body_bytes

    # -- Error handlers -----------------------------------------------------
    from wasteflow.app.errors import register_error_handlers  # noqa: PLC0415

    register_error_handlers(app)

    # -- Request lifecycle hooks --------------------------------------------
    from wasteflow.app.middleware import register_request_hooks  # noqa: PLC0415

    register_request_hooks(app)

    # -- Infrastructure endpoints -------------------------------------------
    _register_health(app, settings.api.base_path)

    # -- Dependency container and API routes --------------------------------
    if database is not None:
        from wasteflow.api import register_blueprints  # noqa: PLC0415
        from wasteflow.app.context import Container  # noqa: PLC0415

        app.extensions["container"] = Container(database, settings)
        register_blueprints(app)

    log.info("Flask application created")
    return app


# ---------------------------------------------------------------------------
# Infrastructure endpoints
# ---------------------------------------------------------------------------


def _register_health(app: Flask, base_path: str = "/api") -> None:
    """Register ``/livez``, ``/healthz``, ``/readyz`` and ``<base>/health``."""
    from wasteflow import __version__  # noqa: PLC0415

    def _database_ok() -> bool | None:
        container = app.extensions.get("container")
        if container is None:
            return None
        try:
            container.db.fetch_value("SELECT 1")
        except Exception:  # noqa: BLE001
            log.warning("Database health check failed", exc_info=True)
            return False
        return True

    @app.route("/livez")
    def livez() -> ResponseReturnValue:
        """Return minimal liveness probe."""
        return jsonify({"alive": True, "version": __version__}), 200

    @app.route("/healthz")
    def healthz() -> ResponseReturnValue:
        """Return health status including database connectivity."""
        result: dict = {"status": "ok", "version": __version__}
        db_ok = _database_ok()
        if db_ok is not None:
            result["checks"] = {"database": "connected" if db_ok else "disconnected"}
            if not db_ok:
                result["status"] = "degraded"
        code = 200 if result["status"] == "ok" else 503
        return jsonify(result), code

    @app.route("/readyz")
    def readyz() -> ResponseReturnValue:
        """Return readiness: container wired and database reachable."""
        db_ok = _database_ok()
        if db_ok is None:
            return jsonify({"ready": False, "reason": "Container not initialized"}), 503
        if not db_ok:
            return jsonify({"ready": False, "reason": "Database not connected"}), 503
        return jsonify({"ready": True}), 200

    @app.route(base_path.rstrip("/") + "/health")
    def api_health() -> ResponseReturnValue:
        """Return the public API heartbeat."""
        return jsonify(
            {
                "status": "OK",
                "message": "WasteFlow API is running",
                "timestamp": datetime.now(UTC).isoformat(),
            }
        ), 200
