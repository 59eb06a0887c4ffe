"""WasteFlow HTTP API: Flask blueprint registration.

Call :func:`register_blueprints` during application startup to wire
the resource blueprints into the Flask app.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from flask import request

if TYPE_CHECKING:
    from flask import Flask

log = logging.getLogger(__name__)


def json_body() -> dict:
    """Return the request's JSON object, or ``{}`` when absent or not an object."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def register_blueprints(app: Flask) -> None:
    """Register all resource blueprints under ``api.base_path``."""
    from wasteflow.api.distributors import distributors_bp  # noqa: PLC0415
    from wasteflow.api.locations import locations_bp  # noqa: PLC0415
    from wasteflow.api.orders import orders_bp  # noqa: PLC0415

    base = app.config["WASTEFLOW_SETTINGS"].api.base_path.rstrip("/")

    app.register_blueprint(orders_bp, url_prefix=base + "/orders")
    app.register_blueprint(distributors_bp, url_prefix=base + "/distributors")
    app.register_blueprint(locations_bp, url_prefix=base + "/locations")

    log.info("API blueprints registered under %s", base or "/")
