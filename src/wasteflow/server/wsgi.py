"""WSGI entry point for external servers.

The application is built on first access to ``app``, from the config
file named by ``WASTEFLOW_CONFIG``::

    export WASTEFLOW_CONFIG=/etc/wasteflow/config.yaml
    gunicorn "wasteflow.server.wsgi:app"

``build_app`` takes the path directly, for servers that accept an
application factory::

    gunicorn "wasteflow.server.wsgi:build_app('/etc/wasteflow/config.yaml')"
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from wasteflow.app import create_app
from wasteflow.config import WasteflowConfig
from wasteflow.db import init_database
from wasteflow.logging import configure_logging

if TYPE_CHECKING:
    from flask import Flask

log = logging.getLogger(__name__)

CONFIG_ENV_VAR = "WASTEFLOW_CONFIG"

_app: Flask | None = None


def build_app(config_path: str | None = None) -> Flask:
    """Load the config, configure logging, open the pool and build the app.

    Raises :class:`RuntimeError` when no path is given and
    ``WASTEFLOW_CONFIG`` is unset.
    """
    path = config_path or os.environ.get(CONFIG_ENV_VAR)
    if not path:
        msg = f"{CONFIG_ENV_VAR} is not set; cannot locate the config file"
        raise RuntimeError(msg)

    config = WasteflowConfig(config_file=path, schema_file="bundled")
    configure_logging(config.settings.logging)
    database = init_database(config.settings.database)
    log.info("WSGI application built from %s", path)
    return create_app(config=config, database=database)


def __getattr__(name: str) -> Flask:
    global _app  # noqa: PLW0603
    if name != "app":
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    if _app is None:
        _app = build_app()
    return _app
