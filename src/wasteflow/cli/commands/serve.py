"""Serve subcommand."""

from __future__ import annotations

import logging
import sys

log = logging.getLogger(__name__)


def run_serve(config, args) -> None:
    """Initialise the database and start the HTTP server."""
    from wasteflow.app import create_app
    from wasteflow.db import init_database

    try:
        db = init_database(config.settings.database)
    except Exception as exc:
        if args.debug:
            raise
        sys.stderr.write(f"wasteflow: error: database initialisation failed: {exc}\n")
        sys.exit(1)

    app = create_app(config=config, database=db)

    if args.dev:
        log.info("Starting development server (not for production)")
        app.run(
            host=config.settings.server.bind,
            port=config.settings.server.port,
            debug=True,
            use_reloader=True,
        )
        return

    from wasteflow.server.gunicorn_app import run_gunicorn

    try:
        run_gunicorn(app, config.settings.server)
    except RuntimeError as exc:
        sys.stderr.write(f"wasteflow: error: {exc}\n")
        sys.exit(1)
