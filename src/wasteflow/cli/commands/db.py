"""Database management subcommands."""

from __future__ import annotations

import logging
import sys

log = logging.getLogger(__name__)


def run_db(config, args) -> None:
    """Handle db subcommands."""
    if args.db_command == "status":
        _db_status(config)
    elif args.db_command == "init":
        _db_init(config)
    else:
        sys.stderr.write("usage: wasteflow -c CONFIG db {status,init}\n")
        sys.exit(1)


def _db_status(config) -> None:
    """Check database connectivity and which tables exist."""
    from wasteflow.db import init_database, schema_status

    try:
        db = init_database(config.settings.database)
        db.fetch_value("SELECT 1")
        tables = schema_status(db)
    except Exception as exc:
        log.exception("Database status check failed")
        sys.stderr.write(f"database: unreachable ({exc})\n")
        sys.exit(1)

    sys.stdout.write("database: connected\n")
    for name, present in tables.items():
        sys.stdout.write(f"  table {name}: {'present' if present else 'MISSING'}\n")
    if not all(tables.values()):
        sys.exit(2)


def _db_init(config) -> None:
    """Apply the bundled schema (idempotent)."""
    from wasteflow.db import apply_schema, init_database

    try:
        db = init_database(config.settings.database)
        schema_path = apply_schema(db)
    except Exception as exc:
        log.exception("Schema initialisation failed")
        sys.stderr.write(f"schema initialisation failed: {exc}\n")
        sys.exit(1)
    sys.stdout.write(f"schema applied from {schema_path}\n")
