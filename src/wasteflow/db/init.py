"""Database initialisation from WasteFlow configuration.

Usage::

    from wasteflow.config import get_config
    from wasteflow.db.init import init_database

    init_database(get_config().settings.database)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pypgkit import Database, DatabaseConfig, SchemaManager

if TYPE_CHECKING:
    from wasteflow.config.settings import DatabaseSettings

_SCHEMA_PATH = Path(__file__).parent / "schema.sql"
_TABLES = ("distributors", "orders")

log = logging.getLogger(__name__)


def _settings_to_config(settings: DatabaseSettings) -> DatabaseConfig:
    """Map WasteFlow DatabaseSettings to PyPGKit DatabaseConfig."""
    return DatabaseConfig(
        host=settings.host,
        port=settings.port,
        database=settings.database,
        user=settings.user,
        password=settings.password,
        sslmode=settings.sslmode,
        min_connections=settings.min_connections,
        max_connections=settings.max_connections,
        connection_timeout=settings.connection_timeout,
    )


def init_database(settings: DatabaseSettings) -> Database:
    """Initialise the :class:`Database` singleton from config settings.

    If the singleton is already initialised, returns the existing instance.
    With ``auto_setup`` enabled the database and the tables from
    ``schema.sql`` are created when missing.
    """
    if Database.is_initialized():
        log.debug("Database already initialised, returning existing instance")
        return Database.get_instance()

    config = _settings_to_config(settings)

    log.info(
        "Initialising database connection: %s@%s:%s/%s",
        settings.user,
        settings.host,
        settings.port,
        settings.database,
    )

    db = Database.init(
        config=config,
        schema_path=_SCHEMA_PATH if settings.auto_setup else None,
        auto_setup=settings.auto_setup,
        interactive=False,
    )

    log.info("Database initialised successfully")
    return db


def schema_status(db: Database) -> dict[str, bool]:
    """Report which WasteFlow tables exist in the ``public`` schema."""
    rows = db.fetch_all(
        "SELECT table_name FROM information_schema.tables "
        "WHERE table_schema = 'public' AND table_name = ANY(%s)",
        (list(_TABLES),),
        as_dict=True,
    )
    present = {r["table_name"] for r in rows}
    return {name: name in present for name in _TABLES}


def apply_schema(db: Database) -> Path:
    """Execute the bundled ``schema.sql`` against *db*.

    Every statement in the file is idempotent.  Returns the path that
    was applied.
    """
    SchemaManager(db).execute_sql_file(_SCHEMA_PATH)
    log.info("Applied schema from %s", _SCHEMA_PATH)
    return _SCHEMA_PATH
