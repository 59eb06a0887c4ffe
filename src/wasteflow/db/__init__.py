"""Database subsystem for WasteFlow.

Public API::

    from wasteflow.db import init_database
"""

from wasteflow.db.init import apply_schema, init_database, schema_status

__all__ = [
    "apply_schema",
    "init_database",
    "schema_status",
]
