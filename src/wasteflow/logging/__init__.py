"""Logging subsystem for WasteFlow.

Public API::

    from wasteflow.logging import configure_logging

    configure_logging(settings.logging)
"""

from wasteflow.logging.setup import configure_logging

__all__ = ["configure_logging"]
