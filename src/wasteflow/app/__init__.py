"""Flask application package for WasteFlow.

Public API::

    from wasteflow.app import create_app
"""

from wasteflow.app.factory import create_app

__all__ = ["create_app"]
