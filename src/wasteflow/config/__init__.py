"""Configuration subsystem for WasteFlow.

Public API::

    from wasteflow.config import get_config, WasteflowConfig

    # At startup (CLI only):
    WasteflowConfig(config_file="config.yaml")

    # Everywhere else:
    cfg  = get_config()
    port = cfg.settings.server.port
"""

from wasteflow.config.settings import (
    ApiSettings,
    AuthSettings,
    DatabaseSettings,
    LoggingSettings,
    OrderSettings,
    SecuritySettings,
    ServerSettings,
    WasteflowSettings,
)
from wasteflow.config.wasteflow_config import (
    ConfigValidationError,
    WasteflowConfig,
    get_config,
)

__all__ = [
    "ApiSettings",
    "AuthSettings",
    "ConfigValidationError",
    "DatabaseSettings",
    "LoggingSettings",
    "OrderSettings",
    "SecuritySettings",
    "ServerSettings",
    "WasteflowConfig",
    "WasteflowSettings",
    "get_config",
]
