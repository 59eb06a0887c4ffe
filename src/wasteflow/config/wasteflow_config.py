"""WasteFlow configuration loader built on ConfigKit.

Lifecycle::

    # 1. CLI creates the singleton (once, at startup)
    WasteflowConfig(config_file="/etc/wasteflow/config.yaml")

    # 2. Any module retrieves it afterwards
    from wasteflow.config import get_config
    cfg = get_config()
    cfg.settings.server.port  # typed access

    # 3. Dynamic access
    cfg.get("database.host", default="localhost")
"""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from configkit import ConfigKit, ConfigKitMeta

from wasteflow.config.settings import WasteflowSettings, build_settings

_SCHEMA_PATH = Path(__file__).parent / "schema.json"

_ENV_RE = re.compile(
    r"^\$\{([^}:]+?)(?::-(.*))?\}$",
    re.DOTALL,
)

_MIN_TOKEN_SECRET_LENGTH = 16
_MIN_PASSWORD_FLOOR = 6

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Module-level singleton reference
# ---------------------------------------------------------------------------
_instance: WasteflowConfig | None = None


def get_config() -> WasteflowConfig:
    """Return the initialised configuration singleton.

    Raises :class:`RuntimeError` if :class:`WasteflowConfig` has not been
    created yet (i.e. the CLI entry point has not run).
    """
    if _instance is None:
        msg = (
            "Configuration not initialised. "
            "WasteflowConfig must be created with config_file= before calling get_config()."
        )
        raise RuntimeError(msg)
    return _instance


class ConfigValidationError(Exception):
    """Raised when cross-field validation finds one or more problems."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        body = "\n".join(f"  - {e}" for e in errors)
        super().__init__(f"Configuration validation failed:\n{body}")


# ---------------------------------------------------------------------------
# Environment variable resolution
# ---------------------------------------------------------------------------


def _resolve_value(value: str, path: str) -> str:
    """Replace ``${VAR}`` or ``${VAR:-default}`` with env var value."""
    match = _ENV_RE.match(value)
    if match is None:
        return value
    var_name, fallback = match.group(1), match.group(2)
    resolved = os.environ.get(var_name)
    if resolved is not None:
        return resolved
    if fallback is not None:
        return fallback
    raise ConfigValidationError(
        [
            f"Environment variable '${{{var_name}}}' referenced "
            f"at '{path}' is not set and has no default",
        ],
    )


def _resolve_env_vars(data: Any, path: str = "") -> None:  # noqa: ANN401
    """Walk *data* in-place and resolve ``${VAR}``/``${VAR:-default}`` strings."""
    if isinstance(data, dict):
        for key, value in data.items():
            child_path = f"{path}.{key}" if path else key
            if isinstance(value, str):
                data[key] = _resolve_value(value, child_path)
            else:
                _resolve_env_vars(value, child_path)
    elif isinstance(data, list):
        for idx, item in enumerate(data):
            child_path = f"{path}[{idx}]"
            if isinstance(item, str):
                data[idx] = _resolve_value(item, child_path)
            else:
                _resolve_env_vars(item, child_path)


# ---------------------------------------------------------------------------
# Config class
# ---------------------------------------------------------------------------


class WasteflowConfig(ConfigKit):
    """Central configuration for the WasteFlow service.

    The JSON schema is bundled at ``config/schema.json``; callers
    supply only ``config_file``.  After construction the typed settings
    tree is available at :pyattr:`settings` and the raw dict via
    :pyattr:`data` / :pymeth:`get`.
    """

    def __init__(
        self,
        *,
        config_file: str | Path,
        schema_file: str | Path | None = None,  # noqa: ARG002
    ) -> None:
        """Load, validate and publish the configuration singleton.

        ``schema_file`` is ignored; it exists only to satisfy the
        :class:`ConfigKitMeta` first-instantiation guard.
        """
        global _instance  # noqa: PLW0603

        super().__init__(config_file=config_file, schema_file=_SCHEMA_PATH)
        self._settings: WasteflowSettings = build_settings(self.data)
        _instance = self

    def _load(self) -> None:
        """Load the config file, then resolve ``${VAR}`` references.

        Resolution runs before schema validation so substituted values
        are checked against the schema too.
        """
        super()._load()
        _resolve_env_vars(self._data)

    @property
    def settings(self) -> WasteflowSettings:
        """Fully-typed, frozen settings tree."""
        return self._settings

    def additional_checks(self) -> None:
        """Cross-field validation run by ConfigKit after the schema passes."""
        errors: list[str] = []
        warnings: list[str] = []

        server = self.data.get("server") or {}
        api = self.data.get("api") or {}
        database = self.data.get("database") or {}
        auth = self.data.get("auth") or {}
        orders = self.data.get("orders") or {}

        base_path = api.get("base_path", "/api")
        if base_path and not base_path.startswith("/"):
            errors.append(f"api.base_path must start with '/' (got '{base_path}')")
        if base_path.endswith("/") and base_path != "/":
            errors.append(f"api.base_path must not end with '/' (got '{base_path}')")

        min_conn = database.get("min_connections", 2)
        max_conn = database.get("max_connections", 10)
        if min_conn > max_conn:
            errors.append(
                f"database.min_connections ({min_conn}) must be <= "
                f"database.max_connections ({max_conn})",
            )
        workers = server.get("workers", 4)
        if max_conn < workers:
            warnings.append(
                f"database.max_connections ({max_conn}) is lower than "
                f"server.workers ({workers})",
            )

        token_secret = auth.get("token_secret", "")
        if len(token_secret) < _MIN_TOKEN_SECRET_LENGTH:
            errors.append(
                f"auth.token_secret is too short ({len(token_secret)} chars) "
                f"- minimum {_MIN_TOKEN_SECRET_LENGTH} characters required",
            )
        if auth.get("min_password_length", _MIN_PASSWORD_FLOOR) < _MIN_PASSWORD_FLOOR:
            errors.append(
                f"auth.min_password_length must be at least {_MIN_PASSWORD_FLOOR}",
            )

        if orders.get("allow_past_dates"):
            warnings.append(
                "orders.allow_past_dates is true; orders may be scheduled in the past",
            )

        for w in warnings:
            log.warning("Config warning: %s", w)

        if errors:
            raise ConfigValidationError(errors)

    def reload_settings(self) -> WasteflowSettings:
        """Re-read the config file and return a fresh settings tree.

        Does not replace the singleton or its raw data.
        """
        source = self._config_path
        with source.open(encoding="utf-8") as f:
            if source.suffix.lower() in (".yaml", ".yml"):
                new_data = yaml.safe_load(f)
            else:
                new_data = json.load(f)
        _resolve_env_vars(new_data)
        return build_settings(new_data)

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton -- testing only."""
        global _instance  # noqa: PLW0603
        _instance = None
        ConfigKitMeta.reset()

    def __repr__(self) -> str:
        return f"<WasteflowConfig config_file={self._config_path}>"
