"""WasteFlow command-line entry point.

Usage::

    wasteflow -c /etc/wasteflow/config.yaml
    wasteflow -c config.yaml --dev
    wasteflow -c config.yaml --validate-only
    wasteflow -c config.yaml serve --dev
    wasteflow -c config.yaml db status
    wasteflow -c config.yaml db init
    wasteflow -c config.yaml inspect order <uuid>
    python -m wasteflow -c config.yaml
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

log = logging.getLogger(__name__)


def _get_version() -> str:
    from wasteflow import __version__

    return __version__


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wasteflow",
        description="WasteFlow: waste-collection order service",
    )
    parser.add_argument(
        "-c",
        "--config",
        required=True,
        metavar="PATH",
        help="Path to the configuration file (YAML or JSON).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Enable debug output (full tracebacks, verbose logging).",
    )
    parser.add_argument(
        "--validate-only",
        action="store_true",
        default=False,
        help="Validate the configuration file and exit.",
    )
    parser.add_argument(
        "--dev",
        action="store_true",
        default=False,
        help="Use Flask's development server instead of gunicorn.",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="Start the WasteFlow server")
    serve_parser.add_argument("--dev", action="store_true", default=False, dest="dev")

    db_parser = subparsers.add_parser("db", help="Database management")
    db_sub = db_parser.add_subparsers(dest="db_command")
    db_sub.add_parser("status", help="Check database connectivity and tables")
    db_sub.add_parser("init", help="Create missing tables from the bundled schema")

    inspect_parser = subparsers.add_parser("inspect", help="Inspect stored records")
    inspect_sub = inspect_parser.add_subparsers(dest="inspect_command")
    order_p = inspect_sub.add_parser("order", help="Inspect an order by UUID")
    order_p.add_argument("resource_id", help="The order ID to inspect")
    dist_p = inspect_sub.add_parser("distributor", help="Inspect a distributor and their orders")
    dist_p.add_argument("email", help="The distributor email")

    return parser


def _print_error(message: str) -> None:
    """Print a user-facing error to stderr."""
    sys.stderr.write(f"wasteflow: error: {message}\n")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.  Parses arguments, loads config, dispatches."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    config_path = Path(args.config)
    if not config_path.is_file():
        _print_error(f"configuration file not found: {config_path}")
        sys.exit(1)

    # Basic stderr logging until the config is loaded.
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        from wasteflow.config import ConfigValidationError, WasteflowConfig

        config = WasteflowConfig(config_file=str(config_path), schema_file="bundled")
    except ConfigValidationError as exc:
        _print_error(str(exc))
        sys.exit(1)
    except Exception as exc:
        if args.debug:
            raise
        _print_error(f"failed to load configuration: {exc}")
        sys.exit(1)

    from wasteflow.logging import configure_logging

    configure_logging(config.settings.logging)

    if args.validate_only:
        _print_settings_summary(config)
        sys.exit(0)

    command = args.command
    if command == "db":
        from wasteflow.cli.commands.db import run_db

        run_db(config, args)
    elif command == "inspect":
        from wasteflow.cli.commands.inspect import run_inspect

        run_inspect(config, args)
    else:
        # No subcommand means serve.
        _print_settings_summary(config)
        from wasteflow.cli.commands.serve import run_serve

        run_serve(config, args)


def _print_settings_summary(config) -> None:
    """Print a short summary of the loaded configuration."""
    s = config.settings
    lines = [
        f"WasteFlow {_get_version()}",
        f"  config:   {config._config_path}",  # noqa: SLF001
        f"  listen:   {s.server.bind}:{s.server.port} ({s.server.workers} workers)",
        f"  api:      {s.api.base_path}",
        f"  database: {s.database.user}@{s.database.host}:{s.database.port}/{s.database.database}",
        f"  logging:  {s.logging.level} ({s.logging.format})",
    ]
    sys.stdout.write("\n".join(lines) + "\n")
