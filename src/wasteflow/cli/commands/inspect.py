"""Inspect subcommand: query stored records for debugging.

Usage::

    wasteflow -c config.yaml inspect order <uuid>
    wasteflow -c config.yaml inspect distributor <email>
"""

from __future__ import annotations

import json
import sys
from uuid import UUID


def run_inspect(config, args) -> None:
    """Dispatch to the appropriate inspect sub-handler."""
    sub = getattr(args, "inspect_command", None)
    if sub is None:
        sys.stderr.write("usage: wasteflow -c CONFIG inspect {order,distributor} ...\n")
        sys.exit(1)

    from wasteflow.db import init_database

    db = init_database(config.settings.database)

    if sub == "order":
        _inspect_order(db, args.resource_id)
    elif sub == "distributor":
        _inspect_distributor(db, args.email)
    else:
        sys.exit(1)


def _inspect_order(db, resource_id: str) -> None:
    """Print one order as JSON."""
    from wasteflow.api.serializers import serialize_order
    from wasteflow.repositories.order import OrderRepository

    try:
        oid = UUID(resource_id)
    except ValueError:
        sys.stderr.write(f"invalid order ID: {resource_id}\n")
        sys.exit(1)

    order = OrderRepository(db).get_by_id(oid)
    if order is None:
        sys.stderr.write(f"order not found: {oid}\n")
        sys.exit(1)

    _print_json(serialize_order(order))


def _inspect_distributor(db, email: str) -> None:
    """Print a distributor profile together with their orders."""
    from wasteflow.api.serializers import serialize_distributor, serialize_order
    from wasteflow.repositories.distributor import DistributorRepository
    from wasteflow.repositories.order import OrderRepository

    distributor = DistributorRepository(db).find_by_email(email)
    orders = OrderRepository(db).list_by_distributor_email(email)
    if distributor is None and not orders:
        sys.stderr.write(f"no distributor or orders for: {email}\n")
        sys.exit(1)

    result = serialize_distributor(distributor) if distributor else {"email": email}
    result["orders"] = [serialize_order(o) for o in orders]
    _print_json(result)


def _print_json(data: dict) -> None:
    sys.stdout.write(json.dumps(data, indent=2, default=str) + "\n")
