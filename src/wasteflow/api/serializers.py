"""Response serialization for WasteFlow resources.

Each function takes a model entity and produces a camelCase
dictionary suitable for ``flask.jsonify``.  Password hashes never
leave this module.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from wasteflow.models.distributor import Distributor
    from wasteflow.models.order import Order


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _quantity(value: float) -> int | float:
    """Render whole kilograms without a trailing ``.0``."""
    return int(value) if float(value).is_integer() else value


def serialize_order(order: Order) -> dict:
    return {
        "id": str(order.id),
        "company": order.company,
        "distributorName": order.distributor_name,
        "distributorEmail": order.distributor_email,
        "orderTypes": list(order.order_types),
        "quantity": _quantity(order.quantity),
        "scheduledDate": _iso(order.scheduled_date),
        "status": order.status.value,
        "createdAt": _iso(order.created_at),
        "updatedAt": _iso(order.updated_at),
    }


def serialize_distributor(distributor: Distributor) -> dict:
    return {
        "id": str(distributor.id),
        "name": distributor.name,
        "email": distributor.email,
        "address": distributor.address,
        "createdAt": _iso(distributor.created_at),
        "updatedAt": _iso(distributor.updated_at),
    }


def serialize_auth_response(message: str, distributor: Distributor, token: str) -> dict:
    """Body returned by register and login."""
    return {
        "message": message,
        "distributor": {
            "id": str(distributor.id),
            "name": distributor.name,
            "email": distributor.email,
            "address": distributor.address,
        },
        "token": token,
    }
