"""Order endpoints.

``POST   /orders``                      create (201)
``GET    /orders``                      list, earliest scheduled first
``GET    /orders/distributor/<email>``  one distributor's orders
``GET    /orders/<order_id>``           single order
``PATCH  /orders/<order_id>/status``    change status
``DELETE /orders/<order_id>``           delete
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import Blueprint, jsonify

from wasteflow.api import json_body
from wasteflow.api.serializers import serialize_order
from wasteflow.app.context import get_container

if TYPE_CHECKING:
    from flask.typing import ResponseReturnValue

orders_bp = Blueprint("orders", __name__)


@orders_bp.route("", methods=["POST"])
def create_order() -> ResponseReturnValue:
    order = get_container().order_service.create_order(json_body())
    return jsonify(serialize_order(order)), 201


@orders_bp.route("", methods=["GET"])
def list_orders() -> ResponseReturnValue:
    orders = get_container().order_service.get_all_orders()
    return jsonify([serialize_order(o) for o in orders])


@orders_bp.route("/distributor/<email>", methods=["GET"])
def list_distributor_orders(email: str) -> ResponseReturnValue:
    orders = get_container().order_service.get_orders_by_distributor(email)
    return jsonify([serialize_order(o) for o in orders])


@orders_bp.route("/<order_id>", methods=["GET"])
def get_order(order_id: str) -> ResponseReturnValue:
    order = get_container().order_service.get_order_by_id(order_id)
    return jsonify(serialize_order(order))


@orders_bp.route("/<order_id>/status", methods=["PATCH"])
def update_order_status(order_id: str) -> ResponseReturnValue:
    status = json_body().get("status")
    order = get_container().order_service.update_order_status(order_id, status)
    return jsonify(serialize_order(order))


@orders_bp.route("/<order_id>", methods=["DELETE"])
def delete_order(order_id: str) -> ResponseReturnValue:
    get_container().order_service.delete_order(order_id)
    return jsonify({"message": "Order deleted successfully"})
