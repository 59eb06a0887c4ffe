"""Distributor directory endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import Blueprint, g, jsonify, request

from wasteflow.api import json_body
from wasteflow.api.serializers import serialize_auth_response, serialize_distributor
from wasteflow.app.context import get_container
from wasteflow.app.errors import AuthenticationError
from wasteflow.auth import require_distributor_auth

if TYPE_CHECKING:
    from flask.typing import ResponseReturnValue

distributors_bp = Blueprint("distributors", __name__)


@distributors_bp.route("/register", methods=["POST"])
def register() -> ResponseReturnValue:
    distributor, token = get_container().distributor_service.register(json_body())
    return jsonify(
        serialize_auth_response("Distributor registered successfully.", distributor, token)
    ), 201


@distributors_bp.route("/login", methods=["POST"])
def login() -> ResponseReturnValue:
    """Authenticate and return a bearer token.

    Failed attempts are throttled per client address and email.
    """
    container = get_container()
    data = json_body()
    email = data.get("email")
    rate_key = f"{request.remote_addr}:{str(email or '').strip().lower()}"

    limiter = container.login_limiter
    limiter.check(rate_key)
    try:
        distributor, token = container.distributor_service.login(data)
    except AuthenticationError:
        limiter.record_failure(rate_key)
        raise
    limiter.record_success(rate_key)
    return jsonify(serialize_auth_response("Login successful.", distributor, token))


@distributors_bp.route("", methods=["GET"])
def list_distributors() -> ResponseReturnValue:
    distributors = get_container().distributor_service.get_all()
    return jsonify([serialize_distributor(d) for d in distributors])


@distributors_bp.route("/me", methods=["GET"])
@require_distributor_auth
def current_distributor() -> ResponseReturnValue:
    return jsonify(serialize_distributor(g.distributor))
