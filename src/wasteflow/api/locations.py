"""District and city lookup endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import Blueprint, jsonify

from wasteflow.api import json_body
from wasteflow.app.errors import NotFoundError, ValidationError
from wasteflow.core import locations

if TYPE_CHECKING:
    from flask.typing import ResponseReturnValue

locations_bp = Blueprint("locations", __name__)


@locations_bp.route("/districts", methods=["GET"])
def list_districts() -> ResponseReturnValue:
    return jsonify({"success": True, "districts": locations.get_district_options()})


@locations_bp.route("/districts/<district>/cities", methods=["GET"])
def list_cities(district: str) -> ResponseReturnValue:
    cities = locations.get_city_options(district)
    if not cities:
        raise NotFoundError("District not found or no cities available")
    return jsonify({"success": True, "district": district, "cities": cities})


@locations_bp.route("/validate", methods=["POST"])
def validate_location() -> ResponseReturnValue:
    data = json_body()
    district, city = data.get("district"), data.get("city")
    if not isinstance(district, str) or not district or not isinstance(city, str) or not city:
        raise ValidationError("District and city are required")

    valid = locations.validate_location(district, city)
    return jsonify(
        {
            "success": True,
            "valid": valid,
            "message": "Valid location" if valid else "Invalid district/city combination",
        }
    )
