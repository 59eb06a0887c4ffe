"""Tests for wasteflow.core.locations."""

from __future__ import annotations

from wasteflow.core.locations import (
    DISTRICTS,
    get_cities_by_district,
    get_city_options,
    get_district_options,
    validate_location,
)


class TestCitiesByDistrict:
    def test_lookup_is_case_insensitive(self):
        assert get_cities_by_district("COLOMBO") == get_cities_by_district("colombo")
        assert get_cities_by_district("  Colombo ")

    def test_numbered_colombo_zones(self):
        cities = get_cities_by_district("colombo")
        assert cities[:15] == [f"Colombo {n}" for n in range(1, 16)]

    def test_unknown(self):
        assert get_cities_by_district("atlantis") == []

    def test_returns_a_copy(self):
        get_cities_by_district("colombo").clear()
        assert get_cities_by_district("colombo")


class TestOptions:
    def test_district_options(self):
        assert get_district_options() == [
            {"value": d.key, "label": d.name} for d in DISTRICTS.values()
        ]

    def test_city_options(self):
        options = get_city_options("colombo")
        assert options[0] == {"value": "Colombo 1", "label": "Colombo 1"}
        assert len(options) == len(DISTRICTS["colombo"].cities)

    def test_city_options_unknown_district(self):
        assert get_city_options("nowhere") == []


class TestValidateLocation:
    def test_valid(self):
        assert validate_location("Colombo", "Negombo")

    def test_city_match_is_exact(self):
        assert not validate_location("colombo", "negombo")

    def test_unknown_district(self):
        assert not validate_location("kandy", "Kandy")
