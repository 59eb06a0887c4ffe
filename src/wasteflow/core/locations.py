"""Static district and city reference data.

Districts are keyed by a lowercase identifier; lookups by district
are case-insensitive while city matching is exact.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class District:
    key: str
    name: str
    cities: tuple[str, ...]


DISTRICTS: dict[str, District] = {
    "colombo": District(
        key="colombo",
        name="Colombo",
        cities=(
            *(f"Colombo {n}" for n in range(1, 16)),
            "Dehiwala", "Mount Lavinia", "Moratuwa", "Kotte", "Maharagama",
            "Nugegoda", "Homagama", "Padukka", "Hanwella", "Avissawella",
            "Seethawaka", "Kaduwela", "Biyagama", "Kelaniya", "Wattala",
            "Hendala", "Ja Ela", "Ekala", "Gampaha", "Kiribathgoda",
            "Ragama", "Dompe", "Minuwangoda", "Katunayake", "Negombo",
            "Kochchikade", "Marawila", "Chilaw", "Puttalam", "Boralesgamuwa",
            "Piliyandala", "Kesbewa", "Bandaragama", "Panadura", "Horana",
            "Ingiriya", "Bulathsinhala", "Mathugama", "Agalawatta", "Beruwala",
            "Aluthgama", "Bentota", "Ambalangoda", "Elpitiya", "Hikkaduwa",
        ),
    ),
}  # fmt: skip


def _option(value: str, label: str) -> dict[str, str]:
    return {"value": value, "label": label}


def get_cities_by_district(district: str) -> list[str]:
    """Return the cities of *district*, or ``[]`` for an unknown district."""
    entry = DISTRICTS.get(district.strip().lower())
    return list(entry.cities) if entry else []


def get_district_options() -> list[dict[str, str]]:
    return [_option(d.key, d.name) for d in DISTRICTS.values()]


def get_city_options(district: str) -> list[dict[str, str]]:
    return [_option(city, city) for city in get_cities_by_district(district)]


def validate_location(district: str, city: str) -> bool:
    """True when *city* (exact spelling) belongs to *district*."""
    return city in get_cities_by_district(district)
