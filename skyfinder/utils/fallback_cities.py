from __future__ import annotations

from skyfinder.services.geocoding_service import Location

FALLBACK_COUNTRY_CODE = "IN"

FALLBACK_CITY_NAMES: tuple[str, ...] = (
    "Mumbai",
    "Delhi",
    "Bangalore",
    "Hyderabad",
    "Chennai",
    "Kolkata",
    "Pune",
    "Ahmedabad",
    "Jaipur",
    "Lucknow",
    "Kanpur",
    "Nagpur",
    "Indore",
    "Thane",
    "Bhopal",
    "Visakhapatnam",
    "Patna",
    "Vadodara",
    "Ghaziabad",
    "Ludhiana",
)


def match_fallback_cities(query: str) -> list[Location]:
    # Coordinates stay at (0, 0) until the backfill pass looks them up.
    needle = query.lower()
    return [
        Location(name=name, latitude=0.0, longitude=0.0, country_code=FALLBACK_COUNTRY_CODE)
        for name in FALLBACK_CITY_NAMES
        if needle in name.lower()
    ]
