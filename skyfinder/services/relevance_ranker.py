from __future__ import annotations

from skyfinder.services.geocoding_service import Location


def rank_locations(locations: list[Location], query: str) -> list[Location]:
    """Sort locations by how well their name matches ``query``.

    Exact matches come first, then names containing the query, then names
    starting with it, then shorter names, then names in plain string order.
    ``sorted`` is stable, so full ties keep their merge order.
    """
    query_lower = query.lower()
    return sorted(locations, key=lambda location: _relevance_key(location, query_lower))


def _relevance_key(location: Location, query_lower: str) -> tuple[bool, bool, bool, int, str]:
    name_lower = location.name.lower()
    # False sorts before True, so each flag is "does not match".
    return (
        name_lower != query_lower,
        query_lower not in name_lower,
        not name_lower.startswith(query_lower),
        len(location.name),
        location.name,
    )
