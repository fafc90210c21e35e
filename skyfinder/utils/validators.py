from __future__ import annotations

import re

_COORD_RE = re.compile(r"^\s*([+-]?\d+(?:\.\d+)?)\s*,\s*([+-]?\d+(?:\.\d+)?)\s*$")
_COORDISH_RE = re.compile(r"^[\s+\-\d.,]+$")
_RESULT_NUMBER_RE = re.compile(r"^\s*#?(\d+)\s*$")


def normalize_query(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip()
    if not normalized:
        return None
    return normalized


def looks_like_coordinate_input(value: str) -> bool:
    text = value.strip()
    return "," in text and bool(_COORDISH_RE.fullmatch(text))


def parse_lat_lon(value: str) -> tuple[float, float] | None:
    match = _COORD_RE.fullmatch(value)
    if not match:
        return None

    lat = float(match.group(1))
    lon = float(match.group(2))
    if not (-90 <= lat <= 90):
        raise ValueError("Latitude must be between -90 and 90.")
    if not (-180 <= lon <= 180):
        raise ValueError("Longitude must be between -180 and 180.")
    return lat, lon


def parse_result_number(value: str) -> int | None:
    """Parse ``3`` or ``#3`` as a pick from the last search results."""
    match = _RESULT_NUMBER_RE.fullmatch(value)
    if not match:
        return None
    return int(match.group(1))
