from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any

import requests

logger = logging.getLogger(__name__)

PLACEHOLDER_API_KEY = "YOUR_API_KEY"


class GeocodingServiceError(RuntimeError):
    pass


class CredentialMissingError(RuntimeError):
    pass


def ensure_api_key(api_key: str | None) -> str:
    key = (api_key or "").strip()
    if not key or key == PLACEHOLDER_API_KEY:
        raise CredentialMissingError(
            "OpenWeather API key is missing. Set OPENWEATHER_API_KEY in your environment or .env file."
        )
    return key


@dataclass(frozen=True, slots=True)
class Location:
    name: str
    latitude: float
    longitude: float
    country_code: str
    state: str | None = None

    @property
    def identity(self) -> tuple[str, str]:
        return (self.name, self.country_code)

    @property
    def has_coordinates(self) -> bool:
        return not (self.latitude == 0 and self.longitude == 0)

    @property
    def display_name(self) -> str:
        parts = [self.name]
        if self.state:
            parts.append(self.state)
        parts.append(self.country_code)
        return ", ".join(parts)

    def with_coordinates(self, latitude: float, longitude: float) -> "Location":
        return replace(self, latitude=latitude, longitude=longitude)

    @classmethod
    def from_api(cls, item: Any) -> "Location":
        if not isinstance(item, dict):
            raise ValueError(f"Expected an object, got {type(item).__name__}")
        name = item["name"]
        country = item["country"]
        if not isinstance(name, str) or not isinstance(country, str):
            raise ValueError("name and country must be strings")
        lat = item["lat"]
        lon = item["lon"]
        if isinstance(lat, bool) or isinstance(lon, bool) or not isinstance(lat, (int, float)) or not isinstance(lon, (int, float)):
            raise ValueError("lat and lon must be numbers")
        state = item.get("state")
        if state is not None and not isinstance(state, str):
            raise ValueError("state must be a string")
        return cls(
            name=name,
            latitude=float(lat),
            longitude=float(lon),
            country_code=country,
            state=state,
        )


class GeocodingService:
    BASE_URL = "https://api.openweathermap.org/geo/1.0/direct"

    def __init__(self, api_key: str | None, timeout_sec: float = 10.0, base_url: str | None = None):
        self.api_key = api_key
        self.timeout_sec = timeout_sec
        self.base_url = base_url or self.BASE_URL

    def search(self, query: str, limit: int) -> list[Location]:
        api_key = ensure_api_key(self.api_key)
        logger.debug("Geocoding query=%r limit=%d", query, limit)

        try:
            response = requests.get(
                self.base_url,
                params={"q": query, "limit": limit, "appid": api_key},
                timeout=self.timeout_sec,
            )
        except requests.RequestException as exc:
            raise GeocodingServiceError("Failed to call the OpenWeather geocoding API.") from exc

        if response.status_code != 200:
            raise GeocodingServiceError(
                f"OpenWeather geocoding API returned status {response.status_code}."
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise GeocodingServiceError("Geocoding response was not valid JSON.") from exc

        if not isinstance(payload, list):
            raise GeocodingServiceError("Geocoding response was not a JSON array.")

        try:
            return [Location.from_api(item) for item in payload]
        except (KeyError, ValueError) as exc:
            raise GeocodingServiceError("Failed to decode geocoding results.") from exc
