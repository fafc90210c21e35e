from __future__ import annotations

from typing import Any

import requests

from skyfinder.services.geocoding_service import ensure_api_key


class WeatherServiceError(RuntimeError):
    pass


class WeatherService:
    BASE_URL = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(self, api_key: str | None, timeout_sec: float = 10.0):
        self.api_key = api_key
        self.timeout_sec = timeout_sec

    def get_current_weather(self, *, latitude: float, longitude: float) -> dict[str, Any]:
        api_key = ensure_api_key(self.api_key)
        params = {
            "lat": latitude,
            "lon": longitude,
            "units": "metric",
            "appid": api_key,
        }

        try:
            response = requests.get(self.BASE_URL, params=params, timeout=self.timeout_sec)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise WeatherServiceError("Failed to call the OpenWeather current weather API.") from exc
        except ValueError as exc:
            raise WeatherServiceError("Weather response was not valid JSON.") from exc

        if not isinstance(payload, dict):
            raise WeatherServiceError("Weather response was not a JSON object.")

        condition = _first(payload.get("weather")) or {}
        main = payload.get("main") or {}
        wind = payload.get("wind") or {}
        sys = payload.get("sys") or {}

        return {
            "condition": condition.get("main"),
            "description": condition.get("description"),
            "temperature": main.get("temp"),
            "feels_like": main.get("feels_like"),
            "temperature_min": main.get("temp_min"),
            "temperature_max": main.get("temp_max"),
            "humidity": main.get("humidity"),
            "pressure": main.get("pressure"),
            "wind_speed": wind.get("speed"),
            "wind_deg": wind.get("deg"),
            "visibility": payload.get("visibility"),
            "dt": payload.get("dt"),
            "sunrise": sys.get("sunrise"),
            "sunset": sys.get("sunset"),
            "timezone_offset": payload.get("timezone", 0),
            "city_name": payload.get("name"),
            "country": sys.get("country"),
            "latitude": latitude,
            "longitude": longitude,
        }


def _first(values: Any) -> Any:
    if isinstance(values, list) and values:
        return values[0]
    return None
