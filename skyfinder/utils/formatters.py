from __future__ import annotations

from typing import TYPE_CHECKING, Any

from skyfinder.utils.condition_map import condition_to_emoji
from skyfinder.utils.time_utils import format_clock, format_date
from skyfinder.utils.units import TemperatureUnit, format_temperature

if TYPE_CHECKING:
    from skyfinder.services.city_search_service import CitySearchResult

_COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)

NO_RESULTS_HINT = (
    "No cities found.\n"
    "Try searching with just the city name (e.g., Mumbai, Delhi)\n"
    "or add ', India' to your search."
)


def format_help_message() -> str:
    return "\n".join(
        [
            "**SkyFinder commands**",
            "/search <city> Search for a city by name",
            "/weather <city, lat,lon or #N> [unit] Show the current weather (unit: C or F)",
            "/help Show this list",
        ]
    )


def wind_direction(deg: float) -> str:
    index = int(deg / 22.5 + 0.5) % 16
    return _COMPASS_POINTS[index]


def format_search_results(result: "CitySearchResult", *, max_items: int = 10) -> str:
    if result.status == "config_error":
        return f"⚠️ Configuration error: {result.error}"

    if not result.locations:
        return NO_RESULTS_HINT

    lines = [f"🔎 Results for **{result.query}**"]
    for index, location in enumerate(result.locations[:max_items], start=1):
        if location.has_coordinates:
            coords = f"({location.latitude:.2f}, {location.longitude:.2f})"
        else:
            coords = "(coordinates unavailable)"
        lines.append(f"{index}. {location.display_name} {coords}")

    remaining = len(result.locations) - max_items
    if remaining > 0:
        lines.append(f"…and {remaining} more")
    lines.append("Use `/weather #N` to see the weather for a result.")
    return "\n".join(lines)


def format_weather_report(
    weather: dict[str, Any],
    *,
    unit: TemperatureUnit = TemperatureUnit.CELSIUS,
    location_label: str | None = None,
) -> str:
    offset = int(weather.get("timezone_offset") or 0)
    label = location_label or _weather_location_label(weather)
    emoji = condition_to_emoji(weather.get("condition"))
    description = (weather.get("description") or weather.get("condition") or "Unknown").capitalize()

    lines = [f"{emoji} **{label}**"]
    if weather.get("dt") is not None:
        lines.append(format_date(weather["dt"], offset))

    lines.append(f"{description} / {format_temperature(weather.get('temperature'), unit)}")
    lines.append(
        f"Feels like {format_temperature(weather.get('feels_like'), unit)}"
        f" (high {format_temperature(weather.get('temperature_max'), unit)}"
        f" · low {format_temperature(weather.get('temperature_min'), unit)})"
    )

    if weather.get("humidity") is not None:
        lines.append(f"Humidity: {weather['humidity']}%")
    if weather.get("pressure") is not None:
        lines.append(f"Pressure: {weather['pressure']} hPa")
    if weather.get("wind_speed") is not None:
        wind = f"Wind: {weather['wind_speed']} m/s"
        if weather.get("wind_deg") is not None:
            wind += f" {wind_direction(weather['wind_deg'])}"
        lines.append(wind)
    if weather.get("visibility") is not None:
        lines.append(f"Visibility: {weather['visibility'] / 1000:.1f} km")
    if weather.get("sunrise") is not None and weather.get("sunset") is not None:
        lines.append(
            f"Sunrise {format_clock(weather['sunrise'], offset)}"
            f" · Sunset {format_clock(weather['sunset'], offset)}"
        )
    return "\n".join(lines)


def _weather_location_label(weather: dict[str, Any]) -> str:
    name = weather.get("city_name")
    country = weather.get("country")
    if name and country:
        return f"{name}, {country}"
    if name:
        return str(name)
    lat = weather.get("latitude")
    lon = weather.get("longitude")
    if lat is None or lon is None:
        return "Unknown location"
    return f"{lat:.4f}, {lon:.4f}"
