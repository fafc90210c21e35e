from __future__ import annotations

DEFAULT_CONDITION_EMOJI = "🌡️"

CONDITION_EMOJI_MAP: dict[str, str] = {
    "clear": "☀️",
    "clouds": "☁️",
    "rain": "🌧️",
    "snow": "❄️",
    "thunderstorm": "⛈️",
}


def condition_to_emoji(condition: str | None) -> str:
    if not condition:
        return DEFAULT_CONDITION_EMOJI
    return CONDITION_EMOJI_MAP.get(condition.lower(), DEFAULT_CONDITION_EMOJI)
