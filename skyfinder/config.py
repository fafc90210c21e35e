from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from skyfinder.services.geocoding_service import PLACEHOLDER_API_KEY
from skyfinder.utils.units import TemperatureUnit, resolve_temperature_unit


@dataclass(slots=True)
class Config:
    discord_bot_token: str
    discord_guild_id: int | None
    openweather_api_key: str
    http_timeout_sec: float
    default_temperature_unit: TemperatureUnit

    @property
    def has_api_key(self) -> bool:
        key = self.openweather_api_key.strip()
        return bool(key) and key != PLACEHOLDER_API_KEY

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        token = (os.getenv("DISCORD_BOT_TOKEN") or "").strip()
        if not token:
            raise ValueError("DISCORD_BOT_TOKEN is not set.")

        guild_raw = (os.getenv("DISCORD_GUILD_ID") or "").strip()
        guild_id = int(guild_raw) if guild_raw else None

        # The key is checked when a search runs, so a missing one surfaces as a configuration error there.
        api_key = (os.getenv("OPENWEATHER_API_KEY") or "").strip()

        timeout_raw = (os.getenv("HTTP_TIMEOUT_SEC") or "10").strip() or "10"
        try:
            timeout_sec = float(timeout_raw)
        except ValueError as exc:
            raise ValueError(f"HTTP_TIMEOUT_SEC must be a number, got {timeout_raw!r}.") from exc

        unit_raw = os.getenv("DEFAULT_TEMPERATURE_UNIT")
        try:
            unit = resolve_temperature_unit(unit_raw, TemperatureUnit.CELSIUS)
        except ValueError as exc:
            raise ValueError(f"DEFAULT_TEMPERATURE_UNIT must be C or F, got {unit_raw!r}.") from exc

        return cls(
            discord_bot_token=token,
            discord_guild_id=guild_id,
            openweather_api_key=api_key,
            http_timeout_sec=timeout_sec,
            default_temperature_unit=unit,
        )
