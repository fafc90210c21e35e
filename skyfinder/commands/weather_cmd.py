from __future__ import annotations

import asyncio
import logging

import discord
from discord import app_commands

from skyfinder.services.geocoding_service import CredentialMissingError
from skyfinder.services.weather_service import WeatherServiceError
from skyfinder.utils.formatters import format_weather_report
from skyfinder.utils.units import resolve_temperature_unit
from skyfinder.utils.validators import looks_like_coordinate_input, parse_lat_lon, parse_result_number

logger = logging.getLogger(__name__)


def register(bot) -> None:
    @bot.tree.command(name="weather", description="Show the current weather for a city, coordinates or a search result")
    @app_commands.describe(
        location="City name, lat,lon (e.g. 19.07,72.88) or a result number from /search (e.g. #3)",
        unit="Temperature unit: C or F",
    )
    async def weather_command(interaction: discord.Interaction, location: str, unit: str | None = None) -> None:
        text = location.strip()
        if not text:
            await interaction.response.send_message("❌ Please enter a city name or coordinates.")
            return

        try:
            temperature_unit = resolve_temperature_unit(unit, bot.config.default_temperature_unit)
        except ValueError:
            await interaction.response.send_message("❌ Unit must be C or F.")
            return

        await interaction.response.defer(thinking=True)

        try:
            parsed = parse_lat_lon(text)
        except ValueError as exc:
            await interaction.followup.send(f"❌ {exc} Example: 19.07,72.88")
            return

        label: str | None = None
        number = parse_result_number(text)
        if parsed is not None:
            lat, lon = parsed
        elif number is not None:
            picked = bot.search_session_for(str(interaction.user.id)).pick(number)
            if picked is None:
                await interaction.followup.send(f"❌ No result #{number}. Run `/search <city>` first.")
                return
            if not picked.has_coordinates:
                await interaction.followup.send(f"❌ Coordinates for {picked.display_name} are unavailable.")
                return
            lat, lon = picked.latitude, picked.longitude
            label = picked.display_name
        elif looks_like_coordinate_input(text):
            await interaction.followup.send("❌ Invalid coordinate format. Example: 19.07,72.88")
            return
        else:
            result = await bot.city_search_service.run_async(text)
            if result.status == "config_error":
                await interaction.followup.send(f"⚠️ Configuration error: {result.error}")
                return
            # Fallback entries keep (0, 0) when their backfill lookup failed.
            match = next((loc for loc in result.locations if loc.has_coordinates), None)
            if match is None:
                await interaction.followup.send(f"❌ No cities found for {text}.")
                return
            lat, lon = match.latitude, match.longitude
            label = match.display_name

        try:
            weather = await asyncio.to_thread(
                bot.weather_service.get_current_weather,
                latitude=lat,
                longitude=lon,
            )
        except CredentialMissingError as exc:
            await interaction.followup.send(f"⚠️ Configuration error: {exc}")
            return
        except WeatherServiceError:
            logger.exception("Weather fetch failed for input=%s", text)
            await interaction.followup.send("❌ Failed to fetch the weather. Please try again later.")
            return
        except Exception:
            logger.exception("/weather failed input=%s", text)
            await interaction.followup.send("❌ An unexpected error occurred. Please try again later.")
            return

        await interaction.followup.send(format_weather_report(weather, unit=temperature_unit, location_label=label))
