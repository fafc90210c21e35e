from __future__ import annotations

import logging

from skyfinder.bot import create_bot
from skyfinder.config import Config
from skyfinder.services.city_search_service import CitySearchService
from skyfinder.services.geocoding_service import GeocodingService
from skyfinder.services.weather_service import WeatherService


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def main() -> None:
    configure_logging()

    config = Config.from_env()

    geocoding_service = GeocodingService(
        config.openweather_api_key,
        timeout_sec=config.http_timeout_sec,
    )
    city_search_service = CitySearchService(geocoding_service)
    weather_service = WeatherService(
        config.openweather_api_key,
        timeout_sec=config.http_timeout_sec,
    )

    bot = create_bot(
        config=config,
        city_search_service=city_search_service,
        weather_service=weather_service,
    )
    bot.run(config.discord_bot_token)


if __name__ == "__main__":
    main()
