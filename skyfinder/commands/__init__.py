from .help_cmd import register as register_help
from .search_cmd import register as register_search
from .weather_cmd import register as register_weather


def register_all_commands(bot) -> None:
    register_help(bot)
    register_search(bot)
    register_weather(bot)
