from __future__ import annotations

from enum import Enum


class TemperatureUnit(str, Enum):
    CELSIUS = "C"
    FAHRENHEIT = "F"

    @property
    def display_name(self) -> str:
        return "Celsius" if self is TemperatureUnit.CELSIUS else "Fahrenheit"

    def convert(self, celsius: float) -> float:
        if self is TemperatureUnit.FAHRENHEIT:
            return celsius * 9 / 5 + 32
        return celsius

    @classmethod
    def parse(cls, value: str) -> "TemperatureUnit":
        text = value.strip().upper()
        for unit in cls:
            if text in (unit.value, unit.display_name.upper()):
                return unit
        raise ValueError(f"Unknown temperature unit: {value!r}")


def format_temperature(celsius: float | None, unit: TemperatureUnit) -> str:
    if celsius is None:
        return "-"
    return f"{unit.convert(float(celsius)):.1f}°{unit.value}"


def resolve_temperature_unit(value: str | None, default: TemperatureUnit) -> TemperatureUnit:
    # Only an absent or blank value falls back to the default; anything else must parse.
    if value is None or not value.strip():
        return default
    return TemperatureUnit.parse(value)
