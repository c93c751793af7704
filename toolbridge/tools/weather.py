"""
Weather forecast tool.

A mock forecast provider for demonstrations and tests. Forecasts are
derived from a hash of the location and date, so the same inputs
always produce the same conditions and temperature.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, List

from toolbridge.tools.base import Declaration, Tool, ToolExecutionError

logger = logging.getLogger(__name__)

WEATHER_CONDITIONS = [
    "sunny",
    "partly cloudy",
    "cloudy",
    "light rain",
    "heavy rain",
    "thunderstorm",
    "windy",
    "snow",
    "foggy",
]

# Celsius (min, max) per condition
TEMPERATURE_RANGES = {
    "sunny": (20, 35),
    "partly cloudy": (18, 30),
    "cloudy": (15, 25),
    "light rain": (12, 20),
    "heavy rain": (10, 18),
    "thunderstorm": (15, 25),
    "windy": (8, 15),
    "snow": (-5, 5),
    "foggy": (5, 15),
}


def hash_string(text: str) -> int:
    """
    Compute a stable non-negative hash of `text`.

    Runs `h = h * 31 + code_unit` over the UTF-16 code units of the
    string, keeping `h` a signed 32-bit integer, and returns `abs(h)`.
    """
    h = 0
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        code_unit = data[i] | (data[i + 1] << 8)
        h = ((h << 5) - h + code_unit) & 0xFFFFFFFF
    if h & 0x80000000:
        h -= 0x100000000
    return abs(h)


class WeatherTool(Tool):
    """
    Report a deterministic mock forecast for a location and date.

    Tool input schema:
    {
        "location": "Manila",
        "date": "2024-03-01"
    }
    """

    aliases = ("get_weather_on_date",)

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "WeatherTool":
        # This tool has no specific configuration; return a new instance
        return cls()

    def describe(self) -> List[Declaration]:
        return [
            {
                "name": "get_weather_on_date",
                "description": "Get the weather forecast for a specific location and date",
                "parameters": {
                    "type": "object",
                    "properties": {
                        "location": {
                            "type": "string",
                            "description": "The location to get weather for (city name)",
                        },
                        "date": {
                            "type": "string",
                            "description": (
                                "The date to get weather for (YYYY-MM-DD format). "
                                "If not provided, the current date is used."
                            ),
                        },
                    },
                    "required": ["location"],
                },
            }
        ]

    async def execute(self, args: Dict[str, Any]) -> Dict[str, Any]:
        location = args.get("location")
        if not location or not isinstance(location, str):
            raise ToolExecutionError("Missing required field: location.")
        forecast_date = args.get("date") or date.today().isoformat()
        try:
            datetime.strptime(forecast_date, "%Y-%m-%d")
        except (TypeError, ValueError) as exc:
            raise ToolExecutionError(
                f"Invalid date {forecast_date!r}; expected YYYY-MM-DD."
            ) from exc

        logger.info("Generating forecast for %s on %s", location, forecast_date)
        seed = hash_string(f"{location}{forecast_date}")
        condition = WEATHER_CONDITIONS[seed % len(WEATHER_CONDITIONS)]
        low, high = TEMPERATURE_RANGES[condition]
        temperature = low + seed % (high - low)

        return {
            "location": location,
            "date": forecast_date,
            "condition": condition,
            "temperature": temperature,
            "humidity": 40 + seed % 40,
            "wind_speed": 5 + seed % 25,
            "forecast": (
                f"The weather in {location} on {forecast_date} will be "
                f"{condition} with a temperature of {temperature}°C"
            ),
        }
