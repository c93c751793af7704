"""
Tests for the deterministic WeatherTool.
"""

from datetime import date

import pytest

from toolbridge.tools.base import ToolExecutionError
from toolbridge.tools.weather import (
    TEMPERATURE_RANGES,
    WEATHER_CONDITIONS,
    WeatherTool,
    hash_string,
)


@pytest.fixture
def tool():
    return WeatherTool.from_config({})


class TestHashString:
    """The running 32-bit string hash."""

    def test_empty(self):
        assert hash_string("") == 0

    def test_small_values(self):
        assert hash_string("a") == 97
        assert hash_string("ab") == 97 * 31 + 98

    def test_matches_java_string_hash(self):
        assert hash_string("hello") == 99162322

    def test_wraps_to_signed_32_bit(self):
        # Hashes to the minimum 32-bit integer before abs()
        assert hash_string("polygenelubricants") == 2**31

    def test_result_is_non_negative(self):
        for text in ["Manila2024-03-01", "Reykjavík2023-12-31", "東京2024-01-01"]:
            assert hash_string(text) >= 0


class TestWeatherTool:
    """Forecast generation."""

    def test_declaration(self, tool):
        declaration = tool.describe()
        assert declaration[0]["name"] == "get_weather_on_date"
        assert declaration[0]["parameters"]["required"] == ["location"]
        assert "get_weather_on_date" in tool.aliases

    @pytest.mark.asyncio
    async def test_forecast_is_deterministic(self, tool):
        args = {"location": "Manila", "date": "2024-03-01"}
        first = await tool.execute(args)
        second = await tool.execute(dict(args))
        assert first == second

    @pytest.mark.asyncio
    async def test_forecast_fields_follow_seed(self, tool):
        result = await tool.execute({"location": "Manila", "date": "2024-03-01"})

        seed = hash_string("Manila2024-03-01")
        condition = WEATHER_CONDITIONS[seed % len(WEATHER_CONDITIONS)]
        low, high = TEMPERATURE_RANGES[condition]
        assert result["condition"] == condition
        assert result["temperature"] == low + seed % (high - low)
        assert low <= result["temperature"] < high
        assert 40 <= result["humidity"] < 80
        assert 5 <= result["wind_speed"] < 30
        assert result["forecast"].startswith("The weather in Manila on 2024-03-01 will be")

    @pytest.mark.asyncio
    async def test_default_date_is_today(self, tool):
        result = await tool.execute({"location": "Manila"})
        assert result["date"] == date.today().isoformat()

    @pytest.mark.asyncio
    async def test_missing_location(self, tool):
        with pytest.raises(ToolExecutionError):
            await tool.execute({"date": "2024-03-01"})

    @pytest.mark.asyncio
    async def test_malformed_date(self, tool):
        with pytest.raises(ToolExecutionError, match="YYYY-MM-DD"):
            await tool.execute({"location": "Manila", "date": "March 1st"})
