"""
weather_service.py — Open-Meteo forecast lookup
Best-effort current conditions plus today's min/max for the e-paper summary.
Any failure (network, non-OK status, malformed payload) yields None.
"""

import logging
import math

import httpx

import config
from services.stats_service import round_half_up

logger = logging.getLogger(__name__)

# Open-Meteo WMO weather codes -> short description
WEATHER_CODE_DESCRIPTIONS = [
    ((0,), "Clear"),
    ((1, 2), "Partly cloudy"),
    ((3,), "Overcast"),
    ((45, 48), "Fog"),
    ((51, 53, 55), "Drizzle"),
    ((61, 63, 65), "Rain"),
    ((71, 73, 75), "Snow"),
    ((80, 81, 82), "Showers"),
    ((95, 96, 99), "Thunder"),
]
FALLBACK_DESCRIPTION = "Cloudy"


def describe_weather_code(code) -> str:
    for codes, desc in WEATHER_CODE_DESCRIPTIONS:
        if code in codes:
            return desc
    return FALLBACK_DESCRIPTION


def _is_number(v) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v)


def _first_rounded(values, fallback: int) -> int:
    if isinstance(values, list) and values and _is_number(values[0]):
        return round_half_up(values[0])
    return fallback


class WeatherService:
    @staticmethod
    def forecast_params(latitude: float, longitude: float, tz_name: str) -> dict:
        return {
            "latitude": latitude,
            "longitude": longitude,
            "current_weather": "true",
            "daily": "temperature_2m_max,temperature_2m_min",
            "timezone": tz_name,
        }

    @staticmethod
    def parse_forecast(data) -> dict:
        """Reduce an Open-Meteo payload to {temp, tempMin, tempMax, windKph, desc}."""
        if not isinstance(data, dict):
            raise ValueError("forecast payload is not an object")
        current = data.get("current_weather")
        daily = data.get("daily")
        current = current if isinstance(current, dict) else {}
        daily = daily if isinstance(daily, dict) else {}

        temp = round_half_up(current["temperature"]) if _is_number(current.get("temperature")) else 0
        wind = round_half_up(current["windspeed"]) if _is_number(current.get("windspeed")) else 0
        code = current.get("weathercode")
        if code is None:
            code = 0

        return {
            "temp": temp,
            "tempMin": _first_rounded(daily.get("temperature_2m_min"), temp),
            "tempMax": _first_rounded(daily.get("temperature_2m_max"), temp),
            "windKph": wind,
            "desc": describe_weather_code(code),
        }

    @staticmethod
    async def fetch(
        client: httpx.AsyncClient | None = None,
        latitude: float | None = None,
        longitude: float | None = None,
        tz_name: str | None = None,
    ) -> dict | None:
        """Single attempt, no retries; None on any failure."""
        params = WeatherService.forecast_params(
            config.EPAPER_LATITUDE if latitude is None else latitude,
            config.EPAPER_LONGITUDE if longitude is None else longitude,
            tz_name or config.EPAPER_TIMEZONE,
        )
        owns_client = client is None
        if owns_client:
            client = httpx.AsyncClient(timeout=config.WEATHER_TIMEOUT_SECONDS)
        try:
            resp = await client.get(config.WEATHER_API_URL, params=params)
            resp.raise_for_status()
            return WeatherService.parse_forecast(resp.json())
        except (httpx.HTTPError, ValueError, OverflowError) as e:
            logger.warning(f"Weather lookup failed: {e}")
            return None
        finally:
            if owns_client:
                await client.aclose()
