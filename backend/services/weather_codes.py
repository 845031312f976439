"""
WMO weather interpretation codes, as used by the Open-Meteo forecast API.

`condition_for_code` buckets a code into the handful of background themes the
UI knows how to draw; `describe_code` gives the human-readable label.
"""
from typing import Any, Optional

CLEAR = "clear"
PARTLY_CLOUDY = "partly-cloudy"
CLOUDY = "cloudy"
FOG = "fog"
RAIN = "rain"
SNOW = "snow"
THUNDER = "thunder"

DESCRIPTIONS = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow fall",
    73: "Moderate snow fall",
    75: "Heavy snow fall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}


def condition_for_code(code: int) -> str:
    if code == 0:
        return CLEAR
    if code in (1, 2):
        return PARTLY_CLOUDY
    if code == 3:
        return CLOUDY
    if 45 <= code <= 48:
        return FOG
    if 51 <= code <= 67 or 80 <= code <= 82:
        return RAIN
    if 71 <= code <= 77:
        return SNOW
    if code >= 95:
        return THUNDER
    return CLOUDY


def describe_code(code: int) -> str:
    return DESCRIPTIONS.get(code, "Unknown")


def current_code(payload: Any) -> Optional[int]:
    """`current_weather.weathercode` from a forecast payload, if present and numeric."""
    if not isinstance(payload, dict):
        return None
    current = payload.get("current_weather")
    if not isinstance(current, dict):
        return None
    code = current.get("weathercode")
    if code is None:
        return None
    try:
        return int(code)
    except (TypeError, ValueError):
        return None


def condition_for_forecast(payload: Any) -> Optional[str]:
    code = current_code(payload)
    return None if code is None else condition_for_code(code)


def description_for_forecast(payload: Any) -> Optional[str]:
    code = current_code(payload)
    return None if code is None else describe_code(code)
