import logging
import os

# Basic settings helper to read environment configuration.

logger = logging.getLogger(__name__)

DEFAULT_FRONTEND_URL = "http://localhost:5173,http://127.0.0.1:5173"


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


def _as_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid value for %s=%r; using default %s", name, raw, default)
        return default


def _as_list(val: str | None, default: str) -> list[str]:
    raw = val if val is not None else default
    return [part.strip() for part in raw.split(",") if part.strip()]


class Settings:
    def __init__(self) -> None:
        self.GEOCODING_BASE_URL: str = os.getenv(
            "GEOCODING_BASE_URL", "https://geocoding-api.open-meteo.com/v1/search"
        )
        self.FORECAST_BASE_URL: str = os.getenv(
            "FORECAST_BASE_URL", "https://api.open-meteo.com/v1/forecast"
        )
        self.HTTP_TIMEOUT_SECONDS: float = _as_float("HTTP_TIMEOUT_SECONDS", 10.0)
        self.GEOCODE_LANGUAGE: str = os.getenv("GEOCODE_LANGUAGE", "en")
        self.PRIORITY_COUNTRY_CODE: str = os.getenv("PRIORITY_COUNTRY_CODE", "IN")
        self.PRIORITY_COUNTRY_NAME: str = os.getenv("PRIORITY_COUNTRY_NAME", "India")
        self.REVERSE_POOL_QUERY: str = os.getenv("REVERSE_POOL_QUERY", "a")
        self.GEOCODE_PARALLEL: bool = _as_bool(os.getenv("GEOCODE_PARALLEL"), True)
        self.ALLOWED_ORIGINS: list[str] = _as_list(os.getenv("FRONTEND_URL"), DEFAULT_FRONTEND_URL)
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
