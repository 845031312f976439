"""Thin client for the public, key-less Open-Meteo geocoding and forecast APIs.

Every outbound call goes through one `requests.Session` owned by the client
instance, bounded by the configured timeout. Any transport, HTTP or decoding
problem surfaces as `ProviderUnavailable`; deciding whether that is fatal is
left to the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from domain.models import PlaceCandidate

GEOCODING_BASE_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_BASE_URL = "https://api.open-meteo.com/v1/forecast"

GENERAL_RESULT_COUNT = 10
RESTRICTED_RESULT_COUNT = 5

HOURLY_FIELDS = "temperature_2m,relativehumidity_2m,precipitation,weathercode,windspeed_10m"
DAILY_FIELDS = "temperature_2m_max,temperature_2m_min,weathercode"

logger = logging.getLogger(__name__)


class ProviderUnavailable(Exception):
    """An upstream provider could not produce a usable response."""

    def __init__(self, provider: str, reason: str):
        super().__init__(f"{provider}: {reason}")
        self.provider = provider
        self.reason = reason


class OpenMeteoClient:
    def __init__(
        self,
        geocoding_url: Optional[str] = None,
        forecast_url: Optional[str] = None,
        language: str = "en",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.geocoding_url = geocoding_url or GEOCODING_BASE_URL
        self.forecast_url = forecast_url or FORECAST_BASE_URL
        self.language = language
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get_json(self, provider: str, url: str, params: Dict[str, Any]) -> Any:
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise ProviderUnavailable(provider, str(exc)) from exc
        try:
            return resp.json()
        except ValueError as exc:
            raise ProviderUnavailable(provider, f"invalid JSON: {exc}") from exc

    def _search(self, params: Dict[str, Any]) -> List[PlaceCandidate]:
        data = self._get_json("geocoding", self.geocoding_url, params)
        raw_results = data.get("results") if isinstance(data, dict) else None
        if raw_results is not None and not isinstance(raw_results, list):
            raise ProviderUnavailable("geocoding", "malformed results")
        candidates: List[PlaceCandidate] = []
        for item in raw_results or []:
            try:
                candidates.append(PlaceCandidate.from_provider(item))
            except (KeyError, TypeError, ValueError) as exc:
                logger.debug("Skipping malformed geocoding result %r: %s", item, exc)
        return candidates

    def search(self, term: str, count: int = GENERAL_RESULT_COUNT) -> List[PlaceCandidate]:
        """Free-text search; provider ordering is returned untouched."""
        return self._search(
            {
                "name": term,
                "count": count,
                "language": self.language,
                "format": "json",
            }
        )

    def search_in_country(
        self,
        term: str,
        country_code: str,
        count: int = RESTRICTED_RESULT_COUNT,
    ) -> List[PlaceCandidate]:
        """Free-text search limited to one ISO country code."""
        return self._search(
            {
                "name": term,
                "count": count,
                "language": self.language,
                "format": "json",
                "countryCode": country_code,
            }
        )

    def forecast(self, latitude: float, longitude: float) -> Any:
        """Fetch current, hourly and daily forecast; the payload is returned verbatim."""
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current_weather": "true",
            "hourly": HOURLY_FIELDS,
            "daily": DAILY_FIELDS,
            "timezone": "auto",
        }
        return self._get_json("forecast", self.forecast_url, params)

    def close(self) -> None:
        self.session.close()
