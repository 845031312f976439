"""
Forecast pass-through.

Forwards coordinates to the forecast provider and hands back its payload
unchanged. ProviderUnavailable propagates; the HTTP layer reports it.
"""
import logging
from typing import Any

logger = logging.getLogger(__name__)


class WeatherService:
    def __init__(self, client):
        self.client = client

    def fetch(self, latitude: float, longitude: float) -> Any:
        logger.info("Weather request for: lat=%s, lon=%s", latitude, longitude)
        payload = self.client.forecast(latitude, longitude)
        logger.info("Weather data retrieved for lat=%s, lon=%s", latitude, longitude)
        return payload
