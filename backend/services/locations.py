"""
Location resolution service.

The single entry point the HTTP layer talks to: name search, autocomplete
suggestions and coordinate lookup, all built on one injected Open-Meteo
client. None of these operations raise on provider failure; they return
empty lists or a fallback location instead.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from domain.models import PlaceCandidate, ReverseLookupResult, Suggestion
from services.country_priority import PriorityCountry
from services.open_meteo import OpenMeteoClient
from services.ranking import RankingEngine
from services.reverse_geocoding import ReverseResolver
from services.weather import WeatherService
from settings import Settings, settings as default_settings

MAX_SUGGESTIONS = 5

logger = logging.getLogger(__name__)


def format_display(candidate: PlaceCandidate) -> str:
    """'Name, Admin1 (Country)' with absent parts left out."""
    display = candidate.name
    if candidate.admin1:
        display += f", {candidate.admin1}"
    if candidate.country:
        display += f" ({candidate.country})"
    return display


def to_suggestion(candidate: PlaceCandidate, priority: PriorityCountry) -> Suggestion:
    return Suggestion(
        name=candidate.name,
        display=format_display(candidate),
        latitude=candidate.latitude,
        longitude=candidate.longitude,
        country=candidate.country or candidate.country_code,
        # exact code match only, not the keyword heuristic
        priority=1 if candidate.country_code == priority.code else 0,
    )


class LocationService:
    def __init__(
        self,
        ranking: RankingEngine,
        reverse: ReverseResolver,
        weather: WeatherService,
        max_suggestions: int = MAX_SUGGESTIONS,
        client: Optional[OpenMeteoClient] = None,
    ):
        self.ranking = ranking
        self.reverse = reverse
        self.weather = weather
        self.max_suggestions = max_suggestions
        # set when this service owns the shared client and must close it
        self.client = client

    @property
    def priority(self) -> PriorityCountry:
        return self.ranking.priority

    def resolve_by_name(self, term: str) -> List[PlaceCandidate]:
        """Ranked candidates for `term`; the first one is the best match."""
        logger.info("Geocoding request for: %s", term)
        results = self.ranking.rank(term)
        logger.info("Geocoding for: %s - Found %d results", term, len(results))
        if results:
            first = results[0]
            logger.info(
                "First result: %s, %s (%s)",
                first.name,
                first.admin1 or "",
                first.country or first.country_code,
            )
        return results

    def resolve_suggestions(self, term: str) -> List[Suggestion]:
        logger.info("Location suggestions request for: %s", term)
        ranked = self.ranking.rank(term)[: self.max_suggestions]
        suggestions = [to_suggestion(c, self.priority) for c in ranked]
        logger.info("Location suggestions for: %s - Found %d suggestions", term, len(suggestions))
        return suggestions

    def resolve_by_coordinates(self, lat: float, lon: float) -> ReverseLookupResult:
        logger.info("Reverse geocoding request for: lat=%s, lon=%s", lat, lon)
        return self.reverse.resolve(lat, lon)

    def close(self) -> None:
        if self.client is not None:
            self.client.close()


def build_location_service(
    config: Optional[Settings] = None,
    client: Optional[OpenMeteoClient] = None,
) -> LocationService:
    """Wire a LocationService from settings, optionally around an existing client."""
    config = config or default_settings
    client = client or OpenMeteoClient(
        geocoding_url=config.GEOCODING_BASE_URL,
        forecast_url=config.FORECAST_BASE_URL,
        language=config.GEOCODE_LANGUAGE,
        timeout=config.HTTP_TIMEOUT_SECONDS,
    )
    priority = PriorityCountry.for_code(config.PRIORITY_COUNTRY_CODE, config.PRIORITY_COUNTRY_NAME)
    return LocationService(
        ranking=RankingEngine(client, priority=priority, parallel=config.GEOCODE_PARALLEL),
        reverse=ReverseResolver(client, pool_query=config.REVERSE_POOL_QUERY),
        weather=WeatherService(client),
        client=client,
    )


_default_location_service: Optional[LocationService] = None


def get_default_location_service() -> LocationService:
    global _default_location_service
    if _default_location_service is None:
        _default_location_service = build_location_service()
    return _default_location_service


def close_default_location_service() -> None:
    """Release the default service's HTTP session; called on app shutdown."""
    global _default_location_service
    if _default_location_service is not None:
        _default_location_service.close()
        _default_location_service = None
