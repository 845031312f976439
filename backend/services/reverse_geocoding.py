"""Nearest-place reverse geocoding over a forward-search candidate pool.

Open-Meteo has no reverse endpoint, so the pool comes from a broad placeholder
search and the closest candidate by great-circle distance wins. The lookup is
best-effort: it never raises, and falls back to a generic name.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

from domain.models import PlaceCandidate, ReverseLookupResult
from services.open_meteo import ProviderUnavailable

EARTH_RADIUS_KM = 6371.0
FALLBACK_LOCATION_NAME = "Your Location"
DEFAULT_POOL_QUERY = "a"

logger = logging.getLogger(__name__)


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance in kilometers between two lat/lon points."""
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(dlon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def nearest_candidate(
    lat: float,
    lon: float,
    candidates: Sequence[PlaceCandidate],
) -> Optional[PlaceCandidate]:
    """Closest candidate to (lat, lon); the first one seen wins exact ties."""
    best: Optional[PlaceCandidate] = None
    best_distance = math.inf
    for candidate in candidates:
        distance = haversine_km(lat, lon, candidate.latitude, candidate.longitude)
        if distance < best_distance:
            best = candidate
            best_distance = distance
    return best


def fallback_result(lat: float, lon: float) -> ReverseLookupResult:
    return ReverseLookupResult(name=FALLBACK_LOCATION_NAME, latitude=lat, longitude=lon)


class ReverseResolver:
    def __init__(self, client, pool_query: str = DEFAULT_POOL_QUERY):
        self.client = client
        self.pool_query = pool_query

    def _candidate_pool(self) -> Sequence[PlaceCandidate]:
        try:
            return self.client.search(self.pool_query)
        except ProviderUnavailable as exc:
            logger.warning("Reverse geocoding pool search failed: %s", exc)
            return []

    def resolve(self, lat: float, lon: float) -> ReverseLookupResult:
        match = nearest_candidate(lat, lon, self._candidate_pool())
        if match is None:
            logger.info("Reverse geocoding found nothing for %s,%s; using fallback", lat, lon)
            return fallback_result(lat, lon)

        logger.info(
            "Reverse geocoding found: %s, %s",
            match.name,
            match.country or match.country_code,
        )
        return ReverseLookupResult(
            name=match.name,
            admin1=match.admin1,
            country=match.country or match.country_code,
            latitude=lat,
            longitude=lon,
        )
