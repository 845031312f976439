"""
Weather and location API routes.

Geocoding, autocomplete suggestions, reverse geocoding and forecast proxying.
"""
import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from domain.models import PlaceCandidate, ReverseLookupResult, Suggestion
from services.coordinates import parse_coordinates, valid_coordinates
from services.locations import LocationService, get_default_location_service
from services.open_meteo import ProviderUnavailable
from services.weather_codes import condition_for_forecast, description_for_forecast

router = APIRouter()
logger = logging.getLogger(__name__)


class PlaceResponse(BaseModel):
    name: str
    admin1: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None
    latitude: float
    longitude: float


class GeocodeResponse(BaseModel):
    results: List[PlaceResponse]


class SuggestionResponse(BaseModel):
    name: str
    display: str
    latitude: float
    longitude: float
    country: Optional[str] = None
    priority: int


class SuggestionsResponse(BaseModel):
    suggestions: List[SuggestionResponse]


class LocationResponse(BaseModel):
    name: str
    admin1: Optional[str] = None
    country: Optional[str] = None
    latitude: float
    longitude: float


class ReverseGeocodeResponse(BaseModel):
    location: LocationResponse


class SearchResponse(BaseModel):
    place: LocationResponse
    weather: Any
    condition: Optional[str] = None
    description: Optional[str] = None


def get_location_service() -> LocationService:
    """FastAPI dependency; tests override it via app.dependency_overrides."""
    return get_default_location_service()


def place_to_response(place: PlaceCandidate) -> PlaceResponse:
    return PlaceResponse(**place.to_dict())


def suggestion_to_response(suggestion: Suggestion) -> SuggestionResponse:
    return SuggestionResponse(**suggestion.to_dict())


def location_to_response(location: ReverseLookupResult) -> LocationResponse:
    return LocationResponse(**location.to_dict())


def _require_term(q: Optional[str]) -> str:
    term = (q or "").strip()
    if not term:
        raise HTTPException(status_code=400, detail="Missing query param q")
    return term


def _require_coordinates(lat: Optional[float], lon: Optional[float]) -> tuple:
    if lat is None or lon is None:
        raise HTTPException(status_code=400, detail="Missing lat or lon parameters")
    if not valid_coordinates(lat, lon):
        raise HTTPException(status_code=400, detail="Coordinates out of range")
    return lat, lon


def _fetch_weather(service: LocationService, lat: float, lon: float) -> Any:
    try:
        return service.weather.fetch(lat, lon)
    except ProviderUnavailable as exc:
        logger.error("Weather fetch error: %s", exc)
        raise HTTPException(status_code=502, detail=f"Weather fetch failed: {exc.reason}")


@router.get("/geocode", response_model=GeocodeResponse)
def geocode(q: Optional[str] = None, service: LocationService = Depends(get_location_service)):
    """Ranked places for a free-text name; the first result is the best match."""
    term = _require_term(q)
    results = service.resolve_by_name(term)
    return GeocodeResponse(results=[place_to_response(p) for p in results])


@router.get("/locations", response_model=SuggestionsResponse)
def locations(q: Optional[str] = None, service: LocationService = Depends(get_location_service)):
    """Search-as-you-type suggestions."""
    term = _require_term(q)
    suggestions = service.resolve_suggestions(term)
    return SuggestionsResponse(suggestions=[suggestion_to_response(s) for s in suggestions])


@router.get("/reverse-geocode", response_model=ReverseGeocodeResponse)
def reverse_geocode(
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    service: LocationService = Depends(get_location_service),
):
    lat, lon = _require_coordinates(lat, lon)
    location = service.resolve_by_coordinates(lat, lon)
    return ReverseGeocodeResponse(location=location_to_response(location))


@router.get("/weather")
def weather(
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    service: LocationService = Depends(get_location_service),
):
    """Forecast provider payload, forwarded unmodified."""
    lat, lon = _require_coordinates(lat, lon)
    return _fetch_weather(service, lat, lon)


@router.get("/search", response_model=SearchResponse)
def search(q: Optional[str] = None, service: LocationService = Depends(get_location_service)):
    """
    One-shot search used by the main search box.

    Input that parses as "lat, lon" is reverse-geocoded; anything else is a
    name search and the best match is used. The forecast for the resolved
    place is fetched in the same request.
    """
    term = _require_term(q)
    coords = parse_coordinates(term)
    if coords:
        place = location_to_response(service.resolve_by_coordinates(*coords))
    else:
        results = service.resolve_by_name(term)
        if not results:
            raise HTTPException(status_code=404, detail="Location not found")
        best = results[0]
        place = LocationResponse(
            name=best.name,
            admin1=best.admin1,
            country=best.country or best.country_code,
            latitude=best.latitude,
            longitude=best.longitude,
        )

    payload = _fetch_weather(service, place.latitude, place.longitude)
    return SearchResponse(
        place=place,
        weather=payload,
        condition=condition_for_forecast(payload),
        description=description_for_forecast(payload),
    )
