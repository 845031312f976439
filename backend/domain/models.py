"""
Core domain models for location resolution.
These are framework-agnostic and can be used across all services.
"""
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple


def _optional_str(item: Dict[str, Any], field_name: str) -> Optional[str]:
    value = item.get(field_name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field_name} is not a string: {value!r}")
    return value or None


@dataclass(frozen=True)
class PlaceCandidate:
    """One geocoding result as returned by the provider."""
    name: str
    latitude: float
    longitude: float
    admin1: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None  # two-letter ISO code when present

    @property
    def key(self) -> Tuple[float, float]:
        """Dedup key: exact provider coordinates, no rounding."""
        return (self.latitude, self.longitude)

    @classmethod
    def from_provider(cls, item: Dict[str, Any]) -> "PlaceCandidate":
        """
        Build a candidate from one entry of the provider's `results` array.

        Raises KeyError / TypeError / ValueError when the entry lacks a name
        or usable coordinates; callers skip such entries.
        """
        name = item["name"]
        if not isinstance(name, str) or not name:
            raise ValueError("candidate has no name")
        latitude = float(item["latitude"])
        longitude = float(item["longitude"])
        # NaN fails both comparisons, infinities fail the bounds
        if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
            raise ValueError(f"coordinates out of range: {latitude}, {longitude}")
        return cls(
            name=name,
            latitude=latitude,
            longitude=longitude,
            admin1=_optional_str(item, "admin1"),
            country=_optional_str(item, "country"),
            country_code=_optional_str(item, "country_code"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Suggestion:
    """Display-ready projection of a PlaceCandidate for autocomplete."""
    name: str
    display: str
    latitude: float
    longitude: float
    country: Optional[str]
    priority: int  # 1 when the candidate is in the priority country

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ReverseLookupResult:
    """
    Best-effort name for a coordinate pair.

    latitude/longitude always echo the queried point, never the matched
    candidate's own coordinates.
    """
    name: str
    latitude: float
    longitude: float
    admin1: Optional[str] = None
    country: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
