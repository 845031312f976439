"""Recognise "lat, lon" typed into the search box."""
import re
from typing import Optional, Tuple

_COORD_PATTERN = re.compile(r"^(-?\d+\.?\d*)\s*,\s*(-?\d+\.?\d*)$")


def valid_coordinates(lat: float, lon: float) -> bool:
    return -90 <= lat <= 90 and -180 <= lon <= 180


def parse_coordinates(text: str) -> Optional[Tuple[float, float]]:
    """Return (lat, lon) for input like "19.0760, 72.8777", else None."""
    match = _COORD_PATTERN.match(text.strip())
    if not match:
        return None
    lat = float(match.group(1))
    lon = float(match.group(2))
    if not valid_coordinates(lat, lon):
        return None
    return lat, lon
