import sys
from pathlib import Path

import pytest

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from domain.models import PlaceCandidate  # noqa: E402
from services.open_meteo import ProviderUnavailable  # noqa: E402


def place(name, lat, lon, country=None, country_code=None, admin1=None) -> PlaceCandidate:
    return PlaceCandidate(
        name=name,
        latitude=lat,
        longitude=lon,
        admin1=admin1,
        country=country,
        country_code=country_code,
    )


class FakeOpenMeteo:
    """In-memory stand-in for OpenMeteoClient.

    `general` / `restricted` map a search term to a result list, or to an
    exception instance that will be raised for that term.
    """

    def __init__(self, general=None, restricted=None, forecast_payload=None, forecast_error=None):
        self.general = general or {}
        self.restricted = restricted or {}
        self.forecast_payload = forecast_payload
        self.forecast_error = forecast_error
        self.calls = []
        self.closed = False

    def _answer(self, table, term):
        value = table.get(term, [])
        if isinstance(value, Exception):
            raise value
        return list(value)

    def search(self, term, count=10):
        self.calls.append(("search", term))
        return self._answer(self.general, term)

    def search_in_country(self, term, country_code, count=5):
        self.calls.append(("search_in_country", term, country_code))
        return self._answer(self.restricted, term)

    def forecast(self, latitude, longitude):
        self.calls.append(("forecast", latitude, longitude))
        if self.forecast_error is not None:
            raise self.forecast_error
        return self.forecast_payload

    def close(self):
        self.closed = True


@pytest.fixture
def make_place():
    return place


@pytest.fixture
def fake_client_factory():
    return FakeOpenMeteo


@pytest.fixture
def provider_down():
    return ProviderUnavailable("geocoding", "connection refused")
