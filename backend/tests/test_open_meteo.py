from unittest.mock import MagicMock

import pytest
import requests

from services.open_meteo import (
    FORECAST_BASE_URL,
    GEOCODING_BASE_URL,
    OpenMeteoClient,
    ProviderUnavailable,
)


class DummyResponse:
    def __init__(self, json_data=None, status_code=200, json_error=None):
        self._json = json_data
        self.status_code = status_code
        self._json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._json


def _client(response=None, side_effect=None) -> OpenMeteoClient:
    session = MagicMock()
    if side_effect is not None:
        session.get.side_effect = side_effect
    else:
        session.get.return_value = response
    return OpenMeteoClient(session=session, timeout=3.0)


def test_search_builds_general_query_and_parses_results():
    client = _client(DummyResponse({
        "results": [
            {
                "name": "Mumbai",
                "latitude": 19.07283,
                "longitude": 72.88261,
                "admin1": "Maharashtra",
                "country": "India",
                "country_code": "IN",
                "population": 12691836,
            }
        ]
    }))
    results = client.search("mumbai")

    client.session.get.assert_called_once_with(
        GEOCODING_BASE_URL,
        params={"name": "mumbai", "count": 10, "language": "en", "format": "json"},
        timeout=3.0,
    )
    assert len(results) == 1
    mumbai = results[0]
    assert mumbai.name == "Mumbai"
    assert mumbai.admin1 == "Maharashtra"
    assert mumbai.country_code == "IN"
    assert mumbai.key == (19.07283, 72.88261)


def test_search_in_country_adds_country_code():
    client = _client(DummyResponse({"results": []}))
    assert client.search_in_country("goa", "IN") == []
    _, kwargs = client.session.get.call_args
    assert kwargs["params"]["countryCode"] == "IN"
    assert kwargs["params"]["count"] == 5


def test_search_without_results_key_is_empty():
    # the provider omits "results" entirely when nothing matches
    client = _client(DummyResponse({"generationtime_ms": 0.4}))
    assert client.search("zzzxyznowhere") == []


def test_search_skips_malformed_entries():
    client = _client(DummyResponse({
        "results": [
            {"name": "No coords"},
            {"latitude": 1.0, "longitude": 2.0},
            {"name": "Bad", "latitude": "north", "longitude": 2.0},
            {"name": "Numeric admin", "latitude": 1.0, "longitude": 2.0, "admin1": 7},
            {"name": "Listed country", "latitude": 1.0, "longitude": 2.0, "country": ["India"]},
            {"name": "Numeric code", "latitude": 1.0, "longitude": 2.0, "country_code": 91},
            {"name": "NaN", "latitude": float("nan"), "longitude": 2.0},
            {"name": "Inf", "latitude": 1.0, "longitude": float("inf")},
            {"name": "Too far north", "latitude": 91.0, "longitude": 2.0},
            {"name": "Too far east", "latitude": 1.0, "longitude": 180.5},
            "not an object",
            {"name": "Good", "latitude": 1.0, "longitude": 2.0},
        ]
    }))
    assert [c.name for c in client.search("x")] == ["Good"]


def test_search_keeps_boundary_coordinates_and_blank_fields():
    client = _client(DummyResponse({
        "results": [
            {"name": "Pole", "latitude": 90, "longitude": -180, "admin1": "", "country": None},
        ]
    }))
    pole = client.search("pole")[0]
    assert pole.key == (90.0, -180.0)
    assert pole.admin1 is None
    assert pole.country is None


@pytest.mark.parametrize("results", [5, True, "Paris", {"name": "Paris"}])
def test_search_non_list_results_is_provider_unavailable(results):
    client = _client(DummyResponse({"results": results}))
    with pytest.raises(ProviderUnavailable) as excinfo:
        client.search("paris")
    assert excinfo.value.reason == "malformed results"


@pytest.mark.parametrize(
    "side_effect",
    [requests.ConnectionError("refused"), requests.Timeout("timed out")],
)
def test_transport_errors_become_provider_unavailable(side_effect):
    client = _client(side_effect=side_effect)
    with pytest.raises(ProviderUnavailable) as excinfo:
        client.search("goa")
    assert excinfo.value.provider == "geocoding"


def test_http_error_becomes_provider_unavailable():
    client = _client(DummyResponse({}, status_code=503))
    with pytest.raises(ProviderUnavailable):
        client.search_in_country("goa", "IN")


def test_invalid_json_becomes_provider_unavailable():
    client = _client(DummyResponse(json_error=ValueError("Expecting value")))
    with pytest.raises(ProviderUnavailable) as excinfo:
        client.search("goa")
    assert "invalid JSON" in excinfo.value.reason


def test_forecast_passes_payload_through():
    payload = {"current_weather": {"temperature": 31.2, "weathercode": 2}, "hourly": {}, "daily": {}}
    client = _client(DummyResponse(payload))
    assert client.forecast(19.07, 72.87) is payload

    args, kwargs = client.session.get.call_args
    assert args == (FORECAST_BASE_URL,)
    assert kwargs["params"] == {
        "latitude": 19.07,
        "longitude": 72.87,
        "current_weather": "true",
        "hourly": "temperature_2m,relativehumidity_2m,precipitation,weathercode,windspeed_10m",
        "daily": "temperature_2m_max,temperature_2m_min,weathercode",
        "timezone": "auto",
    }


def test_forecast_failure_is_tagged():
    client = _client(side_effect=requests.ConnectionError("down"))
    with pytest.raises(ProviderUnavailable) as excinfo:
        client.forecast(0.0, 0.0)
    assert excinfo.value.provider == "forecast"
