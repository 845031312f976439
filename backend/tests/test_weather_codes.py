import pytest

from services.weather_codes import (
    condition_for_code,
    condition_for_forecast,
    describe_code,
    description_for_forecast,
)


@pytest.mark.parametrize(
    "code, condition",
    [
        (0, "clear"),
        (1, "partly-cloudy"),
        (2, "partly-cloudy"),
        (3, "cloudy"),
        (45, "fog"),
        (48, "fog"),
        (51, "rain"),
        (67, "rain"),
        (71, "snow"),
        (77, "snow"),
        (80, "rain"),
        (82, "rain"),
        (85, "cloudy"),
        (95, "thunder"),
        (99, "thunder"),
        (10, "cloudy"),
    ],
)
def test_condition_for_code(code, condition):
    assert condition_for_code(code) == condition


def test_describe_code():
    assert describe_code(0) == "Clear sky"
    assert describe_code(63) == "Moderate rain"
    assert describe_code(42) == "Unknown"


def test_condition_for_forecast():
    assert condition_for_forecast({"current_weather": {"weathercode": 3}}) == "cloudy"
    assert condition_for_forecast({"current_weather": {"weathercode": "95"}}) == "thunder"
    assert condition_for_forecast({"current_weather": {}}) is None
    assert condition_for_forecast({}) is None
    assert condition_for_forecast(None) is None


def test_description_for_forecast():
    assert description_for_forecast({"current_weather": {"weathercode": 0}}) == "Clear sky"
    assert description_for_forecast({"current_weather": {"weathercode": 42}}) == "Unknown"
    assert description_for_forecast({"current_weather": {"weathercode": "rainy"}}) is None
    assert description_for_forecast([]) is None
