# ABOUTME: Shared test fixtures for the weather lookup test suite.
# ABOUTME: Provides OpenWeatherMap payloads, test settings and a URL-routing mock HTTP client factory.

from unittest.mock import AsyncMock

import httpx
import pytest

from weather_lookup.config import Settings
from weather_lookup.deps import LookupDeps
from weather_lookup.weather_service import CURRENT_WEATHER_URL, FORECAST_URL, GEOCODING_URL

# 2025-01-15T00:00:00Z
FORECAST_START = 1736899200
THREE_HOURS = 3 * 3600


def _json_response(payload, status_code: int = 200, url: str = "https://test") -> httpx.Response:
    return httpx.Response(status_code=status_code, json=payload, request=httpx.Request("GET", url))


def _london_current() -> dict:
    return {
        "coord": {"lon": -0.1257, "lat": 51.5085},
        "weather": [{"id": 803, "main": "Clouds", "description": "broken clouds", "icon": "04d"}],
        "base": "stations",
        "main": {
            "temp": 7.6,
            "feels_like": 5.2,
            "temp_min": 6.4,
            "temp_max": 8.5,
            "pressure": 1021,
            "humidity": 81,
        },
        "visibility": 10000,
        "wind": {"speed": 4.12, "deg": 250},
        "clouds": {"all": 75},
        "dt": 1736935200,
        "sys": {"country": "GB", "sunrise": 1736928102, "sunset": 1736958253},
        "timezone": 0,
        "id": 2643743,
        "name": "London",
        "cod": 200,
    }


def _forecast_payload(count: int = 40, start: int = FORECAST_START, lat: float = 51.5085, lon: float = -0.1257) -> dict:
    entries = []
    for i in range(count):
        entries.append(
            {
                "dt": start + i * THREE_HOURS,
                "main": {"temp": 5.0 + i % 8, "feels_like": 3.0, "temp_min": 4.0, "temp_max": 9.0, "humidity": 80},
                "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10n"}],
                "wind": {"speed": 3.5, "deg": 200},
                "visibility": 9000,
                "pop": 0.4,
            }
        )
    return {
        "cod": "200",
        "cnt": count,
        "list": entries,
        "city": {"name": "London", "country": "GB", "timezone": 0, "coord": {"lat": lat, "lon": lon}},
    }


def _geocoding_matches() -> list[dict]:
    return [
        {"name": "Colombo", "country": "LK", "state": "Western Province", "lat": 6.9349969, "lon": 79.8538463},
        {"name": "Colombo", "country": "BR", "state": "Paraná", "lat": -25.2925, "lon": -49.2262},
    ]


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key", debounce_seconds=0.01, grouping_timezone="UTC")


@pytest.fixture
def make_client():
    """Factory for a mock httpx.AsyncClient answering by URL.

    Each route maps to an httpx.Response or an exception to raise.
    """

    def _make(routes: dict) -> AsyncMock:
        mock = AsyncMock(spec=httpx.AsyncClient)

        def fake_get(url, params=None, **kwargs):
            result = routes[url]
            if isinstance(result, Exception):
                raise result
            return result

        mock.get.side_effect = fake_get
        return mock

    return _make


@pytest.fixture
def london_client(make_client):
    return make_client(
        {
            GEOCODING_URL: _json_response(_geocoding_matches()),
            CURRENT_WEATHER_URL: _json_response(_london_current()),
            FORECAST_URL: _json_response(_forecast_payload()),
        }
    )


@pytest.fixture
def make_deps(settings):
    def _make(client) -> LookupDeps:
        return LookupDeps(http_client=client, settings=settings)

    return _make


@pytest.fixture
def json_response():
    """Builder for real httpx.Response objects carrying a JSON body."""
    return _json_response


@pytest.fixture
def london_current() -> dict:
    """Current-conditions payload for London, fresh per test so it can be mutated."""
    return _london_current()


@pytest.fixture
def forecast_payload():
    """Builder for 3-hour forecast payloads starting at 2025-01-15T00:00Z."""
    return _forecast_payload


@pytest.fixture
def geocoding_matches() -> list[dict]:
    """Two geocoding matches for 'Colombo'."""
    return _geocoding_matches()
