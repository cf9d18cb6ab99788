# ABOUTME: Service layer for OpenWeatherMap API calls and response parsing.
# ABOUTME: Handles city autocomplete, current conditions by name, and forecast by coordinates.

import httpx

from weather_lookup.models import CitySuggestion, CurrentWeather, Forecast

GEOCODING_URL = "https://api.openweathermap.org/geo/1.0/direct"
CURRENT_WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"
FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"
ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{icon}@2x.png"


async def search_cities(
    client: httpx.AsyncClient,
    api_key: str,
    query: str,
    limit: int = 5,
) -> list[CitySuggestion]:
    """Look up the top geocoding matches for a partial city name."""
    resp = await client.get(GEOCODING_URL, params={"q": query, "limit": limit, "appid": api_key})
    resp.raise_for_status()
    return [CitySuggestion.model_validate(r) for r in resp.json()]


async def get_current_weather(
    client: httpx.AsyncClient,
    api_key: str,
    city: str,
    units: str = "metric",
) -> CurrentWeather | None:
    """Fetch current conditions for a free-text city name.

    Returns None when OpenWeatherMap does not know the city (HTTP 404).
    """
    resp = await client.get(CURRENT_WEATHER_URL, params={"q": city, "appid": api_key, "units": units})
    if resp.status_code == httpx.codes.NOT_FOUND:
        return None
    resp.raise_for_status()
    return CurrentWeather.model_validate(resp.json())


async def get_forecast(
    client: httpx.AsyncClient,
    api_key: str,
    lat: float,
    lon: float,
    units: str = "metric",
) -> Forecast:
    """Fetch the 5 day / 3 hour forecast for a coordinate pair."""
    resp = await client.get(
        FORECAST_URL,
        params={"lat": lat, "lon": lon, "appid": api_key, "units": units},
    )
    resp.raise_for_status()
    return Forecast.model_validate(resp.json())


def icon_url(icon_code: str) -> str:
    return ICON_URL_TEMPLATE.format(icon=icon_code)
