# ABOUTME: Display helpers mapping weather data to themes, local times, compass labels and units.
# ABOUTME: Builds the JSON view model the web adapter serves for the current LookupState.

import math
from datetime import datetime, timedelta, timezone

from pydantic import BaseModel

from weather_lookup.models import CurrentWeather, DayGroup, ForecastEntry
from weather_lookup.state import LookupState, LookupStatus
from weather_lookup.weather_service import icon_url

COMPASS_POINTS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")
TIME_FORMAT = "%H:%M"
DATE_FORMAT = "%A, %B %d"
LAST_UPDATED_FORMAT = "%H:%M:%S"


class Theme(BaseModel):
    """Gradient colour stops plus an optional background image key."""

    gradient_from: str
    gradient_to: str
    background: str | None = None


DEFAULT_THEME = Theme(gradient_from="gray-900", gradient_to="gray-800")

_HAZY = Theme(gradient_from="gray-300", gradient_to="gray-500")

THEMES: dict[str, Theme] = {
    "clear": Theme(gradient_from="blue-400", gradient_to="cyan-300", background="clear"),
    "clouds": Theme(gradient_from="gray-400", gradient_to="gray-600", background="clouds"),
    "rain": Theme(gradient_from="blue-700", gradient_to="gray-500", background="rain"),
    "thunderstorm": Theme(gradient_from="purple-900", gradient_to="gray-800", background="thunderstorm"),
    "snow": Theme(gradient_from="blue-100", gradient_to="blue-300", background="snow"),
    "mist": _HAZY.model_copy(update={"background": "mist"}),
    "smoke": _HAZY,
    "haze": _HAZY.model_copy(update={"background": "haze"}),
    "fog": _HAZY,
    "drizzle": Theme(gradient_from="blue-300", gradient_to="gray-400"),
}


def theme_for(category: str) -> Theme:
    return THEMES.get(category, DEFAULT_THEME)


def local_datetime(timestamp: int, utc_offset: int) -> datetime:
    """Wall-clock time at a location given its UTC offset in seconds."""
    return datetime.fromtimestamp(timestamp, tz=timezone(timedelta(seconds=utc_offset)))


def format_local_time(timestamp: int, utc_offset: int) -> str:
    return local_datetime(timestamp, utc_offset).strftime(TIME_FORMAT)


def format_local_date(timestamp: int, utc_offset: int) -> str:
    return local_datetime(timestamp, utc_offset).strftime(DATE_FORMAT)


def wind_direction(degrees: float) -> str:
    """8-point compass label; exact half-way bearings round clockwise (22.5 -> NE)."""
    return COMPASS_POINTS[math.floor(degrees / 45 + 0.5) % 8]


def visibility_km(meters: float | None) -> str | None:
    if meters is None:
        return None
    return f"{meters / 1000:.1f}"


def round_temp(value: float | None) -> int | None:
    # half up: 2.5 -> 3, -2.5 -> -2
    if value is None:
        return None
    return math.floor(value + 0.5)


def _condition(weather: list) -> dict:
    if not weather:
        return {"description": None, "icon_url": None}
    first = weather[0]
    return {
        "description": first.description,
        "icon_url": icon_url(first.icon) if first.icon else None,
    }


def current_view(current: CurrentWeather, last_updated: datetime | None) -> dict:
    offset = current.timezone
    return {
        "name": current.name,
        "country": current.country,
        **_condition(current.weather),
        "temp": round_temp(current.main.temp),
        "feels_like": round_temp(current.main.feels_like),
        "temp_min": round_temp(current.main.temp_min),
        "temp_max": round_temp(current.main.temp_max),
        "humidity": current.main.humidity,
        "pressure": current.main.pressure,
        "wind_speed": current.wind.speed,
        "wind_direction": wind_direction(current.wind.deg) if current.wind.deg is not None else None,
        "visibility_km": visibility_km(current.visibility),
        "sunrise": format_local_time(current.sys.sunrise, offset) if current.sys.sunrise else None,
        "sunset": format_local_time(current.sys.sunset, offset) if current.sys.sunset else None,
        "local_date": format_local_date(current.dt, offset),
        "last_updated": last_updated.strftime(LAST_UPDATED_FORMAT) if last_updated else None,
    }


def entry_view(entry: ForecastEntry, utc_offset: int) -> dict:
    return {
        "time": format_local_time(entry.dt, utc_offset),
        **_condition(entry.weather),
        "temp": round_temp(entry.main.temp),
        "humidity": entry.main.humidity,
        "wind_speed": entry.wind.speed,
        "wind_direction": wind_direction(entry.wind.deg) if entry.wind.deg is not None else None,
    }


def render_view(state: LookupState, groups: list[DayGroup]) -> dict:
    """Serialize the state into what the page needs to draw itself.

    Weather and forecast only appear once the state is loaded, so a fetch in
    flight never shows the previous location's data.
    """
    view = {
        "query": state.query,
        "suggestions": [s.display_name for s in state.suggestions] if state.show_suggestions else [],
        "status": state.status.value,
        "loading": state.loading,
        "error": state.error,
        "category": state.category,
        "theme": theme_for(state.category).model_dump(),
        "weather": None,
        "days": [],
        "selected_day": None,
        "entries": [],
    }
    if state.status is not LookupStatus.LOADED or state.current is None or state.forecast is None:
        return view

    offset = state.forecast.city.timezone
    view["weather"] = current_view(state.current, state.last_updated)
    view["days"] = [g.label for g in groups]
    if groups:
        view["selected_day"] = state.selected_day
        view["entries"] = [entry_view(e, offset) for e in groups[state.selected_day].entries]
    return view
