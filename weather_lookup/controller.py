# ABOUTME: Weather lookup controller orchestrating autocomplete, weather fetches and day selection.
# ABOUTME: Owns the debouncer and the single LookupState record the web adapter renders.

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, tzinfo
from zoneinfo import ZoneInfo

import httpx

from weather_lookup.debounce import Debouncer
from weather_lookup.deps import LookupDeps
from weather_lookup.grouping import group_forecast_by_day
from weather_lookup.models import CitySuggestion, DayGroup, ForecastEntry
from weather_lookup.state import LookupState
from weather_lookup.weather_service import get_current_weather, get_forecast, search_cities

logger = logging.getLogger(__name__)


class WeatherLookupController:
    """Single-session controller behind the weather lookup UI.

    Autocomplete runs through a debouncer and never surfaces errors. A weather
    fetch is two strictly ordered requests: current conditions by name, then the
    forecast by the coordinates that lookup resolved to. Either both results land
    in the state or neither does. When fetches overlap, the latest one wins and
    older completions are discarded.
    """

    def __init__(self, deps: LookupDeps, clock: Callable[[], datetime] = datetime.now):
        self.deps = deps
        self.state = LookupState()
        self._clock = clock
        self._debouncer = Debouncer(deps.settings.debounce_seconds)
        self._generation = 0
        tz_name = deps.settings.grouping_timezone
        self._grouping_tz: tzinfo | None = ZoneInfo(tz_name) if tz_name else None

    # Autocomplete

    def set_query(self, query: str) -> asyncio.Task | None:
        """Record a keystroke and (re)schedule the suggestion lookup.

        Short queries clear the suggestions right away without scheduling anything.
        Returns the pending task so callers can await the debounced lookup.
        """
        self.state = self.state.with_query(query)
        if len(query.strip()) < self.deps.settings.min_query_length:
            self._debouncer.cancel()
            self.state = self.state.with_suggestions([])
            return None
        return self._debouncer.schedule(self.fetch_suggestions, query)

    async def fetch_suggestions(self, query: str) -> list[CitySuggestion]:
        """Look up matches for ``query``; on failure keep the previous suggestions."""
        if len(query.strip()) < self.deps.settings.min_query_length:
            self.state = self.state.with_suggestions([])
            return []

        settings = self.deps.settings
        try:
            suggestions = await search_cities(
                self.deps.http_client, settings.api_key, query.strip(), settings.suggestion_limit
            )
        except (httpx.HTTPError, ValueError):
            logger.warning("Suggestion lookup failed for %r", query, exc_info=True)
            return self.state.suggestions

        self.state = self.state.with_suggestions(suggestions)
        return suggestions

    def show_suggestions(self) -> None:
        """Show the suggestion list (input focused)."""
        self.state = self.state.with_suggestions_visible(True)

    def hide_suggestions(self) -> None:
        """Hide the suggestion list (input blurred) without discarding matches."""
        self.state = self.state.with_suggestions_visible(False)

    async def select_suggestion(self, index: int) -> LookupState:
        """Search for the suggestion at ``index`` using its display name."""
        suggestions = self.state.suggestions
        if not 0 <= index < len(suggestions):
            raise IndexError(f"suggestion index {index} out of range for {len(suggestions)} suggestions")
        suggestion = suggestions[index]
        self._debouncer.cancel()
        self.state = self.state.model_copy(update={"query": suggestion.display_name})
        return await self.fetch_weather(suggestion.display_name)

    # Weather fetch

    async def fetch_weather(self, selected_city: str | None = None) -> LookupState:
        """Fetch current conditions and forecast for the query, or ``selected_city`` when given."""
        city = (selected_city or self.state.query).strip()
        if not city:
            return self.state

        self._generation += 1
        generation = self._generation
        self.state = self.state.begin_loading()

        settings = self.deps.settings
        client = self.deps.http_client
        forecast = None
        try:
            current = await get_current_weather(client, settings.api_key, city, settings.units)
            if current is not None:
                forecast = await get_forecast(
                    client, settings.api_key, current.coord.lat, current.coord.lon, settings.units
                )
        except (httpx.HTTPError, ValueError):
            logger.warning("Weather fetch failed for %r", city, exc_info=True)
            current = None

        if generation != self._generation:
            logger.debug("Discarding stale weather fetch for %r", city)
            return self.state

        if current is None or forecast is None:
            self.state = self.state.fail()
        else:
            self.state = self.state.finish(current, forecast, self._clock())
        return self.state

    # Day selection

    @property
    def day_groups(self) -> list[DayGroup]:
        """Forecast entries bucketed by date in the viewer's time zone."""
        if self.state.forecast is None:
            return []
        return group_forecast_by_day(self.state.forecast.entries, self._grouping_tz)

    def select_day(self, index: int) -> LookupState:
        """Choose which day's entries are visible. Raises IndexError outside the grouped range."""
        groups = self.day_groups
        if not 0 <= index < len(groups):
            raise IndexError(f"day index {index} out of range for {len(groups)} forecast days")
        self.state = self.state.with_selected_day(index)
        return self.state

    @property
    def visible_entries(self) -> list[ForecastEntry]:
        groups = self.day_groups
        if not groups:
            return []
        return groups[self.state.selected_day].entries

    def close(self) -> None:
        """Drop any pending suggestion lookup."""
        self._debouncer.cancel()
