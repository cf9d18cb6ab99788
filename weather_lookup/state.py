# ABOUTME: Immutable UI state record for the weather lookup controller.
# ABOUTME: Every transition returns a new LookupState so current and forecast always change together.

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict

from weather_lookup.models import DEFAULT_CATEGORY, CitySuggestion, CurrentWeather, Forecast

NOT_FOUND_MESSAGE = "City not found. Please try another location."


class LookupStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    LOADED = "loaded"


class LookupState(BaseModel):
    """Everything the view renders, swapped whole between awaits."""

    model_config = ConfigDict(frozen=True)

    query: str = ""
    suggestions: list[CitySuggestion] = []
    show_suggestions: bool = False
    status: LookupStatus = LookupStatus.IDLE
    current: CurrentWeather | None = None
    forecast: Forecast | None = None
    category: str = DEFAULT_CATEGORY
    error: str | None = None
    last_updated: datetime | None = None
    selected_day: int = 0

    @property
    def loading(self) -> bool:
        return self.status is LookupStatus.LOADING

    def with_query(self, query: str) -> "LookupState":
        return self.model_copy(update={"query": query, "show_suggestions": True})

    def with_suggestions(self, suggestions: list[CitySuggestion]) -> "LookupState":
        return self.model_copy(update={"suggestions": suggestions})

    def with_suggestions_visible(self, visible: bool) -> "LookupState":
        return self.model_copy(update={"show_suggestions": visible})

    def begin_loading(self) -> "LookupState":
        """idle|loaded|error -> loading. Clears the error and hides suggestions."""
        return self.model_copy(update={"status": LookupStatus.LOADING, "error": None, "show_suggestions": False})

    def finish(self, current: CurrentWeather, forecast: Forecast, now: datetime) -> "LookupState":
        """loading -> loaded with both payloads and the day selector back at 0."""
        return self.model_copy(
            update={
                "status": LookupStatus.LOADED,
                "current": current,
                "forecast": forecast,
                "category": current.category,
                "error": None,
                "last_updated": now,
                "selected_day": 0,
            }
        )

    def fail(self, message: str = NOT_FOUND_MESSAGE) -> "LookupState":
        """loading -> error. Drops both payloads so nothing partial is displayed."""
        return self.model_copy(
            update={
                "status": LookupStatus.ERROR,
                "current": None,
                "forecast": None,
                "category": DEFAULT_CATEGORY,
                "error": message,
                "selected_day": 0,
            }
        )

    def with_selected_day(self, index: int) -> "LookupState":
        return self.model_copy(update={"selected_day": index})
