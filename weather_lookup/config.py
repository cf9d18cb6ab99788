# ABOUTME: Environment-driven settings for the weather lookup app.
# ABOUTME: Reads the OpenWeatherMap key and tuning knobs from the environment or a .env file.

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """Runtime configuration for the lookup controller and HTTP client."""

    api_key: str = ""
    units: str = "metric"
    suggestion_limit: int = 5
    min_query_length: int = 2
    debounce_seconds: float = 0.3
    http_timeout: float = 10.0
    # IANA zone used to bucket forecast entries by date; None means the system local zone
    grouping_timezone: str | None = None


def load_settings() -> Settings:
    """Build Settings from environment variables, loading .env first."""
    load_dotenv()

    api_key = os.environ.get("OPENWEATHER_API_KEY", "")
    if not api_key:
        logger.warning("OPENWEATHER_API_KEY is not set, weather requests will be rejected upstream")

    overrides = {}
    if "WEATHER_DEBOUNCE_SECONDS" in os.environ:
        overrides["debounce_seconds"] = os.environ["WEATHER_DEBOUNCE_SECONDS"]
    if "WEATHER_HTTP_TIMEOUT" in os.environ:
        overrides["http_timeout"] = os.environ["WEATHER_HTTP_TIMEOUT"]

    return Settings(
        api_key=api_key,
        grouping_timezone=os.environ.get("WEATHER_GROUPING_TZ") or None,
        **overrides,
    )
