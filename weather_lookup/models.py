# ABOUTME: Pydantic BaseModels for OpenWeatherMap responses and geocoding suggestions.
# ABOUTME: Defines structured types for current conditions, forecast entries, and day buckets.

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CATEGORY = "default"


class CitySuggestion(BaseModel):
    """One geocoding match offered as an autocomplete suggestion."""

    name: str
    country: str
    state: str | None = None
    lat: float
    lon: float

    @property
    def display_name(self) -> str:
        if self.state:
            return f"{self.name}, {self.state}, {self.country}"
        return f"{self.name}, {self.country}"


class Coordinates(BaseModel):
    """Latitude and longitude in decimal degrees."""

    lat: float
    lon: float


class WeatherCondition(BaseModel):
    """Condition group (``main``), human description and icon code."""

    id: int | None = None
    main: str
    description: str = ""
    icon: str | None = None


class MainReadings(BaseModel):
    """Temperatures in °C plus pressure (hPa) and humidity (%)."""

    temp: float
    feels_like: float | None = None
    temp_min: float | None = None
    temp_max: float | None = None
    pressure: float | None = None
    humidity: float | None = None


class Wind(BaseModel):
    """Wind speed in m/s and meteorological bearing in degrees."""

    speed: float | None = None
    deg: float | None = None


class SunInfo(BaseModel):
    """The ``sys`` block: country code plus sunrise and sunset as unix seconds."""

    country: str | None = None
    sunrise: int | None = None
    sunset: int | None = None


class CurrentWeather(BaseModel):
    """Parsed response from the current-conditions endpoint."""

    name: str
    coord: Coordinates
    weather: list[WeatherCondition] = []
    main: MainReadings
    wind: Wind = Wind()
    visibility: int | None = None
    sys: SunInfo = SunInfo()
    timezone: int = 0
    dt: int

    @property
    def country(self) -> str | None:
        return self.sys.country

    @property
    def category(self) -> str:
        """Lower-cased condition group of the first weather entry, used for theming."""
        if not self.weather:
            return DEFAULT_CATEGORY
        return self.weather[0].main.lower()


class ForecastEntry(BaseModel):
    """One 3-hour step of the forecast."""

    dt: int
    main: MainReadings
    weather: list[WeatherCondition] = []
    wind: Wind = Wind()
    visibility: int | None = None
    pop: float | None = None
    dt_txt: str | None = None


class ForecastCity(BaseModel):
    """City metadata returned alongside the forecast, including its UTC offset."""

    name: str = ""
    country: str | None = None
    timezone: int = 0
    coord: Coordinates | None = None
    sunrise: int | None = None
    sunset: int | None = None


class Forecast(BaseModel):
    """Parsed response from the 5 day / 3 hour forecast endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    entries: list[ForecastEntry] = Field(default=[], alias="list")
    city: ForecastCity = ForecastCity()


class DayGroup(BaseModel):
    """Forecast entries that share one calendar date."""

    date: date
    label: str
    entries: list[ForecastEntry] = []
