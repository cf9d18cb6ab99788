# ABOUTME: Buckets forecast entries by calendar date for day-by-day display.
# ABOUTME: Dates come from the viewer's time zone, not the forecast city's UTC offset.

from collections.abc import Iterable
from datetime import date, datetime, tzinfo

from weather_lookup.models import DayGroup, ForecastEntry

DAY_LABEL_FORMAT = "%a, %b %d"


def entry_date(entry: ForecastEntry, tz: tzinfo | None = None) -> date:
    """Calendar date of an entry in ``tz``, or in the system local zone when tz is None."""
    return datetime.fromtimestamp(entry.dt, tz=tz).date()


def group_forecast_by_day(entries: Iterable[ForecastEntry], tz: tzinfo | None = None) -> list[DayGroup]:
    """Group entries by calendar date, keeping first-seen date order and source order within a day."""
    buckets: dict[date, list[ForecastEntry]] = {}
    for entry in entries:
        buckets.setdefault(entry_date(entry, tz), []).append(entry)

    return [DayGroup(date=d, label=d.strftime(DAY_LABEL_FORMAT), entries=items) for d, items in buckets.items()]
