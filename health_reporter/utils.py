from __future__ import annotations

import datetime as dt
from typing import Any, Optional

import pytz

from .config import get_settings
from .errors import InvalidValue

# yyyy-MM-dd'T'HH:mm:ssZZZZZ
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
# yyyy-MM-dd
DATE_FORMAT = "%Y-%m-%d"


def get_tz() -> pytz.BaseTzInfo:
    return pytz.timezone(get_settings().TIMEZONE)


def localize(ts: dt.datetime, tz: Optional[dt.tzinfo] = None) -> dt.datetime:
    """Attach the configured zone to naive timestamps; aware ones pass through."""
    if ts.tzinfo is not None:
        return ts
    tz = tz or get_tz()
    if hasattr(tz, "localize"):
        return tz.localize(ts)
    return ts.replace(tzinfo=tz)


def _offset_suffix(offset: Optional[dt.timedelta]) -> str:
    total = int(offset.total_seconds()) if offset else 0
    if total == 0:
        return "Z"
    sign = "+" if total > 0 else "-"
    hours, rem = divmod(abs(total), 3600)
    return f"{sign}{hours:02d}:{rem // 60:02d}"


def format_timestamp(ts: dt.datetime, tz: Optional[dt.tzinfo] = None) -> str:
    tz = tz or get_tz()
    local = localize(ts, tz).astimezone(tz)
    return local.strftime("%Y-%m-%dT%H:%M:%S") + _offset_suffix(local.utcoffset())


def parse_timestamp(value: Any, field: str = "date") -> dt.datetime:
    if not isinstance(value, str):
        raise InvalidValue(f"{field}: {value!r} is not a timestamp string", field=field)
    try:
        return dt.datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError as exc:
        raise InvalidValue(f"{field}: {value!r} could not be parsed ({exc})", field=field) from exc


def format_date(day: dt.date | dt.datetime) -> str:
    if isinstance(day, dt.datetime):
        day = day.date()
    return day.strftime(DATE_FORMAT)


def parse_date(value: Any, field: str = "date") -> dt.date:
    if not isinstance(value, str):
        raise InvalidValue(f"{field}: {value!r} is not a date string", field=field)
    try:
        return dt.datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as exc:
        raise InvalidValue(f"{field}: {value!r} could not be parsed ({exc})", field=field) from exc


def start_of_day(day: dt.date, tz: Optional[dt.tzinfo] = None) -> dt.datetime:
    return localize(dt.datetime.combine(day, dt.time.min), tz or get_tz())
