"""
Time helpers. Timestamps are stored as naive UTC; calendar days are computed
in the caller's zone.
"""

import calendar
import datetime
from typing import Optional, Union

import pytz

from bloom.core.config import DEFAULT_TIMEZONE

Zone = Union[str, datetime.tzinfo, None]


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(pytz.UTC).replace(tzinfo=None)


def as_aware(dt: datetime.datetime) -> datetime.datetime:
    if dt.tzinfo is None:
        return pytz.UTC.localize(dt)
    return dt


def as_utc_naive(dt: datetime.datetime) -> datetime.datetime:
    return as_aware(dt).astimezone(pytz.UTC).replace(tzinfo=None)


def resolve_zone(tz: Zone = None) -> datetime.tzinfo:
    """
    Returns a tzinfo for an IANA name, an existing tzinfo, or the configured default.

    Raises:
        ValueError: If the name is not a known zone.
    """
    if isinstance(tz, datetime.tzinfo):
        return tz
    try:
        return pytz.timezone(tz or DEFAULT_TIMEZONE)
    except pytz.UnknownTimeZoneError:
        raise ValueError(f"Unknown time zone '{tz}'")


def to_local(dt: datetime.datetime, tz: Zone = None) -> datetime.datetime:
    return as_aware(dt).astimezone(resolve_zone(tz))


def local_now(tz: Zone = None) -> datetime.datetime:
    return datetime.datetime.now(resolve_zone(tz))


def local_today(tz: Zone = None) -> datetime.date:
    return local_now(tz).date()


def shift_months(dt: datetime.datetime, months: int) -> datetime.datetime:
    """Moves dt by whole calendar months, clamping the day to the target month's length."""
    index = dt.year * 12 + (dt.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def start_of_day(dt: datetime.datetime) -> datetime.datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def window_start(days: int, tz: Zone = None, now: Optional[datetime.datetime] = None) -> datetime.datetime:
    """Instant `days` days before now, as used for trailing analytics windows."""
    now = now or local_now(tz)
    return now - datetime.timedelta(days=days)
