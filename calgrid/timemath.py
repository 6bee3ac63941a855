"""Numeric helpers for placing timestamps on an hour axis."""

from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Iterator, Optional

__all__ = [
    "add_months",
    "duration_hours",
    "effective_end",
    "end_of_month",
    "end_of_week",
    "extended_end_hour",
    "hour_of",
    "hour_offset",
    "hours_from",
    "is_same_day",
    "iter_days",
    "minute_of",
    "start_of_day",
    "start_of_month",
    "start_of_week",
]


def hour_of(value: datetime) -> int:
    return value.hour


def minute_of(value: datetime) -> int:
    return value.minute


def hour_offset(value: datetime) -> float:
    """Return the fractional hour of ``value`` (seconds are ignored)."""

    return value.hour + value.minute / 60


def hours_from(value: datetime, base_hour: int) -> float:
    return hour_offset(value) - base_hour


def effective_end(start: datetime, end: Optional[datetime], default_minutes: int = 60) -> datetime:
    """Return ``end`` or, when it is missing, ``start`` plus ``default_minutes``."""

    if end is None:
        return start + timedelta(minutes=default_minutes)
    return end


def duration_hours(start: datetime, end: datetime) -> float:
    """Signed duration between two timestamps in hours."""

    return (end - start).total_seconds() / 3600


def is_same_day(value: datetime, day: date) -> bool:
    return value.date() == day


def start_of_day(day: date, tz: tzinfo | None = None) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz)


def extended_end_hour(end: datetime, day: date, carry_before: int = 6) -> int:
    """Hour of ``end`` on the axis of ``day``.

    An end that lands on another calendar day before ``carry_before`` o'clock is
    treated as running past midnight, so 01:00 the next morning becomes 25.
    """

    hour = hour_of(end)
    if not is_same_day(end, day) and hour < carry_before:
        return hour + 24
    return hour


# ---------------------------------------------------------------------------
# Calendar arithmetic
# ---------------------------------------------------------------------------


def start_of_week(day: date, week_start: int = 0) -> date:
    """Return the first day of the week containing ``day``.

    ``week_start`` follows :meth:`date.weekday` numbering (0 is Monday).
    """

    return day - timedelta(days=(day.weekday() - week_start) % 7)


def end_of_week(day: date, week_start: int = 0) -> date:
    return start_of_week(day, week_start) + timedelta(days=6)


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def end_of_month(day: date) -> date:
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def add_months(day: date, months: int) -> date:
    """Move ``months`` forward (or back) and land on the first of that month."""

    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    return date(year, month + 1, 1)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every date from ``start`` to ``end`` inclusive."""

    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
