"""Offset of the live "now" marker inside a timeline."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from .hour_range import HourRange


def current_offset(
    hour_range: HourRange,
    now: datetime,
    *,
    day: Optional[date] = None,
) -> Optional[float]:
    """Return how many hours below the top of ``hour_range`` the marker sits.

    ``None`` means the marker is hidden because the hour of ``now`` is outside the
    window. When ``day`` is given the marker is also hidden unless ``now`` falls on
    that day or on the following morning, whose hours count from 24 upwards.
    """

    hour = now.hour
    if day is not None:
        days_ahead = (now.date() - day).days
        if days_ahead not in (0, 1):
            return None
        hour += 24 * days_ahead

    if not hour_range.contains_hour(hour):
        return None
    return hour + now.minute / 60 - hour_range.min


__all__ = ["current_offset"]
