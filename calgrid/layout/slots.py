"""Translate click positions on a timeline back into times and events."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Optional

from ..timemath import start_of_day
from .hour_range import HourRange
from .positioner import EventBox


@dataclass(frozen=True)
class TimeSlot:
    start: datetime
    end: datetime


def time_at_offset(
    day: date,
    hour_range: HourRange,
    offset_hours: float,
    *,
    tz: tzinfo | None = None,
) -> datetime:
    """Timestamp under a click ``offset_hours`` below the top of the timeline.

    The offset is clamped to the rendered rows (``min`` through ``max`` inclusive)
    and truncated to the minute. Offsets reaching hour 24 and later land on the
    following day.
    """

    rendered_minutes = (hour_range.span + 1) * 60
    minutes = int(offset_hours * 60)
    minutes = max(0, min(minutes, rendered_minutes - 1))
    return start_of_day(day, tz) + timedelta(hours=hour_range.min, minutes=minutes)


def slot_at_offset(
    day: date,
    hour_range: HourRange,
    offset_hours: float,
    *,
    duration_minutes: int = 60,
    tz: tzinfo | None = None,
) -> TimeSlot:
    """The hour row under a click, as a slot for creating a new event."""

    moment = time_at_offset(day, hour_range, offset_hours, tz=tz)
    start = moment.replace(minute=0, second=0, microsecond=0)
    return TimeSlot(start=start, end=start + timedelta(minutes=duration_minutes))


def event_at_offset(
    boxes: Iterable[EventBox],
    offset_hours: float,
    x_fraction: float,
) -> Optional[EventBox]:
    """Return the box drawn on top at the click position, if any.

    Boxes later in ``boxes`` are drawn over earlier ones.
    """

    hit: Optional[EventBox] = None
    for box in boxes:
        if box.top_hours <= offset_hours < box.bottom_hours and (
            box.left_fraction <= x_fraction < box.right_fraction
        ):
            hit = box
    return hit


__all__ = ["TimeSlot", "event_at_offset", "slot_at_offset", "time_at_offset"]
