"""Convert events and column slots into hour/fraction geometry."""

from __future__ import annotations

from dataclasses import dataclass

from ..calendar.events import CalendarEvent
from ..config import DEFAULT_SETTINGS, EngineSettings
from ..timemath import duration_hours, hours_from
from .columns import ColumnAssignment
from .hour_range import HourRange


@dataclass(frozen=True)
class EventBox:
    """Render-ready placement of a timed event.

    Vertical values are hours from the top of the visible window, horizontal
    values are fractions of the day column width.
    """

    event: CalendarEvent
    top_hours: float
    height_hours: float
    left_fraction: float
    width_fraction: float

    @property
    def bottom_hours(self) -> float:
        return self.top_hours + self.height_hours

    @property
    def right_fraction(self) -> float:
        return self.left_fraction + self.width_fraction


def event_height_hours(event: CalendarEvent, settings: EngineSettings = DEFAULT_SETTINGS) -> float:
    if event.end is None:
        duration = settings.default_duration_minutes / 60
    else:
        duration = duration_hours(event.start, event.end)
    return max(duration, settings.min_height_hours)


def position_event(
    event: CalendarEvent,
    assignment: ColumnAssignment,
    hour_range: HourRange,
    *,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> EventBox:
    total = max(1, assignment.total_columns)
    slot = 1 / total
    return EventBox(
        event=event,
        top_hours=hours_from(event.start, hour_range.min),
        height_hours=event_height_hours(event, settings),
        left_fraction=assignment.column * slot,
        width_fraction=slot - settings.column_gutter,
    )


__all__ = ["EventBox", "event_height_hours", "position_event"]
