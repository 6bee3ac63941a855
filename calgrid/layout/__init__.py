"""Layout primitives for the month, week and day calendar views."""

from .columns import ColumnAssignment, assign_columns
from .engine import DayTimeline, WeekTimeline, layout_day, layout_grid, layout_view, layout_week_timeline
from .hour_range import HourRange, compute_hour_range
from .month import DayBucket, GridCell, agenda_sections, group_by_day
from .now import current_offset
from .positioner import EventBox, position_event
from .slots import TimeSlot, event_at_offset, slot_at_offset, time_at_offset

__all__ = [
    "ColumnAssignment",
    "DayBucket",
    "DayTimeline",
    "EventBox",
    "GridCell",
    "HourRange",
    "TimeSlot",
    "WeekTimeline",
    "agenda_sections",
    "assign_columns",
    "compute_hour_range",
    "current_offset",
    "event_at_offset",
    "group_by_day",
    "layout_day",
    "layout_grid",
    "layout_view",
    "layout_week_timeline",
    "position_event",
    "slot_at_offset",
    "time_at_offset",
]
