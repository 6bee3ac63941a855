"""Top-level package for the calendar time-grid layout engine."""

from __future__ import annotations

from .calendar import CalendarEvent, Granularity, InvalidGranularity, ViewState
from .config import DEFAULT_SETTINGS, EngineSettings, load_settings
from .layout import (
    HourRange,
    assign_columns,
    compute_hour_range,
    current_offset,
    group_by_day,
    layout_view,
    position_event,
)
from .scheduler import Ticker, next_tick_boundary

__all__ = [
    "__version__",
    "CalendarEvent",
    "DEFAULT_SETTINGS",
    "EngineSettings",
    "Granularity",
    "HourRange",
    "InvalidGranularity",
    "Ticker",
    "ViewState",
    "assign_columns",
    "compute_hour_range",
    "current_offset",
    "group_by_day",
    "layout_view",
    "load_settings",
    "next_tick_boundary",
    "position_event",
]

__version__ = "0.1.0"
