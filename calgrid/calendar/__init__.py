"""Event records and navigation state for a calendar instance."""

from .events import CalendarEvent, EventParseError, event_from_record, events_from_records
from .view_state import DateRange, Granularity, InvalidGranularity, ViewState

__all__ = [
    "CalendarEvent",
    "DateRange",
    "EventParseError",
    "Granularity",
    "InvalidGranularity",
    "ViewState",
    "event_from_record",
    "events_from_records",
]
