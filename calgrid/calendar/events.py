"""Calendar event records consumed by the layout engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo
from typing import Iterable, List, Mapping, Optional

from ..config import parse_bool

logger = logging.getLogger(__name__)

UNTITLED = "Untitled"


@dataclass(frozen=True)
class CalendarEvent:
    """Normalized representation of an event supplied by the data layer.

    ``end`` may be missing; layout code then assumes a one hour duration without
    touching the record. ``event_type`` is carried through for coloring only.
    """

    id: str
    title: Optional[str]
    start: datetime
    end: Optional[datetime] = None
    is_all_day: bool = False
    event_type: str = "REGULAR"
    location: Optional[str] = None

    @property
    def display_title(self) -> str:
        return self.title or UNTITLED

    @property
    def start_date(self) -> date:
        return self.start.date()


class EventParseError(ValueError):
    """Raised when an event record cannot be normalized."""


def event_from_record(record: Mapping[str, object], *, tz: tzinfo | None = None) -> CalendarEvent:
    """Build a :class:`CalendarEvent` from the JSON shape served by the events API.

    Expected keys are ``id``, ``title``, ``startDateTime``, ``endDateTime``,
    ``isAllDay``, ``eventType`` and ``location``. Only ``id`` and
    ``startDateTime`` are required.

    Timestamps carrying an offset are converted to ``tz`` (UTC by default) and
    stored naive, so every event compares on the same wall clock.
    """

    if not isinstance(record, Mapping):
        raise EventParseError(f"Event record must be a mapping, got {type(record).__name__}")

    raw_id = record.get("id")
    if raw_id is None or str(raw_id) == "":
        raise EventParseError("Event record is missing 'id'.")

    raw_start = record.get("startDateTime")
    if raw_start is None:
        raise EventParseError(f"Event {raw_id!r} is missing 'startDateTime'.")
    start = _parse_datetime(raw_start, tz)

    raw_end = record.get("endDateTime")
    end = _parse_datetime(raw_end, tz) if raw_end not in (None, "") else None

    title = record.get("title")
    location = record.get("location")
    event_type = record.get("eventType") or "REGULAR"

    return CalendarEvent(
        id=str(raw_id),
        title=str(title) if title is not None else None,
        start=start,
        end=end,
        is_all_day=_parse_flag(record.get("isAllDay", False), raw_id),
        event_type=str(event_type),
        location=str(location) if location is not None else None,
    )


def events_from_records(
    records: Iterable[Mapping[str, object]],
    *,
    tz: tzinfo | None = None,
) -> List[CalendarEvent]:
    """Normalize ``records``, logging and skipping the ones that are malformed."""

    normalized: List[CalendarEvent] = []
    for record in records:
        try:
            normalized.append(event_from_record(record, tz=tz))
        except EventParseError as exc:
            logger.warning("Skipping malformed event record: %s", exc)
    return normalized


def _parse_flag(value: object, event_id: object) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    flag = parse_bool(str(value))
    if flag is None:
        raise EventParseError(f"Event {event_id!r} has an unreadable 'isAllDay' value: {value!r}")
    return flag


def _parse_datetime(value: object, tz: tzinfo | None = None) -> datetime:
    if isinstance(value, datetime):
        return _to_wall_clock(value, tz)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value)
    cleaned = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        parsed = datetime.fromisoformat(cleaned)
    except ValueError as exc:
        raise EventParseError(f"Unable to parse datetime value: {text}") from exc
    return _to_wall_clock(parsed, tz)


def _to_wall_clock(value: datetime, tz: tzinfo | None) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(tz or timezone.utc).replace(tzinfo=None)


__all__ = [
    "CalendarEvent",
    "EventParseError",
    "UNTITLED",
    "event_from_record",
    "events_from_records",
]
