"""Per-day grouping for the month and week grids and the agenda list."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ..calendar.events import CalendarEvent
from ..timemath import iter_days

LOGGER = logging.getLogger(__name__)

ALL_DAY_LABEL = "All day"


@dataclass(frozen=True)
class DayBucket:
    """Events of one day split at the display cap."""

    day: date
    visible: Tuple[CalendarEvent, ...] = ()
    overflow: Tuple[CalendarEvent, ...] = ()

    @property
    def overflow_count(self) -> int:
        return len(self.overflow)

    @property
    def total(self) -> int:
        return len(self.visible) + len(self.overflow)


@dataclass(frozen=True)
class MonthEventPlacement:
    """A visible entry of a grid cell, ``slot`` counting from the top of the cell."""

    event: CalendarEvent
    slot: int
    start_label: str
    title: str


@dataclass(frozen=True)
class GridCell:
    day: date
    in_current_month: bool
    visible: Tuple[MonthEventPlacement, ...]
    overflow_events: Tuple[CalendarEvent, ...]

    @property
    def overflow_count(self) -> int:
        return len(self.overflow_events)

    @property
    def more_label(self) -> Optional[str]:
        """Text of the "+N more" affordance, ``None`` when nothing is hidden."""

        if not self.overflow_events:
            return None
        return f"+{self.overflow_count} more"


@dataclass(frozen=True)
class AgendaSection:
    day: date
    label: str
    events: Tuple[CalendarEvent, ...]


def group_by_day(
    events: Iterable[CalendarEvent],
    range_start: date,
    range_end: date,
    max_per_day: int,
) -> Dict[date, DayBucket]:
    """Bucket events by start date and cut each day at ``max_per_day``.

    Every date in ``[range_start, range_end]`` gets a bucket, empty when nothing
    starts that day. Events starting outside the range are ignored and a multi-day
    event only shows on its first day. Ordering within a day is by start time, with
    the input order kept for ties.
    """

    if max_per_day < 0:
        raise ValueError(f"max_per_day must not be negative, got {max_per_day}")

    by_day: Dict[date, List[CalendarEvent]] = defaultdict(list)
    for event in events:
        day = event.start.date()
        if range_start <= day <= range_end:
            by_day[day].append(event)

    buckets: Dict[date, DayBucket] = {}
    for day in iter_days(range_start, range_end):
        ordered = sorted(by_day.get(day, ()), key=lambda event: event.start)
        buckets[day] = DayBucket(
            day=day,
            visible=tuple(ordered[:max_per_day]),
            overflow=tuple(ordered[max_per_day:]),
        )

    LOGGER.debug(
        "Grouped events into %d day buckets between %s and %s",
        len(buckets),
        range_start.isoformat(),
        range_end.isoformat(),
    )
    return buckets


def start_label(event: CalendarEvent) -> str:
    if event.is_all_day:
        return ALL_DAY_LABEL
    return f"{event.start:%H:%M}"


def build_grid_cells(
    buckets: Mapping[date, DayBucket],
    *,
    focus_month: Optional[date] = None,
) -> Dict[date, GridCell]:
    """Turn day buckets into cells ready for the grid.

    ``focus_month`` marks which cells belong to the displayed month; the leading
    and trailing days of neighbouring months get ``in_current_month=False``.
    """

    cells: Dict[date, GridCell] = {}
    for day, bucket in buckets.items():
        in_month = focus_month is None or (
            day.year == focus_month.year and day.month == focus_month.month
        )
        cells[day] = GridCell(
            day=day,
            in_current_month=in_month,
            visible=tuple(
                MonthEventPlacement(
                    event=event,
                    slot=slot,
                    start_label=start_label(event),
                    title=event.display_title,
                )
                for slot, event in enumerate(bucket.visible)
            ),
            overflow_events=bucket.overflow,
        )
    return cells


def section_label(day: date, today: date) -> str:
    if day == today:
        return "Today"
    if day == today + timedelta(days=1):
        return "Tomorrow"
    return f"{day:%A}, {day:%B} {day.day}"


def agenda_sections(
    events: Iterable[CalendarEvent],
    range_start: date,
    range_end: date,
    *,
    today: date,
) -> List[AgendaSection]:
    """List the days of ``[range_start, range_end]`` that have events.

    All-day events come first within a day, then timed events by start.
    """

    buckets = group_by_day(events, range_start, range_end, max_per_day=0)
    sections: List[AgendaSection] = []
    for day, bucket in buckets.items():
        if not bucket.overflow:
            continue
        ordered = sorted(bucket.overflow, key=lambda event: (not event.is_all_day, event.start))
        sections.append(AgendaSection(day=day, label=section_label(day, today), events=tuple(ordered)))
    return sections


__all__ = [
    "ALL_DAY_LABEL",
    "AgendaSection",
    "DayBucket",
    "GridCell",
    "MonthEventPlacement",
    "agenda_sections",
    "build_grid_cells",
    "group_by_day",
    "section_label",
    "start_label",
]
