"""Compose the layout primitives into per-view layouts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from ..calendar.events import CalendarEvent
from ..calendar.view_state import DateRange, Granularity, ViewState
from ..config import DEFAULT_SETTINGS, EngineSettings
from ..timemath import end_of_week, start_of_week
from .columns import assign_columns, sort_for_packing
from .hour_range import HourRange, compute_hour_range, merge_hour_ranges
from .month import GridCell, build_grid_cells, group_by_day
from .now import current_offset
from .positioner import EventBox, position_event

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayTimeline:
    """Layout of one day column in the day or week timeline."""

    day: date
    hour_range: HourRange
    all_day_events: Tuple[CalendarEvent, ...]
    positioned: Tuple[EventBox, ...]
    current_time_offset: Optional[float]

    @property
    def rendered_hours(self) -> int:
        """Height of the timeline in hours; both bounds of the range are rows."""

        return self.hour_range.span + 1


@dataclass(frozen=True)
class WeekTimeline:
    dates: DateRange
    hour_range: HourRange
    days: Tuple[DayTimeline, ...]


GridLayout = Dict[date, GridCell]
ViewLayout = Union[GridLayout, WeekTimeline, DayTimeline]


def layout_day(
    events: Iterable[CalendarEvent],
    day: date,
    *,
    now: Optional[datetime] = None,
    hour_range: Optional[HourRange] = None,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> DayTimeline:
    """Lay out the events starting on ``day``.

    All-day events are passed through for the separate lane; timed events are
    packed into columns and positioned within ``hour_range`` (computed from the
    day's events when not supplied). ``now`` drives the current-time marker.
    """

    day_events = [event for event in events if event.start.date() == day]
    all_day = tuple(event for event in day_events if event.is_all_day)
    timed = sort_for_packing(day_events)

    if hour_range is None:
        hour_range = compute_hour_range(day_events, day, settings=settings)

    assignments = assign_columns(
        timed,
        per_cluster=settings.per_cluster_columns,
        default_minutes=settings.default_duration_minutes,
        min_minutes=settings.min_height_hours * 60,
    )
    positioned = tuple(
        position_event(event, assignments[event.id], hour_range, settings=settings)
        for event in timed
    )
    offset = current_offset(hour_range, now, day=day) if now is not None else None

    LOGGER.debug(
        "Laid out %s: %d timed, %d all-day, hours %d-%d",
        day.isoformat(),
        len(positioned),
        len(all_day),
        hour_range.min,
        hour_range.max,
    )
    return DayTimeline(
        day=day,
        hour_range=hour_range,
        all_day_events=all_day,
        positioned=positioned,
        current_time_offset=offset,
    )


def week_hour_range(
    events: Sequence[CalendarEvent],
    days: Iterable[date],
    *,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> HourRange:
    """Shared hour axis of a week: the union of the ranges of days with timed events."""

    ranges: List[HourRange] = []
    for day in days:
        if any(not event.is_all_day and event.start.date() == day for event in events):
            ranges.append(compute_hour_range(events, day, settings=settings))
    return merge_hour_ranges(ranges, settings=settings)


def layout_week_timeline(
    events: Iterable[CalendarEvent],
    view_state: ViewState,
    *,
    now: Optional[datetime] = None,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> WeekTimeline:
    events = list(events)
    week = DateRange(
        start_of_week(view_state.anchor, view_state.week_start),
        end_of_week(view_state.anchor, view_state.week_start),
    )
    shared = week_hour_range(events, week, settings=settings)
    days = tuple(
        layout_day(events, day, now=now, hour_range=shared, settings=settings) for day in week
    )
    return WeekTimeline(dates=week, hour_range=shared, days=days)


def layout_grid(
    events: Iterable[CalendarEvent],
    view_state: ViewState,
    *,
    max_per_day: Optional[int] = None,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> GridLayout:
    """Month or week grid cells for the view's visible range.

    Without an explicit ``max_per_day`` the month grid shows
    ``settings.month_max_per_day`` events per cell and the taller week cells show
    ``settings.cell_max_per_day``.
    """

    visible = view_state.visible_range()
    limit = max_per_day
    if limit is None:
        if view_state.granularity is Granularity.MONTH:
            limit = settings.month_max_per_day
        else:
            limit = settings.cell_max_per_day
    buckets = group_by_day(events, visible.start, visible.end, limit)
    focus = view_state.anchor if view_state.granularity is Granularity.MONTH else None
    return build_grid_cells(buckets, focus_month=focus)


def layout_view(
    events: Iterable[CalendarEvent],
    view_state: ViewState,
    *,
    now: Optional[datetime] = None,
    timeline: bool = False,
    max_per_day: Optional[int] = None,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> ViewLayout:
    """Layout for whatever ``view_state`` currently shows.

    Month is always a grid and day always a timeline; the week view is a grid
    unless ``timeline`` is set.
    """

    if view_state.granularity is Granularity.DAY:
        return layout_day(events, view_state.anchor, now=now, settings=settings)
    if view_state.granularity is Granularity.WEEK and timeline:
        return layout_week_timeline(events, view_state, now=now, settings=settings)
    return layout_grid(events, view_state, max_per_day=max_per_day, settings=settings)


__all__ = [
    "DayTimeline",
    "GridLayout",
    "ViewLayout",
    "WeekTimeline",
    "layout_day",
    "layout_grid",
    "layout_view",
    "layout_week_timeline",
    "week_hour_range",
]
