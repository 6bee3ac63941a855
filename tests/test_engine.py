from __future__ import annotations

from datetime import date, datetime

import pytest

from calgrid.calendar.events import CalendarEvent, events_from_records
from calgrid.calendar.view_state import DateRange, Granularity, ViewState
from calgrid.config import EngineSettings
from calgrid.layout.engine import (
    DayTimeline,
    WeekTimeline,
    layout_day,
    layout_grid,
    layout_view,
    layout_week_timeline,
)
from calgrid.layout.hour_range import HourRange

DAY = date(2024, 5, 15)


def _event(event_id: str, start: datetime, end: datetime | None = None, *, all_day: bool = False) -> CalendarEvent:
    return CalendarEvent(id=event_id, title=event_id.upper(), start=start, end=end, is_all_day=all_day)


@pytest.fixture
def standup_day() -> list[CalendarEvent]:
    return [
        _event("a", datetime(2024, 5, 15, 9, 0), datetime(2024, 5, 15, 10, 0)),
        _event("b", datetime(2024, 5, 15, 9, 30), datetime(2024, 5, 15, 11, 0)),
        _event("c", datetime(2024, 5, 15, 14, 0), datetime(2024, 5, 15, 15, 0)),
    ]


def test_day_timeline_end_to_end(standup_day: list[CalendarEvent]) -> None:
    timeline = layout_day(standup_day, DAY)

    assert timeline.hour_range == HourRange(8, 16)
    assert timeline.rendered_hours == 9
    placed = {box.event.id: box for box in timeline.positioned}
    assert [box.event.id for box in timeline.positioned] == ["a", "b", "c"]
    assert placed["a"].left_fraction == 0.0
    assert placed["b"].left_fraction == pytest.approx(0.5)
    assert placed["c"].left_fraction == 0.0
    assert all(box.width_fraction == pytest.approx(0.5) for box in timeline.positioned)
    assert placed["a"].top_hours == 1.0
    assert placed["b"].top_hours == 1.5
    assert placed["b"].height_hours == 1.5
    assert placed["c"].top_hours == 6.0
    assert timeline.current_time_offset is None


def test_per_cluster_setting_widens_isolated_events(standup_day: list[CalendarEvent]) -> None:
    timeline = layout_day(standup_day, DAY, settings=EngineSettings(per_cluster_columns=True))

    placed = {box.event.id: box for box in timeline.positioned}
    assert placed["a"].width_fraction == pytest.approx(0.5)
    assert placed["c"].width_fraction == 1.0


def test_all_day_events_go_to_their_own_lane(standup_day: list[CalendarEvent]) -> None:
    holiday = _event("holiday", datetime(2024, 5, 15), all_day=True)

    timeline = layout_day([holiday, *standup_day], DAY)

    assert timeline.all_day_events == (holiday,)
    assert "holiday" not in {box.event.id for box in timeline.positioned}
    assert timeline.hour_range == HourRange(8, 16)


def test_day_timeline_ignores_other_days(standup_day: list[CalendarEvent]) -> None:
    tomorrow = _event("z", datetime(2024, 5, 16, 6, 0), datetime(2024, 5, 16, 7, 0))

    timeline = layout_day([*standup_day, tomorrow], DAY)

    assert "z" not in {box.event.id for box in timeline.positioned}


def test_current_time_marker(standup_day: list[CalendarEvent]) -> None:
    timeline = layout_day(standup_day, DAY, now=datetime(2024, 5, 15, 12, 30))
    elsewhere = layout_day(standup_day, DAY, now=datetime(2024, 5, 17, 12, 30))

    assert timeline.current_time_offset == pytest.approx(4.5)
    assert elsewhere.current_time_offset is None


def test_empty_day_uses_fallback_window() -> None:
    timeline = layout_day([], DAY)

    assert timeline == DayTimeline(
        day=DAY,
        hour_range=HourRange(8, 18),
        all_day_events=(),
        positioned=(),
        current_time_offset=None,
    )


def test_month_grid_limits_each_day(standup_day: list[CalendarEvent]) -> None:
    state = ViewState(DAY, Granularity.MONTH)

    cells = layout_grid(standup_day, state)

    cell = cells[DAY]
    assert [placement.event.id for placement in cell.visible] == ["a", "b"]
    assert [event.id for event in cell.overflow_events] == ["c"]
    assert cell.more_label == "+1 more"
    assert len(cells) == 35
    assert min(cells) == date(2024, 4, 29)


def test_grid_limit_can_be_overridden(standup_day: list[CalendarEvent]) -> None:
    state = ViewState(DAY, Granularity.WEEK)

    cells = layout_grid(standup_day, state, max_per_day=3)

    assert len(cells) == 7
    assert cells[DAY].overflow_count == 0
    assert all(cell.in_current_month for cell in cells.values())


def test_week_timeline_shares_one_hour_axis() -> None:
    events = [
        _event("early", datetime(2024, 5, 13, 7, 0), datetime(2024, 5, 13, 8, 0)),
        _event("late", datetime(2024, 5, 17, 19, 0), datetime(2024, 5, 17, 21, 0)),
    ]
    state = ViewState(DAY, Granularity.WEEK)

    week = layout_week_timeline(events, state)

    assert week.dates == DateRange(date(2024, 5, 13), date(2024, 5, 19))
    assert len(week.days) == 7
    assert week.hour_range == HourRange(3, 24)
    assert {day.hour_range for day in week.days} == {week.hour_range}
    assert [box.event.id for box in week.days[0].positioned] == ["early"]
    assert [box.event.id for box in week.days[4].positioned] == ["late"]


def test_week_timeline_without_events_uses_fallback() -> None:
    week = layout_week_timeline([], ViewState(DAY, Granularity.WEEK))

    assert week.hour_range == HourRange(8, 18)


def test_layout_view_dispatches_on_granularity(standup_day: list[CalendarEvent]) -> None:
    state = ViewState(DAY, Granularity.DAY)
    assert isinstance(layout_view(standup_day, state), DayTimeline)

    state.set_granularity(Granularity.WEEK)
    assert isinstance(layout_view(standup_day, state, timeline=True), WeekTimeline)
    assert len(layout_view(standup_day, state)) == 7

    state.set_granularity(Granularity.MONTH)
    grid = layout_view(standup_day, state, max_per_day=1)
    assert grid[DAY].overflow_count == 2


def test_week_grid_shows_more_events_per_cell(standup_day: list[CalendarEvent]) -> None:
    week = layout_grid(standup_day, ViewState(DAY, Granularity.WEEK))
    tight = layout_grid(
        standup_day,
        ViewState(DAY, Granularity.WEEK),
        settings=EngineSettings(cell_max_per_day=1),
    )

    assert [placement.event.id for placement in week[DAY].visible] == ["a", "b", "c"]
    assert tight[DAY].more_label == "+2 more"


def test_degenerate_events_stay_visible_beside_neighbours() -> None:
    events = [
        _event("inverted", datetime(2024, 5, 15, 10, 0), datetime(2024, 5, 15, 9, 0)),
        _event("meeting", datetime(2024, 5, 15, 10, 0), datetime(2024, 5, 15, 11, 0)),
        _event("ping", datetime(2024, 5, 15, 13, 0), datetime(2024, 5, 15, 13, 0)),
        _event("pong", datetime(2024, 5, 15, 13, 0), datetime(2024, 5, 15, 13, 0)),
    ]

    timeline = layout_day(events, DAY)

    placed = {box.event.id: box for box in timeline.positioned}
    assert placed["inverted"].height_hours == 0.5
    for first, second in (("inverted", "meeting"), ("ping", "pong")):
        a, b = placed[first], placed[second]
        assert a.top_hours == b.top_hours
        assert a.right_fraction <= b.left_fraction or b.right_fraction <= a.left_fraction


def test_mixed_utc_and_local_records_lay_out() -> None:
    events = events_from_records(
        [
            {"id": "utc", "startDateTime": "2024-05-15T09:00:00Z", "endDateTime": "2024-05-15T10:00:00Z"},
            {"id": "local", "startDateTime": "2024-05-15T09:30:00", "endDateTime": "2024-05-15T11:00:00"},
        ]
    )

    timeline = layout_day(events, DAY)

    assert [box.event.id for box in timeline.positioned] == ["utc", "local"]
    assert timeline.positioned[1].left_fraction == pytest.approx(0.5)
