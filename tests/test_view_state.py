from __future__ import annotations

from datetime import date

import pytest

from calgrid.calendar.view_state import (
    DateRange,
    Granularity,
    InvalidGranularity,
    ViewState,
    parse_granularity,
)
from calgrid.config import EngineSettings


@pytest.mark.parametrize(
    "granularity, anchor",
    [
        (Granularity.MONTH, date(2024, 5, 1)),
        (Granularity.WEEK, date(2024, 5, 15)),
        (Granularity.DAY, date(2024, 5, 31)),
        (Granularity.DAY, date(2024, 12, 31)),
    ],
)
def test_next_then_previous_round_trips(granularity: Granularity, anchor: date) -> None:
    state = ViewState(anchor, granularity)

    state.next()
    state.previous()

    assert state.anchor == anchor
    assert state.granularity is granularity


def test_month_navigation_anchors_to_first_of_month() -> None:
    state = ViewState(date(2024, 1, 31), Granularity.MONTH)

    assert state.next() == date(2024, 2, 1)
    assert state.next() == date(2024, 3, 1)
    assert state.previous() == date(2024, 2, 1)


def test_mid_month_round_trip_keeps_the_visible_grid() -> None:
    state = ViewState(date(2024, 5, 15), Granularity.MONTH)
    before = state.visible_range()

    state.next()
    state.previous()

    assert state.anchor == date(2024, 5, 1)
    assert state.visible_range() == before


def test_week_and_day_steps() -> None:
    week = ViewState(date(2024, 5, 15), "week")
    assert week.next() == date(2024, 5, 22)

    day = ViewState(date(2024, 2, 28), "DAY")
    assert day.next() == date(2024, 2, 29)
    assert day.next() == date(2024, 3, 1)


def test_today_resets_anchor_and_keeps_granularity() -> None:
    state = ViewState(date(2020, 1, 1), Granularity.WEEK, today_provider=lambda: date(2024, 5, 15))

    assert state.today() == date(2024, 5, 15)
    assert state.granularity is Granularity.WEEK


def test_set_granularity_keeps_anchor() -> None:
    state = ViewState(date(2024, 5, 15))

    state.set_granularity(Granularity.DAY)

    assert state.anchor == date(2024, 5, 15)
    assert state.granularity is Granularity.DAY


@pytest.mark.parametrize("value", ["year", "", 3, None])
def test_invalid_granularity_is_rejected(value: object) -> None:
    state = ViewState(date(2024, 5, 15))

    with pytest.raises(InvalidGranularity):
        state.set_granularity(value)  # type: ignore[arg-type]

    assert state.granularity is Granularity.MONTH


def test_invalid_granularity_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        ViewState(date(2024, 5, 15), "fortnight")
    assert parse_granularity(" Week ") is Granularity.WEEK


def test_month_range_covers_whole_weeks() -> None:
    state = ViewState(date(2024, 5, 15), Granularity.MONTH)

    visible = state.visible_range()

    assert visible == DateRange(date(2024, 4, 29), date(2024, 6, 2))
    assert len(visible) == 35
    assert visible.start.weekday() == 0


def test_month_range_with_sunday_weeks() -> None:
    state = ViewState(date(2024, 5, 15), Granularity.MONTH, week_start=6)

    assert state.visible_range() == DateRange(date(2024, 4, 28), date(2024, 6, 1))


def test_week_and_day_ranges() -> None:
    week = ViewState(date(2024, 5, 15), Granularity.WEEK)
    day = ViewState(date(2024, 5, 15), Granularity.DAY)

    assert week.visible_range() == DateRange(date(2024, 5, 13), date(2024, 5, 19))
    assert day.visible_range() == DateRange(date(2024, 5, 15), date(2024, 5, 15))
    assert date(2024, 5, 19) in week.visible_range()
    assert date(2024, 5, 20) not in week.visible_range()


def test_drill_down_opens_day_view() -> None:
    state = ViewState(date(2024, 5, 1), Granularity.MONTH)

    state.drill_down(date(2024, 5, 23))

    assert state.anchor == date(2024, 5, 23)
    assert state.granularity is Granularity.DAY


def test_title_text() -> None:
    assert ViewState(date(2024, 5, 15), Granularity.MONTH).title() == "May 2024"
    assert ViewState(date(2024, 5, 15), Granularity.DAY).title() == "Wednesday, May 15 2024"


def test_from_settings_uses_configured_week_start() -> None:
    state = ViewState.from_settings(date(2024, 5, 15), "week", EngineSettings(week_start=6))

    assert state.visible_range() == DateRange(date(2024, 5, 12), date(2024, 5, 18))
