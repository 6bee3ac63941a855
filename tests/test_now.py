from __future__ import annotations

from datetime import date, datetime

import pytest

from calgrid.layout.hour_range import HourRange
from calgrid.layout.now import current_offset

RANGE = HourRange(8, 18)


def test_offset_at_window_start_is_zero() -> None:
    assert current_offset(RANGE, datetime(2024, 5, 15, 8, 0)) == 0


def test_offset_counts_minutes() -> None:
    assert current_offset(RANGE, datetime(2024, 5, 15, 13, 45)) == pytest.approx(5.75)


@pytest.mark.parametrize("hour", [0, 7, 19, 23])
def test_marker_hidden_outside_window(hour: int) -> None:
    assert current_offset(RANGE, datetime(2024, 5, 15, hour, 30)) is None


def test_last_hour_row_still_shows_marker() -> None:
    assert current_offset(RANGE, datetime(2024, 5, 15, 18, 30)) == pytest.approx(10.5)


def test_marker_hidden_on_other_days() -> None:
    now = datetime(2024, 5, 16, 12, 0)
    assert current_offset(RANGE, now, day=date(2024, 5, 14)) is None
    assert current_offset(RANGE, now, day=date(2024, 5, 15)) is None
    assert current_offset(RANGE, now, day=date(2024, 5, 16)) == 4


def test_marker_follows_into_carried_hours() -> None:
    late = HourRange(17, 25)

    assert current_offset(late, datetime(2024, 5, 16, 0, 30), day=date(2024, 5, 15)) == pytest.approx(7.5)
    assert current_offset(late, datetime(2024, 5, 16, 2, 0), day=date(2024, 5, 15)) is None
