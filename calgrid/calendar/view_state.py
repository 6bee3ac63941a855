"""Navigation state of a calendar instance."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Callable, Iterator

from ..config import EngineSettings
from ..timemath import (
    add_months,
    end_of_month,
    end_of_week,
    iter_days,
    start_of_month,
    start_of_week,
)

LOGGER = logging.getLogger(__name__)


class Granularity(str, Enum):
    MONTH = "month"
    WEEK = "week"
    DAY = "day"


class InvalidGranularity(ValueError):
    """Raised when a view is asked to switch to an unknown granularity."""


def parse_granularity(value: Granularity | str) -> Granularity:
    """Accept a :class:`Granularity` or its name/value in any case."""

    if isinstance(value, Granularity):
        return value
    if isinstance(value, str):
        try:
            return Granularity(value.strip().lower())
        except ValueError:
            pass
    raise InvalidGranularity(
        f"Unknown granularity {value!r}; expected one of "
        + ", ".join(g.value for g in Granularity)
    )


@dataclass(frozen=True)
class DateRange:
    """Inclusive span of calendar dates."""

    start: date
    end: date

    def days(self) -> list[date]:
        return list(iter_days(self.start, self.end))

    def __iter__(self) -> Iterator[date]:
        return iter_days(self.start, self.end)

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start <= day <= self.end

    def __len__(self) -> int:
        return (self.end - self.start).days + 1


class ViewState:
    """Anchor date and granularity, changed only through navigation calls."""

    def __init__(
        self,
        anchor: date,
        granularity: Granularity | str = Granularity.MONTH,
        *,
        week_start: int = 0,
        today_provider: Callable[[], date] = date.today,
    ) -> None:
        if not 0 <= week_start <= 6:
            raise ValueError(f"week_start must be a weekday index 0-6, got {week_start}")
        self.anchor = anchor
        self.granularity = parse_granularity(granularity)
        self.week_start = week_start
        self._today_provider = today_provider

    @classmethod
    def from_settings(
        cls,
        anchor: date,
        granularity: Granularity | str,
        settings: EngineSettings,
        **kwargs,
    ) -> ViewState:
        return cls(anchor, granularity, week_start=settings.week_start, **kwargs)

    def __repr__(self) -> str:
        return f"ViewState(anchor={self.anchor.isoformat()}, granularity={self.granularity.value})"

    # Navigation -------------------------------------------------------
    def next(self) -> date:
        self.anchor = self._step(1)
        return self.anchor

    def previous(self) -> date:
        self.anchor = self._step(-1)
        return self.anchor

    def today(self) -> date:
        self.anchor = self._today_provider()
        return self.anchor

    def jump_to(self, day: date) -> date:
        self.anchor = day
        return self.anchor

    def set_granularity(self, granularity: Granularity | str) -> Granularity:
        self.granularity = parse_granularity(granularity)
        LOGGER.debug("Switched to %s view at %s", self.granularity.value, self.anchor.isoformat())
        return self.granularity

    def drill_down(self, day: date) -> None:
        """Open the day view of ``day``, as when a "+N more" marker is clicked."""

        self.jump_to(day)
        self.set_granularity(Granularity.DAY)

    # Derived values ---------------------------------------------------
    def visible_range(self) -> DateRange:
        if self.granularity is Granularity.MONTH:
            return DateRange(
                start_of_week(start_of_month(self.anchor), self.week_start),
                end_of_week(end_of_month(self.anchor), self.week_start),
            )
        if self.granularity is Granularity.WEEK:
            return DateRange(
                start_of_week(self.anchor, self.week_start),
                end_of_week(self.anchor, self.week_start),
            )
        return DateRange(self.anchor, self.anchor)

    def title(self) -> str:
        if self.granularity is Granularity.DAY:
            return f"{self.anchor:%A}, {self.anchor:%B} {self.anchor.day} {self.anchor.year}"
        return f"{self.anchor:%B %Y}"

    def _step(self, direction: int) -> date:
        if self.granularity is Granularity.MONTH:
            return add_months(self.anchor, direction)
        if self.granularity is Granularity.WEEK:
            return self.anchor + timedelta(weeks=direction)
        return self.anchor + timedelta(days=direction)


__all__ = [
    "DateRange",
    "Granularity",
    "InvalidGranularity",
    "ViewState",
    "parse_granularity",
]
