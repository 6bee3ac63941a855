"""Visible hour window for a day's timeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Sequence

from ..calendar.events import CalendarEvent
from ..config import DEFAULT_SETTINGS, EngineSettings
from ..timemath import extended_end_hour, hour_of, is_same_day

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class HourRange:
    """Inclusive ``[min, max]`` hour bounds; hours 24-29 stand for the next early morning."""

    min: int
    max: int

    @property
    def span(self) -> int:
        return self.max - self.min

    def hours(self) -> List[int]:
        """Hour rows rendered by the timeline, both bounds included."""

        return list(range(self.min, self.max + 1))

    def contains_hour(self, hour: int) -> bool:
        return self.min <= hour <= self.max


def fallback_range(settings: EngineSettings = DEFAULT_SETTINGS) -> HourRange:
    return HourRange(settings.fallback_min_hour, settings.fallback_max_hour)


def compute_hour_range(
    events: Iterable[CalendarEvent],
    day: date,
    *,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> HourRange:
    """Derive the hour window that shows every timed event starting on ``day``.

    All-day events live in their own lane and do not widen the window. Without
    timed events the working-hours fallback is returned. Windows narrower than
    ``settings.min_span_hours`` are re-centred on their midpoint and shifted, not
    shrunk, to stay inside ``[0, settings.max_extended_hour]``.
    """

    low: Optional[int] = None
    high: Optional[int] = None
    for event in events:
        if event.is_all_day or not is_same_day(event.start, day):
            continue
        start_hour = hour_of(event.start)
        end_hour = extended_end_hour(
            event.end or event.start, day, carry_before=settings.midnight_carry_hour
        )
        low = start_hour if low is None else min(low, start_hour)
        high = end_hour if high is None else max(high, end_hour)

    if low is None or high is None:
        return fallback_range(settings)

    if high - low < settings.min_span_hours:
        low, high = _widen(low, high, settings)

    LOGGER.debug("Hour range for %s resolved to %d-%d", day.isoformat(), low, high)
    return HourRange(low, high)


def merge_hour_ranges(
    ranges: Sequence[HourRange],
    *,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> HourRange:
    """Smallest window covering every range in ``ranges`` (fallback when empty)."""

    if not ranges:
        return fallback_range(settings)
    return HourRange(min(r.min for r in ranges), max(r.max for r in ranges))


def _widen(low: int, high: int, settings: EngineSettings) -> tuple[int, int]:
    span = settings.min_span_hours
    midpoint = (low + high) // 2
    low = midpoint - span // 2
    high = low + span
    if low < 0:
        low, high = 0, span
    elif high > settings.max_extended_hour:
        low, high = settings.max_extended_hour - span, settings.max_extended_hour
    return low, high


__all__ = ["HourRange", "compute_hour_range", "fallback_range", "merge_hour_ranges"]
