"""Caller-side ticking for the current-time marker, aligned to interval boundaries."""

from __future__ import annotations

import itertools
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Iterator, Optional

LOGGER = logging.getLogger(__name__)


def next_tick_boundary(moment: datetime, interval_seconds: int = 60) -> datetime:
    """Return the next multiple of ``interval_seconds`` past midnight at or after ``moment``.

    With the default interval this is the next full minute. Timezone-aware
    datetimes stay aware. If ``moment`` already falls exactly on a boundary, the
    same timestamp is returned.
    """

    if interval_seconds <= 0:
        raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")

    # Round up leftover microseconds so a trigger is never scheduled in the past.
    if moment.microsecond:
        moment = moment.replace(microsecond=0) + timedelta(seconds=1)

    elapsed = moment.hour * 3600 + moment.minute * 60 + moment.second
    remainder = elapsed % interval_seconds
    if remainder == 0:
        return moment
    return moment + timedelta(seconds=interval_seconds - remainder)


@dataclass
class Ticker:
    """Call ``callback`` with each tick boundary so a host can move the now marker."""

    callback: Callable[[datetime], None]
    interval_seconds: int = 60
    time_provider: Callable[[], datetime] = datetime.now
    sleep_func: Callable[[float], None] = time.sleep

    def ticks(self) -> Iterator[datetime]:
        """Yield every boundary once the clock has reached it.

        A callback that overruns a boundary skips it; the next tick is computed
        from the clock again.
        """

        last: Optional[datetime] = None
        while True:
            target = next_tick_boundary(self.time_provider(), self.interval_seconds)
            if last is not None and target <= last:
                target = next_tick_boundary(last + timedelta(seconds=1), self.interval_seconds)
            delay = (target - self.time_provider()).total_seconds()
            if delay > 0:
                LOGGER.debug("Sleeping %.3f seconds until tick at %s", delay, target.isoformat())
                self.sleep_func(delay)
            last = target
            yield target

    def run(self, *, immediate: bool = False, iterations: Optional[int] = None) -> None:
        """Feed ticks to the callback, forever unless ``iterations`` is given.

        ``immediate`` delivers the current time first, counted as one iteration.
        """

        moments = self.ticks()
        if immediate:
            moments = itertools.chain([self.time_provider()], moments)
        if iterations is not None:
            moments = itertools.islice(moments, max(iterations, 0))
        for moment in moments:
            self.callback(moment)
