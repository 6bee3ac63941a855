"""Side-by-side column assignment for overlapping timed events."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Sequence, Tuple

from ..calendar.events import CalendarEvent
from ..config import DEFAULT_SETTINGS
from ..timemath import effective_end

LOGGER = logging.getLogger(__name__)

_Span = Tuple[CalendarEvent, datetime, datetime]


@dataclass(frozen=True)
class ColumnAssignment:
    """Column slot of one event within its day."""

    event_id: str
    column: int
    total_columns: int


def interval(
    event: CalendarEvent,
    default_minutes: int = 60,
    min_minutes: float = DEFAULT_SETTINGS.min_height_hours * 60,
) -> tuple[datetime, datetime]:
    """Time interval used for overlap tests.

    A missing end counts as ``default_minutes`` long. An event that ends at or
    before its start occupies ``min_minutes``, the same space its box is drawn
    with, so nothing can be packed on top of it.
    """

    end = effective_end(event.start, event.end, default_minutes)
    if end < event.start:
        LOGGER.warning("Event %s ends before it starts; packing it at minimum height", event.id)
    if end <= event.start:
        end = event.start + timedelta(minutes=min_minutes)
    return event.start, end


def sort_for_packing(events: Iterable[CalendarEvent]) -> List[CalendarEvent]:
    """Timed events ordered by start, ties broken by id."""

    return sorted(
        (event for event in events if not event.is_all_day),
        key=lambda event: (event.start, event.id),
    )


def _spans(events: Iterable[CalendarEvent], default_minutes: int, min_minutes: float) -> List[_Span]:
    return [(event, *interval(event, default_minutes, min_minutes)) for event in sort_for_packing(events)]


def _cluster_spans(spans: Sequence[_Span]) -> List[List[_Span]]:
    clusters: List[List[_Span]] = []
    cluster_end: datetime | None = None

    for span in spans:
        _, start, end = span
        if clusters and cluster_end is not None and start < cluster_end:
            clusters[-1].append(span)
            cluster_end = max(cluster_end, end)
        else:
            clusters.append([span])
            cluster_end = end
    return clusters


def overlap_clusters(
    events: Iterable[CalendarEvent],
    *,
    default_minutes: int = 60,
    min_minutes: float = DEFAULT_SETTINGS.min_height_hours * 60,
) -> List[List[CalendarEvent]]:
    """Split timed events into maximal groups connected by overlapping intervals."""

    spans = _spans(events, default_minutes, min_minutes)
    return [[event for event, _, _ in cluster] for cluster in _cluster_spans(spans)]


def assign_columns(
    day_events: Iterable[CalendarEvent],
    *,
    per_cluster: bool = False,
    default_minutes: int = 60,
    min_minutes: float = DEFAULT_SETTINGS.min_height_hours * 60,
) -> Dict[str, ColumnAssignment]:
    """Greedily pack a day's timed events into non-overlapping columns.

    Events are visited by ``(start, id)`` and dropped into the leftmost column
    whose latest occupant has ended by the time the event starts. By default
    every event reports the number of columns opened over the whole day. With
    ``per_cluster`` each connected overlap cluster is packed and counted on its
    own, which keeps isolated events full width.
    """

    spans = _spans(day_events, default_minutes, min_minutes)
    if per_cluster:
        assignments: Dict[str, ColumnAssignment] = {}
        for cluster in _cluster_spans(spans):
            assignments.update(_pack(cluster))
        return assignments

    return _pack(spans)


def _pack(spans: Sequence[_Span]) -> Dict[str, ColumnAssignment]:
    column_ends: List[datetime] = []
    placed: List[tuple[str, int]] = []

    for event, start, end in spans:
        for column, occupant_end in enumerate(column_ends):
            if occupant_end <= start:
                column_ends[column] = end
                break
        else:
            column = len(column_ends)
            column_ends.append(end)
        placed.append((event.id, column))

    total = max(1, len(column_ends))
    LOGGER.debug("Packed %d events into %d columns", len(placed), total)
    return {
        event_id: ColumnAssignment(event_id=event_id, column=column, total_columns=total)
        for event_id, column in placed
    }


__all__ = ["ColumnAssignment", "assign_columns", "interval", "overlap_clusters", "sort_for_packing"]
