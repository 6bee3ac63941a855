#!/usr/bin/env python3
"""Lay out a sample day (or an events JSON file) and write a PNG preview."""

from __future__ import annotations

import argparse
import json
import logging
from datetime import date, datetime
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from calgrid.calendar import CalendarEvent, events_from_records
from calgrid.config import load_settings
from calgrid.layout import layout_day
from calgrid.rendering import DayPreviewRenderer
from calgrid.scheduler import Ticker


PREVIEWS_DIR = Path(__file__).resolve().parents[1] / "previews"
DEFAULT_PNG_OUTPUT = PREVIEWS_DIR / "day_layout_sample.png"


def sample_events(day: date) -> list[CalendarEvent]:
    def at(hour: int, minute: int = 0) -> datetime:
        return datetime(day.year, day.month, day.day, hour, minute)

    return [
        CalendarEvent(id="standup", title="Standup", start=at(9), end=at(9, 15)),
        CalendarEvent(id="review", title="Design review", start=at(9), end=at(10, 30)),
        CalendarEvent(id="pairing", title="Pairing", start=at(9, 30), end=at(11)),
        CalendarEvent(id="lunch", title="Lunch", start=at(12), end=at(13)),
        CalendarEvent(id="meetup", title=None, start=at(18), end=None),
        CalendarEvent(id="offsite", title="Team offsite", start=at(0), end=at(23, 59), is_all_day=True),
    ]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--events",
        type=Path,
        default=None,
        help="JSON file holding a list of event records (defaults to built-in sample events).",
    )
    parser.add_argument(
        "--day",
        type=date.fromisoformat,
        default=None,
        help="Day to lay out as YYYY-MM-DD (defaults to today).",
    )
    parser.add_argument(
        "--now",
        type=datetime.fromisoformat,
        default=None,
        help="Timestamp used for the current-time marker (defaults to the current time).",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Optional .env file with CALGRID_* overrides.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Where to write the preview (defaults to previews/day_layout_sample.png).",
    )
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Keep re-rendering on every tick so the current-time marker moves.",
    )
    return parser.parse_args()


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    args = parse_args()
    settings = load_settings(args.env_file)
    day = args.day or date.today()
    now = args.now or datetime.now()

    if args.events is not None:
        events = events_from_records(json.loads(args.events.read_text(encoding="utf-8")))
    else:
        events = sample_events(day)

    output_path = args.output or DEFAULT_PNG_OUTPUT
    renderer = DayPreviewRenderer()

    def render(moment: datetime) -> None:
        timeline = layout_day(events, day, now=moment, settings=settings)
        for box in timeline.positioned:
            print(
                f"{box.event.display_title:<20} top={box.top_hours:5.2f}h "
                f"height={box.height_hours:4.2f}h left={box.left_fraction:.3f} width={box.width_fraction:.3f}"
            )
        renderer.render(timeline, output_path=output_path)
        print(f"Wrote preview to {output_path}")

    if not args.watch:
        render(now)
        return

    ticker = Ticker(render, interval_seconds=settings.tick_seconds)
    try:
        ticker.run(immediate=True)
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Stopped watching")


if __name__ == "__main__":
    main()
