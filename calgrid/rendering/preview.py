"""Grayscale preview of a day timeline, for eyeballing layouts during development."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from PIL import Image, ImageDraw, ImageFont

from ..calendar.events import CalendarEvent
from ..layout.engine import DayTimeline
from ..layout.positioner import EventBox

LOGGER = logging.getLogger(__name__)

Rect = tuple[int, int, int, int]


def _font_length(font: ImageFont.ImageFont, text: str) -> float:
    try:
        return font.getlength(text)  # type: ignore[attr-defined]
    except AttributeError:  # pragma: no cover - fallback for older Pillow
        dummy_img = Image.new("L", (1, 1), color=255)
        draw = ImageDraw.Draw(dummy_img)
        return float(draw.textlength(text, font=font))


def _load_font(path_candidates: Sequence[Path], size: int) -> ImageFont.ImageFont:
    for candidate in path_candidates:
        if candidate and candidate.exists():
            return ImageFont.truetype(str(candidate), size=size)
    return ImageFont.load_default()


def _font_candidates(provided: Path | None) -> List[Path]:
    candidates: List[Path] = [Path(provided)] if provided is not None else []
    for directory in (
        Path("/usr/share/fonts/truetype/dejavu"),
        Path("/usr/share/fonts"),
        Path("/Library/Fonts"),
        Path.home() / ".fonts",
    ):
        candidates.append(directory / "DejaVuSans.ttf")
        candidates.append(directory / "Arial.ttf")
    return candidates


def _fit_text(text: str, font: ImageFont.ImageFont, max_width: int) -> str:
    """Trim ``text`` with an ellipsis until it fits ``max_width`` pixels."""

    if _font_length(font, text) <= max_width:
        return text
    trimmed = text
    while trimmed and _font_length(font, trimmed + "…") > max_width:
        trimmed = trimmed[:-1]
    return trimmed + "…" if trimmed else ""


@dataclass(frozen=True)
class PreviewMetrics:
    """Pixel geometry of the preview canvas."""

    canvas_width: int = 480
    canvas_height: int = 800
    header_height: int = 36
    all_day_lane_height: int = 26
    bottom_padding: int = 8
    hour_label_width: int = 52
    right_padding: int = 12
    box_padding: int = 4
    background_color: int = 255
    grid_color: int = 210
    label_color: int = 90
    text_color: int = 17
    event_fill: int = 120
    event_outline: int = 40
    all_day_fill: int = 170
    now_color: int = 0
    font_path: Path | None = None
    title_font_size: int = 12
    hour_font_size: int = 11

    @property
    def timeline_top(self) -> int:
        return self.header_height + self.all_day_lane_height

    @property
    def timeline_bottom(self) -> int:
        return self.canvas_height - self.bottom_padding

    @property
    def timeline_height(self) -> int:
        return self.timeline_bottom - self.timeline_top

    @property
    def timeline_left(self) -> int:
        return self.hour_label_width

    @property
    def timeline_width(self) -> int:
        return self.canvas_width - self.hour_label_width - self.right_padding

    def hour_height(self, timeline: DayTimeline) -> float:
        return self.timeline_height / timeline.rendered_hours

    def y_for_offset(self, timeline: DayTimeline, offset_hours: float) -> int:
        return int(round(self.timeline_top + offset_hours * self.hour_height(timeline)))

    def box_rect(self, timeline: DayTimeline, box: EventBox) -> Rect:
        """Pixel rectangle of ``box``, clipped to the timeline area."""

        x0 = self.timeline_left + int(round(box.left_fraction * self.timeline_width))
        x1 = self.timeline_left + int(round(box.right_fraction * self.timeline_width)) - 1
        y0 = max(self.timeline_top, self.y_for_offset(timeline, box.top_hours))
        y1 = min(self.timeline_bottom, self.y_for_offset(timeline, box.bottom_hours)) - 1
        return x0, y0, max(x0, x1), max(y0, y1)


class DayPreviewRenderer:
    """Draw a :class:`DayTimeline` onto a Pillow image."""

    def __init__(self, metrics: PreviewMetrics | None = None) -> None:
        self.metrics = metrics or PreviewMetrics()

    def font(self, size: int) -> ImageFont.ImageFont:
        return _load_font(_font_candidates(self.metrics.font_path), size)

    def render(self, timeline: DayTimeline, *, output_path: Path | None = None) -> Image.Image:
        m = self.metrics
        canvas = Image.new("L", (m.canvas_width, m.canvas_height), color=m.background_color)
        draw = ImageDraw.Draw(canvas)

        self._draw_header(draw, timeline)
        self._draw_all_day_lane(draw, timeline.all_day_events)
        self._draw_hour_rules(draw, timeline)
        for box in timeline.positioned:
            self._draw_event(draw, timeline, box)
        if timeline.current_time_offset is not None:
            self._draw_now_line(draw, timeline, timeline.current_time_offset)

        if output_path is not None:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            canvas.save(output_path)
            LOGGER.info("Wrote preview to %s", output_path)
        return canvas

    # ------------------------------------------------------------------
    # Drawing helpers
    # ------------------------------------------------------------------

    def _draw_header(self, draw: ImageDraw.ImageDraw, timeline: DayTimeline) -> None:
        m = self.metrics
        font = self.font(m.title_font_size + 4)
        day = timeline.day
        draw.text((m.box_padding * 2, 8), f"{day:%A}, {day:%B} {day.day}", font=font, fill=m.text_color)

    def _draw_all_day_lane(self, draw: ImageDraw.ImageDraw, events: Sequence[CalendarEvent]) -> None:
        if not events:
            return
        m = self.metrics
        font = self.font(m.title_font_size)
        width = m.timeline_width / len(events)
        top = m.header_height + 2
        bottom = m.timeline_top - 4
        for idx, event in enumerate(events):
            x0 = m.timeline_left + int(round(idx * width))
            x1 = m.timeline_left + int(round((idx + 1) * width)) - 2
            draw.rectangle((x0, top, x1, bottom), fill=m.all_day_fill, outline=m.event_outline)
            label = _fit_text(event.display_title, font, x1 - x0 - 2 * m.box_padding)
            draw.text((x0 + m.box_padding, top + 3), label, font=font, fill=m.text_color)

    def _draw_hour_rules(self, draw: ImageDraw.ImageDraw, timeline: DayTimeline) -> None:
        m = self.metrics
        font = self.font(m.hour_font_size)
        right = m.timeline_left + m.timeline_width
        for row, hour in enumerate(timeline.hour_range.hours()):
            y = m.y_for_offset(timeline, row)
            draw.line((m.timeline_left, y, right, y), fill=m.grid_color, width=1)
            text = f"{hour % 24:02d}:00"
            x = m.timeline_left - 6 - _font_length(font, text)
            draw.text((x, y - 6), text, font=font, fill=m.label_color)

    def _draw_event(self, draw: ImageDraw.ImageDraw, timeline: DayTimeline, box: EventBox) -> None:
        m = self.metrics
        x0, y0, x1, y1 = self.metrics.box_rect(timeline, box)
        draw.rectangle((x0, y0, x1, y1), fill=m.event_fill, outline=m.event_outline)

        inner_width = x1 - x0 - 2 * m.box_padding
        if inner_width <= 0:
            return
        font = self.font(m.title_font_size)
        title = _fit_text(box.event.display_title, font, inner_width)
        draw.text((x0 + m.box_padding, y0 + m.box_padding), title, font=font, fill=m.background_color)

    def _draw_now_line(self, draw: ImageDraw.ImageDraw, timeline: DayTimeline, offset: float) -> None:
        m = self.metrics
        y = m.y_for_offset(timeline, offset)
        draw.line((m.timeline_left, y, m.timeline_left + m.timeline_width, y), fill=m.now_color, width=1)
        r = 4
        draw.ellipse((m.timeline_left - r, y - r, m.timeline_left + r, y + r), fill=m.now_color)


__all__ = ["DayPreviewRenderer", "PreviewMetrics"]
