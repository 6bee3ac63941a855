"""Pillow previews of computed layouts."""

from .preview import DayPreviewRenderer, PreviewMetrics

__all__ = [
    "DayPreviewRenderer",
    "PreviewMetrics",
]
