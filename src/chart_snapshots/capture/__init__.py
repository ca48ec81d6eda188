"""Screenshot capturers."""

from chart_snapshots.capture.imaging import blank_png, crop_png
from chart_snapshots.capture.static_capturer import StaticCapturer

__all__ = ["StaticCapturer", "blank_png", "crop_png"]
