"""Capturer that renders placeholder images without a browser."""

from __future__ import annotations

from typing import List

from chart_snapshots.capture.imaging import blank_png, crop_png
from chart_snapshots.domain.crop import CropBox, Viewport
from chart_snapshots.ports import Capturer


class StaticCapturer(Capturer):
    """Returns a blank PNG of the viewport size for every URL and records the URLs."""

    name = "static"

    def __init__(self, viewport: Viewport = Viewport(width=1920, height=1080)) -> None:
        self.viewport = viewport
        self.urls: List[str] = []

    def capture_full_screenshot(self, url: str) -> bytes:
        self.urls.append(url)
        return blank_png(self.viewport.width, self.viewport.height)

    def crop(self, data: bytes, crop_box: CropBox) -> bytes:
        return crop_png(data, crop_box)
