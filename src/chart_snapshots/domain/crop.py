"""Deterministic crop region that hides chart header and timeline bands."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from chart_snapshots.errors import InvalidViewportError

TOP_BAND_RATIO = 0.08
BOTTOM_BAND_RATIO = 0.12


@dataclass(frozen=True)
class Viewport:
    width: int
    height: int


@dataclass(frozen=True)
class CropBox:
    x: int
    y: int
    width: int
    height: int

    def as_pillow_box(self) -> Tuple[int, int, int, int]:
        """Return ``(left, upper, right, lower)`` as expected by ``Image.crop``."""

        return (self.x, self.y, self.x + self.width, self.y + self.height)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_anonymized_crop_box(viewport: Viewport) -> CropBox:
    """Strip the top 8% and bottom 12% of the viewport.

    Raises InvalidViewportError when the remaining box would be empty.
    """

    top_band = _round_half_up(viewport.height * TOP_BAND_RATIO)
    bottom_band = _round_half_up(viewport.height * BOTTOM_BAND_RATIO)
    width = viewport.width
    height = viewport.height - top_band - bottom_band
    if width <= 0 or height <= 0:
        raise InvalidViewportError(
            f"Viewport {viewport.width}x{viewport.height} leaves no area after cropping"
        )
    return CropBox(x=0, y=top_band, width=width, height=height)
