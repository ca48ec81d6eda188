"""Pillow helpers for cropping captured PNG screenshots."""

from __future__ import annotations

from io import BytesIO

from loguru import logger
from PIL import Image

from chart_snapshots.domain.crop import CropBox
from chart_snapshots.errors import CaptureError


def crop_png(data: bytes, crop_box: CropBox) -> bytes:
    """Crop PNG bytes to ``crop_box`` and return the result as PNG bytes."""

    try:
        with Image.open(BytesIO(data)) as image:
            cropped = image.crop(crop_box.as_pillow_box())
            buffer = BytesIO()
            cropped.save(buffer, format="PNG")
    except OSError as exc:
        logger.exception("Failed to crop screenshot", crop_box=crop_box)
        raise CaptureError(f"Unable to crop screenshot: {exc}") from exc
    return buffer.getvalue()


def blank_png(width: int, height: int, color: str = "white") -> bytes:
    """Render a solid PNG, used as the placeholder chart for offline runs."""

    buffer = BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()
