"""Headless Chromium chart capture via Playwright."""

from __future__ import annotations

from typing import Any, Optional

from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from chart_snapshots.capture.imaging import crop_png
from chart_snapshots.domain.crop import CropBox, Viewport
from chart_snapshots.errors import CaptureError
from chart_snapshots.ports import Capturer
from chart_snapshots.settings import Settings


class PlaywrightCapturer(Capturer):
    """Loads chart URLs in a headless browser and returns PNG screenshots.

    The browser is launched on first use and reused until ``close``.
    """

    name = "playwright"

    def __init__(
        self,
        *,
        viewport: Viewport = Viewport(width=1920, height=1080),
        render_wait_ms: int = 4000,
        navigation_timeout_ms: int = 30000,
    ) -> None:
        self.viewport = viewport
        self.render_wait_ms = render_wait_ms
        self.navigation_timeout_ms = navigation_timeout_ms
        self._playwright: Optional[Any] = None
        self._browser: Optional[Any] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "PlaywrightCapturer":
        return cls(
            viewport=Viewport(width=settings.capture_viewport_width, height=settings.capture_viewport_height),
            render_wait_ms=settings.capture_render_wait_ms,
            navigation_timeout_ms=settings.capture_timeout_ms,
        )

    def __enter__(self) -> "PlaywrightCapturer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _ensure_browser(self) -> Any:
        if self._browser is None:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(headless=True)
            logger.debug("Launched headless Chromium", viewport=self.viewport)
        return self._browser

    def close(self) -> None:
        if self._browser is not None:
            self._browser.close()
            self._browser = None
        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None

    def capture_full_screenshot(self, url: str) -> bytes:
        try:
            browser = self._ensure_browser()
            page = browser.new_page(viewport={"width": self.viewport.width, "height": self.viewport.height})
            try:
                page.goto(url, wait_until="networkidle", timeout=self.navigation_timeout_ms)
                page.wait_for_timeout(self.render_wait_ms)
                image = page.screenshot(type="png")
            finally:
                page.close()
        except PlaywrightError as exc:
            logger.exception("Chart capture failed", url=url)
            raise CaptureError(f"Chart capture failed for {url}: {exc}") from exc
        logger.debug("Captured chart", url=url, size=len(image))
        return image

    def crop(self, data: bytes, crop_box: CropBox) -> bytes:
        return crop_png(data, crop_box)
