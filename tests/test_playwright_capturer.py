"""Tests for the Playwright capturer with a fake browser."""

from __future__ import annotations

from typing import Any, Dict, List

import pytest
from playwright.sync_api import Error as PlaywrightError

from chart_snapshots.capture import playwright_capturer
from chart_snapshots.capture.imaging import blank_png
from chart_snapshots.capture.playwright_capturer import PlaywrightCapturer
from chart_snapshots.domain.crop import Viewport
from chart_snapshots.errors import CaptureError


class DummyPage:
    def __init__(self, browser: "DummyBrowser", viewport: Dict[str, int]) -> None:
        self.browser = browser
        self.viewport = viewport
        self.closed = False

    def goto(self, url: str, wait_until: str, timeout: int) -> None:
        if self.browser.fail:
            raise PlaywrightError("net::ERR_NAME_NOT_RESOLVED")
        self.browser.visits.append({"url": url, "wait_until": wait_until, "timeout": timeout})

    def wait_for_timeout(self, ms: int) -> None:
        self.browser.waits.append(ms)

    def screenshot(self, type: str) -> bytes:
        return blank_png(self.viewport["width"], self.viewport["height"])

    def close(self) -> None:
        self.closed = True


class DummyBrowser:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.visits: List[Dict[str, Any]] = []
        self.waits: List[int] = []
        self.pages: List[DummyPage] = []
        self.closed = False

    def new_page(self, viewport: Dict[str, int]) -> DummyPage:
        page = DummyPage(self, viewport)
        self.pages.append(page)
        return page

    def close(self) -> None:
        self.closed = True


class DummyChromium:
    def __init__(self, browser: DummyBrowser) -> None:
        self.browser = browser
        self.launches = 0

    def launch(self, headless: bool) -> DummyBrowser:
        self.launches += 1
        return self.browser


class DummyPlaywright:
    def __init__(self, browser: DummyBrowser) -> None:
        self.chromium = DummyChromium(browser)
        self.stopped = False

    def start(self) -> "DummyPlaywright":
        return self

    def stop(self) -> None:
        self.stopped = True


def install_fake(monkeypatch: pytest.MonkeyPatch, browser: DummyBrowser) -> DummyPlaywright:
    fake = DummyPlaywright(browser)
    monkeypatch.setattr(playwright_capturer, "sync_playwright", lambda: fake)
    return fake


def test_capturer_reuses_browser_and_closes_pages(monkeypatch: pytest.MonkeyPatch) -> None:
    browser = DummyBrowser()
    fake = install_fake(monkeypatch, browser)

    with PlaywrightCapturer(viewport=Viewport(320, 200), render_wait_ms=10, navigation_timeout_ms=500) as capturer:
        first = capturer.capture_full_screenshot("https://example.test/a")
        capturer.capture_full_screenshot("https://example.test/b")

    assert first.startswith(b"\x89PNG")
    assert fake.chromium.launches == 1
    assert [visit["url"] for visit in browser.visits] == ["https://example.test/a", "https://example.test/b"]
    assert browser.waits == [10, 10]
    assert all(page.closed for page in browser.pages)
    assert browser.closed and fake.stopped


def test_capturer_wraps_browser_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    browser = DummyBrowser(fail=True)
    install_fake(monkeypatch, browser)
    capturer = PlaywrightCapturer()

    with pytest.raises(CaptureError):
        capturer.capture_full_screenshot("https://example.test/a")

    assert browser.pages[0].closed
    capturer.close()
