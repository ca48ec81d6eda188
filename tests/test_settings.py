"""Settings tests."""

import pytest

from chart_snapshots.core.orchestrator import CaptureConfig
from chart_snapshots.settings import Settings


def test_settings_parses_fallback_symbols(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FALLBACK_SYMBOLS", '["btc","eth"," sol "]')

    settings = Settings()

    assert settings.fallback_symbols == ["BTC", "ETH", "SOL"]


def test_capture_config_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHART_THEME", "dark")
    monkeypatch.setenv("CAPTURE_VIEWPORT_WIDTH", "1280")
    monkeypatch.setenv("CAPTURE_VIEWPORT_HEIGHT", "720")

    config = CaptureConfig.from_settings(Settings())

    assert config.theme == "dark"
    assert config.exchange == "BINANCE"
    assert (config.viewport.width, config.viewport.height) == (1280, 720)
    assert "theme=dark" in config.chart_url("BTCUSDT")


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DEFAULT_LIMIT", raising=False)
    monkeypatch.delenv("DEFAULT_SOURCE", raising=False)

    settings = Settings(_env_file=None)

    assert settings.default_limit == 200
    assert settings.default_source == "both"
    assert settings.default_include_anonymized is True
    assert settings.storage_backend == "filesystem"


def test_settings_parses_comma_separated_fallback_symbols(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FALLBACK_SYMBOLS", "btc,eth, sol")

    settings = Settings(_env_file=None)

    assert settings.fallback_symbols == ["BTC", "ETH", "SOL"]
