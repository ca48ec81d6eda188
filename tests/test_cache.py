"""Tests for LocalDataCache."""

import os
import time
from pathlib import Path

from chart_snapshots.data.cache import LocalDataCache


def test_local_data_cache_json_roundtrip(tmp_path: Path) -> None:
    cache = LocalDataCache(root=tmp_path / "cache")
    payload = {"symbols": ["BTCUSDT"], "count": 1}

    cache.write_json(payload, "binance", "test")
    assert cache.exists("binance", "test")
    assert cache.read_json("binance", "test") == payload
    assert list(cache.list_cached()) == [tmp_path / "cache" / "binance" / "test.json"]


def test_local_data_cache_freshness(tmp_path: Path) -> None:
    cache = LocalDataCache(root=tmp_path / "cache")
    path = cache.write_json(["BTCUSDT"], "binance", "exchange-info")

    assert cache.is_fresh("binance", "exchange-info", max_age_seconds=60)
    stale = time.time() - 3600
    os.utime(path, (stale, stale))
    assert not cache.is_fresh("binance", "exchange-info", max_age_seconds=60)
    assert not cache.is_fresh("binance", "missing", max_age_seconds=60)


def test_local_data_cache_remove(tmp_path: Path) -> None:
    cache = LocalDataCache(root=tmp_path / "cache")
    cache.write_json({"foo": "bar"}, "binance", "delete-me")

    cache.remove("binance", "delete-me")
    assert not cache.exists("binance", "delete-me")
