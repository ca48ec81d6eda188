"""Tests for market data clients, symbol sources, and pair resolvers."""

from __future__ import annotations

from typing import Any, Dict, List

import pytest
import requests

from chart_snapshots.clients.base import APIClientError
from chart_snapshots.clients.binance_client import BinanceClient, BinancePairResolver, SuffixPairResolver
from chart_snapshots.clients.coingecko_client import CoinGeckoClient
from chart_snapshots.clients.coinmarketcap_client import CoinMarketCapClient
from chart_snapshots.clients.symbol_source import MarketCapSymbolSource, StaticSymbolSource
from chart_snapshots.data.cache import LocalDataCache
from chart_snapshots.errors import UpstreamListingError
from chart_snapshots.ports import UNRESOLVED, Resolved
from chart_snapshots.settings import Settings


class DummyResponse:
    def __init__(self, payload: Any, status: int = 200) -> None:
        self.payload = payload
        self.status = status

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    def json(self) -> Any:
        return self.payload


class DummySession:
    def __init__(self, *responses: DummyResponse) -> None:
        self.responses = list(responses)
        self.headers: Dict[str, str] = {}
        self.calls: List[Dict[str, Any]] = []

    def get(self, url: str, params: Any = None, timeout: float | None = None) -> DummyResponse:
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        return self.responses.pop(0)


class DummyProvider:
    def __init__(self, symbols: List[str] | None = None, error: bool = False) -> None:
        self.symbols = symbols or []
        self.error = error
        self.calls = 0

    def fetch_top_symbols(self, limit: int) -> List[str]:
        self.calls += 1
        if self.error:
            raise APIClientError("provider down")
        return self.symbols[:limit]


def build_settings(monkeypatch: pytest.MonkeyPatch, **env: str) -> Settings:
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    return Settings()


EXCHANGE_INFO = {
    "symbols": [
        {"symbol": "BTCUSDT", "status": "TRADING", "quoteAsset": "USDT"},
        {"symbol": "ETHUSDT", "status": "TRADING", "quoteAsset": "USDT"},
        {"symbol": "LUNAUSDT", "status": "BREAK", "quoteAsset": "USDT"},
        {"symbol": "ETHBTC", "status": "TRADING", "quoteAsset": "BTC"},
    ]
}


def test_coinmarketcap_client_requires_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CMC_API_KEY", raising=False)
    settings = Settings(_env_file=None)

    with pytest.raises(APIClientError):
        CoinMarketCapClient(settings)


def test_coinmarketcap_client_parses_listing(monkeypatch: pytest.MonkeyPatch) -> None:
    settings = build_settings(monkeypatch, CMC_API_KEY="cmc-key")
    session = DummySession(DummyResponse({"data": [{"symbol": "btc"}, {"symbol": "ETH"}, {"name": "no symbol"}]}))
    client = CoinMarketCapClient(settings, session=session)  # type: ignore[arg-type]

    assert client.fetch_top_symbols(5) == ["BTC", "ETH"]
    assert session.headers["X-CMC_PRO_API_KEY"] == "cmc-key"
    assert session.calls[0]["url"].endswith("/v1/cryptocurrency/listings/latest")
    assert session.calls[0]["params"]["limit"] == 5


def test_coingecko_client_pages_until_limit(monkeypatch: pytest.MonkeyPatch) -> None:
    settings = build_settings(monkeypatch)
    first_page = [{"symbol": f"c{i}"} for i in range(250)]
    second_page = [{"symbol": "last"}, {"symbol": "extra"}]
    session = DummySession(DummyResponse(first_page), DummyResponse(second_page))
    client = CoinGeckoClient(settings, session=session)  # type: ignore[arg-type]

    symbols = client.fetch_top_symbols(251)

    assert len(symbols) == 251
    assert symbols[0] == "C0"
    assert symbols[-1] == "LAST"
    assert [call["params"]["page"] for call in session.calls] == [1, 2]


def test_client_wraps_http_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    settings = build_settings(monkeypatch)
    client = CoinGeckoClient(settings, session=DummySession(DummyResponse({}, status=429)))  # type: ignore[arg-type]

    with pytest.raises(UpstreamListingError):
        client.fetch_top_symbols(10)


def test_market_cap_source_single_provider() -> None:
    cmc = DummyProvider(["BTC", "ETH", "SOL"])
    source = MarketCapSymbolSource(cmc_client=cmc, cg_client=DummyProvider(["XRP"]))  # type: ignore[arg-type]

    assert source.list_top_symbols(limit=2, source="cmc") == ["BTC", "ETH"]


def test_market_cap_source_both_merges_without_duplicates() -> None:
    cmc = DummyProvider(["BTC", "ETH"])
    cg = DummyProvider(["eth", "SOL", "XRP"])
    source = MarketCapSymbolSource(cmc_client=cmc, cg_client=cg)  # type: ignore[arg-type]

    assert source.list_top_symbols(limit=3, source="both") == ["BTC", "ETH", "SOL"]


def test_market_cap_source_both_tolerates_one_failure() -> None:
    source = MarketCapSymbolSource(
        cmc_client=DummyProvider(error=True),  # type: ignore[arg-type]
        cg_client=DummyProvider(["SOL"]),  # type: ignore[arg-type]
    )

    assert source.list_top_symbols(limit=5, source="both") == ["SOL"]


def test_market_cap_source_fails_when_all_providers_fail() -> None:
    source = MarketCapSymbolSource(
        cmc_client=DummyProvider(error=True),  # type: ignore[arg-type]
        cg_client=DummyProvider(error=True),  # type: ignore[arg-type]
    )

    with pytest.raises(UpstreamListingError):
        source.list_top_symbols(limit=5, source="both")


def test_market_cap_source_requires_configured_provider() -> None:
    source = MarketCapSymbolSource(cg_client=DummyProvider(["BTC"]))  # type: ignore[arg-type]

    with pytest.raises(UpstreamListingError):
        source.list_top_symbols(limit=5, source="cmc")


def test_static_symbol_source_truncates() -> None:
    assert StaticSymbolSource(["btc", "eth", "ada"]).list_top_symbols(limit=2, source="both") == ["BTC", "ETH"]


def test_binance_resolver_uses_trading_usdt_pairs(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    settings = build_settings(monkeypatch)
    session = DummySession(DummyResponse(EXCHANGE_INFO))
    resolver = BinancePairResolver(
        BinanceClient(settings, session=session),  # type: ignore[arg-type]
        cache=LocalDataCache(tmp_path / "cache"),
    )

    assert resolver.resolve_preferred_pair("btc") == Resolved("BTCUSDT")
    assert resolver.resolve_preferred_pair("ETHUSDT") == Resolved("ETHUSDT")
    assert resolver.resolve_preferred_pair("LUNA") == UNRESOLVED
    assert resolver.resolve_preferred_pair("DOGE") == UNRESOLVED
    assert len(session.calls) == 1


def test_binance_resolver_reads_fresh_cache(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    settings = build_settings(monkeypatch)
    cache = LocalDataCache(tmp_path / "cache")
    cache.write_json(["SOLUSDT"], "binance", "exchange-info", "usdt")
    session = DummySession()
    resolver = BinancePairResolver(BinanceClient(settings, session=session), cache=cache)  # type: ignore[arg-type]

    assert resolver.resolve_preferred_pair("SOL") == Resolved("SOLUSDT")
    assert session.calls == []


def test_suffix_resolver() -> None:
    resolver = SuffixPairResolver()

    assert resolver.resolve_preferred_pair("ada") == Resolved("ADAUSDT")
    assert resolver.resolve_preferred_pair("  ") == UNRESOLVED
