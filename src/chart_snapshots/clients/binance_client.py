"""Binance spot exchange-info client and the pair resolver built on it."""

from __future__ import annotations

from typing import FrozenSet, List, Optional

import requests

from chart_snapshots.clients.base import APIClientError, BaseClient
from chart_snapshots.data.cache import LocalDataCache
from chart_snapshots.domain.symbols import QUOTE_ASSET, canonical_candidate
from chart_snapshots.models import CanonicalPair
from chart_snapshots.ports import UNRESOLVED, PairResolution, PairResolver, Resolved
from chart_snapshots.settings import Settings


class BinanceClient(BaseClient):
    """Reads tradable spot symbols from ``/api/v3/exchangeInfo``."""

    def __init__(self, settings: Settings, *, session: requests.Session | None = None) -> None:
        super().__init__(
            "binance",
            settings.binance_base_url,
            timeout=settings.http_timeout_seconds,
            session=session,
        )

    def list_trading_symbols(self, quote_asset: str = QUOTE_ASSET) -> List[str]:
        payload = self._get_json("/api/v3/exchangeInfo")
        if not isinstance(payload, dict) or not isinstance(payload.get("symbols"), list):
            raise APIClientError("Binance exchangeInfo payload missing 'symbols'")
        symbols = [
            str(item["symbol"]).upper()
            for item in payload["symbols"]
            if item.get("status") == "TRADING"
            and str(item.get("quoteAsset", "")).upper() == quote_asset
            and item.get("symbol")
        ]
        self._log("Fetched Binance exchange info", quote_asset=quote_asset, count=len(symbols))
        return symbols


class BinancePairResolver(PairResolver):
    """Resolves ``BTC`` to ``BTCUSDT`` when Binance lists that pair as trading.

    The tradable set is loaded once per resolver and cached on disk.
    """

    name = "binance"

    def __init__(
        self,
        client: BinanceClient,
        *,
        cache: Optional[LocalDataCache] = None,
        max_age_seconds: float = 6 * 3600,
    ) -> None:
        self.client = client
        self.cache = cache
        self.max_age_seconds = max_age_seconds
        self._tradable: Optional[FrozenSet[str]] = None

    def _load_tradable(self) -> FrozenSet[str]:
        if self._tradable is not None:
            return self._tradable
        cache_key = ("binance", "exchange-info", QUOTE_ASSET.lower())
        if self.cache is not None and self.cache.is_fresh(*cache_key, max_age_seconds=self.max_age_seconds):
            symbols = list(self.cache.read_json(*cache_key))
        else:
            symbols = self.client.list_trading_symbols(QUOTE_ASSET)
            if self.cache is not None and symbols:
                self.cache.write_json(symbols, *cache_key)
        self._tradable = frozenset(symbols)
        return self._tradable

    def resolve_preferred_pair(self, symbol: str) -> PairResolution:
        candidate = canonical_candidate(symbol)
        if candidate in self._load_tradable():
            return Resolved(CanonicalPair(candidate))
        return UNRESOLVED


class SuffixPairResolver(PairResolver):
    """Resolves every non-empty ticker by appending the quote asset."""

    name = "suffix"

    def resolve_preferred_pair(self, symbol: str) -> PairResolution:
        if not symbol.strip():
            return UNRESOLVED
        return Resolved(CanonicalPair(canonical_candidate(symbol)))
