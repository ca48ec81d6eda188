"""Combines CoinMarketCap and CoinGecko rankings behind the symbol source port."""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from loguru import logger

from chart_snapshots.clients.base import APIClientError
from chart_snapshots.clients.coingecko_client import CoinGeckoClient
from chart_snapshots.clients.coinmarketcap_client import CoinMarketCapClient
from chart_snapshots.errors import UpstreamListingError
from chart_snapshots.models import SourceSelector
from chart_snapshots.ports import SymbolSource

ProviderFn = Callable[[int], List[str]]


class MarketCapSymbolSource(SymbolSource):
    """Lists top symbols from ``cmc``, ``cg`` or ``both``.

    With ``both``, CoinMarketCap ordering comes first and CoinGecko fills in
    symbols not already listed. A single failing provider is tolerated for
    ``both``; the listing fails only if no provider returns anything.
    """

    name = "market-cap"

    def __init__(
        self,
        *,
        cmc_client: Optional[CoinMarketCapClient] = None,
        cg_client: Optional[CoinGeckoClient] = None,
    ) -> None:
        self.cmc_client = cmc_client
        self.cg_client = cg_client

    def _providers(self, source: SourceSelector) -> List[Tuple[str, ProviderFn]]:
        providers: List[Tuple[str, ProviderFn]] = []
        if source in ("cmc", "both") and self.cmc_client:
            providers.append(("cmc", self.cmc_client.fetch_top_symbols))
        if source in ("cg", "both") and self.cg_client:
            providers.append(("cg", self.cg_client.fetch_top_symbols))
        return providers

    def list_top_symbols(self, *, limit: int, source: SourceSelector) -> List[str]:
        providers = self._providers(source)
        if not providers:
            raise UpstreamListingError(f"No symbol provider configured for source '{source}'")

        if source != "both":
            _, fetch = providers[0]
            return fetch(limit)[:limit]

        seen = set()
        combined: List[str] = []
        failures: List[str] = []
        for provider_name, fetch in providers:
            try:
                symbols = fetch(limit)
            except APIClientError as exc:
                logger.warning("Symbol provider failed", provider=provider_name, error=str(exc))
                failures.append(provider_name)
                continue
            for symbol in symbols:
                key = symbol.upper()
                if key not in seen:
                    combined.append(key)
                    seen.add(key)
            if len(combined) >= limit:
                break
        if not combined and failures:
            raise UpstreamListingError(f"All symbol providers failed: {', '.join(failures)}")
        return combined[:limit]


class StaticSymbolSource(SymbolSource):
    """Returns a fixed symbol list, ignoring the source selector."""

    name = "static"

    def __init__(self, symbols: Sequence[str]) -> None:
        self.symbols = [symbol.upper() for symbol in symbols]

    def list_top_symbols(self, *, limit: int, source: SourceSelector) -> List[str]:
        return self.symbols[:limit]
