"""CoinMarketCap listings client."""

from __future__ import annotations

from typing import Any, Dict, List

import requests

from chart_snapshots.clients.base import APIClientError, BaseClient
from chart_snapshots.settings import Settings


class CoinMarketCapClient(BaseClient):
    """Fetches top cryptocurrencies ranked by market cap."""

    def __init__(self, settings: Settings, *, session: requests.Session | None = None) -> None:
        if not settings.cmc_api_key:
            raise APIClientError("CoinMarketCap API key not configured")
        super().__init__(
            "coinmarketcap",
            settings.cmc_base_url,
            timeout=settings.http_timeout_seconds,
            headers={"X-CMC_PRO_API_KEY": settings.cmc_api_key},
            session=session,
        )

    def fetch_top_symbols(self, limit: int) -> List[str]:
        params: Dict[str, Any] = {"start": 1, "limit": limit, "sort": "market_cap", "convert": "USD"}
        payload = self._get_json("/v1/cryptocurrency/listings/latest", params=params)
        listings = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(listings, list):
            raise APIClientError("CoinMarketCap listings payload missing 'data'")
        symbols = [str(item["symbol"]).upper() for item in listings if item.get("symbol")]
        self._log("Fetched CoinMarketCap listings", count=len(symbols))
        return symbols[:limit]
