"""CoinGecko markets client."""

from __future__ import annotations

from typing import Any, Dict, List

import requests

from chart_snapshots.clients.base import APIClientError, BaseClient
from chart_snapshots.settings import Settings

MAX_PER_PAGE = 250


class CoinGeckoClient(BaseClient):
    """Pages through ``/coins/markets`` ordered by market cap."""

    def __init__(self, settings: Settings, *, session: requests.Session | None = None) -> None:
        headers = {"x-cg-demo-api-key": settings.coingecko_api_key} if settings.coingecko_api_key else None
        super().__init__(
            "coingecko",
            settings.coingecko_base_url,
            timeout=settings.http_timeout_seconds,
            headers=headers,
            session=session,
        )

    def fetch_top_symbols(self, limit: int) -> List[str]:
        symbols: List[str] = []
        per_page = min(MAX_PER_PAGE, limit)
        page = 1
        while len(symbols) < limit:
            params: Dict[str, Any] = {
                "vs_currency": "usd",
                "order": "market_cap_desc",
                "per_page": per_page,
                "page": page,
            }
            markets = self._get_json("/coins/markets", params=params)
            if not isinstance(markets, list):
                raise APIClientError("CoinGecko markets payload is not a list")
            symbols.extend(str(item["symbol"]).upper() for item in markets if item.get("symbol"))
            if len(markets) < per_page:
                break
            page += 1
        self._log("Fetched CoinGecko markets", count=len(symbols), pages=page)
        return symbols[:limit]
