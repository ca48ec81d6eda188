"""TradingView chart URL construction."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlencode

CHART_BASE_URL = "https://www.tradingview.com/chart/"


@dataclass(frozen=True)
class ChartUrlParams:
    exchange: str
    symbol: str
    theme: str
    timeframe: str
    window_days: int
    toolbar_collapsed: bool


def build_chart_url(params: ChartUrlParams) -> str:
    """Return the chart-viewer URL for a pair.

    Query parameters keep a fixed order; ``studies`` is always present and empty.
    """

    query = urlencode(
        [
            ("theme", params.theme),
            ("interval", params.timeframe),
            ("studies", ""),
            ("range", f"{params.window_days}D"),
            ("symbol", f"{params.exchange}:{params.symbol}"),
            ("toolbar", "false" if params.toolbar_collapsed else "true"),
        ]
    )
    return f"{CHART_BASE_URL}?{query}"
