"""Client adapters for market data providers."""

from chart_snapshots.clients.binance_client import BinanceClient, BinancePairResolver, SuffixPairResolver
from chart_snapshots.clients.coingecko_client import CoinGeckoClient
from chart_snapshots.clients.coinmarketcap_client import CoinMarketCapClient
from chart_snapshots.clients.symbol_source import MarketCapSymbolSource, StaticSymbolSource

__all__ = [
    "BinanceClient",
    "BinancePairResolver",
    "CoinGeckoClient",
    "CoinMarketCapClient",
    "MarketCapSymbolSource",
    "StaticSymbolSource",
    "SuffixPairResolver",
]
