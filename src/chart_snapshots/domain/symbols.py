"""Recognition and normalization of quote-asset trading pair symbols."""

from __future__ import annotations

from typing import Iterable, List

from chart_snapshots.models import CanonicalPair

QUOTE_ASSET = "USDT"


def is_canonical_pair_symbol(symbol: str) -> bool:
    """Return True if ``symbol`` ends with the quote asset, ignoring case."""

    return symbol.upper().endswith(QUOTE_ASSET)


def map_to_canonical_pairs(tickers: Iterable[str]) -> List[CanonicalPair]:
    """Keep quote-asset tickers, uppercased, in input order.

    Duplicates are preserved.
    """

    return [CanonicalPair(ticker.upper()) for ticker in tickers if is_canonical_pair_symbol(ticker)]


def canonical_candidate(symbol: str) -> str:
    """Return the quote-asset pair a bare ticker would trade as.

    ``"btc"`` becomes ``"BTCUSDT"``; symbols already in canonical form are only uppercased.
    """

    cleaned = symbol.strip()
    if is_canonical_pair_symbol(cleaned):
        return map_to_canonical_pairs([cleaned])[0]
    return f"{cleaned.upper()}{QUOTE_ASSET}"
