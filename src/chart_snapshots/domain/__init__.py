"""Pure helpers for chart URLs, pair symbols, and crop geometry."""

from chart_snapshots.domain.chart_url import ChartUrlParams, build_chart_url
from chart_snapshots.domain.crop import CropBox, Viewport, compute_anonymized_crop_box
from chart_snapshots.domain.symbols import QUOTE_ASSET, is_canonical_pair_symbol, map_to_canonical_pairs

__all__ = [
    "ChartUrlParams",
    "CropBox",
    "QUOTE_ASSET",
    "Viewport",
    "build_chart_url",
    "compute_anonymized_crop_box",
    "is_canonical_pair_symbol",
    "map_to_canonical_pairs",
]
