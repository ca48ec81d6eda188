"""Chart snapshots package root exports with lazy imports to avoid heavy deps at import time."""

from __future__ import annotations

from typing import Any

__all__ = ["FetchJobRunner", "FetchService", "Settings", "get_settings", "run_fetch_job"]


def __getattr__(name: str) -> Any:
    if name in ("FetchJobRunner", "run_fetch_job"):
        from chart_snapshots.core import orchestrator

        return getattr(orchestrator, name)
    if name == "FetchService":
        from chart_snapshots.service.fetch_service import FetchService

        return FetchService
    if name == "Settings":
        from chart_snapshots.settings import Settings

        return Settings
    if name == "get_settings":
        from chart_snapshots.settings import get_settings

        return get_settings
    raise AttributeError(f"module 'chart_snapshots' has no attribute '{name}'")
