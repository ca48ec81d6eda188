"""Fetch/capture job: list symbols, resolve pairs, capture, crop, store, record."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

from loguru import logger

from chart_snapshots.domain.chart_url import ChartUrlParams, build_chart_url
from chart_snapshots.domain.crop import Viewport, compute_anonymized_crop_box
from chart_snapshots.models import (
    CanonicalPair,
    FetchJobParams,
    FetchJobResult,
    ImageType,
    NewImage,
    NewVersion,
)
from chart_snapshots.ports import (
    Capturer,
    Clock,
    IdGenerator,
    PairResolver,
    PersistenceAdapter,
    ProgressLogger,
    Resolved,
    StorageAdapter,
    SymbolSource,
)
from chart_snapshots.settings import Settings


class JobStage(str, Enum):
    LIST = "list"
    RESOLVE = "resolve"
    CREATE_VERSION = "create_version"
    PROCESS = "process"
    COMPLETE = "complete"


@dataclass(frozen=True)
class CaptureConfig:
    """Fixed chart parameters used for every pair in a run."""

    exchange: str = "BINANCE"
    theme: str = "light"
    timeframe: str = "1D"
    window_days: int = 365
    toolbar_collapsed: bool = True
    viewport: Viewport = field(default_factory=lambda: Viewport(width=1920, height=1080))

    @classmethod
    def from_settings(cls, settings: Settings) -> "CaptureConfig":
        return cls(
            exchange=settings.chart_exchange,
            theme=settings.chart_theme,
            timeframe=settings.chart_timeframe,
            window_days=settings.chart_window_days,
            viewport=Viewport(
                width=settings.capture_viewport_width,
                height=settings.capture_viewport_height,
            ),
        )

    def chart_url(self, pair: str) -> str:
        return build_chart_url(
            ChartUrlParams(
                exchange=self.exchange,
                symbol=pair,
                theme=self.theme,
                timeframe=self.timeframe,
                window_days=self.window_days,
                toolbar_collapsed=self.toolbar_collapsed,
            )
        )


@dataclass
class FetchJobDeps:
    """Port set injected into a single run."""

    source: SymbolSource
    resolver: PairResolver
    capturer: Capturer
    storage: StorageAdapter
    db: PersistenceAdapter
    ids: IdGenerator
    clock: Clock
    logger: Optional[ProgressLogger] = None
    job_id: Optional[str] = None


def storage_key(version_id: str, pair: str, kind: ImageType) -> str:
    """Return the blob key for an artifact: ``screens/{version}/{pair}/{kind}.png``."""

    return f"screens/{version_id}/{pair}/{kind}.png"


def resolve_pairs(symbols: Iterable[str], resolver: PairResolver) -> List[CanonicalPair]:
    """Resolve symbols in order, dropping those without a tradable pair."""

    pairs: List[CanonicalPair] = []
    for symbol in symbols:
        resolution = resolver.resolve_preferred_pair(symbol)
        if isinstance(resolution, Resolved):
            pairs.append(resolution.pair)
    return pairs


class FetchJobRunner:
    """Runs one fetch/capture job against an injected port set.

    Pairs are processed sequentially in resolution order. Port failures are not
    caught: they end the run, and records written before the failure remain.
    """

    def __init__(self, deps: FetchJobDeps, config: Optional[CaptureConfig] = None) -> None:
        self.deps = deps
        self.config = config or CaptureConfig()

    def _progress(self, message: str) -> None:
        if self.deps.logger is not None:
            self.deps.logger.log(message)

    def _stage(self, stage: JobStage, **context: object) -> None:
        logger.bind(job_id=self.deps.job_id, stage=stage.value).info("Fetch job stage", **context)

    def run(self, params: FetchJobParams) -> FetchJobResult:
        deps = self.deps
        started_at = deps.clock.now().isoformat()

        self._stage(JobStage.LIST, limit=params.limit, source=params.source)
        symbols = deps.source.list_top_symbols(limit=params.limit, source=params.source)

        self._stage(JobStage.RESOLVE, symbols=len(symbols))
        pairs = resolve_pairs(symbols, deps.resolver)

        self._stage(JobStage.CREATE_VERSION, pairs=len(pairs))
        version = deps.db.create_version(NewVersion(source=params.source, coin_count=len(pairs)))
        self._progress(f"job:start version={version.id} pairs={len(pairs)}")

        self._stage(JobStage.PROCESS, version_id=version.id)
        processed = 0
        for pair in pairs:
            self._process_pair(version.id, pair, include_anonymized=params.include_anonymized)
            processed += 1
            self._progress(f"job:progress version={version.id} pair={pair} processed={processed}")

        self._stage(JobStage.COMPLETE, version_id=version.id, processed=processed)
        self._progress(f"job:complete version={version.id} processed={processed}")
        return FetchJobResult(
            version_id=version.id,
            processed_pairs=processed,
            started_at=started_at,
            finished_at=deps.clock.now().isoformat(),
        )

    def _process_pair(self, version_id: str, pair: CanonicalPair, *, include_anonymized: bool) -> None:
        deps = self.deps
        url = self.config.chart_url(pair)
        full = deps.capturer.capture_full_screenshot(url)
        self._store(version_id, pair, "full", full)

        if include_anonymized:
            crop_box = compute_anonymized_crop_box(self.config.viewport)
            anon = deps.capturer.crop(full, crop_box)
            self._store(version_id, pair, "anon", anon)
        logger.debug("Pair processed", version_id=version_id, pair=pair)

    def _store(self, version_id: str, pair: CanonicalPair, kind: ImageType, data: bytes) -> None:
        stored_path = self.deps.storage.upload(storage_key(version_id, pair, kind), data)
        self.deps.db.insert_image(
            NewImage(version_id=version_id, type=kind, pair=pair, path=stored_path)
        )


def run_fetch_job(
    params: FetchJobParams,
    deps: FetchJobDeps,
    config: Optional[CaptureConfig] = None,
) -> FetchJobResult:
    """Convenience wrapper around ``FetchJobRunner(deps, config).run(params)``."""

    return FetchJobRunner(deps, config).run(params)
