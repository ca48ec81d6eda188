"""Entry point used by callers to start a fetch job with request-style input."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional

from loguru import logger

from chart_snapshots.capture.static_capturer import StaticCapturer
from chart_snapshots.clients import (
    BinanceClient,
    BinancePairResolver,
    CoinGeckoClient,
    CoinMarketCapClient,
    MarketCapSymbolSource,
    StaticSymbolSource,
    SuffixPairResolver,
)
from chart_snapshots.core.orchestrator import CaptureConfig, FetchJobDeps, FetchJobRunner
from chart_snapshots.data.blob_store import FilesystemBlobStore
from chart_snapshots.data.cache import LocalDataCache
from chart_snapshots.data.duckdb_store import DuckDBPersistence
from chart_snapshots.data.progress import FanOutProgressLogger, FileProgressLogger, LoguruProgressLogger
from chart_snapshots.models import FetchJobParams
from chart_snapshots.ports import Capturer, ProgressLogger, StorageAdapter
from chart_snapshots.settings import Settings
from chart_snapshots.utils.runtime import SystemClock, UuidIdGenerator


@dataclass(frozen=True)
class JobDefaults:
    """Values used for fields missing from a start request."""

    limit: int = 200
    source: str = "both"
    include_anonymized: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "JobDefaults":
        return cls(
            limit=settings.default_limit,
            source=settings.default_source,
            include_anonymized=settings.default_include_anonymized,
        )


def _parse_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ValueError(f"includeAnonymized must be a boolean, got {value!r}")


def params_from_body(body: Mapping[str, Any] | None, defaults: JobDefaults = JobDefaults()) -> FetchJobParams:
    """Fill missing request fields with defaults; ``includeAnonymized`` and snake case are both accepted."""

    body = body or {}
    include_anonymized = body.get("includeAnonymized", body.get("include_anonymized"))
    limit = body.get("limit")
    source = body.get("source")
    if include_anonymized is None:
        include_anonymized = defaults.include_anonymized
    return FetchJobParams(
        limit=defaults.limit if limit is None else limit,
        source=defaults.source if source is None else source,
        include_anonymized=_parse_flag(include_anonymized),
    )


class FetchService:
    """Mints a job id, attaches a per-job progress log, and runs the job."""

    def __init__(
        self,
        deps: FetchJobDeps,
        *,
        logs_dir: str | Path = Path("data/logs"),
        config: Optional[CaptureConfig] = None,
        defaults: JobDefaults = JobDefaults(),
        mirror_to_loguru: bool = False,
    ) -> None:
        self.deps = deps
        self.mirror_to_loguru = mirror_to_loguru
        self.logs_dir = Path(logs_dir)
        self.config = config or CaptureConfig()
        self.defaults = defaults

    def log_path(self, job_id: str) -> Path:
        return self.logs_dir / f"fetch-{job_id}.log"

    def _progress_logger(self, job_id: str) -> ProgressLogger:
        file_logger = FileProgressLogger(self.log_path(job_id), clock=self.deps.clock)
        if self.mirror_to_loguru:
            return FanOutProgressLogger(file_logger, LoguruProgressLogger(job_id))
        return file_logger

    def start(self, body: Mapping[str, Any] | None = None) -> Dict[str, Any]:
        params = params_from_body(body, self.defaults)
        job_id = self.deps.ids.generate_id()
        progress = self.deps.logger or self._progress_logger(job_id)
        deps = replace(self.deps, logger=progress, job_id=job_id)
        logger.info(
            "Fetch job starting",
            job_id=job_id,
            limit=params.limit,
            source=params.source,
            include_anonymized=params.include_anonymized,
        )
        try:
            result = FetchJobRunner(deps, self.config).run(params)
        except Exception:
            logger.exception("Fetch job failed", job_id=job_id)
            raise
        logger.info("Fetch job completed", job_id=job_id, version_id=result.version_id, processed=result.processed_pairs)
        return {
            "job_id": job_id,
            "version_id": result.version_id,
            "processed_pairs": result.processed_pairs,
        }


def build_storage(settings: Settings) -> StorageAdapter:
    if settings.storage_backend == "s3":
        from chart_snapshots.data.s3_store import S3BlobStore

        return S3BlobStore.from_settings(settings)
    return FilesystemBlobStore(settings.storage_root)


def _build_capturer(settings: Settings, *, offline: bool) -> Capturer:
    config = CaptureConfig.from_settings(settings)
    if offline:
        return StaticCapturer(config.viewport)
    from chart_snapshots.capture.playwright_capturer import PlaywrightCapturer

    return PlaywrightCapturer.from_settings(settings)


@contextmanager
def job_deps(settings: Settings, *, offline: bool = False) -> Iterator[FetchJobDeps]:
    """Wire the configured backends and close them when the block exits.

    ``offline`` swaps the network-bound ports for the static symbol list, the
    suffix resolver, and the placeholder capturer.
    """

    clock = SystemClock()
    ids = UuidIdGenerator()
    if offline:
        source = StaticSymbolSource(settings.fallback_symbols)
        resolver = SuffixPairResolver()
    else:
        source = MarketCapSymbolSource(
            cmc_client=CoinMarketCapClient(settings) if settings.cmc_api_key else None,
            cg_client=CoinGeckoClient(settings),
        )
        resolver = BinancePairResolver(
            BinanceClient(settings),
            cache=LocalDataCache(settings.cache_dir),
            max_age_seconds=settings.exchange_info_ttl_seconds,
        )
    capturer = _build_capturer(settings, offline=offline)
    db = DuckDBPersistence(settings.database_path, ids=ids, clock=clock)
    try:
        yield FetchJobDeps(
            source=source,
            resolver=resolver,
            capturer=capturer,
            storage=build_storage(settings),
            db=db,
            ids=ids,
            clock=clock,
        )
    finally:
        close = getattr(capturer, "close", None)
        if close is not None:
            close()
        db.close()


def start_fetch_job(
    body: Mapping[str, Any] | None,
    settings: Settings,
    *,
    offline: bool = False,
) -> Dict[str, Any]:
    """Run one job with the configured backends, logging to file and loguru."""

    with job_deps(settings, offline=offline) as deps:
        service = FetchService(
            deps,
            logs_dir=settings.logs_dir,
            config=CaptureConfig.from_settings(settings),
            defaults=JobDefaults.from_settings(settings),
            mirror_to_loguru=True,
        )
        return service.start(body)
