"""Fetch job orchestration."""

from chart_snapshots.core.orchestrator import (
    CaptureConfig,
    FetchJobDeps,
    FetchJobRunner,
    JobStage,
    resolve_pairs,
    run_fetch_job,
    storage_key,
)

__all__ = [
    "CaptureConfig",
    "FetchJobDeps",
    "FetchJobRunner",
    "JobStage",
    "resolve_pairs",
    "run_fetch_job",
    "storage_key",
]
