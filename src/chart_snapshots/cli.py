"""Command-line interface for chart snapshot utilities."""

from __future__ import annotations

import argparse
import sys
from dataclasses import asdict
from pathlib import Path

import orjson
from loguru import logger

from chart_snapshots.core.orchestrator import CaptureConfig
from chart_snapshots.data.duckdb_store import DuckDBPersistence
from chart_snapshots.models import SOURCE_SELECTORS
from chart_snapshots.service.fetch_service import start_fetch_job
from chart_snapshots.settings import get_settings


def _configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def command_check_config(args: argparse.Namespace) -> None:
    """Print active configuration."""

    settings = get_settings()
    config = CaptureConfig.from_settings(settings)
    print("Chart snapshots configuration")
    print(f"Chart: {config.exchange} theme={config.theme} interval={config.timeframe} range={config.window_days}D")
    print(f"Viewport: {config.viewport.width}x{config.viewport.height}")
    location = settings.s3_bucket if settings.storage_backend == "s3" else settings.storage_root
    print(f"Storage: {settings.storage_backend} ({location})")
    print(f"Database: {settings.database_path}")
    print(f"CoinMarketCap key configured: {bool(settings.cmc_api_key)}")
    print(f"Log level: {settings.log_level}")


def command_chart_url(args: argparse.Namespace) -> None:
    """Print the chart URL that would be captured for a pair."""

    config = CaptureConfig.from_settings(get_settings())
    print(config.chart_url(args.pair.upper()))


def command_fetch(args: argparse.Namespace) -> None:
    """Run a fetch/capture job with the configured backends."""

    settings = get_settings()
    body = {"limit": args.limit, "source": args.source, "include_anonymized": args.anonymize}
    print(f"Starting fetch job (offline={args.offline})...")
    result = start_fetch_job(body, settings, offline=args.offline)
    payload = orjson.dumps(result, option=orjson.OPT_INDENT_2)
    print(payload.decode())
    if args.output:
        output: Path = args.output
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(payload)
        print(f"Result saved to {output}")


def command_list_versions(args: argparse.Namespace) -> None:
    """Print stored versions, newest first."""

    with DuckDBPersistence(get_settings().database_path) as store:
        versions = store.list_versions()
    if versions.empty:
        print("No versions recorded.")
        return
    print(versions.to_string(index=False))


def command_list_images(args: argparse.Namespace) -> None:
    """Print image records for a version as JSON."""

    with DuckDBPersistence(get_settings().database_path) as store:
        images = store.list_images(args.version_id)
    print(orjson.dumps([asdict(image) for image in images], option=orjson.OPT_INDENT_2).decode())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Chart snapshot command-line tools.")
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check-config", help="Print active configuration.")
    check.set_defaults(func=command_check_config)

    url = sub.add_parser("chart-url", help="Print the chart URL for a pair.")
    url.add_argument("pair", help="Canonical pair, e.g. BTCUSDT.")
    url.set_defaults(func=command_chart_url)

    fetch = sub.add_parser("fetch", help="Fetch top pairs and capture their charts.")
    fetch.add_argument("--limit", type=int, default=None, help="Maximum number of symbols to request.")
    fetch.add_argument("--source", choices=SOURCE_SELECTORS, default=None, help="Ranking source to list symbols from.")
    fetch.add_argument(
        "--anonymize",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Store a cropped anonymized image next to each full capture.",
    )
    fetch.add_argument(
        "--offline",
        action="store_true",
        help="Use the fallback symbol list and placeholder images instead of network services.",
    )
    fetch.add_argument("--output", type=Path, default=None, help="Write the job result JSON to this path.")
    fetch.set_defaults(func=command_fetch)

    versions = sub.add_parser("list-versions", help="List recorded versions.")
    versions.set_defaults(func=command_list_versions)

    images = sub.add_parser("list-images", help="List image records for a version.")
    images.add_argument("version_id", help="Version id printed by the fetch command.")
    images.set_defaults(func=command_list_images)

    return parser


def run(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(get_settings().log_level)
    args.func(args)


if __name__ == "__main__":
    run()
