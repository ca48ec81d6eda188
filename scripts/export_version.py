#!/usr/bin/env python3
"""Copy every artifact of a version out of blob storage into a local folder."""

from __future__ import annotations

import argparse
from pathlib import Path

import orjson

from chart_snapshots.data.duckdb_store import DuckDBPersistence
from chart_snapshots.service.fetch_service import build_storage
from chart_snapshots.settings import get_settings


def export_version(version_id: str, output: Path) -> None:
    settings = get_settings()
    storage = build_storage(settings)
    with DuckDBPersistence(settings.database_path) as store:
        images = store.list_images(version_id)

    if not images:
        print(f"No images recorded for version {version_id}.")
        return

    manifest = []
    for image in images:
        data = storage.download(image.path)
        if data is None:
            print(f"Missing blob for {image.path}; skipping")
            continue
        target = output / image.pair / f"{image.type}.png"
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        manifest.append({"pair": image.pair, "type": image.type, "file": str(target), "captured_at": image.captured_at})

    (output / "manifest.json").write_bytes(orjson.dumps(manifest, option=orjson.OPT_INDENT_2))
    print(f"Exported {len(manifest)} images to {output}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Export a version's screenshots to a folder.")
    parser.add_argument("version_id", help="Version id to export.")
    parser.add_argument("--output", type=Path, default=Path("data/exports"), help="Destination folder.")
    args = parser.parse_args()
    export_version(args.version_id, args.output / args.version_id)


if __name__ == "__main__":
    main()
