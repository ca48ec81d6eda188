"""Version and image records persisted in DuckDB."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import duckdb
import pandas as pd
from loguru import logger

from chart_snapshots.errors import PersistenceError
from chart_snapshots.models import ImageRecord, NewImage, NewVersion, VersionRecord
from chart_snapshots.ports import Clock, IdGenerator, PersistenceAdapter
from chart_snapshots.utils.runtime import SystemClock, UuidIdGenerator


class DuckDBPersistence(PersistenceAdapter):
    """Stores runs in a ``versions`` table and artifacts in an ``images`` table.

    Pass ``":memory:"`` as ``db_path`` for a throwaway database.
    """

    name = "duckdb"

    def __init__(
        self,
        db_path: str | Path = "data/snapshots.duckdb",
        *,
        ids: Optional[IdGenerator] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.db_path = str(db_path)
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = duckdb.connect(self.db_path)
        self.ids = ids or UuidIdGenerator()
        self.clock = clock or SystemClock()
        self._ensure_tables()

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "DuckDBPersistence":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _ensure_tables(self) -> None:
        self.conn.execute(
            """
            CREATE TABLE IF NOT EXISTS versions (
                id TEXT PRIMARY KEY,
                source TEXT NOT NULL,
                created_at TEXT NOT NULL,
                coin_count INTEGER NOT NULL
            )
            """
        )
        self.conn.execute(
            """
            CREATE TABLE IF NOT EXISTS images (
                id TEXT PRIMARY KEY,
                version_id TEXT NOT NULL,
                type TEXT NOT NULL,
                pair TEXT NOT NULL,
                captured_at TEXT NOT NULL,
                path TEXT NOT NULL,
                thumb_path TEXT
            )
            """
        )

    def create_version(self, record: NewVersion) -> VersionRecord:
        version = VersionRecord(
            id=self.ids.generate_id(),
            source=record.source,
            created_at=self.clock.now().isoformat(),
            coin_count=record.coin_count,
        )
        try:
            self.conn.execute(
                "INSERT INTO versions VALUES (?, ?, ?, ?)",
                (version.id, version.source, version.created_at, version.coin_count),
            )
        except duckdb.Error as exc:
            logger.exception("Failed to insert version", source=record.source)
            raise PersistenceError(f"Failed to create version: {exc}") from exc
        return version

    def insert_image(self, record: NewImage) -> ImageRecord:
        image = ImageRecord(
            id=self.ids.generate_id(),
            version_id=record.version_id,
            type=record.type,
            pair=record.pair,
            captured_at=self.clock.now().isoformat(),
            path=record.path,
            thumb_path=record.thumb_path,
        )
        try:
            self.conn.execute(
                "INSERT INTO images VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    image.id,
                    image.version_id,
                    image.type,
                    image.pair,
                    image.captured_at,
                    image.path,
                    image.thumb_path,
                ),
            )
        except duckdb.Error as exc:
            logger.exception("Failed to insert image", version_id=record.version_id, pair=record.pair)
            raise PersistenceError(f"Failed to insert image: {exc}") from exc
        return image

    # Queries ----------------------------------------------------------------------

    def list_versions(self) -> pd.DataFrame:
        return self.conn.execute(
            "SELECT id, source, created_at, coin_count FROM versions ORDER BY created_at DESC"
        ).fetchdf()

    def list_images(self, version_id: str) -> List[ImageRecord]:
        rows = self.conn.execute(
            """
            SELECT id, version_id, type, pair, captured_at, path, thumb_path
            FROM images WHERE version_id = ? ORDER BY rowid
            """,
            (version_id,),
        ).fetchall()
        return [
            ImageRecord(
                id=row[0],
                version_id=row[1],
                type=row[2],
                pair=row[3],
                captured_at=row[4],
                path=row[5],
                thumb_path=row[6],
            )
            for row in rows
        ]
