"""In-memory persistence, used by tests and offline demos."""

from __future__ import annotations

from typing import List, Optional

from chart_snapshots.models import ImageRecord, NewImage, NewVersion, VersionRecord
from chart_snapshots.ports import Clock, IdGenerator, PersistenceAdapter
from chart_snapshots.utils.runtime import SequentialIdGenerator, SystemClock


class InMemoryPersistence(PersistenceAdapter):
    name = "memory"

    def __init__(self, *, ids: Optional[IdGenerator] = None, clock: Optional[Clock] = None) -> None:
        self.ids = ids or SequentialIdGenerator("rec")
        self.clock = clock or SystemClock()
        self.versions: List[VersionRecord] = []
        self.images: List[ImageRecord] = []

    def create_version(self, record: NewVersion) -> VersionRecord:
        version = VersionRecord(
            id=self.ids.generate_id(),
            source=record.source,
            created_at=self.clock.now().isoformat(),
            coin_count=record.coin_count,
        )
        self.versions.append(version)
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
        self.images.append(image)
        return image

    def list_images(self, version_id: str) -> List[ImageRecord]:
        return [image for image in self.images if image.version_id == version_id]
