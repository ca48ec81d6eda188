"""Abstract capabilities the fetch job depends on.

Concrete backends subclass these and override the operations they support.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Union

from chart_snapshots.domain.crop import CropBox
from chart_snapshots.models import (
    CanonicalPair,
    ImageRecord,
    NewImage,
    NewVersion,
    SourceSelector,
    VersionRecord,
)


@dataclass(frozen=True)
class Resolved:
    """A ticker that maps to a tradable canonical pair."""

    pair: CanonicalPair


@dataclass(frozen=True)
class Unresolved:
    """A ticker with no tradable canonical pair on the configured venue."""

    symbol: str = ""


UNRESOLVED = Unresolved()

PairResolution = Union[Resolved, Unresolved]


class SymbolSource:
    """Lists raw tickers ordered by resolution priority."""

    name: str = "base"

    def list_top_symbols(self, *, limit: int, source: SourceSelector) -> List[str]:
        raise NotImplementedError


class PairResolver:
    name: str = "base"

    def resolve_preferred_pair(self, symbol: str) -> PairResolution:
        raise NotImplementedError


class Capturer:
    name: str = "base"

    def capture_full_screenshot(self, url: str) -> bytes:
        raise NotImplementedError

    def crop(self, data: bytes, crop_box: CropBox) -> bytes:
        raise NotImplementedError


class StorageAdapter:
    """Blob storage; only ``upload`` is required by the fetch job."""

    name: str = "base"

    def upload(self, key: str, data: bytes) -> str:
        """Store ``data`` under ``key`` and return the path to record."""

        raise NotImplementedError

    def download(self, key: str) -> bytes | None:
        raise NotImplementedError

    def exists(self, key: str) -> bool:
        raise NotImplementedError

    def delete(self, key: str) -> bool:
        raise NotImplementedError

    def list(self, prefix: str = "") -> List[str]:
        raise NotImplementedError


class PersistenceAdapter:
    """Relational store for version and image records.

    Each call assigns the record id and timestamp and is atomic on its own.
    """

    name: str = "base"

    def create_version(self, record: NewVersion) -> VersionRecord:
        raise NotImplementedError

    def insert_image(self, record: NewImage) -> ImageRecord:
        raise NotImplementedError


class IdGenerator:
    def generate_id(self) -> str:
        raise NotImplementedError


class Clock:
    def now(self) -> datetime:
        raise NotImplementedError


class ProgressLogger:
    """Append-only sink for ``job:*`` progress lines."""

    def log(self, message: str) -> None:
        raise NotImplementedError
