"""Filesystem and in-memory blob storage backends."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Dict, List

from loguru import logger

from chart_snapshots.errors import StorageError
from chart_snapshots.ports import StorageAdapter


def normalize_key(key: str) -> str:
    """Strip leading slashes and reject keys that escape the storage root."""

    normalized = key.lstrip("/")
    parts = PurePosixPath(normalized).parts
    if not parts or ".." in parts:
        raise StorageError(f"Invalid storage key: {key!r}")
    return normalized


class FilesystemBlobStore(StorageAdapter):
    """Stores blobs as files under ``root``; ``upload`` returns the key itself."""

    name = "filesystem"

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.root.joinpath(*PurePosixPath(normalize_key(key)).parts)

    def upload(self, key: str, data: bytes) -> str:
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            logger.exception("Blob upload failed", key=key)
            raise StorageError(f"Failed to write {key}: {exc}") from exc
        logger.debug("Stored blob", key=key, size=len(data))
        return normalize_key(key)

    def download(self, key: str) -> bytes | None:
        path = self._path(key)
        if not path.is_file():
            return None
        return path.read_bytes()

    def exists(self, key: str) -> bool:
        return self._path(key).is_file()

    def delete(self, key: str) -> bool:
        path = self._path(key)
        if not path.is_file():
            return False
        path.unlink()
        return True

    def list(self, prefix: str = "") -> List[str]:
        keys = [path.relative_to(self.root).as_posix() for path in self.root.glob("**/*") if path.is_file()]
        return sorted(key for key in keys if key.startswith(prefix.lstrip("/")))


class InMemoryBlobStore(StorageAdapter):
    """Dict-backed store; keeps upload order in ``uploads``."""

    name = "memory"

    def __init__(self) -> None:
        self.blobs: Dict[str, bytes] = {}
        self.uploads: List[str] = []

    def upload(self, key: str, data: bytes) -> str:
        normalized = normalize_key(key)
        self.blobs[normalized] = bytes(data)
        self.uploads.append(normalized)
        return normalized

    def download(self, key: str) -> bytes | None:
        return self.blobs.get(normalize_key(key))

    def exists(self, key: str) -> bool:
        return normalize_key(key) in self.blobs

    def delete(self, key: str) -> bool:
        return self.blobs.pop(normalize_key(key), None) is not None

    def list(self, prefix: str = "") -> List[str]:
        return sorted(key for key in self.blobs if key.startswith(prefix.lstrip("/")))
