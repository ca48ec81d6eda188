"""Local filesystem cache for upstream reference payloads."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any, Iterable

import orjson


class LocalDataCache:
    """Writes JSON blobs under a root folder and honours a max age on read."""

    def __init__(self, root: str | Path = Path("data/cache")) -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _sanitize(self, part: str) -> str:
        return part.replace("/", "_").replace(":", "-")

    def _build_path(self, *parts: str) -> Path:
        safe_parts = [self._sanitize(part) for part in parts if part]
        return self.root.joinpath(*safe_parts).with_suffix(".json")

    def is_fresh(self, *parts: str, max_age_seconds: float) -> bool:
        """Return True if the artifact exists and is younger than ``max_age_seconds``."""

        path = self._build_path(*parts)
        if not path.exists():
            return False
        return time.time() - path.stat().st_mtime < max_age_seconds

    def exists(self, *parts: str) -> bool:
        return self._build_path(*parts).exists()

    def remove(self, *parts: str) -> None:
        path = self._build_path(*parts)
        if path.exists():
            path.unlink()

    def read_json(self, *parts: str) -> Any:
        return orjson.loads(self._build_path(*parts).read_bytes())

    def write_json(self, data: Any, *parts: str) -> Path:
        path = self._build_path(*parts)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(orjson.dumps(data, option=orjson.OPT_INDENT_2, default=str))
        return path

    def list_cached(self) -> Iterable[Path]:
        """Yield all cached file paths."""

        for path in self.root.glob("**/*.json"):
            if path.is_file():
                yield path
