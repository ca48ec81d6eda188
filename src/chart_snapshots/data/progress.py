"""Progress logger backends for ``job:*`` lines."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from loguru import logger

from chart_snapshots.ports import Clock, ProgressLogger
from chart_snapshots.utils.runtime import SystemClock


class FileProgressLogger(ProgressLogger):
    """Appends ``<ISO timestamp> <message>`` lines to a log file."""

    def __init__(self, path: str | Path, *, clock: Optional[Clock] = None) -> None:
        self.path = Path(path)
        self.clock = clock or SystemClock()

    def log(self, message: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(f"{self.clock.now().isoformat()} {message}\n")


class LoguruProgressLogger(ProgressLogger):
    """Forwards progress lines to loguru, tagged with the job id."""

    def __init__(self, job_id: str | None = None) -> None:
        self.job_id = job_id

    def log(self, message: str) -> None:
        logger.bind(job_id=self.job_id, progress=True).info(message)


class MemoryProgressLogger(ProgressLogger):
    def __init__(self) -> None:
        self.lines: List[str] = []

    def log(self, message: str) -> None:
        self.lines.append(message)


class FanOutProgressLogger(ProgressLogger):
    """Writes each line to every wrapped logger in order."""

    def __init__(self, *loggers: ProgressLogger) -> None:
        self.loggers = list(loggers)

    def log(self, message: str) -> None:
        for sink in self.loggers:
            sink.log(message)
