"""Default id generator and clock implementations."""

from __future__ import annotations

import itertools
import uuid
from datetime import datetime, timezone

from chart_snapshots.ports import Clock, IdGenerator


class UuidIdGenerator(IdGenerator):
    def generate_id(self) -> str:
        return str(uuid.uuid4())


class SequentialIdGenerator(IdGenerator):
    """Deterministic ids (``prefix_1``, ``prefix_2``...) for tests and demos."""

    def __init__(self, prefix: str = "id") -> None:
        self.prefix = prefix
        self._counter = itertools.count(1)

    def generate_id(self) -> str:
        return f"{self.prefix}_{next(self._counter)}"


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Always returns the same instant."""

    def __init__(self, instant: datetime) -> None:
        self.instant = instant if instant.tzinfo else instant.replace(tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self.instant
