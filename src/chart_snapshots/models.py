"""Records and parameter objects shared by the orchestrator and its ports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, NewType, Optional, Tuple

SourceSelector = Literal["cmc", "cg", "both"]
ImageType = Literal["full", "anon"]
CanonicalPair = NewType("CanonicalPair", str)

SOURCE_SELECTORS: Tuple[str, ...] = ("cmc", "cg", "both")
IMAGE_TYPES: Tuple[str, ...] = ("full", "anon")


@dataclass(frozen=True)
class FetchJobParams:
    """Batch parameters for one fetch/capture run."""

    limit: int
    source: SourceSelector
    include_anonymized: bool

    def __post_init__(self) -> None:
        if isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit < 1:
            raise ValueError(f"limit must be a positive integer, got {self.limit!r}")
        if self.source not in SOURCE_SELECTORS:
            raise ValueError(f"source must be one of {SOURCE_SELECTORS}, got {self.source!r}")


@dataclass(frozen=True)
class NewVersion:
    source: SourceSelector
    coin_count: int


@dataclass(frozen=True)
class VersionRecord:
    """Identity and metadata of one orchestrator run."""

    id: str
    source: SourceSelector
    created_at: str  # ISO-8601
    coin_count: int


@dataclass(frozen=True)
class NewImage:
    version_id: str
    type: ImageType
    pair: CanonicalPair
    path: str
    thumb_path: Optional[str] = None

    def __post_init__(self) -> None:
        if self.type not in IMAGE_TYPES:
            raise ValueError(f"type must be one of {IMAGE_TYPES}, got {self.type!r}")


@dataclass(frozen=True)
class ImageRecord:
    """Metadata describing one stored screenshot artifact."""

    id: str
    version_id: str
    type: ImageType
    pair: CanonicalPair
    captured_at: str  # ISO-8601
    path: str
    thumb_path: Optional[str] = None


@dataclass(frozen=True)
class FetchJobResult:
    version_id: str
    processed_pairs: int
    started_at: Optional[str] = field(default=None, compare=False)
    finished_at: Optional[str] = field(default=None, compare=False)
