"""Error kinds raised by adapters and geometry helpers."""

from __future__ import annotations


class ChartSnapshotsError(Exception):
    """Base class for failures surfaced by a fetch job."""


class UpstreamListingError(ChartSnapshotsError):
    """Raised when a symbol source cannot produce a listing."""


class CaptureError(ChartSnapshotsError):
    """Raised when a screenshot capture or crop fails."""


class StorageError(ChartSnapshotsError):
    """Raised when an artifact upload or lookup fails."""


class PersistenceError(ChartSnapshotsError):
    """Raised when a version or image record cannot be written."""


class InvalidViewportError(ChartSnapshotsError, ValueError):
    """Raised when a viewport is too small to yield a non-empty crop box."""
