"""Custom exception hierarchy for pycubetrack."""

from __future__ import annotations

from pathlib import Path


class TrackerError(Exception):
    """Base exception for all pycubetrack errors."""


class TrackerConfigError(TrackerError):
    """Invalid or missing configuration."""


class ConversionError(TrackerError):
    """Geodetic conversion failure.

    The WGS84 to ECEF transform is total over its input domain, so this is
    never raised by :func:`pycubetrack.geodesy.to_ecef`.  It exists so
    callers can catch the full taxonomy uniformly.
    """


class StoreError(TrackerError):
    """Failure touching the backing observation file."""

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class StoreReadError(StoreError):
    """The backing file exists but could not be read."""


class CorruptStoreError(StoreReadError):
    """The backing file does not hold the expected key -> observations mapping.

    Raised at load time, before any mutation, so the file on disk is left
    untouched.
    """


class StoreWriteError(StoreError):
    """The backing file could not be written (permissions, disk full, ...)."""


class MissingFixError(TrackerError):
    """No location fix was available for the capture cycle."""
