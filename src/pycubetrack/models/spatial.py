"""ECEF point and cubic-meter key models."""

from __future__ import annotations

from pycubetrack._constants import KEY_SEPARATOR
from pycubetrack.models._base import TrackerBaseModel


class EcefPoint(TrackerBaseModel):
    """Earth-Centered-Earth-Fixed coordinate in meters."""

    x: float
    y: float
    z: float

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


class SpatialKey(TrackerBaseModel):
    """Integer triple naming the 1m x 1m x 1m ECEF cube that holds a point.

    ``str(key)`` gives the colon-joined form used as the top-level key of
    the backing file, e.g. ``"-2706180:-4261067:3885711"``.
    """

    bin_x: int
    bin_y: int
    bin_z: int

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.bin_x, self.bin_y, self.bin_z)

    def __str__(self) -> str:
        return KEY_SEPARATOR.join(str(part) for part in self.as_tuple())
