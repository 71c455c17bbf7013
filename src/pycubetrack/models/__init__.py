"""Data models for fixes, ECEF points, cube keys and observations."""

from pycubetrack.models._base import TrackerBaseModel, format_timestamp, utcnow
from pycubetrack.models.fix import GeographicFix
from pycubetrack.models.observation import ObservationRecord
from pycubetrack.models.spatial import EcefPoint, SpatialKey

__all__ = [
    "EcefPoint",
    "GeographicFix",
    "ObservationRecord",
    "SpatialKey",
    "TrackerBaseModel",
    "format_timestamp",
    "utcnow",
]
