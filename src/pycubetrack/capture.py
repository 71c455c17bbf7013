"""One capture cycle: fix -> ECEF -> cube key -> observation -> store.

:func:`capture_observation` is the cycle boundary.  Every pycubetrack
error raised inside it, and any numeric failure on a fix that skipped
validation, is logged and swallowed, and the cycle is abandoned without
retry.  Retrying is the scheduler's business.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from pycubetrack.binning import key_to_string, to_key
from pycubetrack.exceptions import MissingFixError, TrackerError
from pycubetrack.geodesy import to_ecef
from pycubetrack.models._base import TrackerBaseModel, format_timestamp, utcnow
from pycubetrack.models.fix import GeographicFix
from pycubetrack.models.observation import ObservationRecord
from pycubetrack.models.spatial import EcefPoint, SpatialKey
from pycubetrack.store.store import ObservationStore, append_observation

_logger = logging.getLogger(__name__)


class CaptureResult(TrackerBaseModel):
    """Outcome of a completed capture cycle."""

    key: SpatialKey
    record: ObservationRecord
    observation_count: int
    """Number of observations stored under ``key`` after the append."""

    @property
    def key_string(self) -> str:
        return key_to_string(self.key)


def build_observation(fix: GeographicFix, ecef: EcefPoint, captured_at: datetime) -> ObservationRecord:
    """Assemble the record written for *fix*."""
    return ObservationRecord(
        timestamp=format_timestamp(captured_at),
        gps_latitude=fix.latitude,
        gps_longitude=fix.longitude,
        gps_altitude=fix.altitude,
        gps_accuracy_meters=fix.accuracy,
        gps_provider=fix.provider,
        gps_speed_mps=fix.speed,
        gps_bearing_degrees=fix.bearing,
        ecef_x=ecef.x,
        ecef_y=ecef.y,
        ecef_z=ecef.z,
    )


def _run_cycle(fix: GeographicFix, store: ObservationStore, clock: Callable[[], datetime]) -> CaptureResult:
    # Load first: a corrupt file aborts the cycle before anything is computed or written.
    mapping = store.load()

    ecef = to_ecef(fix.latitude, fix.longitude, fix.altitude)
    key = to_key(ecef)
    key_string = key_to_string(key)
    record = build_observation(fix, ecef, clock())

    _logger.info("Logging to key: %s", key_string)
    mapping = append_observation(mapping, key_string, record)
    store.persist(mapping)
    _logger.info("Wrote observation to %s", store.path)
    return CaptureResult(key=key, record=record, observation_count=len(mapping[key_string]))


def capture_observation(
    fix: GeographicFix | None,
    *,
    store: ObservationStore,
    clock: Callable[[], datetime] = utcnow,
) -> CaptureResult | None:
    """Record *fix* into *store*.

    Returns ``None`` without touching the file when *fix* is ``None``, and
    ``None`` after logging when any step fails.
    """
    try:
        if fix is None:
            raise MissingFixError("no location fix available")
        return _run_cycle(fix, store, clock)
    except MissingFixError:
        _logger.warning("Cannot log location, no fix available")
        return None
    except (TrackerError, ValueError, ArithmeticError):
        _logger.error("Capture cycle failed for %s", store.path, exc_info=True)
        return None
