from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path

import pytest
from pydantic import ValidationError

from pycubetrack.binning import key_to_string, to_key
from pycubetrack.capture import build_observation, capture_observation
from pycubetrack.geodesy import to_ecef
from pycubetrack.models.fix import GeographicFix
from pycubetrack.store import ObservationStore, load


def _clock(start: datetime) -> Callable[[], datetime]:
    def _ticks() -> Iterator[datetime]:
        current = start
        while True:
            yield current
            current += timedelta(minutes=1)

    ticks = _ticks()
    return lambda: next(ticks)


def _fix(lat: float = 37.7749, lon: float = -122.4194, alt: float = 10.0) -> GeographicFix:
    return GeographicFix(
        latitude=lat,
        longitude=lon,
        altitude=alt,
        accuracy=4.0,
        provider="fused",
        speed=0.75,
        bearing=180.0,
    )


def test_build_observation_fields() -> None:
    fix = _fix()
    ecef = to_ecef(fix.latitude, fix.longitude, fix.altitude)

    record = build_observation(fix, ecef, datetime(2025, 3, 1, 12, 0, 0, 123456, tzinfo=UTC))

    assert record.timestamp == "2025-03-01T12:00:00.123Z"
    assert record.gps_latitude == 37.7749
    assert record.gps_longitude == -122.4194
    assert record.gps_altitude == 10.0
    assert record.gps_accuracy_meters == 4.0
    assert record.gps_provider == "fused"
    assert record.gps_speed_mps == 0.75
    assert record.gps_bearing_degrees == 180.0
    assert (record.ecef_x, record.ecef_y, record.ecef_z) == ecef.as_tuple()


def test_build_observation_converts_timestamp_to_utc() -> None:
    fix = _fix()
    ecef = to_ecef(fix.latitude, fix.longitude, fix.altitude)
    offset = datetime(2025, 3, 1, 13, 0, 0, tzinfo=timezone(timedelta(hours=1)))

    assert build_observation(fix, ecef, offset).timestamp == "2025-03-01T12:00:00.000Z"


def test_three_fix_scenario(tmp_path: Path) -> None:
    path = tmp_path / "location_log.yaml"
    store = ObservationStore(path)
    clock = _clock(datetime(2025, 3, 1, 12, 0, tzinfo=UTC))

    first = capture_observation(_fix(), store=store, clock=clock)
    assert first is not None
    k1 = key_to_string(to_key(to_ecef(37.7749, -122.4194, 10.0)))
    assert first.key_string == k1
    assert first.observation_count == 1
    assert list(load(path)) == [k1]

    second = capture_observation(_fix(), store=store, clock=clock)
    assert second is not None
    assert second.key_string == k1
    assert second.observation_count == 2
    stored = load(path)[k1]
    assert [r.timestamp for r in stored] == ["2025-03-01T12:00:00.000Z", "2025-03-01T12:01:00.000Z"]
    assert stored[0] == first.record

    third = capture_observation(_fix(lat=37.7750), store=store, clock=clock)
    assert third is not None
    k2 = third.key_string
    assert k2 != k1

    mapping = load(path)
    assert list(mapping) == [k1, k2]
    assert mapping[k1] == [first.record, second.record]
    assert mapping[k2] == [third.record]


def test_missing_fix_skips_cycle(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "location_log.yaml"

    with caplog.at_level(logging.WARNING, logger="pycubetrack.capture"):
        result = capture_observation(None, store=ObservationStore(path))

    assert result is None
    assert not path.exists()
    assert "no fix" in caplog.text


def test_corrupt_store_is_logged_and_left_intact(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "location_log.yaml"
    path.write_text("[1, 2, 3]\n", encoding="utf-8")

    with caplog.at_level(logging.ERROR, logger="pycubetrack.capture"):
        result = capture_observation(_fix(), store=ObservationStore(path))

    assert result is None
    assert path.read_text(encoding="utf-8") == "[1, 2, 3]\n"
    assert any(record.levelno == logging.ERROR for record in caplog.records)


def test_unwritable_store_is_logged(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    with caplog.at_level(logging.ERROR, logger="pycubetrack.capture"):
        result = capture_observation(_fix(), store=ObservationStore(blocker / "log.yaml"))

    assert result is None
    assert "Capture cycle failed" in caplog.text


def test_capture_preserves_foreign_fields(tmp_path: Path) -> None:
    path = tmp_path / "location_log.yaml"
    path.write_text(
        '"1:2:3":\n'
        "- timestamp: '2024-01-01T00:00:00.000Z'\n"
        "  gps_latitude: 0.0\n"
        "  gps_longitude: 0.0\n"
        "  gps_altitude: 0.0\n"
        "  gps_accuracy_meters: 0.0\n"
        "  gps_provider: gps\n"
        "  gps_speed_mps: 0.0\n"
        "  gps_bearing_degrees: 0.0\n"
        "  ecef_x: 1.5\n"
        "  ecef_y: 2.5\n"
        "  ecef_z: 3.5\n"
        "  note: kept\n",
        encoding="utf-8",
    )

    result = capture_observation(_fix(), store=ObservationStore(path))

    assert result is not None
    mapping = load(path)
    assert mapping["1:2:3"][0].model_extra == {"note": "kept"}
    assert len(mapping) == 2


@pytest.mark.parametrize("field", ["latitude", "longitude", "altitude"])
@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_fix_rejects_non_finite_values(field: str, value: float) -> None:
    values = {"latitude": 37.7749, "longitude": -122.4194, "altitude": 10.0, field: value}
    with pytest.raises(ValidationError):
        GeographicFix(**values)


@pytest.mark.parametrize("altitude", [math.nan, math.inf, -math.inf])
def test_non_finite_fix_is_logged_and_skipped(
    tmp_path: Path, caplog: pytest.LogCaptureFixture, altitude: float
) -> None:
    path = tmp_path / "location_log.yaml"
    fix = GeographicFix.model_construct(latitude=37.7749, longitude=-122.4194, altitude=altitude)

    with caplog.at_level(logging.ERROR, logger="pycubetrack.capture"):
        result = capture_observation(fix, store=ObservationStore(path))

    assert result is None
    assert not path.exists()
    assert "Capture cycle failed" in caplog.text
