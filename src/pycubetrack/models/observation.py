"""Observation record model."""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, field_validator

from pycubetrack.models._base import TrackerBaseModel


class ObservationRecord(TrackerBaseModel):
    """One recorded fix: capture timestamp, raw fix fields and derived ECEF.

    Field declaration order is the presentation order in the backing
    file.  Fields not declared here (written by some other tool) are kept
    and emitted after the known ones, so a load/persist cycle never drops
    data it does not understand.

    Numeric fields take real numbers only.  Quoted numbers and booleans
    are rejected rather than coerced, and ``timestamp`` is kept as the
    exact text that was read.
    """

    model_config = ConfigDict(extra="allow")

    timestamp: str
    gps_latitude: float
    gps_longitude: float
    gps_altitude: float
    gps_accuracy_meters: float
    gps_provider: str | None = None
    gps_speed_mps: float
    gps_bearing_degrees: float
    ecef_x: float
    ecef_y: float
    ecef_z: float

    @field_validator(
        "gps_latitude",
        "gps_longitude",
        "gps_altitude",
        "gps_accuracy_meters",
        "gps_speed_mps",
        "gps_bearing_degrees",
        "ecef_x",
        "ecef_y",
        "ecef_z",
        mode="before",
    )
    @classmethod
    def _require_number(cls, value: Any) -> Any:
        # bool is an int subclass; YAML ``true`` must not become 1.0.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"expected a number, got {value!r}")
        return value

    @field_validator("timestamp")
    @classmethod
    def _require_timestamp(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("timestamp must be non-empty")
        return value

    def to_document(self) -> dict[str, Any]:
        """Plain dict in presentation order, ready for the YAML codec."""
        return self.model_dump(mode="python")
