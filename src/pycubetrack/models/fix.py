"""Geographic fix model."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import AliasChoices, ConfigDict, Field, field_validator

from pycubetrack.models._base import TrackerBaseModel


class GeographicFix(TrackerBaseModel):
    """One location fix handed over by the location collaborator.

    No range checks are applied: the fix is recorded exactly as the
    provider reported it.  Non-finite numbers (NaN, infinity) are rejected.

    Parameters
    ----------
    latitude : float
        Latitude in degrees, ``[-90, 90]``.
    longitude : float
        Longitude in degrees, ``[-180, 180]``.
    altitude : float
        Meters above the WGS84 ellipsoid; may be negative.
    accuracy : float
        Horizontal accuracy in meters.  ``0`` means unknown.
    provider : str or None
        Provider tag such as ``"gps"`` or ``"fused"``, stored verbatim.
    speed : float
        Ground speed in m/s.
    bearing : float
        Bearing in degrees, ``[0, 360)``.
    captured_at : datetime or None
        When the provider produced the fix.  Informational only; the
        observation timestamp is taken when the cycle runs.
    """

    model_config = ConfigDict(allow_inf_nan=False)

    latitude: float = Field(validation_alias=AliasChoices("latitude", "lat"))
    longitude: float = Field(validation_alias=AliasChoices("longitude", "lon", "lng"))
    altitude: float = Field(default=0.0, validation_alias=AliasChoices("altitude", "alt"))
    accuracy: float = 0.0
    provider: str | None = None
    speed: float = 0.0
    bearing: float = 0.0
    captured_at: datetime | None = None

    @field_validator("captured_at")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value
