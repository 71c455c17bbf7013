"""Base model and timestamp helpers shared by the data models.

Every value type inherits from :class:`TrackerBaseModel` which is frozen,
so a fix, a point, a key or an observation never changes after it has
been built.  Timestamps are rendered in a single canonical form:
ISO-8601, UTC, millisecond precision and a literal ``Z`` suffix
(``2025-03-01T12:00:00.123Z``).
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict


def utcnow() -> datetime:
    """Wall-clock source used for capture timestamps."""
    return datetime.now(UTC)


def format_timestamp(value: datetime) -> str:
    """Render *value* as ``YYYY-MM-DDTHH:MM:SS.mmmZ``.

    Naive datetimes are assumed to already be in UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class TrackerBaseModel(BaseModel):
    """Base for pycubetrack value types."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )
