"""Cubic-meter binning of ECEF points."""

from __future__ import annotations

import math

from pycubetrack._constants import KEY_PATTERN
from pycubetrack.models.spatial import EcefPoint, SpatialKey


def to_key(point: EcefPoint) -> SpatialKey:
    """Return the key of the 1m cube containing *point*.

    Each axis is floored toward negative infinity, so ``-0.5`` lands in
    cube ``-1`` and a point exactly on a boundary belongs to the cube on
    its positive side.
    """
    return SpatialKey(
        bin_x=math.floor(point.x),
        bin_y=math.floor(point.y),
        bin_z=math.floor(point.z),
    )


def key_to_string(key: SpatialKey) -> str:
    """Colon-joined ``"binX:binY:binZ"`` form used in the backing file."""
    return str(key)


def parse_key(text: str) -> SpatialKey:
    """Inverse of :func:`key_to_string`.

    Raises :class:`ValueError` if *text* is not three colon-separated
    integers.
    """
    match = KEY_PATTERN.match(text.strip()) if isinstance(text, str) else None
    if match is None:
        raise ValueError(f"not a cube key: {text!r}")
    bin_x, bin_y, bin_z = (int(part) for part in match.groups())
    return SpatialKey(bin_x=bin_x, bin_y=bin_y, bin_z=bin_z)


def is_key_string(text: object) -> bool:
    return isinstance(text, str) and KEY_PATTERN.match(text) is not None
