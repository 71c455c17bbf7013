"""WGS84 geodetic to ECEF conversion."""

from __future__ import annotations

import math

from pycubetrack._constants import WGS84_A, WGS84_E2
from pycubetrack.models.spatial import EcefPoint


def to_ecef(latitude_deg: float, longitude_deg: float, altitude_m: float) -> EcefPoint:
    """Convert a geodetic coordinate to Earth-Centered-Earth-Fixed meters.

    Closed-form transform on the WGS84 ellipsoid, no iteration.  Poles are
    not special-cased; ``cos(90deg)`` simply evaluates to a tiny number.

    Parameters
    ----------
    latitude_deg : float
        Geodetic latitude in degrees.
    longitude_deg : float
        Longitude in degrees.
    altitude_m : float
        Height above the ellipsoid in meters.

    Returns
    -------
    EcefPoint
        ``(x, y, z)`` in meters.
    """
    lat = math.radians(latitude_deg)
    lon = math.radians(longitude_deg)
    sin_lat = math.sin(lat)
    cos_lat = math.cos(lat)

    # Prime-vertical radius of curvature.
    n = WGS84_A / math.sqrt(1 - WGS84_E2 * sin_lat**2)

    x = (n + altitude_m) * cos_lat * math.cos(lon)
    y = (n + altitude_m) * cos_lat * math.sin(lon)
    z = ((1 - WGS84_E2) * n + altitude_m) * sin_lat
    return EcefPoint(x=x, y=y, z=z)
