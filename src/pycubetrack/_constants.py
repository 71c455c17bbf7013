"""Internal constants shared across the library."""

import re

# ------------------------------------------------------------------
# WGS84 ellipsoid
# ------------------------------------------------------------------

WGS84_A = 6378137.0  # semi-major axis, meters
WGS84_F = 1 / 298.257223563  # flattening
WGS84_E2 = WGS84_F * (2 - WGS84_F)  # first eccentricity squared

# ------------------------------------------------------------------
# Backing file
# ------------------------------------------------------------------

DEFAULT_STORE_FILENAME = "location_log.yaml"
DEFAULT_LOGGING_INTERVAL_MINUTES = 1.0
DEFAULT_FIX_TIMEOUT_SECONDS = 30.0

KEY_SEPARATOR = ":"
KEY_PATTERN = re.compile(r"^(-?\d+):(-?\d+):(-?\d+)$")

#: Presentation order of an observation's fields in the backing file.
OBSERVATION_FIELDS: tuple[str, ...] = (
    "timestamp",
    "gps_latitude",
    "gps_longitude",
    "gps_altitude",
    "gps_accuracy_meters",
    "gps_provider",
    "gps_speed_mps",
    "gps_bearing_degrees",
    "ecef_x",
    "ecef_y",
    "ecef_z",
)
