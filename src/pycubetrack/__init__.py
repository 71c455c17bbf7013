"""pycubetrack - log GPS fixes into cubic-meter ECEF bins in a YAML store."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pycubetrack")
except PackageNotFoundError:
    __version__ = "0+local"
from pycubetrack.acquisition import CallbackFixSource, FixSource, acquire_single_fix
from pycubetrack.binning import key_to_string, parse_key, to_key
from pycubetrack.capture import CaptureResult, build_observation, capture_observation
from pycubetrack.config import TrackerConfig, load_config
from pycubetrack.exceptions import (
    ConversionError,
    CorruptStoreError,
    MissingFixError,
    StoreError,
    StoreReadError,
    StoreWriteError,
    TrackerConfigError,
    TrackerError,
)
from pycubetrack.geodesy import to_ecef
from pycubetrack.models import EcefPoint, GeographicFix, ObservationRecord, SpatialKey
from pycubetrack.runner import CaptureRunner
from pycubetrack.store import ObservationMap, ObservationStore, append_observation, load, persist

__all__ = [
    "__version__",
    "CallbackFixSource",
    "CaptureResult",
    "CaptureRunner",
    "ConversionError",
    "CorruptStoreError",
    "EcefPoint",
    "FixSource",
    "GeographicFix",
    "MissingFixError",
    "ObservationMap",
    "ObservationRecord",
    "ObservationStore",
    "SpatialKey",
    "StoreError",
    "StoreReadError",
    "StoreWriteError",
    "TrackerConfig",
    "TrackerConfigError",
    "TrackerError",
    "acquire_single_fix",
    "append_observation",
    "build_observation",
    "capture_observation",
    "key_to_string",
    "load",
    "load_config",
    "parse_key",
    "persist",
    "to_ecef",
    "to_key",
]
