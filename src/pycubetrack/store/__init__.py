"""Observation store layer.

This package owns the backing file: the YAML codec that validates its
shape, and the load/append/persist protocol run once per capture cycle.
"""

from pycubetrack.store.codec import ObservationMap, decode_store, encode_store
from pycubetrack.store.store import ObservationStore, append_observation, load, persist

__all__ = [
    "ObservationMap",
    "ObservationStore",
    "append_observation",
    "decode_store",
    "encode_store",
    "load",
    "persist",
]
