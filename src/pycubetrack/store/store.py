"""File-backed observation store.

Each capture cycle is ``load -> append_observation -> persist``; nothing
is cached in memory between cycles.  The store performs no locking: the
caller guarantees that at most one cycle touches a given file at a time.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path

import yaml

from pycubetrack.exceptions import CorruptStoreError, StoreReadError, StoreWriteError
from pycubetrack.models.observation import ObservationRecord
from pycubetrack.store.codec import ObservationMap, decode_store, encode_store

_logger = logging.getLogger(__name__)

_TMP_SUFFIX = ".tmp"


def load(path: Path | str) -> ObservationMap:
    """Read the aggregate at *path*.

    An absent or empty file yields an empty mapping.

    Raises
    ------
    StoreReadError
        The file exists but could not be read.
    CorruptStoreError
        The file could be read but does not hold the expected structure.
    """
    path = Path(path)
    if not path.exists():
        _logger.debug("Store %s absent; starting empty", path)
        return {}

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise StoreReadError(f"cannot read store {path}: {exc}", path=path) from exc

    if not text.strip():
        _logger.debug("Store %s is empty", path)
        return {}

    try:
        mapping = decode_store(text)
    except CorruptStoreError as exc:
        exc.path = path
        raise
    _logger.debug("Loaded %d keys from %s", len(mapping), path)
    return mapping


def append_observation(
    mapping: Mapping[str, Sequence[ObservationRecord]],
    key: str,
    record: ObservationRecord,
) -> ObservationMap:
    """Return a copy of *mapping* with *record* appended under *key*.

    The input is not modified.  Other keys keep their sequences; *key*
    gets a new list holding its previous records followed by *record*.
    """
    updated: ObservationMap = {k: list(v) for k, v in mapping.items()}
    updated.setdefault(key, []).append(record)
    return updated


def _write_atomic(path: Path, text: str) -> None:
    tmp_path = path.with_name(path.name + _TMP_SUFFIX)
    try:
        with tmp_path.open("w", encoding="utf-8") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise


def persist(
    path: Path | str,
    mapping: Mapping[str, Sequence[ObservationRecord]],
    *,
    atomic: bool = True,
) -> None:
    """Write the full aggregate to *path*, replacing existing content.

    With ``atomic=True`` the text goes to a sibling ``.tmp`` file that is
    then renamed over *path*, so a reader sees either the old or the new
    file.  With ``atomic=False`` the file is overwritten in place.

    Raises
    ------
    StoreWriteError
        The aggregate could not be encoded or the destination could not be
        written.
    """
    path = Path(path)
    try:
        text = encode_store(mapping)
    except yaml.YAMLError as exc:
        raise StoreWriteError(f"cannot encode store for {path}: {exc}", path=path) from exc

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if atomic:
            _write_atomic(path, text)
        else:
            path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise StoreWriteError(f"cannot write store {path}: {exc}", path=path) from exc
    _logger.debug("Persisted %d keys to %s", len(mapping), path)


class ObservationStore:
    """Observation store bound to one backing file.

    Usage::

        store = ObservationStore("location_log.yaml")
        mapping = store.record("-2706180:-4261067:3885711", record)
    """

    def __init__(self, path: Path | str, *, atomic_writes: bool = True) -> None:
        self._path = Path(path)
        self._atomic_writes = atomic_writes

    @property
    def path(self) -> Path:
        return self._path

    @property
    def atomic_writes(self) -> bool:
        return self._atomic_writes

    def load(self) -> ObservationMap:
        return load(self._path)

    def persist(self, mapping: Mapping[str, Sequence[ObservationRecord]]) -> None:
        persist(self._path, mapping, atomic=self._atomic_writes)

    def record(self, key: str, record: ObservationRecord) -> ObservationMap:
        """Run one load/append/persist cycle and return the persisted mapping.

        If loading fails nothing is written.
        """
        mapping = append_observation(self.load(), key, record)
        self.persist(mapping)
        return mapping

    def __repr__(self) -> str:
        return f"ObservationStore(path={str(self._path)!r}, atomic_writes={self._atomic_writes})"
