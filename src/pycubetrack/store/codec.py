"""YAML codec for the observation store.

The backing file is a block-style YAML mapping from quoted cube keys to
lists of observation mappings::

    "-2706180:-4261067:3885711":
      - timestamp: '2025-03-01T12:00:00.123Z'
        gps_latitude: 37.7749
        ...

Decoding is the schema boundary: every key and every record is validated
here, so nothing downstream has to guess at the shape of the data.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import yaml
from pydantic import ValidationError

from pycubetrack.binning import is_key_string
from pycubetrack.exceptions import CorruptStoreError
from pycubetrack.models.observation import ObservationRecord

ObservationMap = dict[str, list[ObservationRecord]]
"""Cube key string -> observations in arrival order."""

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _QuotedKey(str):
    """Marker so top-level keys are always emitted double-quoted.

    Without quoting, a key such as ``6378137:0:0`` would be read back by a
    YAML 1.1 loader as a sexagesimal integer.
    """


class _StoreDumper(yaml.SafeDumper):
    pass


def _represent_quoted_key(dumper: yaml.SafeDumper, data: _QuotedKey) -> yaml.ScalarNode:
    return dumper.represent_scalar("tag:yaml.org,2002:str", str(data), style='"')


_StoreDumper.add_representer(_QuotedKey, _represent_quoted_key)


class _StoreLoader(yaml.SafeLoader):
    """Safe loader that leaves unquoted timestamps as their original text."""

    yaml_implicit_resolvers = {
        first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
        for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
    }


def encode_store(mapping: Mapping[str, Sequence[ObservationRecord]]) -> str:
    """Serialise *mapping* to block-style YAML text."""
    document = {
        _QuotedKey(key): [record.to_document() for record in records]
        for key, records in mapping.items()
    }
    return yaml.dump(
        document,
        Dumper=_StoreDumper,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )


def _decode_records(key: str, value: Any) -> list[ObservationRecord]:
    if not isinstance(value, list):
        raise CorruptStoreError(f"observations for {key!r} are not a list")
    if not value:
        raise CorruptStoreError(f"observations for {key!r} are empty")

    records: list[ObservationRecord] = []
    for index, item in enumerate(value):
        if not isinstance(item, dict):
            raise CorruptStoreError(f"observation {index} under {key!r} is not a mapping")
        try:
            records.append(ObservationRecord.model_validate(item))
        except ValidationError as exc:
            raise CorruptStoreError(f"observation {index} under {key!r} is invalid: {exc}") from exc
    return records


def decode_store(text: str) -> ObservationMap:
    """Parse and validate store text.

    Blank text or an empty/null document decodes to an empty mapping.

    Raises
    ------
    CorruptStoreError
        If the text is not YAML, or is not a mapping of cube keys to
        non-empty lists of valid observations.
    """
    try:
        document = yaml.load(text, Loader=_StoreLoader)
    except yaml.YAMLError as exc:
        raise CorruptStoreError(f"store is not valid YAML: {exc}") from exc

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise CorruptStoreError(f"store root must be a mapping, got {type(document).__name__}")

    mapping: ObservationMap = {}
    for key, value in document.items():
        if not is_key_string(key):
            raise CorruptStoreError(f"invalid cube key {key!r}")
        mapping[key] = _decode_records(key, value)
    return mapping
