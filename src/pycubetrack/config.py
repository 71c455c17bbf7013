"""Tracker configuration for pycubetrack."""

from __future__ import annotations

import dataclasses
import json
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from pycubetrack._constants import (
    DEFAULT_FIX_TIMEOUT_SECONDS,
    DEFAULT_LOGGING_INTERVAL_MINUTES,
    DEFAULT_STORE_FILENAME,
)
from pycubetrack.exceptions import TrackerConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise TrackerConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class TrackerConfig:
    """Tracker configuration.

    Parameters
    ----------
    store_path : Path
        Backing YAML file holding every observation.
    logging_interval_minutes : float
        Minutes between capture cycles when driven by
        :class:`~pycubetrack.runner.CaptureRunner`.
    fix_timeout : float
        Seconds to wait for a single location fix before skipping the
        cycle.
    atomic_writes : bool
        Write through a temporary file and rename it over the store.
        ``False`` overwrites the store in place.
    """

    store_path: Path = Path(DEFAULT_STORE_FILENAME)
    logging_interval_minutes: float = DEFAULT_LOGGING_INTERVAL_MINUTES
    fix_timeout: float = DEFAULT_FIX_TIMEOUT_SECONDS
    atomic_writes: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "store_path", Path(self.store_path))
        if self.logging_interval_minutes <= 0:
            raise TrackerConfigError(
                f"logging_interval_minutes must be positive, got {self.logging_interval_minutes}"
            )
        if self.fix_timeout <= 0:
            raise TrackerConfigError(f"fix_timeout must be positive, got {self.fix_timeout}")

    @property
    def logging_interval_seconds(self) -> float:
        return self.logging_interval_minutes * 60.0

    @classmethod
    def from_env(cls, **overrides: Any) -> TrackerConfig:
        """Create configuration from ``CUBETRACK_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        store_env = env.get("CUBETRACK_STORE_PATH")
        if store_env:
            config_kwargs["store_path"] = Path(store_env)

        _ENV_FLOAT_MAP = {
            "CUBETRACK_LOGGING_INTERVAL_MINUTES": "logging_interval_minutes",
            "CUBETRACK_FIX_TIMEOUT": "fix_timeout",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)

        if "atomic_writes" not in overrides:
            config_kwargs["atomic_writes"] = _env_bool(env.get("CUBETRACK_ATOMIC_WRITES"), True)

        config_kwargs.update(overrides)
        return cls(**config_kwargs)


class _ConfigFile(BaseModel):
    """Shape of a config file; keys are camelCase (``loggingIntervalMinutes``)."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    logging_interval_minutes: float
    store_path: str | None = None
    fix_timeout_seconds: float | None = None
    atomic_writes: bool | None = None

    @field_validator("logging_interval_minutes", "fix_timeout_seconds", mode="before")
    @classmethod
    def _reject_non_numbers(cls, value: Any) -> Any:
        # Only real numbers are accepted; "5" or true are configuration mistakes.
        if value is None:
            return value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"expected a number, got {value!r}")
        return value


def _parse_yaml(content: str) -> Any:
    return yaml.safe_load(content)


def _parse_json(content: str) -> Any:
    return json.loads(content)


_PARSERS = {
    ".yaml": _parse_yaml,
    ".yml": _parse_yaml,
    ".json": _parse_json,
}


def load_config(path: Path | str, **overrides: Any) -> TrackerConfig:
    """Load a :class:`TrackerConfig` from a YAML or JSON file.

    ``loggingIntervalMinutes`` is required.  ``storePath``,
    ``fixTimeoutSeconds`` and ``atomicWrites`` are optional; a relative
    ``storePath`` is resolved against the config file's directory.

    Raises
    ------
    TrackerConfigError
        The file is unreadable, has an unsupported extension, or does not
        carry a valid ``loggingIntervalMinutes``.
    """
    path = Path(path)
    parser = _PARSERS.get(path.suffix.lower())
    if parser is None:
        raise TrackerConfigError(f"Unsupported config file type: {path.name}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise TrackerConfigError(f"Failed to read config file: {path}") from exc

    try:
        document = parser(content)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise TrackerConfigError(f"Failed to parse config file: {path}: {exc}") from exc

    if not isinstance(document, dict):
        raise TrackerConfigError(f"Config file {path} must hold a mapping")

    try:
        parsed = _ConfigFile.model_validate(document)
    except ValidationError as exc:
        raise TrackerConfigError(f"Invalid config file {path}: {exc}") from exc

    config_kwargs: dict[str, Any] = {"logging_interval_minutes": parsed.logging_interval_minutes}
    if parsed.store_path:
        store_path = Path(parsed.store_path)
        if not store_path.is_absolute():
            store_path = path.parent / store_path
        config_kwargs["store_path"] = store_path
    if parsed.fix_timeout_seconds is not None:
        config_kwargs["fix_timeout"] = parsed.fix_timeout_seconds
    if parsed.atomic_writes is not None:
        config_kwargs["atomic_writes"] = parsed.atomic_writes

    config_kwargs.update(overrides)
    return TrackerConfig(**config_kwargs)
