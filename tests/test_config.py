from __future__ import annotations

from pathlib import Path

import pytest

from pycubetrack.config import TrackerConfig, load_config
from pycubetrack.exceptions import TrackerConfigError


def test_defaults() -> None:
    config = TrackerConfig()
    assert config.store_path == Path("location_log.yaml")
    assert config.logging_interval_minutes == 1.0
    assert config.logging_interval_seconds == 60.0
    assert config.atomic_writes is True


def test_rejects_non_positive_interval() -> None:
    with pytest.raises(TrackerConfigError):
        TrackerConfig(logging_interval_minutes=0)


def test_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("CUBETRACK_STORE_PATH", str(tmp_path / "log.yaml"))
    monkeypatch.setenv("CUBETRACK_LOGGING_INTERVAL_MINUTES", "15")
    monkeypatch.setenv("CUBETRACK_FIX_TIMEOUT", "5.5")
    monkeypatch.setenv("CUBETRACK_ATOMIC_WRITES", "off")

    config = TrackerConfig.from_env()

    assert config.store_path == tmp_path / "log.yaml"
    assert config.logging_interval_minutes == 15.0
    assert config.fix_timeout == 5.5
    assert config.atomic_writes is False


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CUBETRACK_LOGGING_INTERVAL_MINUTES", "15")
    monkeypatch.setenv("CUBETRACK_ATOMIC_WRITES", "false")

    config = TrackerConfig.from_env(logging_interval_minutes=2.0, atomic_writes=True)

    assert config.logging_interval_minutes == 2.0
    assert config.atomic_writes is True


def test_from_env_rejects_bad_number(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CUBETRACK_FIX_TIMEOUT", "soon")
    with pytest.raises(TrackerConfigError):
        TrackerConfig.from_env()


def test_load_yaml_config(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "loggingIntervalMinutes: 15\nstorePath: data/location_log.yaml\nfixTimeoutSeconds: 12\natomicWrites: false\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.logging_interval_minutes == 15.0
    assert config.store_path == tmp_path / "data" / "location_log.yaml"
    assert config.fix_timeout == 12.0
    assert config.atomic_writes is False


def test_load_json_config(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text('{"loggingIntervalMinutes": 5}', encoding="utf-8")

    config = load_config(path, atomic_writes=False)

    assert config.logging_interval_minutes == 5.0
    assert config.store_path == Path("location_log.yaml")
    assert config.atomic_writes is False


@pytest.mark.parametrize(
    "content",
    [
        "storePath: x.yaml\n",
        "loggingIntervalMinutes: soon\n",
        "loggingIntervalMinutes: '5'\n",
        "loggingIntervalMinutes: true\n",
        "loggingIntervalMinutes: 0\n",
        "- not a mapping\n",
        "loggingIntervalMinutes: [\n",
    ],
)
def test_load_config_rejects_invalid(tmp_path: Path, content: str) -> None:
    path = tmp_path / "config.yml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(TrackerConfigError):
        load_config(path)


def test_load_config_unsupported_extension(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("loggingIntervalMinutes = 5\n", encoding="utf-8")
    with pytest.raises(TrackerConfigError, match="Unsupported config file type"):
        load_config(path)


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(TrackerConfigError, match="Failed to read config file"):
        load_config(tmp_path / "absent.yaml")
