#!/usr/bin/env python3
"""Record one location fix into an observation store.

Usage
-----
::

    python scripts/capture_fix.py --lat 37.7749 --lon -122.4194 --alt 10 \
        --accuracy 4.5 --provider gps --store location_log.yaml

Options::

    --config FILE      Read store path and write mode from a YAML/JSON config
    --store FILE       Store path (overrides --config and CUBETRACK_STORE_PATH)
    --in-place         Overwrite the store in place instead of write+rename
    --verbose          Enable debug logging
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pycubetrack import (  # noqa: E402
    GeographicFix,
    ObservationStore,
    TrackerConfig,
    TrackerConfigError,
    capture_observation,
    load_config,
)


def _build_config(args: argparse.Namespace) -> TrackerConfig:
    overrides: dict[str, object] = {}
    if args.store:
        overrides["store_path"] = Path(args.store)
    if args.in_place:
        overrides["atomic_writes"] = False
    if args.config:
        return load_config(args.config, **overrides)
    return TrackerConfig.from_env(**overrides)


def main() -> int:
    parser = argparse.ArgumentParser(description="Record one GPS fix into a cubic-meter observation store.")
    parser.add_argument("--lat", type=float, required=True, help="Latitude in degrees")
    parser.add_argument("--lon", type=float, required=True, help="Longitude in degrees")
    parser.add_argument("--alt", type=float, default=0.0, help="Altitude above the WGS84 ellipsoid in meters")
    parser.add_argument("--accuracy", type=float, default=0.0, help="Accuracy in meters")
    parser.add_argument("--provider", default="gps", help="Provider tag (default: gps)")
    parser.add_argument("--speed", type=float, default=0.0, help="Speed in m/s")
    parser.add_argument("--bearing", type=float, default=0.0, help="Bearing in degrees")
    parser.add_argument("--config", help="YAML or JSON config file")
    parser.add_argument("--store", help="Store file path")
    parser.add_argument("--in-place", action="store_true", help="Overwrite the store in place")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    try:
        config = _build_config(args)
    except TrackerConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    try:
        fix = GeographicFix(
            latitude=args.lat,
            longitude=args.lon,
            altitude=args.alt,
            accuracy=args.accuracy,
            provider=args.provider,
            speed=args.speed,
            bearing=args.bearing,
        )
    except ValidationError as exc:
        print(f"Invalid fix: {exc}", file=sys.stderr)
        return 2
    store = ObservationStore(config.store_path, atomic_writes=config.atomic_writes)
    result = capture_observation(fix, store=store)
    if result is None:
        return 1

    print(f"{result.key_string}  observations={result.observation_count}  ({store.path})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
