#!/usr/bin/env python3
"""Summarise an observation store: one line per cube key.

Usage
-----
::

    python scripts/summarize_store.py location_log.yaml
    python scripts/summarize_store.py location_log.yaml --json
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pycubetrack import ObservationMap, StoreReadError, load  # noqa: E402


def _summarize(mapping: ObservationMap) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for key, records in mapping.items():
        rows.append(
            {
                "key": key,
                "observations": len(records),
                "first": records[0].timestamp,
                "last": records[-1].timestamp,
            }
        )
    return rows


def main() -> int:
    parser = argparse.ArgumentParser(description="Summarise a cubic-meter observation store.")
    parser.add_argument("store", help="Store file path")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    args = parser.parse_args()

    try:
        mapping = load(args.store)
    except StoreReadError as exc:
        print(f"Cannot read store: {exc}", file=sys.stderr)
        return 1

    rows = _summarize(mapping)
    if args.json_mode:
        print(json.dumps(rows, indent=2))
        return 0

    if not rows:
        print("Store is empty.")
        return 0

    key_w = max(len(row["key"]) for row in rows)
    header = f"{'Key':<{key_w}}  {'Count':>5}  {'First':<24}  Last"
    print(header)
    print("─" * len(header))
    for row in rows:
        print(f"{row['key']:<{key_w}}  {row['observations']:>5}  {row['first']:<24}  {row['last']}")
    total = sum(row["observations"] for row in rows)
    print(f"\n{len(rows)} key(s), {total} observation(s).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
