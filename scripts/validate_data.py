#!/usr/bin/env python3
"""Lightweight validator for farm data JSON files."""

from __future__ import annotations

import json
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import List, Tuple

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from farm_dashboard.config import DATA_FILE
from farm_dashboard.models import Budget, Crop, Expense, Farm

RECORD_TYPES = {
    'farms': Farm,
    'crops': Crop,
    'expenses': Expense,
    'budgets': Budget,
}


def validate_data(path: Path) -> List[Tuple[str, str]]:
    """Return ``(location, message)`` pairs for every invalid record."""
    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)

    errors: List[Tuple[str, str]] = []
    if not isinstance(data, dict):
        return [(path.name, "top level must be an object")]

    for section, record_type in RECORD_TYPES.items():
        records = data.get(section, [])
        if not isinstance(records, list):
            errors.append((section, "must be a list"))
            continue
        seen = set()
        for index, raw in enumerate(records):
            location = f"{section}[{index}]"
            if not isinstance(raw, Mapping):
                errors.append((location, "record must be an object"))
                continue
            try:
                record = record_type.from_dict(raw)
            except (TypeError, ValueError) as exc:
                errors.append((location, str(exc)))
                continue
            if record.id in seen:
                errors.append((location, f"duplicate id {record.id}"))
            seen.add(record.id)
    return errors


def main(argv: List[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    path = Path(argv[0]) if argv else DATA_FILE
    if not path.exists():
        print(f"Data file not found: {path}")
        return 1

    try:
        issues = validate_data(path)
    except json.JSONDecodeError as exc:
        print(f"Data file is not valid JSON: {path} ({exc})")
        return 1
    if issues:
        print("Data validation failed:")
        for location, message in issues:
            print(f"  - {location}: {message}")
        return 1

    print("All records validated successfully.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
