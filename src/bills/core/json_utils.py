#!/usr/bin/env python3
"""
JSON Utilities Module

Reading and writing of the JSON exports the CLI consumes and produces.
Output is always pretty-printed UTF-8 so reconciliation runs diff cleanly.
"""

import json
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any

from .dates import FinancialDate
from .money import Money


def to_jsonable(value: Any) -> Any:
    """
    Default serializer for domain primitives.

    Money becomes integer pence, dates become ISO strings and enums their value.
    """
    if isinstance(value, Money):
        return value.to_pence()
    if isinstance(value, FinancialDate):
        return value.to_iso_string()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def read_json(filepath: str | Path) -> Any:
    """
    Read data from a JSON file.

    Args:
        filepath: Path to the JSON file

    Returns:
        The parsed JSON data
    """
    with open(filepath, encoding="utf-8") as f:
        return json.load(f)


def read_json_list(filepath: str | Path) -> list[dict[str, Any]]:
    """
    Read a JSON file that must hold a list of records.

    A top-level object with a single list value (e.g. {"bills": [...]}) is
    unwrapped, matching how the application exports its tables.

    Raises:
        ValueError: If the file does not hold a list of objects
    """
    data = read_json(filepath)
    if isinstance(data, dict) and len(data) == 1:
        data = next(iter(data.values()))
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise ValueError(f"{filepath} must contain a JSON list of objects")
    return data


def format_json(data: Any, sort_keys: bool = False) -> str:
    """Format data as a pretty-printed JSON string."""
    return json.dumps(data, indent=2, ensure_ascii=False, sort_keys=sort_keys, default=to_jsonable)


def write_json(filepath: str | Path, data: Any, sort_keys: bool = False) -> None:
    """
    Write data to a JSON file with standard pretty-printing.

    Parent directories are created as needed.

    Args:
        filepath: Path to the JSON file
        data: Data to write to the file
        sort_keys: If True, sort dictionary keys (default: False)
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False, sort_keys=sort_keys, default=to_jsonable)
        f.write("\n")
