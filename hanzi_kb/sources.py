"""Helpers shared by the table loaders."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Optional

from .errors import SourceMalformed

RE_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def read_json_source(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"Missing source file: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SourceMalformed(str(path), f"invalid JSON: {e}")


def parse_int(value: Any) -> Optional[int]:
    """
    Read an integer field leniently.

    "12" -> 12, "12 strokes" -> 12, 12.0 -> 12. Anything unreadable (including a
    missing value) -> None; callers don't tell the two apart.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value else None
    if isinstance(value, str):
        m = RE_LEADING_INT.match(value)
        return int(m.group(1)) if m else None
    return None


def first_present(item: dict, *keys: str) -> Any:
    """Value of the first key that is present and not None."""
    for key in keys:
        if item.get(key) is not None:
            return item[key]
    return None


def optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None
