from __future__ import annotations

import math
import re
from typing import Any

MIN_LIMIT = 1
MAX_LIMIT = 20
DEFAULT_LIMIT = 10

_LEADING_INT = re.compile(r"^\s*[-+]?\d+")


def _to_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value)
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(0))


def resolve_limit(value: Any = None) -> int:
    """Resolve a requested row count to the effective bound used by every entry point.

    Missing or non-numeric input falls back to ``DEFAULT_LIMIT``; numeric input is
    clamped into ``[MIN_LIMIT, MAX_LIMIT]``.
    """
    parsed = _to_int(value)
    if parsed is None:
        return DEFAULT_LIMIT
    return min(max(parsed, MIN_LIMIT), MAX_LIMIT)


def is_valid_symbol(symbol: str | None) -> bool:
    return bool(symbol) and symbol != "N/A"
