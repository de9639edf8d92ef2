from __future__ import annotations

import math
import re

_DECORATION = re.compile(r"[+,%$M]")
_LEADING_FLOAT = re.compile(r"-?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def parse_numeric_string(value: str | None) -> float | None:
    """Parse an upstream string-encoded number such as ``"+1.25"`` or ``"11.11%"``.

    Returns ``None`` for missing, empty or unparseable input. Only the leading
    numeric prefix is considered, so ``"12.5 USD"`` yields 12.5.
    """
    if not value:
        return None
    cleaned = _DECORATION.sub("", str(value)).strip()
    match = _LEADING_FLOAT.match(cleaned)
    if not match:
        return None
    parsed = float(match.group(0))
    if not math.isfinite(parsed):
        return None
    return parsed
