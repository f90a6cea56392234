"""Normalization helpers.

Centralizes defensive parsing and id synthesis for both ingestion paths.
"""

from __future__ import annotations

import math
from typing import Any


def parse_coordinate(value: Any, *, scale: float = 1.0) -> float:
    """Parse a coordinate, returning NaN for anything unusable.

    Strings are stripped first. Booleans, non-numeric strings, ``None``
    and non-finite numbers all become NaN. *scale* divides the parsed
    value (the live feed sends fixed-point degrees).
    """
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return math.nan
    try:
        result = float(value)
    except (TypeError, ValueError):
        return math.nan
    if not math.isfinite(result):
        return math.nan
    return result / scale


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def resolve_id(value: Any, *, prefix: str, index: int) -> str:
    """Return the source id, or ``<prefix>-<index>`` when it is missing."""
    return safe_str(value) or f"{prefix}-{index}"
