"""Tolerant cell coercion for MLS exports."""

from __future__ import annotations

import math
import re
from typing import Any

_NUMERIC_NOISE = re.compile(r"[$,\s]")
_LEADING_DECIMAL = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def is_missing(v: Any) -> bool:
    if v is None:
        return True
    return isinstance(v, float) and math.isnan(v)


def parse_number(v: Any) -> float:
    """Coerce a raw cell to a number, falling back to 0.

    Numbers pass through untouched. Text has currency symbols, thousands
    separators and whitespace stripped, then the leading decimal literal is
    used (``"1,800 sqft"`` -> 1800).
    """

    if isinstance(v, bool):
        return float(v)
    if isinstance(v, (int, float)):
        return 0.0 if is_missing(v) else v
    if isinstance(v, str):
        match = _LEADING_DECIMAL.match(_NUMERIC_NOISE.sub("", v))
        if match is None:
            return 0.0
        return float(match.group(0))
    return 0.0


def parse_string(v: Any) -> str:
    return "" if is_missing(v) else str(v).strip()


def to_int(v: Any) -> int:
    value = parse_number(v)
    if math.isinf(value):
        raise ValueError(f"Cannot convert {v!r} to an integer")
    return int(value)

