"""Display formatting for exported listings."""

from __future__ import annotations

from typing import Optional

NOT_AVAILABLE = "N/A"


def format_number(value: float) -> str:
    """Render a number without a trailing ``.0`` when it is integral."""

    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_percent(value: float, decimals: int = 1) -> str:
    return f"{value:.{decimals}f}%"


def format_score(score: Optional[float]) -> str:
    return NOT_AVAILABLE if score is None else f"{score:.1f}"


def format_profit(profit: Optional[float]) -> str:
    return NOT_AVAILABLE if profit is None else f"${profit:.0f}"


def format_roi(roi: Optional[float]) -> str:
    return NOT_AVAILABLE if roi is None else format_percent(roi)


__all__ = [
    "NOT_AVAILABLE",
    "format_number",
    "format_percent",
    "format_score",
    "format_profit",
    "format_roi",
]
