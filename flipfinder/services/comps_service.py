"""After-repair value estimates from comparable sales."""

from __future__ import annotations

from typing import Optional, Sequence

import pandas as pd

from ..models.deal import ArvEstimate, ComparableSale

CONSERVATIVE_FACTOR = 0.95
MODERATE_FACTOR = 1.00
AGGRESSIVE_FACTOR = 1.05


def calculate_arv_from_comps(average_price_per_sqft: float, sqft: float) -> ArvEstimate:
    base_arv = average_price_per_sqft * sqft
    return ArvEstimate(
        conservative=base_arv * CONSERVATIVE_FACTOR,
        moderate=base_arv * MODERATE_FACTOR,
        aggressive=base_arv * AGGRESSIVE_FACTOR,
    )


def _comps_frame(comps: Sequence[ComparableSale]) -> pd.DataFrame:
    return pd.DataFrame([comp.model_dump() for comp in comps])


def average_price_per_sqft(comps: Sequence[ComparableSale]) -> Optional[float]:
    if not comps:
        return None
    return float(_comps_frame(comps)["price_per_sqft"].mean())


def average_sale_price(comps: Sequence[ComparableSale]) -> Optional[float]:
    if not comps:
        return None
    return float(_comps_frame(comps)["sale_price"].mean())


def estimate_arv(comps: Sequence[ComparableSale], sqft: float) -> Optional[ArvEstimate]:
    """ARV scenarios for a subject of ``sqft``; None when there are no comps."""

    average = average_price_per_sqft(comps)
    if average is None:
        return None
    return calculate_arv_from_comps(average, sqft)


__all__ = [
    "calculate_arv_from_comps",
    "average_price_per_sqft",
    "average_sale_price",
    "estimate_arv",
]
