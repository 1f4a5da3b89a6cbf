"""Per zip code market statistics over the current listing set."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

from ..models.listing import Listing, MarketStatistics


def calculate_market_stats(listings: Iterable[Listing], zip_code: str) -> Optional[MarketStatistics]:
    """Aggregate the listings whose zip code equals ``zip_code``.

    Recomputed from scratch on every call. Returns None when no listing falls
    in the bucket.
    """

    members = [listing for listing in listings if listing.zip_code == zip_code]
    if not members:
        return None

    price_per_sqft = np.array([listing.price_per_sqft for listing in members], dtype=float)
    prices = np.array([listing.price for listing in members], dtype=float)
    return MarketStatistics(
        zip_code=zip_code,
        average_price_per_sqft=float(price_per_sqft.mean()),
        median_sale_price=float(np.median(prices)),
        property_count=len(members),
    )


def build_market_stats_index(listings: Sequence[Listing]) -> Dict[str, Optional[MarketStatistics]]:
    """Compute statistics once per distinct zip code in the batch."""

    listings = list(listings)
    zip_codes: List[str] = list(dict.fromkeys(listing.zip_code for listing in listings))
    return {zip_code: calculate_market_stats(listings, zip_code) for zip_code in zip_codes}


__all__ = ["calculate_market_stats", "build_market_stats_index"]
