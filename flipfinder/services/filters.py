"""Filtering, sorting and summarising the listing snapshot."""

from __future__ import annotations

from typing import Callable, Dict, List, Sequence, Union

from ..models.listing import FilterOptions, Listing, PortfolioSummary
from .scoring import HIGH_POTENTIAL_SCORE, average_anomaly_score

SortKey = Callable[[Listing], Union[float, str]]

SORT_KEYS: Dict[str, SortKey] = {
    "address": lambda listing: listing.address.lower(),
    "price": lambda listing: listing.price,
    "price_per_sqft": lambda listing: listing.price_per_sqft,
    "anomaly_score": lambda listing: listing.anomaly_score or 0,
    "estimated_roi": lambda listing: listing.estimated_roi or 0,
    "days_on_market": lambda listing: listing.days_on_market,
}

DEFAULT_SORT = "anomaly_score"


def matches_filters(listing: Listing, options: FilterOptions) -> bool:
    if listing.price < options.min_price or listing.price > options.max_price:
        return False
    # Zero thresholds disable the ROI and score filters.
    if options.min_roi > 0 and (listing.estimated_roi or 0) < options.min_roi:
        return False
    if options.min_anomaly_score > 0 and (listing.anomaly_score or 0) < options.min_anomaly_score:
        return False
    if options.zip_codes and listing.zip_code not in options.zip_codes:
        return False
    if options.min_beds and listing.beds < options.min_beds:
        return False
    if options.max_days_on_market and listing.days_on_market > options.max_days_on_market:
        return False
    return True


def filter_listings(listings: Sequence[Listing], options: FilterOptions) -> List[Listing]:
    return [listing for listing in listings if matches_filters(listing, options)]


def sort_listings(listings: Sequence[Listing], field: str = DEFAULT_SORT, descending: bool = True) -> List[Listing]:
    if field not in SORT_KEYS:
        raise ValueError(f"Unknown sort field: {field}")
    return sorted(listings, key=SORT_KEYS[field], reverse=descending)


def zip_codes(listings: Sequence[Listing]) -> List[str]:
    return sorted({listing.zip_code for listing in listings if listing.zip_code})


def summarize(listings: Sequence[Listing]) -> PortfolioSummary:
    count = len(listings)
    return PortfolioSummary(
        property_count=count,
        high_potential_count=sum(1 for listing in listings if (listing.anomaly_score or 0) >= HIGH_POTENTIAL_SCORE),
        average_anomaly_score=average_anomaly_score(listings),
        average_price=sum(listing.price for listing in listings) / count if count else None,
    )


__all__ = ["SORT_KEYS", "matches_filters", "filter_listings", "sort_listings", "zip_codes", "summarize"]
