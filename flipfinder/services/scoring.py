"""Deterministic anomaly scoring of listings against their local market."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ..models.listing import Listing, MarketStatistics
from .market_stats import build_market_stats_index

# ---------------------------------------------------------------------------
# Rubric
# ---------------------------------------------------------------------------

BASE_SCORE = 5
MIN_SCORE = 1
MAX_SCORE = 10

MEDIAN_PRICE_RATIO = 0.80
MEDIAN_PRICE_POINTS = 2

PRICE_PER_SQFT_RATIO = 0.75
PRICE_PER_SQFT_POINTS = 2

STALE_DAYS_ON_MARKET = 60
STALE_LISTING_POINTS = 1

DISTRESS_KEYWORD_POINTS = 1
DISTRESS_KEYWORD_CAP = 2

LUXURY_PRICE_THRESHOLD = 1_500_000
LUXURY_PRICE_POINTS = -1

RECENT_BUILD_YEAR = 2000
RECENT_BUILD_POINTS = -1

HIGH_POTENTIAL_SCORE = 7

DISTRESS_KEYWORDS: Tuple[str, ...] = (
    "fixer",
    "tlc",
    "as-is",
    "as is",
    "handyman special",
    "estate sale",
    "needs work",
    "needs repair",
    "investor special",
    "cash only",
    "motivated seller",
    "bring offers",
)


@dataclass(frozen=True)
class Bounds:
    minimum: int
    maximum: int

    def clamp(self, value: int) -> int:
        return max(self.minimum, min(self.maximum, value))


SCORE_BOUNDS = Bounds(MIN_SCORE, MAX_SCORE)


@dataclass(frozen=True)
class ScoreAdjustment:
    """A single rubric rule that fired for a listing."""

    label: str
    points: int


@dataclass(frozen=True)
class ScoreBreakdown:
    score: int
    adjustments: List[ScoreAdjustment]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def find_distress_keywords(remarks: Optional[str]) -> List[str]:
    if not remarks:
        return []
    text = remarks.lower()
    return [keyword for keyword in DISTRESS_KEYWORDS if keyword in text]


def score_breakdown(listing: Listing, stats: Optional[MarketStatistics]) -> ScoreBreakdown:
    # Without market context the base score is returned untouched, including
    # the rules that do not depend on the market.
    if stats is None:
        return ScoreBreakdown(score=BASE_SCORE, adjustments=[])

    adjustments: List[ScoreAdjustment] = []
    if listing.price <= stats.median_sale_price * MEDIAN_PRICE_RATIO:
        adjustments.append(ScoreAdjustment("Below market median price", MEDIAN_PRICE_POINTS))
    if listing.price_per_sqft <= stats.average_price_per_sqft * PRICE_PER_SQFT_RATIO:
        adjustments.append(ScoreAdjustment("Below market price per sqft", PRICE_PER_SQFT_POINTS))
    if listing.days_on_market > STALE_DAYS_ON_MARKET:
        adjustments.append(ScoreAdjustment("Long days on market", STALE_LISTING_POINTS))

    keywords = find_distress_keywords(listing.remarks)
    if keywords:
        points = min(len(keywords) * DISTRESS_KEYWORD_POINTS, DISTRESS_KEYWORD_CAP)
        adjustments.append(ScoreAdjustment(f"Distress keywords: {', '.join(keywords)}", points))

    if listing.price > LUXURY_PRICE_THRESHOLD:
        adjustments.append(ScoreAdjustment("Price above flip range", LUXURY_PRICE_POINTS))
    if listing.year_built > RECENT_BUILD_YEAR:
        adjustments.append(ScoreAdjustment("Recent construction", RECENT_BUILD_POINTS))

    total = BASE_SCORE + sum(adjustment.points for adjustment in adjustments)
    return ScoreBreakdown(score=SCORE_BOUNDS.clamp(total), adjustments=adjustments)


def calculate_anomaly_score(listing: Listing, stats: Optional[MarketStatistics]) -> int:
    return score_breakdown(listing, stats).score


def enrich_with_anomaly_scores(listings: Sequence[Listing]) -> List[Listing]:
    """Score every listing against one statistics snapshot for its zip code."""

    stats_index: Dict[str, Optional[MarketStatistics]] = build_market_stats_index(listings)
    return [
        listing.model_copy(update={"anomaly_score": calculate_anomaly_score(listing, stats_index.get(listing.zip_code))})
        for listing in listings
    ]


def find_high_potential(listings: Sequence[Listing], min_score: float = HIGH_POTENTIAL_SCORE) -> List[Listing]:
    hits = [listing for listing in listings if (listing.anomaly_score or 0) >= min_score]
    return sorted(hits, key=lambda listing: listing.anomaly_score or 0, reverse=True)


def average_anomaly_score(listings: Sequence[Listing]) -> Optional[float]:
    if not listings:
        return None
    return sum(listing.anomaly_score or 0 for listing in listings) / len(listings)


__all__ = [
    "DISTRESS_KEYWORDS",
    "ScoreAdjustment",
    "ScoreBreakdown",
    "find_distress_keywords",
    "score_breakdown",
    "calculate_anomaly_score",
    "enrich_with_anomaly_scores",
    "find_high_potential",
    "average_anomaly_score",
]
