from conftest import make_listing
from flipfinder.models.listing import MarketStatistics
from flipfinder.services.scoring import (
    calculate_anomaly_score,
    enrich_with_anomaly_scores,
    find_distress_keywords,
    find_high_potential,
    score_breakdown,
)


def _stats() -> MarketStatistics:
    return MarketStatistics(
        zip_code="33139",
        average_price_per_sqft=500.0,
        median_sale_price=1_000_000.0,
        property_count=3,
    )


def test_missing_statistics_returns_base_score():
    listing = make_listing(days_on_market=120, remarks="Fixer, needs TLC")
    assert calculate_anomaly_score(listing, None) == 5
    assert score_breakdown(listing, None).adjustments == []


def test_neutral_listing_keeps_base_score():
    listing = make_listing(price=1_000_000.0, sqft=2_000.0)
    assert calculate_anomaly_score(listing, _stats()) == 5


def test_all_positive_signals_clamp_to_ten():
    listing = make_listing(
        price=700_000.0,
        sqft=2_000.0,
        days_on_market=61,
        remarks="Fixer! Needs TLC, bring offers",
        year_built=1970,
    )
    breakdown = score_breakdown(listing, _stats())
    assert sum(adj.points for adj in breakdown.adjustments) == 7
    assert breakdown.score == 10


def test_distress_keywords_are_capped():
    listing = make_listing(remarks="Classic FIXER that needs tlc")
    assert find_distress_keywords(listing.remarks) == ["fixer", "tlc"]
    assert calculate_anomaly_score(listing, _stats()) == 7


def test_days_on_market_threshold_is_exclusive():
    assert calculate_anomaly_score(make_listing(days_on_market=60), _stats()) == 5
    assert calculate_anomaly_score(make_listing(days_on_market=61), _stats()) == 6


def test_expensive_recent_build_is_penalised():
    listing = make_listing(price=1_600_000.0, sqft=1_000.0, year_built=2010)
    assert calculate_anomaly_score(listing, _stats()) == 3


def test_thresholds_are_inclusive():
    # exactly 80% of median price and 75% of average price per sqft
    listing = make_listing(price=800_000.0, sqft=2_000.0, price_per_sqft=375.0)
    assert calculate_anomaly_score(listing, _stats()) == 9


def test_enrich_uses_one_snapshot_per_zip():
    listings = [
        make_listing(id="a", price=500_000.0, sqft=2_000.0),
        make_listing(id="b", price=1_000_000.0, sqft=2_000.0),
        make_listing(id="c", price=1_100_000.0, sqft=2_000.0),
        make_listing(id="d", price=400_000.0, sqft=1_000.0, zip_code="33140"),
    ]
    scored = enrich_with_anomaly_scores(listings)
    # zip 33139: median 1,000,000, average price per sqft ~433.33
    assert [listing.anomaly_score for listing in scored] == [9, 5, 5, 5]
    assert listings[0].anomaly_score is None


def test_scoring_is_idempotent():
    listings = [
        make_listing(id="a", price=500_000.0, remarks="as-is estate sale"),
        make_listing(id="b", price=1_000_000.0, days_on_market=90),
    ]
    first = enrich_with_anomaly_scores(listings)
    second = enrich_with_anomaly_scores(first)
    assert [l.anomaly_score for l in first] == [l.anomaly_score for l in second]
    assert all(1 <= l.anomaly_score <= 10 for l in first)


def test_find_high_potential_sorts_descending():
    listings = [
        make_listing(id="a", anomaly_score=7),
        make_listing(id="b", anomaly_score=9),
        make_listing(id="c", anomaly_score=4),
        make_listing(id="d"),
    ]
    assert [l.id for l in find_high_potential(listings)] == ["b", "a"]
    assert [l.id for l in find_high_potential(listings, min_score=4)] == ["b", "a", "c"]
