import json

import pytest

from conftest import make_listing
from flipfinder.db.storage import (
    EXPORT_HEADERS,
    StorageError,
    clear_listings,
    export_to_csv,
    get_last_updated,
    load_listings,
    save_listings,
)


def _listings():
    return [
        make_listing(
            id="prop-1-0",
            beds=3,
            baths=2.5,
            days_on_market=75,
            remarks='Needs work, "as is"',
            listing_agent="Jane Broker",
            mls_number="A1",
            anomaly_score=8,
            estimated_profit=58_800.4,
            estimated_roi=6.3009,
        ),
        make_listing(id="prop-1-1", address="12 Main St, Unit 4", price=875_000.0, sqft=1_800.0),
    ]


def test_round_trip_preserves_every_field(tmp_path):
    path = tmp_path / "store.json"
    listings = _listings()
    save_listings(listings, path)
    assert load_listings(path) == listings
    assert get_last_updated(path) is not None


def test_persisted_blob_uses_camel_case(tmp_path):
    path = tmp_path / "store.json"
    save_listings(_listings(), path)
    blob = json.loads(path.read_text(encoding="utf-8"))
    assert set(blob) == {"properties", "lastUpdated"}
    first = blob["properties"][0]
    assert first["zipCode"] == "33139"
    assert first["pricePerSqft"] == 500.0
    assert first["estimatedROI"] == 6.3009


def test_load_is_best_effort(tmp_path):
    path = tmp_path / "store.json"
    assert load_listings(path) == []
    path.write_text("{not json", encoding="utf-8")
    assert load_listings(path) == []
    assert get_last_updated(path) is None


def test_clear_removes_snapshot(tmp_path):
    path = tmp_path / "store.json"
    save_listings(_listings(), path)
    clear_listings(path)
    assert load_listings(path) == []
    clear_listings(path)


def test_save_failure_raises_storage_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(StorageError):
        save_listings(_listings(), blocker / "store.json")


def test_export_format():
    lines = export_to_csv(_listings()).split("\n")
    assert lines[0] == ",".join(EXPORT_HEADERS)
    assert lines[1] == (
        "1234 Ocean Dr,Miami Beach,FL,33139,1000000,3,2.5,2000,500.00,1985,75,"
        "Single Family,8.0,$58800,6.3%"
    )
    assert lines[2] == (
        '"12 Main St, Unit 4",Miami Beach,FL,33139,875000,0,0,1800,486.11,1985,0,'
        "Single Family,N/A,N/A,N/A"
    )


def test_export_escapes_quotes():
    listing = make_listing(property_type='Condo "Hotel"')
    row = export_to_csv([listing]).split("\n")[1]
    assert '"Condo ""Hotel"""' in row
