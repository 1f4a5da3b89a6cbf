import pytest
from fastapi.testclient import TestClient

from flipfinder.api import app
from flipfinder.db.csv_ingest import generate_sample_csv

client = TestClient(app)

REFERENCE_DEAL = {
    "purchasePrice": 800000,
    "renovationBudget": 700000,
    "estimatedARV": 1800000,
    "holdingPeriod": 12,
    "downPaymentPercent": 20,
    "interestRate": 8,
}


def _upload(content: str):
    return client.post("/api/listings/upload", content=content, headers={"Content-Type": "text/csv"})


def test_health():
    assert client.get("/api/health").json() == {"status": "ok"}


def test_upload_scores_and_persists(repository):
    resp = _upload(generate_sample_csv())
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["errors"] == []
    assert [item["anomalyScore"] for item in payload["listings"]] == [7, 5]
    assert len(repository.list_listings()) == 2
    assert repository.storage_path.exists()


def test_upload_reports_missing_columns(repository):
    payload = _upload("Street,Cost\n1 A St,100\n").json()
    assert payload["listings"] == []
    assert payload["errors"][0].startswith("Missing required columns: price, sqft.")
    assert repository.list_listings() == []


def test_listing_queries(repository):
    _upload(generate_sample_csv())
    listings = client.get("/api/listings").json()
    assert listings["total"] == 2
    assert listings["zipCodes"] == ["33139"]
    assert [item["anomalyScore"] for item in listings["items"]] == [7, 5]

    cheap = client.get("/api/listings", params={"max_price": 900000}).json()
    assert [item["address"] for item in cheap["items"]] == ["1234 Ocean Dr"]

    hot = client.get("/api/listings/high-potential").json()
    assert [item["address"] for item in hot] == ["1234 Ocean Dr"]

    listing_id = hot[0]["id"]
    assert client.get(f"/api/listings/{listing_id}").json()["mlsNumber"] == "A11234567"
    assert client.get("/api/listings/prop-missing").status_code == 404
    assert client.get("/api/listings", params={"sort": "bogus"}).status_code == 400


def test_market_stats_endpoint(repository):
    _upload(generate_sample_csv())
    stats = client.get("/api/markets/33139").json()
    assert stats["propertyCount"] == 2
    assert stats["medianSalePrice"] == pytest.approx(1_037_500)
    assert client.get("/api/markets/90210").status_code == 404


def test_summary_and_clear(repository):
    _upload(generate_sample_csv())
    summary = client.get("/api/listings/summary").json()
    assert summary["propertyCount"] == 2
    assert summary["highPotentialCount"] == 1
    assert summary["averageAnomalyScore"] == pytest.approx(6.0)

    assert client.delete("/api/listings").json() == {"status": "cleared"}
    assert client.get("/api/listings/summary").json()["averageAnomalyScore"] is None
    assert not repository.storage_path.exists()


def test_deal_analysis_endpoint():
    resp = client.post("/api/deals/analyze", json=REFERENCE_DEAL)
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["netProfit"] == pytest.approx(58_800)
    assert payload["roi"] == pytest.approx(6.3009, abs=1e-3)


def test_listing_deal_estimate(repository):
    listing_id = _upload(generate_sample_csv()).json()["listings"][0]["id"]
    resp = client.post(
        f"/api/listings/{listing_id}/deal",
        json={"renovationBudget": 300000, "estimatedARV": 1500000},
    )
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["analysis"]["purchasePrice"] == 875000
    assert payload["listing"]["estimatedProfit"] == pytest.approx(payload["analysis"]["netProfit"])
    assert repository.get_listing(listing_id).estimated_roi == pytest.approx(payload["analysis"]["roi"])

    export = client.get("/api/export")
    assert export.headers["content-type"].startswith("text/csv")
    assert export.text.splitlines()[0].startswith("Address,City,State,Zip Code")
    assert export.text.splitlines()[1].endswith("%")


def test_arv_endpoint():
    comps = [
        {"address": "1 A St", "salePrice": 500000, "sqft": 1000},
        {"address": "2 B St", "salePrice": 600000, "sqft": 1200},
    ]
    payload = client.post("/api/comps/arv", json={"comps": comps, "sqft": 2000}).json()
    assert payload["estimate"] == pytest.approx({"conservative": 950000, "moderate": 1000000, "aggressive": 1050000})
    assert payload["averageSalePrice"] == pytest.approx(550000)
    assert client.post("/api/comps/arv", json={"comps": [], "sqft": 2000}).status_code == 422


def test_sample_endpoint():
    resp = client.get("/api/sample")
    assert resp.text == generate_sample_csv()
