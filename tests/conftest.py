import pytest

from flipfinder.db import repo as repo_module
from flipfinder.db.repo import Repo
from flipfinder.models.listing import Listing


def make_listing(**overrides) -> Listing:
    fields = {
        "id": "prop-1-0",
        "address": "1234 Ocean Dr",
        "city": "Miami Beach",
        "zip_code": "33139",
        "price": 1_000_000.0,
        "sqft": 2_000.0,
        "year_built": 1985,
    }
    fields.update(overrides)
    fields.setdefault("price_per_sqft", fields["price"] / fields["sqft"])
    return Listing(**fields)


@pytest.fixture
def repository(tmp_path, monkeypatch) -> Repo:
    repo = Repo(storage_path=tmp_path / "listings.json")
    monkeypatch.setattr(repo_module, "_repo_singleton", repo)
    return repo
