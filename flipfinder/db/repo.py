"""Session repository holding the scored listing snapshot."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Union

from ..models.deal import DealAnalysis
from ..models.listing import IngestResult, Listing, MarketStatistics
from ..services.deal_calculator import estimate_listing_deal
from ..services.market_stats import calculate_market_stats
from ..services.scoring import enrich_with_anomaly_scores
from ..utils.logging import get_logger
from . import storage
from .csv_ingest import parse_listings_csv, parse_listings_file

LOGGER = get_logger("db.repo")


class Repo:
    """Holds one ingestion batch at a time and mirrors it to storage.

    Every upload replaces the whole snapshot; listings are only ever swapped
    for updated copies, never mutated.
    """

    def __init__(self, storage_path: Optional[Union[str, Path]] = None, persist: bool = True) -> None:
        self.storage_path = storage_path
        self.persist = persist
        self._listings: List[Listing] = storage.load_listings(storage_path) if persist else []
        LOGGER.info("Repository initialised with %d listings", len(self._listings))

    # ------------------------------------------------------------------
    # Ingestion
    def load_csv(self, content: str) -> IngestResult:
        result = parse_listings_csv(content)
        return self._replace(result)

    def load_file(self, path: Union[str, Path]) -> IngestResult:
        return self._replace(parse_listings_file(path))

    def _replace(self, result: IngestResult) -> IngestResult:
        if not result.listings:
            return result
        scored = enrich_with_anomaly_scores(result.listings)
        self._listings = scored
        self._save()
        return IngestResult(listings=scored, errors=result.errors)

    # ------------------------------------------------------------------
    # Listings
    def list_listings(self) -> List[Listing]:
        return list(self._listings)

    def get_listing(self, listing_id: str) -> Optional[Listing]:
        for listing in self._listings:
            if listing.id == listing_id:
                return listing
        return None

    def get_market_stats(self, zip_code: str) -> Optional[MarketStatistics]:
        return calculate_market_stats(self._listings, zip_code)

    def apply_deal(self, listing_id: str, analysis: DealAnalysis) -> Optional[Listing]:
        index: Dict[str, int] = {listing.id: i for i, listing in enumerate(self._listings)}
        if listing_id not in index:
            return None
        updated = estimate_listing_deal(self._listings[index[listing_id]], analysis)
        listings = list(self._listings)
        listings[index[listing_id]] = updated
        self._listings = listings
        self._save()
        LOGGER.info("deal_applied listing=%s roi=%.1f", listing_id, analysis.roi)
        return updated

    def clear(self) -> None:
        self._listings = []
        if self.persist:
            storage.clear_listings(self.storage_path)

    # ------------------------------------------------------------------
    def _save(self) -> None:
        if not self.persist:
            return
        try:
            storage.save_listings(self._listings, self.storage_path)
        except storage.StorageError as exc:
            LOGGER.warning("Snapshot kept in memory only (%s)", exc)


_repo_singleton: Repo | None = None


def get_repository() -> Repo:
    global _repo_singleton
    if _repo_singleton is None:
        _repo_singleton = Repo()
    return _repo_singleton


def reset_repository() -> None:
    global _repo_singleton
    _repo_singleton = None
