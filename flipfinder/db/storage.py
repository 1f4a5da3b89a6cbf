"""Best-effort JSON persistence and CSV export of the listing snapshot."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pydantic import Field

from ..models.listing import CamelModel, Listing
from ..utils.formatting import format_number, format_profit, format_roi, format_score
from ..utils.io import resolve_path
from ..utils.logging import get_logger

LOGGER = get_logger("db.storage")

STORAGE_FILE = os.getenv("STORAGE_FILE", "property-flip-analyzer-data.json")

EXPORT_HEADERS = [
    "Address",
    "City",
    "State",
    "Zip Code",
    "Price",
    "Beds",
    "Baths",
    "Sqft",
    "Price/Sqft",
    "Year Built",
    "Days on Market",
    "Property Type",
    "Anomaly Score",
    "Est. Profit",
    "Est. ROI %",
]

PathLike = Union[str, Path]


class StorageError(RuntimeError):
    """Raised when the listing snapshot cannot be written."""


class StorageData(CamelModel):
    properties: List[Listing] = Field(default_factory=list)
    last_updated: str


def _storage_path(path: Optional[PathLike]) -> Path:
    return resolve_path(path or STORAGE_FILE)


def _read(path: Optional[PathLike]) -> Optional[StorageData]:
    target = _storage_path(path)
    if not target.exists():
        return None
    return StorageData.model_validate_json(target.read_text(encoding="utf-8"))


def save_listings(listings: Sequence[Listing], path: Optional[PathLike] = None) -> None:
    target = _storage_path(path)
    data = StorageData(properties=list(listings), last_updated=datetime.now(timezone.utc).isoformat())
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(data.model_dump_json(by_alias=True), encoding="utf-8")
    except OSError as exc:
        LOGGER.error("save_failed path=%s error=%s", target, exc)
        raise StorageError("Failed to save data. Storage might be full.") from exc
    LOGGER.info("listings_saved path=%s count=%d", target, len(data.properties))


def load_listings(path: Optional[PathLike] = None) -> List[Listing]:
    try:
        data = _read(path)
    except Exception as exc:
        LOGGER.error("load_failed path=%s error=%s", _storage_path(path), exc)
        return []
    return data.properties if data else []


def get_last_updated(path: Optional[PathLike] = None) -> Optional[str]:
    try:
        data = _read(path)
    except Exception as exc:
        LOGGER.error("last_updated_failed path=%s error=%s", _storage_path(path), exc)
        return None
    return data.last_updated if data else None


def clear_listings(path: Optional[PathLike] = None) -> None:
    target = _storage_path(path)
    try:
        target.unlink(missing_ok=True)
    except OSError as exc:
        LOGGER.error("clear_failed path=%s error=%s", target, exc)


def _export_cell(value: object) -> str:
    text = format_number(value) if isinstance(value, (int, float)) else str(value)
    if "," in text or "\n" in text or '"' in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def _export_row(listing: Listing) -> List[object]:
    return [
        listing.address,
        listing.city,
        listing.state,
        listing.zip_code,
        listing.price,
        listing.beds,
        listing.baths,
        listing.sqft,
        f"{listing.price_per_sqft:.2f}",
        listing.year_built,
        listing.days_on_market,
        listing.property_type,
        format_score(listing.anomaly_score),
        format_profit(listing.estimated_profit),
        format_roi(listing.estimated_roi),
    ]


def export_to_csv(listings: Sequence[Listing]) -> str:
    lines = [",".join(EXPORT_HEADERS)]
    for listing in listings:
        lines.append(",".join(_export_cell(cell) for cell in _export_row(listing)))
    return "\n".join(lines)


def export_filename(today: Optional[datetime] = None) -> str:
    stamp = (today or datetime.now(timezone.utc)).date().isoformat()
    return f"property-analysis-{stamp}.csv"


__all__ = [
    "STORAGE_FILE",
    "EXPORT_HEADERS",
    "StorageError",
    "StorageData",
    "save_listings",
    "load_listings",
    "get_last_updated",
    "clear_listings",
    "export_to_csv",
    "export_filename",
]
