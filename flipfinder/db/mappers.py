"""Map raw CSV rows onto canonical listing records."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..models.listing import DEFAULT_PROPERTY_TYPE, DEFAULT_STATE, Listing
from ..utils.coerce import parse_number, parse_string, to_int


class RowRejected(ValueError):
    """Raised when a row lacks a usable address, price or sqft."""


def _cell(row: Mapping[str, Any], column: Optional[str]) -> Any:
    return row.get(column) if column else None


def _text(row: Mapping[str, Any], column: Optional[str], default: str = "") -> str:
    return parse_string(row.get(column)) if column else default


def _optional_text(row: Mapping[str, Any], column: Optional[str]) -> Optional[str]:
    return parse_string(row.get(column)) if column else None


def listing_id(batch_timestamp: int, index: int) -> str:
    return f"prop-{batch_timestamp}-{index}"


def map_listing_row(
    row: Mapping[str, Any],
    columns: Mapping[str, Optional[str]],
    index: int,
    batch_timestamp: int,
) -> Listing:
    address = _text(row, columns.get("address"))
    price = parse_number(_cell(row, columns.get("price")))
    sqft = parse_number(_cell(row, columns.get("sqft")))
    if not address or price <= 0 or sqft <= 0:
        raise RowRejected("Invalid or missing required data")

    return Listing(
        id=listing_id(batch_timestamp, index),
        address=address,
        city=_text(row, columns.get("city")),
        state=_text(row, columns.get("state"), DEFAULT_STATE),
        zip_code=_text(row, columns.get("zip_code")),
        price=price,
        beds=parse_number(_cell(row, columns.get("beds"))),
        baths=parse_number(_cell(row, columns.get("baths"))),
        sqft=sqft,
        year_built=to_int(_cell(row, columns.get("year_built"))),
        days_on_market=to_int(_cell(row, columns.get("days_on_market"))),
        property_type=_text(row, columns.get("property_type"), DEFAULT_PROPERTY_TYPE),
        remarks=_optional_text(row, columns.get("remarks")),
        listing_agent=_optional_text(row, columns.get("listing_agent")),
        mls_number=_optional_text(row, columns.get("mls_number")),
        price_per_sqft=price / sqft,
    )


__all__ = ["RowRejected", "listing_id", "map_listing_row"]
