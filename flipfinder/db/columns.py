"""Header resolution for MLS CSV exports with inconsistent column names."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence

# Ordered by priority; the first alias present in the header row wins.
COLUMN_ALIASES: Dict[str, List[str]] = {
    "address": ["address", "street address", "property address", "full address", "street"],
    "city": ["city", "municipality"],
    "state": ["state", "st"],
    "zip_code": ["zip", "zipcode", "zip code", "postal code"],
    "price": ["price", "list price", "listing price", "current price", "asking price"],
    "beds": ["beds", "bedrooms", "bed", "br", "#beds"],
    "baths": ["baths", "bathrooms", "bath", "ba", "#baths", "total baths"],
    "sqft": ["sqft", "square feet", "sq ft", "living area", "gross living area", "gla"],
    "year_built": ["year built", "yearbuilt", "yr built", "year_built"],
    "days_on_market": ["dom", "days on market", "days_on_market", "daysonmarket", "cdom", "cumulative dom"],
    "property_type": ["property type", "type", "property_type", "prop type"],
    "remarks": ["remarks", "public remarks", "description", "property description", "comments"],
    "listing_agent": ["listing agent", "agent", "agent name", "list agent"],
    "mls_number": ["mls#", "mls number", "mls", "listing number", "listing#"],
}

REQUIRED_FIELDS = ("address", "price", "sqft")

ColumnMap = Dict[str, Optional[str]]


def find_column(headers: Sequence[str], aliases: Iterable[str]) -> Optional[str]:
    """Return the header matching the earliest alias, or None."""

    folded = [str(h).strip().lower() for h in headers]
    for alias in aliases:
        key = alias.strip().lower()
        if key in folded:
            return headers[folded.index(key)]
    return None


def resolve_columns(headers: Sequence[str], aliases: Mapping[str, Sequence[str]] = COLUMN_ALIASES) -> ColumnMap:
    headers = list(headers)
    return {field: find_column(headers, names) for field, names in aliases.items()}


def missing_required(columns: Mapping[str, Optional[str]], required: Sequence[str] = REQUIRED_FIELDS) -> List[str]:
    return [field for field in required if not columns.get(field)]


__all__ = ["COLUMN_ALIASES", "REQUIRED_FIELDS", "ColumnMap", "find_column", "resolve_columns", "missing_required"]
