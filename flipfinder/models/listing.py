"""Pydantic models representing listing domain objects."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_STATE = "FL"
DEFAULT_PROPERTY_TYPE = "Single Family"


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys for storage and the API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Listing(CamelModel):
    id: str
    address: str
    city: str = ""
    state: str = DEFAULT_STATE
    zip_code: str = ""
    price: float = Field(..., gt=0)
    beds: float = 0
    baths: float = 0
    sqft: float = Field(..., gt=0)
    year_built: int = 0
    days_on_market: int = 0
    property_type: str = DEFAULT_PROPERTY_TYPE
    remarks: Optional[str] = None
    listing_agent: Optional[str] = None
    mls_number: Optional[str] = None
    price_per_sqft: float
    anomaly_score: Optional[float] = Field(None, ge=1, le=10)
    estimated_profit: Optional[float] = None
    estimated_roi: Optional[float] = Field(None, alias="estimatedROI")


class MarketStatistics(CamelModel):
    zip_code: str
    average_price_per_sqft: float
    median_sale_price: float
    property_count: int


class IngestResult(CamelModel):
    listings: List[Listing] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)


class FilterOptions(CamelModel):
    min_price: float = 500_000
    max_price: float = 2_000_000
    min_roi: float = 30
    min_anomaly_score: float = 0
    zip_codes: List[str] = Field(default_factory=list)
    min_beds: Optional[float] = None
    max_days_on_market: Optional[int] = None


class PortfolioSummary(CamelModel):
    property_count: int
    high_potential_count: int
    average_anomaly_score: Optional[float]
    average_price: Optional[float]
