"""Pydantic schemas for deal analysis and comparable sales."""

from __future__ import annotations

import uuid
from typing import Any, Optional

from pydantic import Field, model_validator

from .listing import CamelModel


class DealConstants(CamelModel, frozen=True):
    """Fixed market assumptions applied to every deal analysis."""

    property_tax_rate: float = 0.015
    insurance_rate: float = 0.005
    monthly_utilities: float = 500
    acquisition_cost_percent: float = 0.03
    selling_cost_percent: float = 0.08


class DealAssumptions(CamelModel):
    purchase_price: float
    renovation_budget: float
    estimated_arv: float = Field(..., alias="estimatedARV")
    holding_period: float
    down_payment_percent: float
    interest_rate: float


class DealAnalysis(DealAssumptions, frozen=True):
    down_payment: float
    loan_amount: float
    acquisition_costs: float
    monthly_holding_costs: float
    total_holding_costs: float
    total_investment: float
    gross_profit: float
    selling_costs: float
    net_profit: float
    total_cash_invested: float
    roi: float


class ComparableSale(CamelModel):
    id: str = Field(default_factory=lambda: f"comp-{uuid.uuid4().hex[:12]}")
    address: str
    sale_price: float = Field(..., gt=0)
    sqft: float = Field(..., gt=0)
    beds: float = 0
    baths: float = 0
    sale_date: Optional[str] = None
    price_per_sqft: float

    @model_validator(mode="before")
    @classmethod
    def _derive_price_per_sqft(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if data.get("price_per_sqft") is not None or data.get("pricePerSqft") is not None:
            return data
        price = data.get("sale_price", data.get("salePrice"))
        sqft = data.get("sqft")
        try:
            price_per_sqft = float(price) / float(sqft)
        except (TypeError, ValueError, ZeroDivisionError):
            # field validation reports the offending input
            return data
        return {**data, "price_per_sqft": price_per_sqft}


class ArvEstimate(CamelModel, frozen=True):
    conservative: float
    moderate: float
    aggressive: float
