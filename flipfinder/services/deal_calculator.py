"""Purchase, renovate and resell deal economics."""

from __future__ import annotations

from ..models.deal import DealAnalysis, DealAssumptions, DealConstants
from ..models.listing import Listing

DEFAULT_DEAL_CONSTANTS = DealConstants()

QUICK_HOLDING_PERIOD = 12
QUICK_DOWN_PAYMENT_PERCENT = 20
QUICK_INTEREST_RATE = 8


def calculate_deal_analysis(
    assumptions: DealAssumptions,
    constants: DealConstants = DEFAULT_DEAL_CONSTANTS,
) -> DealAnalysis:
    """Compute the full cost, profit and ROI breakdown for a flip.

    Pure function of its inputs. Nonsensical inputs produce nonsensical
    (possibly negative) outputs rather than errors; ROI is 0 whenever no cash
    is invested.
    """

    purchase_price = assumptions.purchase_price
    renovation_budget = assumptions.renovation_budget
    estimated_arv = assumptions.estimated_arv

    down_payment = purchase_price * (assumptions.down_payment_percent / 100)
    loan_amount = purchase_price - down_payment
    acquisition_costs = purchase_price * constants.acquisition_cost_percent

    monthly_property_tax = (purchase_price * constants.property_tax_rate) / 12
    monthly_insurance = (purchase_price * constants.insurance_rate) / 12
    monthly_interest = (loan_amount * (assumptions.interest_rate / 100)) / 12
    monthly_holding_costs = monthly_property_tax + monthly_insurance + monthly_interest + constants.monthly_utilities

    total_holding_costs = monthly_holding_costs * assumptions.holding_period
    total_investment = purchase_price + renovation_budget + total_holding_costs + acquisition_costs
    gross_profit = estimated_arv - total_investment
    selling_costs = estimated_arv * constants.selling_cost_percent
    net_profit = gross_profit - selling_costs
    total_cash_invested = down_payment + renovation_budget + total_holding_costs
    roi = (net_profit / total_cash_invested) * 100 if total_cash_invested > 0 else 0.0

    return DealAnalysis(
        **assumptions.model_dump(),
        down_payment=down_payment,
        loan_amount=loan_amount,
        acquisition_costs=acquisition_costs,
        monthly_holding_costs=monthly_holding_costs,
        total_holding_costs=total_holding_costs,
        total_investment=total_investment,
        gross_profit=gross_profit,
        selling_costs=selling_costs,
        net_profit=net_profit,
        total_cash_invested=total_cash_invested,
        roi=roi,
    )


def _quick_analysis(
    purchase_price: float,
    renovation_budget: float,
    estimated_arv: float,
    holding_period: float,
) -> DealAnalysis:
    return calculate_deal_analysis(
        DealAssumptions(
            purchase_price=purchase_price,
            renovation_budget=renovation_budget,
            estimated_arv=estimated_arv,
            holding_period=holding_period,
            down_payment_percent=QUICK_DOWN_PAYMENT_PERCENT,
            interest_rate=QUICK_INTEREST_RATE,
        )
    )


def calculate_quick_roi(
    purchase_price: float,
    renovation_budget: float,
    estimated_arv: float,
    holding_period: float = QUICK_HOLDING_PERIOD,
) -> float:
    return _quick_analysis(purchase_price, renovation_budget, estimated_arv, holding_period).roi


def calculate_quick_profit(
    purchase_price: float,
    renovation_budget: float,
    estimated_arv: float,
    holding_period: float = QUICK_HOLDING_PERIOD,
) -> float:
    return _quick_analysis(purchase_price, renovation_budget, estimated_arv, holding_period).net_profit


def estimate_listing_deal(listing: Listing, analysis: DealAnalysis) -> Listing:
    """Return a copy of ``listing`` carrying the deal's profit and ROI."""

    return listing.model_copy(update={"estimated_profit": analysis.net_profit, "estimated_roi": analysis.roi})


__all__ = [
    "DEFAULT_DEAL_CONSTANTS",
    "calculate_deal_analysis",
    "calculate_quick_roi",
    "calculate_quick_profit",
    "estimate_listing_deal",
]
