from pathlib import Path
from typing import Any, List, Optional

from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI, HTTPException, Query, Request, Response
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, Field

load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env", override=False)

from .db.csv_ingest import generate_sample_csv
from .db.repo import get_repository
from .db.storage import export_filename, export_to_csv
from .models.deal import ComparableSale, DealAssumptions
from .models.listing import FilterOptions
from .services.comps_service import average_sale_price, estimate_arv
from .services.deal_calculator import calculate_deal_analysis
from .services.filters import SORT_KEYS, filter_listings, sort_listings, summarize, zip_codes
from .services.scoring import HIGH_POTENTIAL_SCORE, find_high_potential
from .utils.logging import get_logger

LOGGER = get_logger("api")

app = FastAPI(title="Flip Finder")
router = APIRouter(prefix="/api")


def _dump(value: Any) -> Any:
    return jsonable_encoder(value, by_alias=True)


class ArvRequest(BaseModel):
    comps: List[ComparableSale] = Field(default_factory=list)
    sqft: float


class ListingDealRequest(BaseModel):
    renovation_budget: float = Field(..., alias="renovationBudget")
    estimated_arv: float = Field(..., alias="estimatedARV")
    holding_period: float = Field(12, alias="holdingPeriod")
    down_payment_percent: float = Field(20, alias="downPaymentPercent")
    interest_rate: float = Field(8, alias="interestRate")
    purchase_price: Optional[float] = Field(None, alias="purchasePrice")


@router.get("/health")
def health():
    return {"status": "ok"}


@router.post("/listings/upload")
async def upload_listings(request: Request):
    body = await request.body()
    try:
        content = body.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        return {"listings": [], "errors": [f"CSV Parse Error: {exc}"]}
    result = get_repository().load_csv(content)
    LOGGER.info("upload listings=%d errors=%d", len(result.listings), len(result.errors))
    return _dump(result)


@router.get("/listings")
def list_listings(
    min_price: float = Query(0, ge=0),
    max_price: Optional[float] = Query(None),
    min_roi: float = Query(0),
    min_anomaly_score: float = Query(0, ge=0, le=10),
    zip_code: Optional[List[str]] = Query(None),
    min_beds: Optional[float] = Query(None),
    max_days_on_market: Optional[int] = Query(None),
    sort: str = Query("anomaly_score"),
    descending: bool = Query(True),
):
    if sort not in SORT_KEYS:
        raise HTTPException(400, detail=f"invalid sort field: {sort}")
    options = FilterOptions(
        min_price=min_price,
        max_price=max_price if max_price is not None else float("inf"),
        min_roi=min_roi,
        min_anomaly_score=min_anomaly_score,
        zip_codes=zip_code or [],
        min_beds=min_beds,
        max_days_on_market=max_days_on_market,
    )
    listings = get_repository().list_listings()
    rows = sort_listings(filter_listings(listings, options), sort, descending)
    return _dump({"items": rows, "total": len(listings), "zipCodes": zip_codes(listings)})


@router.get("/listings/high-potential")
def high_potential(min_score: float = Query(HIGH_POTENTIAL_SCORE, ge=1, le=10)):
    return _dump(find_high_potential(get_repository().list_listings(), min_score))


@router.get("/listings/summary")
def listings_summary():
    return _dump(summarize(get_repository().list_listings()))


@router.get("/listings/{listing_id}")
def get_listing(listing_id: str):
    listing = get_repository().get_listing(listing_id)
    if listing is None:
        raise HTTPException(404, detail="listing not found")
    return _dump(listing)


@router.delete("/listings")
def clear_listings():
    get_repository().clear()
    return {"status": "cleared"}


@router.post("/listings/{listing_id}/deal")
def estimate_deal(listing_id: str, req: ListingDealRequest):
    repo = get_repository()
    listing = repo.get_listing(listing_id)
    if listing is None:
        raise HTTPException(404, detail="listing not found")
    analysis = calculate_deal_analysis(
        DealAssumptions(
            purchase_price=req.purchase_price if req.purchase_price is not None else listing.price,
            renovation_budget=req.renovation_budget,
            estimated_arv=req.estimated_arv,
            holding_period=req.holding_period,
            down_payment_percent=req.down_payment_percent,
            interest_rate=req.interest_rate,
        )
    )
    updated = repo.apply_deal(listing_id, analysis)
    return _dump({"listing": updated, "analysis": analysis})


@router.get("/markets/{zip_code}")
def market_stats(zip_code: str):
    stats = get_repository().get_market_stats(zip_code)
    if stats is None:
        raise HTTPException(404, detail="no listings for zip code")
    return _dump(stats)


@router.post("/deals/analyze")
def analyze_deal(assumptions: DealAssumptions):
    return _dump(calculate_deal_analysis(assumptions))


@router.post("/comps/arv")
def comps_arv(req: ArvRequest):
    estimate = estimate_arv(req.comps, req.sqft)
    if estimate is None:
        raise HTTPException(422, detail="at least one comparable sale is required")
    return _dump({"estimate": estimate, "averageSalePrice": average_sale_price(req.comps)})


@router.get("/export")
def export_listings():
    csv_text = export_to_csv(get_repository().list_listings())
    headers = {"Content-Disposition": f'attachment; filename="{export_filename()}"'}
    return Response(content=csv_text, media_type="text/csv", headers=headers)


@router.get("/sample")
def sample_csv():
    return Response(content=generate_sample_csv(), media_type="text/csv")


app.include_router(router)
