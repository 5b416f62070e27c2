from fastapi import APIRouter, Depends, HTTPException

from stockscreener.analysis.profiles import SCREENING_PROFILES
from stockscreener.api.dependencies import get_pipeline
from stockscreener.schemas.screening import (
    LargeGapScreenRequest,
    PredefinedScreenRequest,
    RangeScreenRequest,
    ScreeningFilters,
    ScreeningResult,
)
from stockscreener.services.screening_pipeline import ScreeningPipeline

router = APIRouter(prefix="/api", tags=["screen"])

# Upper gap bound applied by /screen/gap when the caller omits max
DEFAULT_MAX_GAP = 100


@router.post("/screen", response_model=ScreeningResult)
async def screen(
    filters: ScreeningFilters,
    pipeline: ScreeningPipeline = Depends(get_pipeline),
):
    """Universal screener over the built-in symbol universe."""
    return await pipeline.screen(filters)


@router.post("/screen/predefined", response_model=ScreeningResult)
async def screen_predefined(
    body: PredefinedScreenRequest,
    pipeline: ScreeningPipeline = Depends(get_pipeline),
):
    """Run one of the provider's named screens (day_gainers, most_actives, ...)."""
    if not body.screen_id:
        raise HTTPException(status_code=400, detail="No screener ID provided")
    return await pipeline.screen_predefined(body.screen_id, body.limit)


@router.post("/screen/market-cap", response_model=ScreeningResult)
async def screen_by_market_cap(
    body: RangeScreenRequest,
    pipeline: ScreeningPipeline = Depends(get_pipeline),
):
    return await pipeline.screen_by_market_cap(body.min_value, body.max_value, body.limit)


@router.post("/screen/pe", response_model=ScreeningResult)
async def screen_by_pe_ratio(
    body: RangeScreenRequest,
    pipeline: ScreeningPipeline = Depends(get_pipeline),
):
    return await pipeline.screen_by_pe_ratio(body.min_value, body.max_value, body.limit)


@router.post("/screen/dividend", response_model=ScreeningResult)
async def screen_by_dividend_yield(
    body: RangeScreenRequest,
    pipeline: ScreeningPipeline = Depends(get_pipeline),
):
    return await pipeline.screen_by_dividend_yield(body.min_value, body.max_value, body.limit)


@router.post("/screen/gap", response_model=ScreeningResult)
async def screen_by_gap(
    body: RangeScreenRequest,
    pipeline: ScreeningPipeline = Depends(get_pipeline),
):
    max_gap = DEFAULT_MAX_GAP if body.max_value is None else body.max_value
    return await pipeline.screen_by_gap(body.min_value, max_gap, body.limit)


@router.post("/screen/gap/large", response_model=ScreeningResult)
async def screen_by_large_gap(
    body: LargeGapScreenRequest,
    pipeline: ScreeningPipeline = Depends(get_pipeline),
):
    return await pipeline.screen_by_large_gap(body.percentage, body.limit)


@router.get(
    "/profiles",
    response_model=dict[str, ScreeningFilters],
    response_model_exclude_none=True,
)
async def get_profiles():
    """Named filter presets."""
    return SCREENING_PROFILES
