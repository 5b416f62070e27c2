from fastapi import APIRouter, Depends, HTTPException

from stockscreener.api.dependencies import get_pipeline
from stockscreener.api.validation import parse_quote_symbol
from stockscreener.schemas.screening import Stock
from stockscreener.services.screening_pipeline import ScreeningPipeline

router = APIRouter(prefix="/api", tags=["quote"])


@router.get("/quote/{symbol}", response_model=Stock)
async def get_quote(
    symbol: str,
    pipeline: ScreeningPipeline = Depends(get_pipeline),
):
    symbol = parse_quote_symbol(symbol)
    stock = await pipeline.get_quote(symbol)
    if not stock:
        raise HTTPException(status_code=404, detail="Stock not found")
    return stock
